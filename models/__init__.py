"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
which is required for relationships to work correctly.
"""

from models.base import Base
from models.menu import Menu
from models.menu_item import MenuItem
from models.cart_item import CartItem

__all__ = [
    'Base',
    'Menu',
    'MenuItem',
    'CartItem',
]
