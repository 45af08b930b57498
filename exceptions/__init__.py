"""
Custom exceptions for the travel booking back end.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
TravelBookingException (base)
├── CartException
│   ├── InvalidPriceException
│   ├── InvalidQuantityException
│   ├── CartItemNotFoundException
│   └── InvalidCartStateException
└── MenuException
    └── MenuNotFoundException

Usage:
------
Services raise specific exceptions:
    raise MenuNotFoundException(location="header")

The API router converts them to HTTP responses:
    try:
        tree = await MenuService.get_menu_tree("header", session)
    except TravelBookingException as e:
        raise handle_service_error(e)
"""

from .base import TravelBookingException
from .cart import (
    CartException,
    InvalidPriceException,
    InvalidQuantityException,
    CartItemNotFoundException,
    InvalidCartStateException
)
from .menu import MenuException, MenuNotFoundException

__all__ = [
    # Base
    'TravelBookingException',

    # Cart
    'CartException',
    'InvalidPriceException',
    'InvalidQuantityException',
    'CartItemNotFoundException',
    'InvalidCartStateException',

    # Menu
    'MenuException',
    'MenuNotFoundException',
]
