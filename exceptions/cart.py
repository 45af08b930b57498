"""
Cart-related exceptions.
"""

from decimal import Decimal

from enums.error_kind import ErrorKind
from .base import TravelBookingException


class CartException(TravelBookingException):
    """Base exception for cart-related errors."""
    pass


class InvalidPriceException(CartException):
    """Raised when a cart line carries a missing or negative price snapshot."""

    kind = ErrorKind.INVALID_PRICE

    def __init__(self, price: Decimal | None, field: str = "price_at_add"):
        if price is None:
            message = f"Cart item has no {field}"
        else:
            message = f"Cart item {field} must not be negative (got {price})"
        super().__init__(message, details={'field': field, 'price': price})
        self.price = price
        self.field = field


class InvalidQuantityException(CartException):
    """Raised when a cart line quantity is missing or not positive."""

    kind = ErrorKind.INVALID_QUANTITY

    def __init__(self, quantity: int | None):
        super().__init__(
            f"Cart item quantity must be positive (got {quantity})",
            details={'quantity': quantity}
        )
        self.quantity = quantity


class CartItemNotFoundException(CartException):
    """Raised when cart item not found."""

    def __init__(self, cart_item_id: int):
        super().__init__(
            f"Cart item {cart_item_id} not found",
            details={'cart_item_id': cart_item_id}
        )
        self.cart_item_id = cart_item_id


class InvalidCartStateException(CartException):
    """Raised when cart is in invalid state for operation."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid cart state: {reason}",
            details={'reason': reason}
        )
        self.reason = reason
