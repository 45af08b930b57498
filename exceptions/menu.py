"""
Menu-related exceptions.
"""

from .base import TravelBookingException


class MenuException(TravelBookingException):
    """Base exception for navigation menu errors."""
    pass


class MenuNotFoundException(MenuException):
    """Raised when no active menu is bound to a location."""

    def __init__(self, location: str):
        super().__init__(
            f"Menu not found for location '{location}'",
            details={'location': location}
        )
        self.location = location
