"""
Error Handler Utility for API Routes

Provides centralized error handling for the HTTP layer with:
- Consistent status codes per exception type
- Automatic exception to response mapping
- Logging for debugging

Usage in routes:
    from utils.error_handler import handle_service_error

    try:
        result = await SomeService.some_method()
    except TravelBookingException as e:
        raise handle_service_error(e)
"""

import logging

from fastapi import HTTPException, status

from exceptions import (
    TravelBookingException,
    InvalidPriceException,
    InvalidQuantityException,
    CartItemNotFoundException,
    InvalidCartStateException,
    MenuNotFoundException,
)


def handle_service_error(exception: TravelBookingException) -> HTTPException:
    """
    Convert service exception to an HTTPException with a client-facing message.

    Args:
        exception: The custom exception raised by a service

    Returns:
        HTTPException to raise from the route

    Example:
        try:
            tree = await MenuService.get_menu_tree("header", session)
        except MenuNotFoundException as e:
            raise handle_service_error(e)
    """
    # Log the error for debugging
    logging.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    # Map exception types to status codes
    error_mapping = {
        # Menu exceptions
        MenuNotFoundException: status.HTTP_404_NOT_FOUND,

        # Cart exceptions
        CartItemNotFoundException: status.HTTP_404_NOT_FOUND,
        InvalidPriceException: status.HTTP_400_BAD_REQUEST,
        InvalidQuantityException: status.HTTP_400_BAD_REQUEST,
        InvalidCartStateException: status.HTTP_400_BAD_REQUEST,
    }

    status_code = error_mapping.get(type(exception))

    if not status_code:
        # Unknown exception type - don't leak internals
        logging.error(f"Unmapped exception type: {type(exception).__name__}")
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred"
        )

    return HTTPException(status_code=status_code, detail=exception.message)


def handle_unexpected_error(exception: Exception) -> HTTPException:
    """
    Handle unexpected exceptions (non-TravelBookingException).

    Note:
        Also logs the full exception for debugging
    """
    logging.error(f"Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred"
    )
