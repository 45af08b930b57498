"""
API router for navigation menus and the shopping cart.

Serves the JSON consumed by the booking front end:
- Menu tree per page location (header, footer columns)
- Cart summary with totals and rejected lines
- Adding, updating, removing and clearing cart lines for users and guest sessions
"""

import logging
import uuid
from datetime import datetime
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import get_db_session
from exceptions import TravelBookingException
from models.cart_item import CartItemDTO, CartItemUpdateDTO, CartSummaryDTO
from models.menu_item import MenuWithTreeDTO
from services.cart import CartService
from services.menu import MenuService
from utils.error_handler import handle_service_error, handle_unexpected_error

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api", tags=["api"])


def generate_correlation_id() -> str:
    """Generate unique correlation ID for request tracing."""
    return f"{datetime.now().strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:8]}"


async def db_session() -> AsyncIterator[AsyncSession | Session]:
    async with get_db_session() as session:
        yield session


@api_router.get("/menus/location/{location}", response_model=MenuWithTreeDTO)
async def get_menu_by_location(location: str, session: AsyncSession | Session = Depends(db_session)):
    """
    Get the active menu of a location with its flat items and assembled tree.

    Returns:
        200: {menu, items, tree}
        404: No menu bound to this location
    """
    correlation_id = generate_correlation_id()
    try:
        menu = await MenuService.get_menu_tree(location, session)
        logger.info(f"[{correlation_id}] Menu '{location}' served with {len(menu.tree)} top-level entries")
        return menu
    except TravelBookingException as e:
        raise handle_service_error(e)
    except Exception as e:
        logger.error(f"[{correlation_id}] Failed to fetch menu by location", exc_info=True)
        raise handle_unexpected_error(e)


@api_router.get("/cart", response_model=CartSummaryDTO)
async def get_cart(
    user_id: int | None = Query(default=None),
    session_id: str | None = Query(default=None),
    session: AsyncSession | Session = Depends(db_session)
):
    """
    Get the cart of a signed-in user or guest session.

    Without user_id and session_id an empty cart is returned.
    """
    try:
        return await CartService.get_cart_summary(session, user_id=user_id, session_id=session_id)
    except TravelBookingException as e:
        raise handle_service_error(e)
    except Exception as e:
        raise handle_unexpected_error(e)


@api_router.post("/cart/add", response_model=CartItemDTO, status_code=status.HTTP_201_CREATED)
async def add_to_cart(payload: CartItemDTO, session: AsyncSession | Session = Depends(db_session)):
    """
    Add a product to the cart, capturing its price at this moment.

    Returns:
        201: Stored cart line
        400: Invalid price snapshot, quantity or missing owner
    """
    correlation_id = generate_correlation_id()
    logger.info(f"[{correlation_id}] Cart add request for {payload.item_type.value} {payload.item_id}")
    try:
        return await CartService.add_to_cart(payload, session)
    except TravelBookingException as e:
        raise handle_service_error(e)
    except Exception as e:
        logger.error(f"[{correlation_id}] Failed to add item to cart", exc_info=True)
        raise handle_unexpected_error(e)


@api_router.delete("/cart/clear")
async def clear_cart(
    user_id: int | None = Query(default=None),
    session_id: str | None = Query(default=None),
    session: AsyncSession | Session = Depends(db_session)
):
    try:
        removed = await CartService.clear_cart(session, user_id=user_id, session_id=session_id)
        return {"success": True, "removed": removed}
    except TravelBookingException as e:
        raise handle_service_error(e)
    except Exception as e:
        raise handle_unexpected_error(e)


@api_router.delete("/cart/{cart_item_id}")
async def remove_from_cart(
    cart_item_id: int,
    user_id: int | None = Query(default=None),
    session_id: str | None = Query(default=None),
    session: AsyncSession | Session = Depends(db_session)
):
    if user_id is None and not session_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to remove cart items"
        )
    try:
        await CartService.remove_from_cart(cart_item_id, session, user_id=user_id, session_id=session_id)
        return {"success": True}
    except TravelBookingException as e:
        raise handle_service_error(e)
    except Exception as e:
        raise handle_unexpected_error(e)


@api_router.patch("/cart/{cart_item_id}", response_model=CartItemDTO)
async def update_cart_item(
    cart_item_id: int,
    payload: CartItemUpdateDTO,
    user_id: int | None = Query(default=None),
    session_id: str | None = Query(default=None),
    session: AsyncSession | Session = Depends(db_session)
):
    """
    Change quantity, guests, dates or notes of a cart line.

    Price fields in the body are ignored, the line keeps its captured price.

    Returns:
        200: Updated cart line
        400: Quantity not positive
        401: Neither user_id nor session_id given
        404: Line missing or owned by someone else
    """
    if user_id is None and not session_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to update cart items"
        )
    try:
        return await CartService.update_cart_item(
            cart_item_id, payload, session, user_id=user_id, session_id=session_id
        )
    except TravelBookingException as e:
        raise handle_service_error(e)
    except Exception as e:
        raise handle_unexpected_error(e)
