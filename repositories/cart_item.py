from sqlalchemy import select, delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.cart_item import CartItem, CartItemDTO, CartItemUpdateDTO


class CartItemRepository:

    @staticmethod
    async def create(cart_item: CartItemDTO, session: AsyncSession | Session) -> CartItemDTO:
        values = cart_item.model_dump(exclude_none=True)
        values['item_type'] = cart_item.item_type.value
        item = CartItem(**values)
        session.add(item)
        await session_flush(session)
        return CartItemDTO.model_validate(item, from_attributes=True)

    @staticmethod
    async def get_by_user_id(user_id: int, session: AsyncSession | Session) -> list[CartItemDTO]:
        stmt = select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.id.asc())
        result = await session_execute(stmt, session)
        return [CartItemDTO.model_validate(item, from_attributes=True) for item in result.scalars().all()]

    @staticmethod
    async def get_by_session_id(session_id: str, session: AsyncSession | Session) -> list[CartItemDTO]:
        stmt = select(CartItem).where(CartItem.session_id == session_id).order_by(CartItem.id.asc())
        result = await session_execute(stmt, session)
        return [CartItemDTO.model_validate(item, from_attributes=True) for item in result.scalars().all()]

    @staticmethod
    async def get_by_id(cart_item_id: int, session: AsyncSession | Session) -> CartItemDTO | None:
        stmt = select(CartItem).where(CartItem.id == cart_item_id)
        result = await session_execute(stmt, session)
        item = result.scalar()
        if item is None:
            return None
        return CartItemDTO.model_validate(item, from_attributes=True)

    @staticmethod
    async def update(cart_item_id: int, updates: CartItemUpdateDTO, session: AsyncSession | Session) -> int:
        # Only fields sent by the caller; occupancy columns are not nullable
        values = {
            k: v for k, v in updates.model_dump(exclude_unset=True).items()
            if v is not None or k not in ('adults', 'children', 'infants')
        }
        if not values:
            return 0
        stmt = update(CartItem).where(CartItem.id == cart_item_id).values(**values)
        result = await session_execute(stmt, session)
        return result.rowcount

    @staticmethod
    async def remove(cart_item_id: int, session: AsyncSession | Session) -> int:
        stmt = delete(CartItem).where(CartItem.id == cart_item_id)
        result = await session_execute(stmt, session)
        return result.rowcount

    @staticmethod
    async def clear(
        session: AsyncSession | Session,
        user_id: int | None = None,
        session_id: str | None = None
    ) -> int:
        """
        Delete every line owned by a user or a guest session.

        Returns:
            Number of deleted lines
        """
        if user_id is not None:
            stmt = delete(CartItem).where(CartItem.user_id == user_id)
        elif session_id is not None:
            stmt = delete(CartItem).where(CartItem.session_id == session_id)
        else:
            return 0
        result = await session_execute(stmt, session)
        return result.rowcount
