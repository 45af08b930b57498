from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.menu import Menu, MenuDTO
from models.menu_item import MenuItem, MenuItemDTO


class MenuRepository:
    """Repository for navigation menus and their items."""

    @staticmethod
    async def get_by_location(location: str, session: AsyncSession | Session) -> MenuDTO | None:
        """
        Get the active menu bound to a location.

        Args:
            location: Location key, e.g. "header"
            session: Database session

        Returns:
            MenuDTO if found, None otherwise
        """
        stmt = (
            select(Menu)
            .where(Menu.location == location)
            .where(Menu.active == True)
            .order_by(Menu.id.asc())
            .limit(1)
        )
        result = await session_execute(stmt, session)
        menu = result.scalar()
        if menu is None:
            return None
        return MenuDTO.model_validate(menu, from_attributes=True)

    @staticmethod
    async def get_items(
        menu_id: int,
        session: AsyncSession | Session,
        active_only: bool = True
    ) -> list[MenuItemDTO]:
        """
        Get the flat list of items of a menu, ordered like the storage layer returns them.

        Args:
            menu_id: ID of the menu
            session: Database session
            active_only: Skip items switched off in the admin panel

        Returns:
            List of MenuItemDTO sorted by order position, then id
        """
        stmt = select(MenuItem).where(MenuItem.menu_id == menu_id)
        if active_only:
            stmt = stmt.where(MenuItem.active == True)
        stmt = stmt.order_by(MenuItem.order_position.asc(), MenuItem.id.asc())
        result = await session_execute(stmt, session)
        items = result.scalars().all()
        return [MenuItemDTO.model_validate(item, from_attributes=True) for item in items]

    @staticmethod
    async def create(menu_dto: MenuDTO, session: AsyncSession | Session) -> MenuDTO:
        menu = Menu(**menu_dto.model_dump(exclude_none=True))
        session.add(menu)
        await session_flush(session)
        return MenuDTO.model_validate(menu, from_attributes=True)

    @staticmethod
    async def add_item(item_dto: MenuItemDTO, session: AsyncSession | Session) -> MenuItemDTO:
        values = item_dto.model_dump(exclude_none=True)
        values['item_type'] = item_dto.item_type.value
        item = MenuItem(**values)
        session.add(item)
        await session_flush(session)
        return MenuItemDTO.model_validate(item, from_attributes=True)
