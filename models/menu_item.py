from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from enums.error_kind import ErrorKind
from enums.menu_item_kind import MenuItemKind
from models.base import Base
from models.menu import MenuDTO


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True)
    menu_id = Column(Integer, ForeignKey("menus.id", ondelete="CASCADE"), nullable=False)
    # No FK on purpose: rows may reference parents that were deleted or never existed,
    # the tree builder normalizes those instead of the database rejecting them
    parent_id = Column(Integer, nullable=True)
    title = Column(String, nullable=False)
    url = Column(String, nullable=True)
    icon = Column(String, nullable=True)  # FontAwesome icon name
    icon_type = Column(String, nullable=True, default="fas")  # fas, fab, far
    item_type = Column(String, nullable=False, default=MenuItemKind.LINK.value)
    order_position = Column("order", Integer, nullable=False, default=0)
    target = Column(String, nullable=True, default="_self")
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    menu = relationship("Menu", back_populates="items")


class MenuItemDTO(BaseModel):
    id: int | None = None
    menu_id: int | None = None
    parent_id: int | None = None
    title: str | None = None
    url: str | None = None
    icon: str | None = None
    icon_type: str | None = "fas"
    item_type: MenuItemKind = MenuItemKind.LINK
    order_position: int = 0
    target: str | None = "_self"
    active: bool = True


class MenuTreeNodeDTO(MenuItemDTO):
    """Menu item with its ordered children. Children of a child are always empty."""
    children: list["MenuTreeNodeDTO"] = Field(default_factory=list)


class MenuAnomalyDTO(BaseModel):
    """Data-quality note produced while building a menu tree."""
    item_id: int | None
    parent_id: int | None = None
    kind: ErrorKind


class MenuWithTreeDTO(BaseModel):
    menu: MenuDTO
    items: list[MenuItemDTO]
    tree: list[MenuTreeNodeDTO]

