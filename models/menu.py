from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship

from models.base import Base


class Menu(Base):
    """
    Named navigation menu bound to a page location.

    Locations are free-form keys used by the UI, e.g. "header",
    "footer_quick_links" or "footer_destinations".
    """
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    location = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    items = relationship("MenuItem", back_populates="menu", cascade="all, delete-orphan")


class MenuDTO(BaseModel):
    id: int | None = None
    name: str | None = None
    location: str | None = None
    description: str | None = None
    active: bool | None = None
