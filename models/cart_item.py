# a cart line is a priced snapshot of one bookable product. Prices are captured when
# the item is added and never recomputed from the catalog afterwards, so a later
# price change on a hotel or tour does not alter what the customer already sees.
#
# carts belong either to a signed-in user (user_id) or to a guest browser session
# (session_id); there is no separate carts table.
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, JSON

from enums.cart_item_type import CartItemType
from enums.error_kind import ErrorKind
from models.base import Base


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=True, index=True)
    session_id = Column(String, nullable=True, index=True)  # For guest users
    item_type = Column(String, nullable=False)
    item_id = Column(Integer, nullable=False)  # References the booked product, table depends on item_type
    item_name = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    adults = Column(Integer, nullable=False, default=1)
    children = Column(Integer, nullable=False, default=0)
    infants = Column(Integer, nullable=False, default=0)
    check_in_date = Column(DateTime, nullable=True)
    check_out_date = Column(DateTime, nullable=True)
    travel_date = Column(DateTime, nullable=True)
    configuration = Column(JSON, nullable=True)  # Room preferences, slugs, seat selection
    price_at_add = Column(Numeric(12, 2), nullable=False)
    discounted_price_at_add = Column(Numeric(12, 2), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class CartItemDTO(BaseModel):
    id: int | None = None
    user_id: int | None = None
    session_id: str | None = None
    item_type: CartItemType
    item_id: int
    item_name: str | None = None
    quantity: int | None = 1
    adults: int = Field(default=1, ge=0)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)
    check_in_date: datetime | None = None
    check_out_date: datetime | None = None
    travel_date: datetime | None = None
    configuration: dict | None = None
    price_at_add: Decimal | None = None
    discounted_price_at_add: Decimal | None = None
    notes: str | None = None

    @property
    def display_name(self) -> str:
        return self.item_name or f"{self.item_type.value} #{self.item_id}"


class CartItemUpdateDTO(BaseModel):
    """Editable fields of a stored cart line. Price snapshots are not editable."""
    quantity: int | None = None
    adults: int | None = Field(default=None, ge=0)
    children: int | None = Field(default=None, ge=0)
    infants: int | None = Field(default=None, ge=0)
    check_in_date: datetime | None = None
    check_out_date: datetime | None = None
    travel_date: datetime | None = None
    configuration: dict | None = None
    notes: str | None = None


class CartLineDTO(BaseModel):
    """Normalized display row for an accepted cart item."""
    item: CartItemDTO
    name: str
    unit_price: Decimal
    effective_unit_price: Decimal
    line_total: Decimal
    discount: Decimal
    discount_applied: bool
    guests: int | None = None  # adults + children + infants, only for occupancy-priced types


class RejectedCartItemDTO(BaseModel):
    item: CartItemDTO
    reason: ErrorKind
    message: str


class CartTotalsDTO(BaseModel):
    subtotal: Decimal = Decimal("0.00")
    discount_total: Decimal = Decimal("0.00")
    item_count: int = 0
    tax: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")


class CartSummaryDTO(BaseModel):
    totals: CartTotalsDTO = Field(default_factory=CartTotalsDTO)
    lines: list[CartLineDTO] = Field(default_factory=list)
    rejected: list[RejectedCartItemDTO] = Field(default_factory=list)
    badge: str = ""
    currency: str | None = None
