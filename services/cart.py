import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from db import session_commit
from exceptions.cart import (
    InvalidPriceException,
    InvalidQuantityException,
    CartItemNotFoundException,
    InvalidCartStateException
)
from models.cart_item import (
    CartItemDTO,
    CartItemUpdateDTO,
    CartLineDTO,
    CartSummaryDTO,
    CartTotalsDTO,
    RejectedCartItemDTO
)
from repositories.cart_item import CartItemRepository

CENT = Decimal("0.01")


def to_money(amount: Decimal) -> Decimal:
    """
    Round a currency amount to cents.

    Only applied to aggregated values so that many lines never drift by a cent.

    Examples:
        Decimal("10.005") → Decimal("10.01")
        Decimal("160") → Decimal("160.00")
    """
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


class CartService:

    @staticmethod
    def get_effective_unit_price(item: CartItemDTO) -> Decimal:
        """
        Validate the price snapshot of a cart line and return the price that is billed.

        The discounted snapshot wins only when it is present and lower than the list
        snapshot. Prices are never re-read from the catalog.

        Raises:
            InvalidPriceException: price_at_add missing or negative, or negative discount price
            InvalidQuantityException: quantity missing or not positive
        """
        price = item.price_at_add
        if price is None or price < 0:
            raise InvalidPriceException(price)
        discounted = item.discounted_price_at_add
        if discounted is not None and discounted < 0:
            raise InvalidPriceException(discounted, field="discounted_price_at_add")
        if item.quantity is None or item.quantity <= 0:
            raise InvalidQuantityException(item.quantity)

        if discounted is not None and discounted < price:
            return discounted
        return price

    @staticmethod
    def compute_cart_totals(
        items: Iterable[CartItemDTO],
        tax_percent: Decimal | None = None
    ) -> CartSummaryDTO:
        """
        Compute cart totals and display lines from price snapshots.

        Invalid lines do not abort the computation: they are reported in
        `rejected` with their reason and contribute nothing to the totals,
        including item_count.

        Args:
            items: Cart lines of one owner
            tax_percent: Tax rate in percent, defaults to config.CART_TAX_PERCENT

        Returns:
            CartSummaryDTO with totals, accepted lines, rejected lines and badge text

        Example:
            price_at_add=100, discounted_price_at_add=80, quantity=2
            → subtotal 160.00, discount_total 40.00, item_count 2
        """
        if tax_percent is None:
            tax_percent = config.CART_TAX_PERCENT
        tax_percent = Decimal(str(tax_percent))

        subtotal = Decimal("0")
        discount_total = Decimal("0")
        item_count = 0
        lines = []
        rejected = []

        for item in items:
            try:
                unit_price = CartService.get_effective_unit_price(item)
            except (InvalidPriceException, InvalidQuantityException) as e:
                logging.warning(f"[Cart] Rejected {item.display_name}: {e}")
                rejected.append(RejectedCartItemDTO(item=item, reason=e.kind, message=e.message))
                continue

            line_total = unit_price * item.quantity
            discount = (item.price_at_add - unit_price) * item.quantity
            subtotal += line_total
            discount_total += discount
            item_count += item.quantity
            lines.append(CartLineDTO(
                item=item,
                name=item.display_name,
                unit_price=item.price_at_add,
                effective_unit_price=unit_price,
                line_total=line_total,
                discount=discount,
                discount_applied=unit_price < item.price_at_add,
                guests=item.adults + item.children + item.infants if item.item_type.uses_occupancy else None
            ))

        subtotal = to_money(subtotal)
        tax = to_money(subtotal * tax_percent / Decimal("100"))
        totals = CartTotalsDTO(
            subtotal=subtotal,
            discount_total=to_money(discount_total),
            item_count=item_count,
            tax=tax,
            total=subtotal + tax
        )
        return CartSummaryDTO(
            totals=totals,
            lines=lines,
            rejected=rejected,
            badge=CartService.format_badge(item_count),
            currency=config.CURRENCY.value
        )

    @staticmethod
    def format_badge(item_count: int, limit: int | None = None) -> str:
        """
        Text of the cart badge in the header.

        Examples:
            0 → ""
            5 → "5"
            120 → "99+"
        """
        if limit is None:
            limit = config.CART_BADGE_LIMIT
        if item_count <= 0:
            return ""
        if item_count > limit:
            return f"{limit}+"
        return str(item_count)

    @staticmethod
    async def get_cart_summary(
        session: AsyncSession | Session,
        user_id: int | None = None,
        session_id: str | None = None
    ) -> CartSummaryDTO:
        """
        Load the cart of a signed-in user or a guest session and aggregate it.

        A user id takes precedence over a guest session id. Without either the
        cart is empty.
        """
        if user_id is not None:
            items = await CartItemRepository.get_by_user_id(user_id, session)
        elif session_id:
            items = await CartItemRepository.get_by_session_id(session_id, session)
        else:
            items = []
        logging.info(f"[Cart] Loaded {len(items)} cart items (user_id={user_id}, guest={session_id is not None})")
        return CartService.compute_cart_totals(items)

    @staticmethod
    async def add_to_cart(cart_item: CartItemDTO, session: AsyncSession | Session) -> CartItemDTO:
        """
        Store a new cart line with its price snapshot.

        Raises:
            InvalidCartStateException: Neither user_id nor session_id given
            InvalidPriceException: Invalid price snapshot
            InvalidQuantityException: Quantity not positive
        """
        if cart_item.user_id is None and not cart_item.session_id:
            raise InvalidCartStateException("cart item needs a user_id or a session_id")
        CartService.get_effective_unit_price(cart_item)

        if cart_item.user_id is not None:
            # Signed-in carts are keyed by user only
            cart_item = cart_item.model_copy(update={'session_id': None})

        created = await CartItemRepository.create(cart_item, session)
        await session_commit(session)
        logging.info(f"[Cart] Added {created.item_type.value} {created.item_id} x{created.quantity} as cart item {created.id}")
        return created

    @staticmethod
    async def remove_from_cart(
        cart_item_id: int,
        session: AsyncSession | Session,
        user_id: int | None = None,
        session_id: str | None = None
    ) -> None:
        """
        Remove one cart line owned by the caller.

        Raises:
            CartItemNotFoundException: Line missing or owned by someone else
        """
        cart_item = await CartItemRepository.get_by_id(cart_item_id, session)
        if cart_item is None or not CartService._is_owner(cart_item, user_id, session_id):
            raise CartItemNotFoundException(cart_item_id)
        await CartItemRepository.remove(cart_item_id, session)
        await session_commit(session)

    @staticmethod
    async def update_cart_item(
        cart_item_id: int,
        updates: CartItemUpdateDTO,
        session: AsyncSession | Session,
        user_id: int | None = None,
        session_id: str | None = None
    ) -> CartItemDTO:
        """
        Change quantity, occupancy, dates or notes of a cart line owned by the caller.

        The price snapshot is kept as captured when the line was added.

        Raises:
            CartItemNotFoundException: Line missing or owned by someone else
            InvalidQuantityException: Quantity sent but not positive
        """
        cart_item = await CartItemRepository.get_by_id(cart_item_id, session)
        if cart_item is None or not CartService._is_owner(cart_item, user_id, session_id):
            raise CartItemNotFoundException(cart_item_id)
        if 'quantity' in updates.model_fields_set and (updates.quantity is None or updates.quantity <= 0):
            raise InvalidQuantityException(updates.quantity)

        await CartItemRepository.update(cart_item_id, updates, session)
        await session_commit(session)
        logging.info(f"[Cart] Updated cart item {cart_item_id}: {sorted(updates.model_fields_set)}")
        return await CartItemRepository.get_by_id(cart_item_id, session)

    @staticmethod
    async def clear_cart(
        session: AsyncSession | Session,
        user_id: int | None = None,
        session_id: str | None = None
    ) -> int:
        if user_id is None and not session_id:
            raise InvalidCartStateException("clearing a cart needs a user_id or a session_id")
        removed = await CartItemRepository.clear(session, user_id=user_id, session_id=session_id)
        await session_commit(session)
        logging.info(f"[Cart] Cleared {removed} cart items (user_id={user_id}, guest={session_id is not None})")
        return removed

    @staticmethod
    def _is_owner(cart_item: CartItemDTO, user_id: int | None, session_id: str | None) -> bool:
        if user_id is not None:
            return cart_item.user_id == user_id
        if session_id:
            return cart_item.session_id == session_id
        return False
