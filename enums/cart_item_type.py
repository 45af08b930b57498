from enum import Enum


class CartItemType(str, Enum):
    """
    Kinds of bookable products that can sit in a cart.

    Values are stored verbatim in cart_items.item_type.
    """

    FLIGHT = "flight"
    HOTEL = "hotel"
    ROOM = "room"
    TOUR = "tour"
    PACKAGE = "package"
    VISA = "visa"
    TRANSPORTATION = "transportation"

    @property
    def uses_occupancy(self) -> bool:
        """Adults/children/infants only matter for these types."""
        return self in (CartItemType.FLIGHT, CartItemType.HOTEL, CartItemType.ROOM, CartItemType.TOUR)
