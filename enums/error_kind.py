from enum import Enum


class ErrorKind(str, Enum):
    """
    Reasons reported alongside a best-effort menu tree or cart summary.

    INVALID_PRICE / INVALID_QUANTITY reject a single cart line.
    ORPHAN_MENU_ITEM / DUPLICATE_MENU_ITEM_ID are data-quality notes, never fatal.
    """

    INVALID_PRICE = "InvalidPrice"
    INVALID_QUANTITY = "InvalidQuantity"
    ORPHAN_MENU_ITEM = "OrphanMenuItem"
    DUPLICATE_MENU_ITEM_ID = "DuplicateMenuItemId"
