from enum import Enum


class MenuItemKind(str, Enum):
    LINK = "link"
    HEADING = "heading"  # Group label without its own URL
