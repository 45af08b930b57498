"""
Menu Service

Turns the flat menu_items rows of a menu into the two-level navigation tree
rendered by the header and footer.
"""

import logging
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from enums.error_kind import ErrorKind
from exceptions.menu import MenuNotFoundException
from models.menu_item import MenuItemDTO, MenuTreeNodeDTO, MenuAnomalyDTO, MenuWithTreeDTO
from repositories.menu import MenuRepository


def _sibling_order(node: MenuTreeNodeDTO) -> tuple[int, int]:
    return node.order_position, node.id


def _report(
    anomalies: list[MenuAnomalyDTO] | None,
    kind: ErrorKind,
    item_id: int | None,
    parent_id: int | None = None
) -> None:
    logging.warning(f"[MenuTree] {kind.value}: item_id={item_id}, parent_id={parent_id}")
    if anomalies is not None:
        anomalies.append(MenuAnomalyDTO(item_id=item_id, parent_id=parent_id, kind=kind))


class MenuService:
    """Service for navigation menu assembly."""

    @staticmethod
    def build_menu_tree(
        items: Iterable[MenuItemDTO],
        anomalies: list[MenuAnomalyDTO] | None = None
    ) -> list[MenuTreeNodeDTO]:
        """
        Build a two-level navigation tree from a flat list of menu items.

        Algorithm:
        1. Wrap every item in a node with no children, keyed by id (last write wins)
        2. Items without a resolvable parent become top-level nodes
        3. Items whose parent is top-level are appended to that parent
        4. Sort top-level nodes and each child list by (order_position, id)

        Anomalies never abort the build:
        - parent_id == id or an unknown parent_id: the item is promoted to top level
          and reported as ORPHAN_MENU_ITEM
        - parent resolves to an item that is itself nested: the item is dropped and
          reported as ORPHAN_MENU_ITEM, which also breaks parent cycles
        - repeated id: the earlier record is discarded, reported as DUPLICATE_MENU_ITEM_ID

        Args:
            items: Flat menu items in any order
            anomalies: Optional list the caller wants data-quality notes appended to

        Returns:
            Top-level MenuTreeNodeDTO list, each with ordered children

        Example:
            >>> tree = MenuService.build_menu_tree([
            ...     MenuItemDTO(id=1, title="Hotels", order_position=0),
            ...     MenuItemDTO(id=2, parent_id=1, title="Cairo", order_position=0),
            ... ])
            >>> [child.id for child in tree[0].children]
            [2]
        """
        lookup: dict[int, MenuTreeNodeDTO] = {}
        for item in items:
            if item.id is None:
                logging.warning(f"[MenuTree] Skipping menu item without id: title={item.title!r}")
                continue
            if item.id in lookup:
                _report(anomalies, ErrorKind.DUPLICATE_MENU_ITEM_ID, item.id, item.parent_id)
            node = MenuTreeNodeDTO.model_validate(item.model_dump(exclude={'children'}))
            lookup[item.id] = node

        def resolves_to_parent(node: MenuTreeNodeDTO) -> bool:
            return (
                node.parent_id is not None
                and node.parent_id != node.id
                and node.parent_id in lookup
            )

        roots: list[MenuTreeNodeDTO] = []
        for node in lookup.values():
            if node.parent_id is None:
                roots.append(node)
            elif not resolves_to_parent(node):
                _report(anomalies, ErrorKind.ORPHAN_MENU_ITEM, node.id, node.parent_id)
                roots.append(node)
            else:
                parent = lookup[node.parent_id]
                if resolves_to_parent(parent):
                    # Third level is not rendered by the navigation
                    _report(anomalies, ErrorKind.ORPHAN_MENU_ITEM, node.id, node.parent_id)
                else:
                    parent.children.append(node)

        roots.sort(key=_sibling_order)
        for root in roots:
            root.children.sort(key=_sibling_order)
        return roots

    @staticmethod
    async def get_menu_tree(location: str, session: AsyncSession | Session) -> MenuWithTreeDTO:
        """
        Load the active menu of a location and assemble its tree.

        Args:
            location: Location key, e.g. "header" or "footer_quick_links"
            session: Database session

        Returns:
            MenuWithTreeDTO with the menu, its flat active items and the tree

        Raises:
            MenuNotFoundException: If no active menu is bound to the location
        """
        menu = await MenuRepository.get_by_location(location, session)
        if menu is None:
            raise MenuNotFoundException(location=location)

        items = await MenuRepository.get_items(menu.id, session, active_only=True)
        anomalies: list[MenuAnomalyDTO] = []
        tree = MenuService.build_menu_tree(items, anomalies)
        if anomalies:
            logging.info(f"[MenuTree] Menu '{menu.name}' built with {len(anomalies)} data-quality notes")
        return MenuWithTreeDTO(menu=menu, items=items, tree=tree)
