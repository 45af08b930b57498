"""
Unit Tests: MenuService.build_menu_tree()

Covers ordering, parent resolution, orphans, self references, duplicate ids,
multi-level input and parent cycles. No database needed.

Run with:
    pytest tests/menu/unit/test_menu_tree_builder.py -v
"""

import pytest

from enums.error_kind import ErrorKind
from models.menu_item import MenuItemDTO, MenuTreeNodeDTO
from services.menu import MenuService


def item(item_id, parent_id=None, order=0, title=None):
    return MenuItemDTO(
        id=item_id,
        menu_id=1,
        parent_id=parent_id,
        order_position=order,
        title=title or f"Item {item_id}",
        url=f"/page/{item_id}"
    )


def depth(node: MenuTreeNodeDTO) -> int:
    if not node.children:
        return 1
    return 1 + max(depth(child) for child in node.children)


def all_ids(nodes: list[MenuTreeNodeDTO]) -> list[int]:
    ids = []
    for node in nodes:
        ids.append(node.id)
        ids.extend(all_ids(node.children))
    return ids


class TestBuildMenuTree:

    def test_empty_input_returns_empty_tree(self):
        assert MenuService.build_menu_tree([]) == []

    def test_parent_with_single_child(self):
        tree = MenuService.build_menu_tree([item(1), item(2, parent_id=1)])

        assert len(tree) == 1
        assert tree[0].id == 1
        assert [child.id for child in tree[0].children] == [2]
        assert tree[0].children[0].children == []

    def test_siblings_sorted_by_order_position(self):
        tree = MenuService.build_menu_tree([
            item(10, order=3),
            item(11, order=1),
            item(12, order=2),
        ])

        assert [node.order_position for node in tree] == [1, 2, 3]
        assert [node.id for node in tree] == [11, 12, 10]

    def test_order_ties_broken_by_ascending_id(self):
        tree = MenuService.build_menu_tree([
            item(7, order=1),
            item(3, order=1),
            item(5, order=0),
        ])

        assert [node.id for node in tree] == [5, 3, 7]

    def test_children_sorted_independently(self):
        tree = MenuService.build_menu_tree([
            item(1, order=1),
            item(2, order=0),
            item(20, parent_id=1, order=2),
            item(21, parent_id=1, order=1),
            item(30, parent_id=2, order=5),
            item(31, parent_id=2, order=5),
        ])

        assert [node.id for node in tree] == [2, 1]
        assert [child.id for child in tree[0].children] == [30, 31]
        assert [child.id for child in tree[1].children] == [21, 20]

    def test_child_listed_before_parent(self):
        tree = MenuService.build_menu_tree([item(2, parent_id=1), item(1)])

        assert [node.id for node in tree] == [1]
        assert [child.id for child in tree[0].children] == [2]

    def test_self_referencing_item_is_top_level(self):
        anomalies = []
        tree = MenuService.build_menu_tree([item(4, parent_id=4)], anomalies)

        assert [node.id for node in tree] == [4]
        assert tree[0].children == []
        assert [a.kind for a in anomalies] == [ErrorKind.ORPHAN_MENU_ITEM]

    def test_missing_parent_promotes_item_to_top_level(self):
        anomalies = []
        tree = MenuService.build_menu_tree([item(1), item(2, parent_id=99, order=-1)], anomalies)

        assert [node.id for node in tree] == [2, 1]
        assert len(anomalies) == 1
        assert anomalies[0].item_id == 2
        assert anomalies[0].parent_id == 99
        assert anomalies[0].kind == ErrorKind.ORPHAN_MENU_ITEM

    def test_children_of_promoted_orphan_are_attached(self):
        tree = MenuService.build_menu_tree([item(2, parent_id=99), item(3, parent_id=2)])

        assert [node.id for node in tree] == [2]
        assert [child.id for child in tree[0].children] == [3]

    def test_third_level_item_is_dropped(self):
        anomalies = []
        tree = MenuService.build_menu_tree([
            item(1),
            item(2, parent_id=1),
            item(3, parent_id=2),
        ], anomalies)

        assert all_ids(tree) == [1, 2]
        assert tree[0].children[0].children == []
        assert [(a.item_id, a.kind) for a in anomalies] == [(3, ErrorKind.ORPHAN_MENU_ITEM)]

    def test_parent_cycle_does_not_create_nodes(self):
        anomalies = []
        tree = MenuService.build_menu_tree([item(1, parent_id=2), item(2, parent_id=1), item(3)], anomalies)

        assert all_ids(tree) == [3]
        assert sorted(a.item_id for a in anomalies) == [1, 2]

    def test_duplicate_id_last_write_wins(self):
        anomalies = []
        tree = MenuService.build_menu_tree([
            item(1, title="Old"),
            item(2, parent_id=1),
            item(1, title="New"),
        ], anomalies)

        assert len(tree) == 1
        assert tree[0].title == "New"
        assert [child.id for child in tree[0].children] == [2]
        assert [a.kind for a in anomalies] == [ErrorKind.DUPLICATE_MENU_ITEM_ID]

    def test_duplicate_id_can_change_parent(self):
        tree = MenuService.build_menu_tree([
            item(1),
            item(2, parent_id=1),
            item(2),
        ])

        assert [node.id for node in tree] == [1, 2]
        assert tree[0].children == []

    def test_anomalies_argument_is_optional(self):
        tree = MenuService.build_menu_tree([item(1, parent_id=1), item(1)])

        assert [node.id for node in tree] == [1]

    def test_display_attributes_are_carried_over(self):
        source = MenuItemDTO(
            id=1, menu_id=3, title="Visas", url="/visas",
            icon="passport", icon_type="fas", target="_blank", order_position=0
        )
        node = MenuService.build_menu_tree([source])[0]

        assert node.title == "Visas"
        assert node.url == "/visas"
        assert node.icon == "passport"
        assert node.target == "_blank"
        assert node.menu_id == 3

    def test_input_items_are_not_mutated(self):
        items = [item(1), item(2, parent_id=1)]
        snapshot = [i.model_copy(deep=True) for i in items]

        MenuService.build_menu_tree(items)

        assert items == snapshot

    def test_idempotent_and_deterministic(self):
        items = [
            item(5, order=2), item(6, parent_id=5, order=1), item(7, parent_id=5, order=0),
            item(8, parent_id=42), item(9, parent_id=9), item(10, parent_id=6),
        ]

        first = MenuService.build_menu_tree(items)
        second = MenuService.build_menu_tree(items)

        assert first == second

    def test_rebuilding_from_tree_nodes_gives_same_tree(self):
        items = [item(1), item(2, parent_id=1), item(3, order=1)]
        tree = MenuService.build_menu_tree(items)
        flattened = [tree[0], tree[0].children[0], tree[1]]

        assert MenuService.build_menu_tree(flattened) == tree

    @pytest.mark.parametrize("items", [
        [item(1, parent_id=2), item(2, parent_id=3), item(3, parent_id=1)],
        [item(1), item(2, parent_id=1), item(3, parent_id=2), item(4, parent_id=3)],
        [item(1, parent_id=1), item(2, parent_id=1), item(3, parent_id=2)],
        [item(1), item(1, parent_id=1), item(2, parent_id=1), item(2, parent_id=2)],
    ])
    def test_forest_depth_never_exceeds_two(self, items):
        tree = MenuService.build_menu_tree(items)

        for root in tree:
            assert depth(root) <= 2
            assert root.id not in all_ids(root.children)
        ids = all_ids(tree)
        assert len(ids) == len(set(ids))
