# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

"""Tests for interview_scoring.categories."""

from __future__ import annotations

import pytest

from interview_scoring.categories import Category, CategoryError, CategoryHierarchy, default_categories


def _make_tree() -> CategoryHierarchy:
    return CategoryHierarchy.build(
        [
            ("Root", "Root", None),
            ("Mid", "Middle", "Root"),
            ("Leaf", "Leaf", "Mid"),
            ("Other", "Other leaf", "Root"),
            ("Solo", "Single root", None),
        ]
    )


class TestBuild:
    """Tests for CategoryHierarchy.build."""

    def test_leaves_are_selectable(self) -> None:
        """Only categories without children can be assigned."""
        tree = _make_tree()
        assert [c.code for c in tree.selectables()] == ["Leaf", "Other", "Solo"]
        assert not tree.get("Root").selectable
        assert not tree.get("Mid").selectable

    def test_entries_round_trip(self) -> None:
        """entries() rebuilds an equal hierarchy."""
        tree = _make_tree()
        assert CategoryHierarchy.build(tree.entries()) == tree

    @pytest.mark.parametrize(
        "entries",
        [
            pytest.param([("A", "a", None), ("A", "again", None)], id="duplicate-code"),
            pytest.param([("A", "a", "B"), ("B", "b", None)], id="parent-after-child"),
            pytest.param([("A", "a", "Missing")], id="unknown-parent"),
            pytest.param([("  ", "blank", None)], id="blank-code"),
        ],
    )
    def test_invalid_entries(self, entries) -> None:
        """Broken definitions raise CategoryError."""
        with pytest.raises(CategoryError):
            CategoryHierarchy.build(entries)

    def test_parent_must_precede_child(self) -> None:
        """The direct constructor checks parent positions too."""
        with pytest.raises(CategoryError):
            CategoryHierarchy([Category("A", "a", parent=1), Category("B", "b")])

    @pytest.mark.parametrize(
        "categories",
        [
            pytest.param(
                [Category("A", "a", selectable=True), Category("B", "b", parent=0)],
                id="group-marked-selectable",
            ),
            pytest.param(
                [Category("A", "a", selectable=False), Category("B", "b", parent=0, selectable=False)],
                id="leaf-marked-unselectable",
            ),
        ],
    )
    def test_selectable_must_match_structure(self, categories) -> None:
        """Only leaves may be selectable, and every leaf is."""
        with pytest.raises(CategoryError, match="selectable"):
            CategoryHierarchy(categories)

    def test_consistent_flags_are_accepted(self) -> None:
        """Flags matching the structure pass the direct constructor."""
        tree = CategoryHierarchy([Category("A", "a", selectable=False), Category("B", "b", parent=0)])
        assert [c.code for c in tree.selectables()] == ["B"]


class TestLookup:
    """Navigating a hierarchy."""

    def test_get_unknown_code(self) -> None:
        """Unknown codes raise CategoryError."""
        with pytest.raises(CategoryError):
            _make_tree().get("Nope")

    def test_ancestors_nearest_first(self) -> None:
        """Ancestors walk up to the root."""
        tree = _make_tree()
        assert [c.code for c in tree.ancestors(tree.get("Leaf"))] == ["Mid", "Root"]
        assert tree.ancestors(tree.get("Solo")) == []

    def test_children_and_roots(self) -> None:
        """Direct children only."""
        tree = _make_tree()
        assert [c.code for c in tree.children(tree.get("Root"))] == ["Mid", "Other"]
        assert [c.code for c in tree.roots()] == ["Root", "Solo"]

    def test_membership(self) -> None:
        """Categories of another hierarchy with the same code but other parent are not members."""
        tree = _make_tree()
        assert "Leaf" in tree
        assert tree.get("Leaf") in tree
        assert Category("Leaf", "Leaf") not in tree
        assert 42 not in tree


class TestDefaultCategories:
    """Tests for the standard scoring model."""

    def test_internal_and_external_details(self) -> None:
        """Int1..Int5 and Ext1..Ext5 are assignable."""
        codes = [c.code for c in default_categories().selectables()]
        assert codes == ["Int1", "Int2", "Int3", "Int4", "Int5", "Ext1", "Ext2", "Ext3", "Ext4", "Ext5"]

    def test_groups(self) -> None:
        """Int and Ext group the details."""
        model = default_categories()
        assert [c.code for c in model.roots()] == ["Int", "Ext"]
        assert model.parent_of(model.get("Ext2")) == model.get("Ext")
