# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Detail category hierarchy.

Categories live in a flat table owned by a `CategoryHierarchy`. A category
refers to its parent by position in that table, so a parent always precedes
its children and cycles cannot be expressed. Only leaf categories can be
assigned to tokens; inner categories aggregate the counts of their children.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator


class CategoryError(ValueError):
    """
    Raised when a category hierarchy cannot be built or a category is unknown.
    """

    pass


@dataclass(frozen=True)
class Category:
    """
    A single detail category.

    Attributes:
        code:
            Short identifier, unique within its hierarchy (e.g. `Int1`).
        name:
            Display name.
        parent:
            Position of the parent category in the hierarchy table, or None
            for a root category.
        selectable:
            True if the category is a leaf and can be assigned to tokens.
    """

    code: str
    name: str
    parent: int | None = None
    selectable: bool = True

    def __str__(self) -> str:
        return self.code


class CategoryHierarchy:
    """Immutable forest of detail categories."""

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        self._categories: tuple[Category, ...] = tuple(categories)
        self._by_code: dict[str, int] = {}

        for idx, category in enumerate(self._categories):
            if category.code in self._by_code:
                raise CategoryError(f"Duplicate category code: {category.code}")
            if category.parent is not None and not 0 <= category.parent < idx:
                raise CategoryError(
                    f"Parent of category '{category.code}' must be defined before it"
                )
            self._by_code[category.code] = idx

        has_children = {c.parent for c in self._categories if c.parent is not None}
        for idx, category in enumerate(self._categories):
            if category.selectable == (idx in has_children):
                raise CategoryError(
                    f"Category '{category.code}' must be selectable if and only if it has no children"
                )

    @classmethod
    def build(cls, entries: Iterable[tuple[str, str, str | None]]) -> CategoryHierarchy:
        """
        Build a hierarchy from `(code, name, parent_code)` entries.

        Selectability is derived from the structure: every category without
        children is selectable.

        Args:
            entries:
                Category definitions in an order where every parent appears
                before its children.

        Returns:
            The new hierarchy.

        Raises:
            CategoryError:
                If a code is empty or duplicated, or a parent code refers to a
                category that has not been added yet.
        """

        rows: list[tuple[str, str, int | None]] = []
        positions: dict[str, int] = {}

        for code, name, parent_code in entries:
            code = (code or "").strip()
            if not code:
                raise CategoryError("Category code must be a non-empty string")
            if code in positions:
                raise CategoryError(f"Duplicate category code: {code}")

            parent: int | None = None
            if parent_code is not None:
                if parent_code not in positions:
                    raise CategoryError(
                        f"Unknown parent category '{parent_code}' for category '{code}'"
                    )
                parent = positions[parent_code]

            positions[code] = len(rows)
            rows.append((code, name, parent))

        has_children = {parent for (_code, _name, parent) in rows if parent is not None}
        return cls(
            Category(code=code, name=name, parent=parent, selectable=idx not in has_children)
            for idx, (code, name, parent) in enumerate(rows)
        )

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Category):
            idx = self._by_code.get(item.code)
            return idx is not None and self._categories[idx] == item
        if isinstance(item, str):
            return item in self._by_code
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryHierarchy):
            return NotImplemented
        return self._categories == other._categories

    def __repr__(self) -> str:
        return f"CategoryHierarchy({[c.code for c in self._categories]!r})"

    def get(self, code: str) -> Category:
        """Return the category with the given code or raise CategoryError."""

        idx = self._by_code.get(code)
        if idx is None:
            raise CategoryError(f"Unknown category code: {code}")
        return self._categories[idx]

    def index_of(self, category: Category) -> int:
        if category not in self:
            raise CategoryError(f"Category is not part of this hierarchy: {category.code}")
        return self._by_code[category.code]

    def parent_of(self, category: Category) -> Category | None:
        if category.parent is None:
            return None
        return self._categories[category.parent]

    def children(self, category: Category) -> list[Category]:
        idx = self.index_of(category)
        return [c for c in self._categories if c.parent == idx]

    def ancestors(self, category: Category) -> list[Category]:
        """
        Return all ancestors of a category, nearest first.

        The category itself is not part of the result.
        """

        self.index_of(category)
        out: list[Category] = []
        current = self.parent_of(category)
        while current is not None:
            out.append(current)
            current = self.parent_of(current)
        return out

    def is_selectable(self, category: Category) -> bool:
        self.index_of(category)
        return category.selectable

    def roots(self) -> list[Category]:
        return [c for c in self._categories if c.parent is None]

    def selectables(self) -> list[Category]:
        return [c for c in self._categories if c.selectable]

    def entries(self) -> list[tuple[str, str, str | None]]:
        """Return `(code, name, parent_code)` entries suitable for `build`."""

        return [
            (
                c.code,
                c.name,
                self._categories[c.parent].code if c.parent is not None else None,
            )
            for c in self._categories
        ]


def default_categories() -> CategoryHierarchy:
    """
    Return the standard scoring model for autobiographical interviews.

    Internal details are grouped below `Int`, external details below `Ext`.
    """

    return CategoryHierarchy.build(
        [
            ("Int", "Internal", None),
            ("Int1", "Internal: Event details", "Int"),
            ("Int2", "Internal: Place details", "Int"),
            ("Int3", "Internal: Time details", "Int"),
            ("Int4", "Internal: Perceptual details", "Int"),
            ("Int5", "Internal: Emotion/Thought details", "Int"),
            ("Ext", "External", None),
            ("Ext1", "External: Semantic details", "Ext"),
            ("Ext2", "External: Repetitions", "Ext"),
            ("Ext3", "External: Other details", "Ext"),
            ("Ext4", "External: Episodic details", "Ext"),
            ("Ext5", "External: Generic events/routines", "Ext"),
        ]
    )
