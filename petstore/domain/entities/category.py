"""Category entity - optional grouping a pet belongs to."""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    """
    Category of a pet.

    Identity is ``id`` when present; a category without an id is pending
    creation. A category with neither id nor name is empty and stands for
    "no category".
    """

    id: int | None = None
    name: str | None = None

    @property
    def is_empty(self) -> bool:
        """Check whether neither id nor name is set."""
        return self.id is None and self.name is None

    @property
    def is_complete(self) -> bool:
        """Check whether both id and name are set."""
        return self.id is not None and self.name is not None

    @classmethod
    def resolve(cls, category: Category | None) -> Category:
        """Resolve an optional category: absent becomes a fresh empty category."""
        if category is None:
            return cls()
        return category

    def with_id(self, category_id: int) -> Category:
        """Return a copy carrying the store-assigned id."""
        return Category(id=category_id, name=self.name)

    def __str__(self) -> str:
        return f"Category(id: {self.id}, name: {self.name})"
