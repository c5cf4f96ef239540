"""Tag entity - free-form label attached to pets."""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass


@dataclass(frozen=True)
class Tag:
    """
    Tag attached to a pet.

    Tags are stored by name: two tags with the same name and different ids
    resolve to the same stored tag.
    """

    id: int | None = None
    name: str | None = None

    @property
    def is_complete(self) -> bool:
        """Check whether both id and name are set."""
        return self.id is not None and self.name is not None

    def with_id(self, tag_id: int) -> Tag:
        """Return a copy carrying the store-assigned id."""
        return Tag(id=tag_id, name=self.name)

    def __str__(self) -> str:
        return f"Tag(id: {self.id}, name: {self.name})"
