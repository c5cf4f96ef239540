"""Tags value object."""

# Standard library imports
from collections.abc import Sequence

from ..entities.tag import Tag
from ..exceptions import EmptyTagsError
from .base import ValueObject


class Tags(ValueObject):
    """Immutable tag collection.

    An absent collection (``None``) is valid and normalizes to no tags; a
    collection that is present but empty is rejected. The two cases must stay
    distinct.
    """

    __slots__ = ("_tags",)

    def __init__(self, tags: Sequence[Tag] | None) -> None:
        """
        Raises:
            EmptyTagsError: If tags is supplied but empty
        """
        if tags is not None and len(tags) == 0:
            raise EmptyTagsError()
        self._tags = tuple(tags or ())

    @property
    def value(self) -> list[Tag]:
        return list(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def _key(self) -> frozenset[Tag]:
        return frozenset(self._tags)

    def __str__(self) -> str:
        return str([str(tag) for tag in self._tags])
