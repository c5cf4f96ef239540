"""
Pet Entity - the catalog aggregate root with its creation request.
"""

from __future__ import annotations

# Standard library imports
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from ..exceptions import EmptyNameError, InvalidStatusError
from .category import Category
from .tag import Tag


class Status(Enum):
    """Pet status enumeration"""

    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"

    @classmethod
    def parse(cls, value: str | None) -> Status:
        """
        Parse a status string, case-sensitively.

        Args:
            value: Status string, or None when the caller supplied no status

        Returns:
            Matching status; AVAILABLE when value is None

        Raises:
            InvalidStatusError: If value is not a known status string
        """
        if value is None:
            return cls.AVAILABLE
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatusError(value) from None

    @classmethod
    def from_stored(cls, value: str | None) -> Status:
        """Decode a stored status leniently; unknown values fall back to AVAILABLE."""
        try:
            return cls.parse(value)
        except InvalidStatusError:
            return cls.AVAILABLE

    def __str__(self) -> str:
        return self.value


@dataclass
class Pet:
    """
    Pet entity.

    A pet owns an optional category, an ordered list of photo URLs and an
    unordered collection of tags. ``id`` is assigned by the store.
    """

    name: str
    id: int | None = None
    category: Category | None = None
    photo_urls: list[str] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    status: Status = Status.AVAILABLE

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise EmptyNameError()

    def set_category(self, category: Category) -> None:
        self.category = category

    def add_photo(self, url: str) -> None:
        self.photo_urls.append(url)

    def add_tag(self, tag: Tag) -> None:
        self.tags.append(tag)

    def set_status(self, status: Status) -> None:
        self.status = status

    def tag_set(self) -> frozenset[Tag]:
        """Tags as an order-independent set."""
        return frozenset(self.tags)

    def copy(self) -> Pet:
        """Return a copy that shares no mutable state with this pet."""
        return replace(self, photo_urls=list(self.photo_urls), tags=list(self.tags))


@dataclass
class CreatePetRequest:
    """
    Input for creating a pet, before the store assigns an id.

    Build it with ``parse`` to apply every input rule once; direct construction
    is left to trusted callers such as tests and internal tooling.
    """

    name: str
    photo_urls: list[str] = field(default_factory=list)
    id: int | None = None
    category: Category | None = None
    tags: list[Tag] = field(default_factory=list)
    status: Status = Status.AVAILABLE

    @classmethod
    def parse(
        cls,
        name: str,
        photo_urls: Sequence[str],
        *,
        id: int | None = None,
        category: Category | None = None,
        tags: Iterable[Tag] | None = None,
        status: str | None = None,
    ) -> CreatePetRequest:
        """
        Validate raw input and build a normalized request.

        Raises:
            EmptyNameError: If name is blank
            EmptyPhotoUrlsError: If no photo URL is supplied
            EmptyTagsError: If tags is supplied but empty
            InvalidStatusError: If status is not a known status string
        """
        # Local imports
        from ..value_objects import PetName, PhotoUrls, Tags

        return cls(
            id=id,
            name=PetName(name).value,
            category=Category.resolve(category),
            photo_urls=PhotoUrls(photo_urls).value,
            tags=Tags(None if tags is None else list(tags)).value,
            status=Status.parse(status),
        )
