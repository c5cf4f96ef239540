"""
In-memory Pet Repository

Concurrency-safe fake of IPetRepository backed by dictionaries. Used by the unit
suite and by the ``memory`` repository backend for local runs without a
database. Follows the same upsert rules as the PostgreSQL repository.
"""

# Standard library imports
import asyncio
import logging
from collections.abc import Iterable

# Local imports
from petstore.application.interfaces.exceptions import IntegrityError
from petstore.application.interfaces.repositories import IPetRepository
from petstore.domain.entities.category import Category
from petstore.domain.entities.pet import CreatePetRequest, Pet
from petstore.domain.entities.tag import Tag
from petstore.domain.exceptions import DuplicatePetError, UnknownPetError

logger = logging.getLogger(__name__)


def _next_id(used: Iterable[int]) -> int:
    return max(used, default=0) + 1


class InMemoryPetRepository(IPetRepository):
    """
    Dictionary-backed pet store guarded by an asyncio lock.

    Writes are all-or-nothing: every conflict is detected before state
    changes. Callers always receive copies, so mutating a returned pet never
    changes stored state.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        # Pets are stored without their category; it is resolved by id on read
        self._pets: dict[int, Pet] = {}
        self._pet_categories: dict[int, int | None] = {}
        self._ids_by_name: dict[str, int] = {}
        self._categories: dict[int, Category] = {}
        self._tags: dict[int, Tag] = {}
        self._tags_by_name: dict[str, Tag] = {}

    async def add_pet(self, request: CreatePetRequest) -> Pet:
        async with self._lock:
            if request.name in self._ids_by_name:
                raise DuplicatePetError(request.name)
            self._check_keys(request)

            category = self._upsert_category(request.category)
            tags = [self._upsert_tag(tag) for tag in request.tags if tag.name is not None]
            pet_id = request.id if request.id is not None else _next_id(self._pets)

            self._pets[pet_id] = Pet(
                id=pet_id,
                name=request.name,
                photo_urls=list(request.photo_urls),
                tags=list(dict.fromkeys(tags)),
                status=request.status,
            )
            self._pet_categories[pet_id] = category.id if category is not None else None
            self._ids_by_name[request.name] = pet_id

            logger.debug(f"Stored pet {pet_id} '{request.name}' in memory")
            return self._view(pet_id)

    async def find_pet_by_id(self, pet_id: int) -> Pet | None:
        async with self._lock:
            if pet_id not in self._pets:
                return None
            return self._view(pet_id)

    async def count(self) -> int:
        async with self._lock:
            return len(self._pets)

    async def clear(self) -> None:
        async with self._lock:
            self._pets.clear()
            self._pet_categories.clear()
            self._ids_by_name.clear()
            self._categories.clear()
            self._tags.clear()
            self._tags_by_name.clear()

    def _view(self, pet_id: int) -> Pet:
        """Copy of a stored pet joined with its category's current row."""
        pet = self._pets[pet_id].copy()
        category_id = self._pet_categories.get(pet_id)
        category = self._categories.get(category_id) if category_id is not None else None
        if category is not None and category.is_complete:
            pet.set_category(category)
        return pet

    def _check_keys(self, request: CreatePetRequest) -> None:
        """Reject supplied ids that would collide with stored rows."""
        if request.id is not None and request.id in self._pets:
            raise UnknownPetError(IntegrityError("pets_pkey"))
        new_tags: dict[int, str] = {}
        for tag in request.tags:
            if tag.id is None or tag.name is None or tag.name in self._tags_by_name:
                continue
            if tag.id in self._tags or new_tags.get(tag.id, tag.name) != tag.name:
                raise UnknownPetError(IntegrityError("tags_pkey"))
            new_tags[tag.id] = tag.name

    def _upsert_category(self, category: Category | None) -> Category | None:
        if category is None or category.is_empty:
            return None
        category_id = category.id if category.id is not None else _next_id(self._categories)
        stored = category.with_id(category_id)
        self._categories[category_id] = stored
        return stored

    def _upsert_tag(self, tag: Tag) -> Tag:
        # Name-addressed: a known name keeps its stored id
        if tag.name in self._tags_by_name:
            return self._tags_by_name[tag.name]
        tag_id = tag.id if tag.id is not None else _next_id(self._tags)
        stored = tag.with_id(tag_id)
        self._tags[tag_id] = stored
        self._tags_by_name[tag.name] = stored
        return stored

    def __repr__(self) -> str:
        return f"InMemoryPetRepository(pets={len(self._pets)})"
