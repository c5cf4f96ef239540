"""
PostgreSQL Pet Repository Implementation

Concrete implementation of IPetRepository using PostgreSQL database.
Maps one pet aggregate onto the pets, categories, tags, pet_photos and pet_tags
tables, writing and reading each aggregate inside a single transaction.
"""

# Standard library imports
import logging
from typing import Any

# Local imports
from petstore.application.interfaces.exceptions import IntegrityError
from petstore.application.interfaces.repositories import IPetRepository
from petstore.domain.entities.category import Category
from petstore.domain.entities.pet import CreatePetRequest, Pet, Status
from petstore.domain.entities.tag import Tag
from petstore.domain.exceptions import CreatePetError, DuplicatePetError, UnknownPetError
from petstore.infrastructure.database.adapter import PostgreSQLAdapter, PostgreSQLTransaction
from petstore.infrastructure.database.schema import PET_NAME_CONSTRAINT

logger = logging.getLogger(__name__)


class PostgreSQLPetRepository(IPetRepository):
    """
    PostgreSQL implementation of IPetRepository.

    Categories are upserted by id and tags by name, so both may be shared
    between pets. The unique constraint on ``pets.name`` backs up the
    duplicate check when two requests for the same name race.
    """

    def __init__(self, adapter: PostgreSQLAdapter) -> None:
        """
        Initialize repository with database adapter.

        Args:
            adapter: PostgreSQL database adapter
        """
        self.adapter = adapter

    async def add_pet(self, request: CreatePetRequest) -> Pet:
        """
        Persist a new pet with its category, photos and tags.

        Args:
            request: Validated creation request

        Returns:
            The stored pet, carrying the generated pet, category and tag ids

        Raises:
            DuplicatePetError: If a pet with the same name already exists
            UnknownPetError: If any storage operation fails
        """
        try:
            async with self.adapter.transaction() as tx:
                if await self._name_exists(tx, request.name):
                    raise DuplicatePetError(request.name)

                category = await self._upsert_category(tx, request.category)
                pet_id = await self._insert_pet(tx, request, category)
                await self._insert_photos(tx, pet_id, request.photo_urls)
                tags = await self._link_tags(tx, pet_id, request.tags)

        except CreatePetError:
            raise
        except IntegrityError as e:
            if e.constraint == PET_NAME_CONSTRAINT:
                logger.info(f"Concurrent insert of pet '{request.name}' rejected by constraint")
                raise DuplicatePetError(request.name) from e
            logger.error(f"Failed to add pet '{request.name}': {e}")
            raise UnknownPetError(e) from e
        except Exception as e:
            logger.error(f"Failed to add pet '{request.name}': {e}")
            raise UnknownPetError(e) from e

        logger.debug(f"Inserted pet {pet_id} '{request.name}'")
        # Same view find_pet_by_id gives: a nameless category reads back as absent
        return Pet(
            id=pet_id,
            name=request.name,
            category=category if category is not None and category.is_complete else None,
            photo_urls=list(request.photo_urls),
            tags=tags,
            status=request.status,
        )

    async def find_pet_by_id(self, pet_id: int) -> Pet | None:
        """
        Retrieve a pet by its ID.

        Args:
            pet_id: The pet identifier

        Returns:
            The pet if found, None otherwise

        Raises:
            UnknownPetError: If any storage operation fails
        """
        try:
            async with self.adapter.transaction() as tx:
                record = await tx.fetch_one(
                    """
                    SELECT p.id, p.name, p.status,
                           c.id AS category_id, c.name AS category_name
                    FROM pets p
                    LEFT JOIN categories c ON p.category_id = c.id
                    WHERE p.id = %s
                    """,
                    pet_id,
                )
                if record is None:
                    return None

                photo_urls = await tx.fetch_values(
                    "SELECT url FROM pet_photos WHERE pet_id = %s", pet_id
                )
                tag_records = await tx.fetch_all(
                    """
                    SELECT t.id, t.name
                    FROM tags t
                    JOIN pet_tags pt ON t.id = pt.tag_id
                    WHERE pt.pet_id = %s
                    """,
                    pet_id,
                )

            return self._map_record_to_pet(record, photo_urls, tag_records)

        except Exception as e:
            logger.error(f"Failed to retrieve pet {pet_id}: {e}")
            raise UnknownPetError(e) from e

    async def _name_exists(self, tx: PostgreSQLTransaction, name: str) -> bool:
        return bool(
            await tx.fetch_value("SELECT EXISTS(SELECT 1 FROM pets WHERE name = %s)", name)
        )

    async def _upsert_category(
        self, tx: PostgreSQLTransaction, category: Category | None
    ) -> Category | None:
        """Insert or update the category; returns it with its resolved id."""
        if category is None or category.is_empty:
            return None

        if category.id is None:
            category_id = await tx.fetch_value(
                "INSERT INTO categories (name) VALUES (%s) RETURNING id", category.name
            )
        else:
            category_id = await tx.fetch_value(
                """
                INSERT INTO categories (id, name) VALUES (%s, %s)
                ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name
                RETURNING id
                """,
                category.id,
                category.name,
            )
        return category.with_id(category_id)

    async def _insert_pet(
        self,
        tx: PostgreSQLTransaction,
        request: CreatePetRequest,
        category: Category | None,
    ) -> int:
        category_id = category.id if category is not None else None
        status = request.status.value

        if request.id is None:
            return await tx.fetch_value(
                "INSERT INTO pets (name, category_id, status) VALUES (%s, %s, %s) RETURNING id",
                request.name,
                category_id,
                status,
            )
        return await tx.fetch_value(
            "INSERT INTO pets (id, name, category_id, status) VALUES (%s, %s, %s, %s) RETURNING id",
            request.id,
            request.name,
            category_id,
            status,
        )

    async def _insert_photos(
        self, tx: PostgreSQLTransaction, pet_id: int, photo_urls: list[str]
    ) -> None:
        # Rows go in one at a time, in list order
        await tx.execute_batch(
            "INSERT INTO pet_photos (pet_id, url) VALUES (%s, %s)",
            [(pet_id, url) for url in photo_urls],
        )

    async def _link_tags(
        self, tx: PostgreSQLTransaction, pet_id: int, tags: list[Tag]
    ) -> list[Tag]:
        """Upsert each tag by name and link it to the pet."""
        linked: list[Tag] = []
        seen: set[int] = set()

        for tag in tags:
            # NULL names never conflict, so a nameless tag would add a row per request
            if tag.name is None:
                logger.debug(f"Skipping nameless tag {tag} for pet {pet_id}")
                continue
            if tag.id is None:
                tag_id = await tx.fetch_value(
                    """
                    INSERT INTO tags (name) VALUES (%s)
                    ON CONFLICT (name) DO UPDATE SET name = EXCLUDED.name
                    RETURNING id
                    """,
                    tag.name,
                )
            else:
                tag_id = await tx.fetch_value(
                    """
                    INSERT INTO tags (id, name) VALUES (%s, %s)
                    ON CONFLICT (name) DO UPDATE SET name = EXCLUDED.name
                    RETURNING id
                    """,
                    tag.id,
                    tag.name,
                )

            await tx.execute_query(
                "INSERT INTO pet_tags (pet_id, tag_id) VALUES (%s, %s) ON CONFLICT DO NOTHING",
                pet_id,
                tag_id,
            )
            if tag_id not in seen:
                seen.add(tag_id)
                linked.append(tag.with_id(tag_id))

        return linked

    def _map_record_to_pet(
        self,
        record: dict[str, Any],
        photo_urls: list[str],
        tag_records: list[dict[str, Any]],
    ) -> Pet:
        """Assemble a Pet from the joined pet row and its child rows."""
        pet = Pet(id=record["id"], name=record["name"])
        pet.set_status(Status.from_stored(record["status"]))

        category_id = record.get("category_id")
        category_name = record.get("category_name")
        if category_id is not None and category_name is not None:
            pet.set_category(Category(id=category_id, name=category_name))

        for url in photo_urls:
            pet.add_photo(url)

        for tag_record in tag_records:
            tag_id = tag_record.get("id")
            tag_name = tag_record.get("name")
            if tag_id is None or tag_name is None:
                logger.warning(f"Skipping incomplete tag row {tag_record} for pet {pet.id}")
                continue
            pet.add_tag(Tag(id=tag_id, name=tag_name))

        return pet

    def __repr__(self) -> str:
        return f"PostgreSQLPetRepository(adapter={self.adapter})"
