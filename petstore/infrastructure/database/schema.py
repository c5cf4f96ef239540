"""
Database schema for the pet catalog.

Five tables: ``categories``, ``tags``, ``pets`` and the two child tables
``pet_photos`` and ``pet_tags``. Statements are idempotent so start-up can run
them against an existing database.
"""

# Standard library imports
import logging

# Local imports
from .adapter import PostgreSQLAdapter

logger = logging.getLogger(__name__)

PET_NAME_CONSTRAINT = "pets_name_key"

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS categories (
        id BIGSERIAL PRIMARY KEY,
        name TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tags (
        id BIGSERIAL PRIMARY KEY,
        name TEXT UNIQUE
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS pets (
        id BIGSERIAL PRIMARY KEY,
        name TEXT NOT NULL CONSTRAINT {PET_NAME_CONSTRAINT} UNIQUE,
        category_id BIGINT REFERENCES categories (id),
        status TEXT NOT NULL DEFAULT 'available'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pet_photos (
        pet_id BIGINT NOT NULL REFERENCES pets (id) ON DELETE CASCADE,
        url TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pet_tags (
        pet_id BIGINT NOT NULL REFERENCES pets (id) ON DELETE CASCADE,
        tag_id BIGINT NOT NULL REFERENCES tags (id),
        PRIMARY KEY (pet_id, tag_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_pet_photos_pet_id ON pet_photos (pet_id)",
)


async def create_schema(adapter: PostgreSQLAdapter) -> None:
    """Create all catalog tables in a single transaction."""
    logger.info("Ensuring pet catalog schema exists")
    async with adapter.transaction() as tx:
        for statement in SCHEMA_STATEMENTS:
            await tx.execute_query(statement)
    logger.info("Pet catalog schema ready")
