"""PostgreSQL infrastructure: pool lifecycle, query adapter and schema."""

from .adapter import PostgreSQLAdapter, PostgreSQLTransaction
from .connection import DatabaseConnection
from .schema import PET_NAME_CONSTRAINT, create_schema

__all__ = [
    "DatabaseConnection",
    "PET_NAME_CONSTRAINT",
    "PostgreSQLAdapter",
    "PostgreSQLTransaction",
    "create_schema",
]
