"""Repository adapters implementing the pet repository port."""

from .memory_pet_repository import InMemoryPetRepository
from .pet_repository import PostgreSQLPetRepository

__all__ = ["InMemoryPetRepository", "PostgreSQLPetRepository"]
