"""Domain entities of the pet catalog."""

from .category import Category
from .pet import CreatePetRequest, Pet, Status
from .tag import Tag

__all__ = ["Category", "CreatePetRequest", "Pet", "Status", "Tag"]
