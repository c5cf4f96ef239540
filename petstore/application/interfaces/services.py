"""
Service Interface Definitions

The public API of the pet domain. Inbound adapters (HTTP) depend on this
contract only, never on the repository or on storage technology.
"""

# Standard library imports
from abc import abstractmethod
from typing import Protocol

# Local imports
from petstore.domain.entities.pet import CreatePetRequest, Pet


class IPetService(Protocol):
    """Pet service interface, safe to share between concurrent requests."""

    @abstractmethod
    async def add_pet(self, request: CreatePetRequest) -> Pet:
        """
        Create a new pet.

        Raises:
            DuplicatePetError: If a pet with the same name already exists
            UnknownPetError: If the store fails
        """
        ...

    @abstractmethod
    async def find_pet_by_id(self, pet_id: int) -> Pet | None:
        """
        Find a pet by its id, returning None when it does not exist.

        Raises:
            UnknownPetError: If the store fails
        """
        ...
