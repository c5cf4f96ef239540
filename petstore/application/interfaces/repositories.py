"""
Repository Interface Definitions

Defines the contract that storage adapters must implement.
Following the Repository pattern and clean architecture principles.
"""

# Standard library imports
from abc import abstractmethod
from typing import Protocol

# Local imports
from petstore.domain.entities.pet import CreatePetRequest, Pet


class IPetRepository(Protocol):
    """
    Pet repository interface.

    Defines operations for persisting and retrieving Pet aggregates.
    Implementations are shared by every concurrent request and must not
    assume exclusive access.
    """

    @abstractmethod
    async def add_pet(self, request: CreatePetRequest) -> Pet:
        """
        Persist a new pet with its category, photo URLs and tags.

        Args:
            request: The validated creation request

        Returns:
            The created pet, carrying the id assigned by the store

        Raises:
            DuplicatePetError: MUST be raised if a pet with the same name exists;
                nothing is written in that case
            UnknownPetError: If the underlying store fails
        """
        ...

    @abstractmethod
    async def find_pet_by_id(self, pet_id: int) -> Pet | None:
        """
        Retrieve a pet by its id.

        Args:
            pet_id: The store-assigned identifier

        Returns:
            The pet if found, None otherwise (a missing pet is not an error)

        Raises:
            UnknownPetError: If the underlying store fails
        """
        ...
