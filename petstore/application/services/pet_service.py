"""
PetService - canonical implementation of the pet service port.

All pet-domain orchestration lives here. The service currently passes calls
through to the repository; cross-cutting behaviour such as notifications
belongs here rather than in persistence code.
"""

import logging

from ...domain.entities.pet import CreatePetRequest, Pet
from ...domain.exceptions import DuplicatePetError, UnknownPetError
from ..interfaces.repositories import IPetRepository
from ..interfaces.services import IPetService

logger = logging.getLogger(__name__)


class PetService(IPetService):
    """
    Pet service backed by a repository.

    Holds no per-call state, so one instance serves all concurrent requests.
    """

    def __init__(self, repository: IPetRepository) -> None:
        self._repository = repository

    @property
    def repository(self) -> IPetRepository:
        return self._repository

    async def add_pet(self, request: CreatePetRequest) -> Pet:
        """
        Create the pet described by ``request``.

        Raises:
            DuplicatePetError: Propagated from the repository
            UnknownPetError: Propagated from the repository
        """
        try:
            pet = await self._repository.add_pet(request)
        except DuplicatePetError:
            logger.info(f"Rejected duplicate pet name '{request.name}'")
            raise
        except UnknownPetError as e:
            logger.error(f"Failed to add pet '{request.name}': {e}", exc_info=e.cause)
            raise

        logger.info(f"Added pet {pet.id} '{pet.name}'")
        return pet

    async def find_pet_by_id(self, pet_id: int) -> Pet | None:
        """
        Find a pet by id; None when no pet has that id.

        Raises:
            UnknownPetError: Propagated from the repository
        """
        try:
            pet = await self._repository.find_pet_by_id(pet_id)
        except UnknownPetError as e:
            logger.error(f"Failed to find pet {pet_id}: {e}", exc_info=e.cause)
            raise

        if pet is None:
            logger.debug(f"Pet {pet_id} not found")
        return pet

    def __repr__(self) -> str:
        return f"PetService(repository={type(self._repository).__name__})"
