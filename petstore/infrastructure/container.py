"""
Dependency Injection Container - wiring for the pet catalog service.

Selects exactly one repository implementation from configuration at start-up
and owns the database connection lifecycle.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar, cast

from petstore.application.interfaces.exceptions import FactoryError
from petstore.application.interfaces.repositories import IPetRepository
from petstore.application.interfaces.services import IPetService
from petstore.application.services.pet_service import PetService
from petstore.infrastructure.config import AppConfig
from petstore.infrastructure.database.adapter import PostgreSQLAdapter
from petstore.infrastructure.database.connection import DatabaseConnection
from petstore.infrastructure.database.schema import create_schema
from petstore.infrastructure.repositories import InMemoryPetRepository, PostgreSQLPetRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Container:
    """
    Dependency Injection Container for the pet catalog.

    Call ``start()`` before resolving components and ``stop()`` at shutdown.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        """Initialize the container with configuration."""
        self.config = config or AppConfig.from_env()
        self._connection: DatabaseConnection | None = None
        self._singletons: dict[type[Any], Any] = {}
        self._factories: dict[type[Any], Callable[[], Any]] = {}
        self._started = False

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def pet_service(self) -> IPetService:
        return self.get(IPetService)  # type: ignore[type-abstract]

    async def start(self) -> None:
        """
        Open infrastructure and register components.

        Raises:
            ConnectionError: If the database stays unreachable after all retries
            FactoryError: If the configured backend is unknown
        """
        if self._started:
            return

        backend = self.config.repository_backend
        try:
            await self._register_repository(backend)
        except BaseException:
            logger.error(f"Container failed to start with '{backend}' repository")
            await self.stop()
            raise

        self._register_singleton(
            IPetService,  # type: ignore[type-abstract]
            lambda: PetService(self.get(IPetRepository)),  # type: ignore[type-abstract]
        )

        self._started = True
        logger.info(f"Container started with '{backend}' repository")

    async def _register_repository(self, backend: str) -> None:
        if backend == "postgres":
            self._connection = DatabaseConnection(self.config.database)
            await self._connection.connect()
            adapter = self._connection.create_adapter()
            if self.config.auto_create_schema:
                await create_schema(adapter)
            self.register(PostgreSQLAdapter, adapter)
            self._register_singleton(
                IPetRepository,  # type: ignore[type-abstract]
                lambda: PostgreSQLPetRepository(self.get(PostgreSQLAdapter)),
            )
        elif backend == "memory":
            self._register_singleton(
                IPetRepository,  # type: ignore[type-abstract]
                InMemoryPetRepository,
            )
        else:
            raise FactoryError("IPetRepository", f"Unknown repository backend: {backend}")

    async def stop(self) -> None:
        """Release infrastructure resources."""
        if self._connection is not None:
            await self._connection.disconnect()
            self._connection = None

        self._singletons.clear()
        self._factories.clear()
        self._started = False
        logger.info("Container stopped")

    def _register_singleton(self, cls: type[T], factory: Callable[[], Any]) -> None:
        """Register a lazily built singleton component."""
        self._factories[cls] = factory

    def get(self, cls: type[T]) -> T:
        """
        Get an instance of a registered component.

        Raises:
            KeyError: If the class is not registered
        """
        if cls in self._singletons:
            return cast(T, self._singletons[cls])

        if cls not in self._factories:
            raise KeyError(f"No registration found for {cls.__name__}")

        instance = self._factories[cls]()
        self._singletons[cls] = instance
        return cast(T, instance)

    def has(self, cls: type[T]) -> bool:
        return cls in self._factories or cls in self._singletons

    def register(self, cls: type[T], instance: T) -> None:
        """Register a pre-created instance."""
        self._singletons[cls] = instance
        self._factories[cls] = lambda: instance
