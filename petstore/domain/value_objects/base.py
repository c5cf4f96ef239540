"""Base class for value objects."""

# Standard library imports
from abc import ABC, abstractmethod
from typing import Any


class ValueObject(ABC):
    """Abstract base class for all value objects.

    Provides common functionality for value objects including:
    - Immutability enforcement
    - Equality comparison
    - Hashability
    """

    __slots__ = ()  # Subclasses should define their own __slots__

    @abstractmethod
    def _key(self) -> Any:
        """Value used for equality and hashing."""
        pass

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._key()!r})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if hasattr(self, name):
            raise AttributeError(f"Cannot modify immutable value object attribute '{name}'")
        super().__setattr__(name, value)
