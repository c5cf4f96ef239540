"""PetName value object - the natural uniqueness key of a pet."""

from ..exceptions import EmptyNameError
from .base import ValueObject


class PetName(ValueObject):
    """Immutable, non-blank pet name."""

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        """Initialize PetName with validation.

        Args:
            value: The raw name; kept as given once it passes validation

        Raises:
            EmptyNameError: If the trimmed name is empty
        """
        if value is None or not value.strip():
            raise EmptyNameError()
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def _key(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value
