"""PhotoUrls value object."""

# Standard library imports
from collections.abc import Sequence

from ..exceptions import EmptyPhotoUrlsError
from .base import ValueObject


class PhotoUrls(ValueObject):
    """Immutable, non-empty ordered list of photo URLs."""

    __slots__ = ("_urls",)

    def __init__(self, urls: Sequence[str]) -> None:
        """
        Raises:
            EmptyPhotoUrlsError: If no URL is supplied
        """
        if not urls:
            raise EmptyPhotoUrlsError()
        self._urls = tuple(urls)

    @property
    def value(self) -> list[str]:
        """URLs in the order they were supplied."""
        return list(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def _key(self) -> tuple[str, ...]:
        return self._urls

    def __str__(self) -> str:
        return str(list(self._urls))
