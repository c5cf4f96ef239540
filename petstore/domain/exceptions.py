"""
Domain-level exceptions for the pet catalog.

This module defines exceptions that are specific to domain logic and business rules.
Validation errors are raised at the input boundary before any repository call;
CreatePetError subclasses are the only errors a repository may surface.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class PetValidationError(DomainException, ValueError):
    """Raised when raw input cannot be turned into a valid domain value."""

    def __init__(self, field: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details={"field": field, **(details or {})})
        self.field = field


class EmptyNameError(PetValidationError):
    """Raised when a pet name is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("name", "pet name cannot be empty")


class EmptyPhotoUrlsError(PetValidationError):
    """Raised when no photo URL is supplied."""

    def __init__(self) -> None:
        super().__init__("photo_urls", "photo urls cannot be empty")


class EmptyTagsError(PetValidationError):
    """Raised when a tag list is supplied but contains no tags."""

    def __init__(self) -> None:
        super().__init__("tags", "tags cannot be empty")


class InvalidStatusError(PetValidationError):
    """Raised when a status string is not one of the known statuses."""

    def __init__(self, value: str) -> None:
        super().__init__("status", f"invalid status: {value}", details={"value": value})
        self.value = value


class CreatePetError(DomainException):
    """Base exception for failures of the pet service and repository contract."""

    pass


class DuplicatePetError(CreatePetError):
    """
    Raised when a pet with the same name already exists.

    This is the only modeled business failure of pet creation.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"pet with name {name} already exists", details={"name": name})
        self.name = name


class UnknownPetError(CreatePetError):
    """
    Opaque infrastructure failure.

    The original exception is kept in ``cause`` for server-side logging and must
    not be shown to callers.
    """

    def __init__(self, cause: BaseException, message: str | None = None) -> None:
        super().__init__(message or f"unexpected storage failure: {cause}")
        self.cause = cause
