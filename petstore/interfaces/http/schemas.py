"""
Request and response models for the pet HTTP API.

Every response is wrapped as ``{"status_code": <int>, "data": <payload>}``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from petstore.domain.entities.category import Category
from petstore.domain.entities.pet import CreatePetRequest, Pet
from petstore.domain.entities.tag import Tag

T = TypeVar("T")


class CategoryBody(BaseModel):
    """Category as it appears on the wire."""

    id: int | None = None
    name: str | None = None

    def to_domain(self) -> Category:
        return Category(id=self.id, name=self.name)

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryBody":
        return cls(id=category.id, name=category.name)


class TagBody(BaseModel):
    """Tag as it appears on the wire."""

    id: int | None = None
    name: str | None = None

    def to_domain(self) -> Tag:
        return Tag(id=self.id, name=self.name)

    @classmethod
    def from_domain(cls, tag: Tag) -> "TagBody":
        return cls(id=tag.id, name=tag.name)


class CreatePetHttpRequest(BaseModel):
    """Body of a pet creation request."""

    id: int | None = None
    name: str
    category: CategoryBody | None = None
    photo_urls: list[str]
    tags: list[TagBody] | None = None
    status: str | None = None

    def to_domain(self) -> CreatePetRequest:
        """
        Validate the body into a domain request.

        Raises:
            PetValidationError: If any field breaks a pet input rule
        """
        return CreatePetRequest.parse(
            self.name,
            self.photo_urls,
            id=self.id,
            category=self.category.to_domain() if self.category is not None else None,
            tags=[tag.to_domain() for tag in self.tags] if self.tags is not None else None,
            status=self.status,
        )


class PetData(BaseModel):
    """Pet payload of a successful response."""

    id: int | None
    name: str
    category: CategoryBody | None = None
    photo_urls: list[str] = Field(default_factory=list)
    tags: list[TagBody] = Field(default_factory=list)
    status: str

    @classmethod
    def from_domain(cls, pet: Pet) -> "PetData":
        return cls(
            id=pet.id,
            name=pet.name,
            category=CategoryBody.from_domain(pet.category) if pet.category is not None else None,
            photo_urls=list(pet.photo_urls),
            tags=[TagBody.from_domain(tag) for tag in pet.tags],
            status=str(pet.status),
        )


class ErrorData(BaseModel):
    """Payload of every error response."""

    message: str


class ApiResponseBody(BaseModel, Generic[T]):
    """Envelope shared by all API responses."""

    status_code: int
    data: T


class HealthData(BaseModel):
    status: str
    repository: str
    database: str | None = None
