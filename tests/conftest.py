"""Global pytest configuration and fixtures."""

# Standard library imports
from pathlib import Path
from unittest.mock import AsyncMock

# Load test environment variables
from dotenv import load_dotenv

test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)

# Third-party imports
import pytest

# Local imports
from petstore.application.services.pet_service import PetService
from petstore.domain.entities.category import Category
from petstore.domain.entities.pet import CreatePetRequest, Pet, Status
from petstore.domain.entities.tag import Tag
from petstore.infrastructure.repositories.memory_pet_repository import InMemoryPetRepository

PHOTO_URLS = ["http://example.com/p1.jpg", "http://example.com/p2.jpg"]


@pytest.fixture
def dogs_category() -> Category:
    return Category(id=1, name="Dogs")


@pytest.fixture
def sample_tags() -> list[Tag]:
    return [Tag(id=1, name="friendly"), Tag(id=2, name="playful")]


@pytest.fixture
def sample_request(dogs_category, sample_tags) -> CreatePetRequest:
    """Fully populated, validated creation request."""
    return CreatePetRequest.parse(
        "Rex",
        PHOTO_URLS,
        category=dogs_category,
        tags=sample_tags,
        status="available",
    )


@pytest.fixture
def sample_pet(dogs_category, sample_tags) -> Pet:
    """Stored form of ``sample_request``."""
    return Pet(
        id=1,
        name="Rex",
        category=dogs_category,
        photo_urls=list(PHOTO_URLS),
        tags=list(sample_tags),
        status=Status.AVAILABLE,
    )


@pytest.fixture
def memory_repository() -> InMemoryPetRepository:
    return InMemoryPetRepository()


@pytest.fixture
def pet_service(memory_repository) -> PetService:
    return PetService(memory_repository)


@pytest.fixture
def mock_pet_repository() -> AsyncMock:
    """Provides a mock pet repository."""
    repository = AsyncMock()
    repository.add_pet.return_value = None
    repository.find_pet_by_id.return_value = None
    return repository
