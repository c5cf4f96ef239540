"""
Pet API endpoints.

Thin handlers: parse the body into a domain request, call the pet service and
wrap the result. Error mapping lives in ``errors``.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from petstore.application.interfaces.services import IPetService
from petstore.infrastructure.database.adapter import PostgreSQLAdapter

from .errors import error_response
from .schemas import ApiResponseBody, CreatePetHttpRequest, HealthData, PetData

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pets"])


def get_pet_service(request: Request) -> IPetService:
    """Resolve the pet service installed on the application."""
    service: IPetService = request.app.state.pet_service
    return service


@router.post(
    "/pet",
    response_model=ApiResponseBody[PetData],
    status_code=status.HTTP_201_CREATED,
)
async def add_pet(
    body: CreatePetHttpRequest,
    service: IPetService = Depends(get_pet_service),
) -> ApiResponseBody[PetData]:
    """
    Create a new pet.

    Responds 201 with the stored pet, 400 when a field is invalid, 422 when the
    name is taken and 500 on storage failure.
    """
    request = body.to_domain()
    pet = await service.add_pet(request)
    return ApiResponseBody[PetData](
        status_code=status.HTTP_201_CREATED, data=PetData.from_domain(pet)
    )


@router.get(
    "/pet/{pet_id}",
    response_model=ApiResponseBody[PetData],
    responses={status.HTTP_404_NOT_FOUND: {"description": "No pet has the given id"}},
)
async def find_pet_by_id(
    pet_id: int,
    service: IPetService = Depends(get_pet_service),
) -> ApiResponseBody[PetData] | JSONResponse:
    """Find a pet by id."""
    pet = await service.find_pet_by_id(pet_id)
    if pet is None:
        return error_response(status.HTTP_404_NOT_FOUND, f"pet with id {pet_id} not found")
    return ApiResponseBody[PetData](status_code=status.HTTP_200_OK, data=PetData.from_domain(pet))


@router.get("/health", response_model=ApiResponseBody[HealthData])
async def health(request: Request) -> ApiResponseBody[HealthData] | JSONResponse:
    """Liveness, plus database reachability when the PostgreSQL backend is in use."""
    container = getattr(request.app.state, "container", None)
    if container is None or not container.has(PostgreSQLAdapter):
        backend = container.config.repository_backend if container is not None else "custom"
        return ApiResponseBody[HealthData](
            status_code=status.HTTP_200_OK, data=HealthData(status="healthy", repository=backend)
        )

    adapter = container.get(PostgreSQLAdapter)
    if await adapter.health_check():
        return ApiResponseBody[HealthData](
            status_code=status.HTTP_200_OK,
            data=HealthData(status="healthy", repository="postgres", database="up"),
        )

    logger.warning("Health check failed: database unreachable")
    body = ApiResponseBody[HealthData](
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        data=HealthData(status="unhealthy", repository="postgres", database="down"),
    )
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump())
