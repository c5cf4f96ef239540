"""
Mapping of domain and application errors onto HTTP responses.

Validation errors become 400, duplicate names 422, and every other failure a
generic 500 whose cause is only logged.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from petstore.domain.exceptions import DuplicatePetError, PetValidationError, UnknownPetError

from .schemas import ApiResponseBody, ErrorData

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Field name -> label used in 400 messages
FIELD_LABELS: dict[str, str] = {
    "name": "pet name",
    "category": "category",
    "photo_urls": "photo urls",
    "tags": "tags",
    "status": "status",
}


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ApiResponseBody[ErrorData](status_code=status_code, data=ErrorData(message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def validation_message(error: PetValidationError) -> str:
    label = FIELD_LABELS.get(error.field, error.field)
    return f"{label} {error} is invalid"


async def handle_validation_error(request: Request, exc: PetValidationError) -> JSONResponse:
    logger.info(f"Rejected invalid pet input on {request.url.path}: {exc}")
    return error_response(status.HTTP_400_BAD_REQUEST, validation_message(exc))


async def handle_duplicate_pet(request: Request, exc: DuplicatePetError) -> JSONResponse:
    return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))


async def handle_unknown_pet_error(request: Request, exc: UnknownPetError) -> JSONResponse:
    logger.error(f"Storage failure on {request.url.path}: {exc.cause!r}", exc_info=exc.cause)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc!r}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PetValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(DuplicatePetError, handle_duplicate_pet)  # type: ignore[arg-type]
    app.add_exception_handler(UnknownPetError, handle_unknown_pet_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
