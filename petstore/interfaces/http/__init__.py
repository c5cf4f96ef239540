"""HTTP adapter for the pet service, built on FastAPI."""

from .app import CORRELATION_ID_HEADER, create_app

__all__ = ["CORRELATION_ID_HEADER", "create_app"]
