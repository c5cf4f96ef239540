"""
Application Interfaces - Port Contracts

This module defines the interface contracts that the infrastructure layer
must implement. Following the dependency inversion principle, the application
layer defines what it needs, and the infrastructure layer provides it.
"""

from .exceptions import (
    ConfigurationError,
    ConnectionError,
    FactoryError,
    IntegrityError,
    RepositoryError,
    TimeoutError,
    TransactionError,
)
from .repositories import IPetRepository
from .services import IPetService

__all__ = [
    # Port interfaces
    "IPetRepository",
    "IPetService",
    # Exceptions
    "RepositoryError",
    "TransactionError",
    "ConnectionError",
    "TimeoutError",
    "IntegrityError",
    "FactoryError",
    "ConfigurationError",
]
