"""
Repository Exception Definitions

Defines exceptions that storage adapters raise internally.
Following clean architecture principles - these are application-level exceptions
and never cross the repository boundary: repositories translate them into
CreatePetError subclasses.
"""


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class TransactionError(RepositoryError):
    """Raised when a transaction cannot be started, committed or rolled back."""

    pass


class ConnectionError(RepositoryError):
    """Raised when database connection fails."""

    def __init__(self, message: str = "Database connection failed") -> None:
        super().__init__(message)


class TimeoutError(RepositoryError):
    """Raised when repository operation times out."""

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        super().__init__(f"Operation '{operation}' timed out after {timeout_seconds} seconds")
        self.operation = operation
        self.timeout_seconds = timeout_seconds


class IntegrityError(RepositoryError):
    """Raised when database integrity constraint is violated."""

    def __init__(self, constraint: str, message: str | None = None) -> None:
        msg = f"Integrity constraint '{constraint}' violated"
        if message:
            msg += f": {message}"
        super().__init__(msg)
        self.constraint = constraint


class FactoryError(Exception):
    """Raised when factory cannot create an instance."""

    def __init__(self, factory_type: str, message: str) -> None:
        super().__init__(f"{factory_type} factory error: {message}")
        self.factory_type = factory_type


class ConfigurationError(Exception):
    """Raised when configuration-related errors occur."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause
