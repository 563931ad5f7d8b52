class ServiceError(Exception):
    """Base class for service-layer errors."""


class NotFoundError(ServiceError):
    """Raised when requested reference data does not exist."""


class CurriculumNotFoundError(NotFoundError):
    """Raised when no curriculum matches an id or an active program code."""

    def __init__(self, key: int | str):
        self.key = key
        if isinstance(key, int):
            message = f"Curriculum {key} not found."
        else:
            message = f"No active curriculum found for program '{key}'."
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when creation input is invalid."""
