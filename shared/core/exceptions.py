"""Error taxonomy for the property manager.

Every business-rule failure raised by the stores and the service is a
``PropertyManagerError``. The ``kind`` tells the API layer how to report it;
``status_code`` is the application code placed in the response envelope.
"""

from enum import Enum

from shared.utils.app_status_code import AppStatusCode


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


class PropertyManagerError(Exception):
    """Base exception for all property manager errors."""

    kind: ErrorKind = ErrorKind.VALIDATION
    status_code: str = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PropertyManagerError):
    """Raised for malformed input: bad size, bad page parameters, bad price."""

    kind = ErrorKind.VALIDATION
    status_code = AppStatusCode.INVALID_INPUT


class NotFoundError(PropertyManagerError):
    """Raised when a referenced property, price or contract does not exist."""

    kind = ErrorKind.NOT_FOUND
    status_code = AppStatusCode.RECORD_NOT_FOUND


class ConflictError(PropertyManagerError):
    """Raised when an allocation race is lost or a transfer party does not match."""

    kind = ErrorKind.CONFLICT
    status_code = AppStatusCode.CONFLICT_ERROR


class UnavailableError(PropertyManagerError):
    """No property matches an allocation request."""

    kind = ErrorKind.UNAVAILABLE
    status_code = AppStatusCode.NO_PROPERTY_AVAILABLE
