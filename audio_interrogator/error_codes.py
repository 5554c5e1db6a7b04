"""Error codes for the audio interrogator.

Codes are attached to ``AudioInterrogatorError`` subclasses and mapped to
HTTP responses by ``exceptions.register_exception_handlers``.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Error category classification."""

    BACKEND = "backend"
    DEVICE = "device"
    VALIDATION = "validation"
    INTERNAL = "internal"


class ErrorCode(str, Enum):
    """Application error codes."""

    # Backend
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    BACKEND_ENUMERATION_FAILED = "BACKEND_ENUMERATION_FAILED"

    # Device
    DEVICE_NOT_FOUND = "DEVICE_NOT_FOUND"

    # Validation
    VALIDATION_INVALID_DEVICE_NAME = "VALIDATION_INVALID_DEVICE_NAME"


@dataclass(frozen=True)
class ErrorMapping:
    """Mapping from error code to HTTP response details."""

    http_status: int
    category: ErrorCategory
    title: str


ERROR_MAPPINGS: dict[ErrorCode, ErrorMapping] = {
    ErrorCode.BACKEND_UNAVAILABLE: ErrorMapping(
        503, ErrorCategory.BACKEND, "Audio Backend Unavailable"
    ),
    ErrorCode.BACKEND_ENUMERATION_FAILED: ErrorMapping(
        500, ErrorCategory.BACKEND, "Device Enumeration Failed"
    ),
    ErrorCode.DEVICE_NOT_FOUND: ErrorMapping(
        404, ErrorCategory.DEVICE, "Device Not Found"
    ),
    ErrorCode.VALIDATION_INVALID_DEVICE_NAME: ErrorMapping(
        400, ErrorCategory.VALIDATION, "Invalid Device Name"
    ),
}

# Default mapping for unknown error codes
_DEFAULT_MAPPING = ErrorMapping(500, ErrorCategory.INTERNAL, "Internal Error")


def get_error_mapping(error_code: str) -> ErrorMapping:
    """Get error mapping for a given error code string.

    Args:
        error_code: Error code string (e.g., "DEVICE_NOT_FOUND")

    Returns:
        ErrorMapping with http_status, category, and title.
        Returns default 500/INTERNAL mapping for unknown codes.
    """
    try:
        code = ErrorCode(error_code)
        return ERROR_MAPPINGS.get(code, _DEFAULT_MAPPING)
    except ValueError:
        return _DEFAULT_MAPPING
