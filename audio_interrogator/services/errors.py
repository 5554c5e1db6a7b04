"""Exceptions raised by the device scanning services."""

from dataclasses import dataclass, field
from typing import Any

from ..error_codes import ErrorCode, get_error_mapping


@dataclass
class AudioInterrogatorError(Exception):
    """Base error carrying an application error code.

    Attributes:
        error_code: Application error code (e.g., "DEVICE_NOT_FOUND")
        message: Human-readable error message
        inner_error: Optional details from the failing layer
    """

    error_code: str
    message: str
    inner_error: dict[str, Any] | None = field(default=None)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    @property
    def http_status(self) -> int:
        """Get HTTP status code for this error."""
        return get_error_mapping(self.error_code).http_status

    @property
    def category(self) -> str:
        """Get error category."""
        return get_error_mapping(self.error_code).category.value

    @property
    def title(self) -> str:
        """Get error title."""
        return get_error_mapping(self.error_code).title


class BackendError(AudioInterrogatorError):
    """A backend could not enumerate devices at all."""

    def __init__(self, backend: str, message: str, unavailable: bool = False):
        code = (
            ErrorCode.BACKEND_UNAVAILABLE
            if unavailable
            else ErrorCode.BACKEND_ENUMERATION_FAILED
        )
        super().__init__(code.value, message, {"backend": backend})
        self.backend = backend


class DeviceNotFoundError(AudioInterrogatorError):
    """No device with the requested name exists in the snapshot."""

    def __init__(self, name: str):
        super().__init__(
            ErrorCode.DEVICE_NOT_FOUND.value,
            f"No device named '{name}'",
            {"device": name},
        )
        self.name = name


class InvalidDeviceNameError(AudioInterrogatorError):
    """Device identifier is not a safe ALSA name."""

    def __init__(self, name: str):
        super().__init__(
            ErrorCode.VALIDATION_INVALID_DEVICE_NAME.value,
            "Invalid device name format",
            {"device": name},
        )
        self.name = name
