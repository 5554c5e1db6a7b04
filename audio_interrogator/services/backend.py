"""Common interface for device enumeration backends."""

from abc import ABC, abstractmethod

from ..models import AudioDeviceInfo


class DeviceBackend(ABC):
    """A source of raw device records.

    ``enumerate`` raises ``BackendError`` when the backend cannot enumerate at
    all; per-device problems are handled inside the backend.
    """

    name: str = "backend"

    @abstractmethod
    def enumerate(self) -> list[AudioDeviceInfo]:
        """Return the devices this backend can see, in a stable order."""
