"""Aggregation of device records from every enabled backend."""

import logging
from typing import Optional, Sequence

from ..models import AudioDeviceInfo, ScanSettings, SystemAudioInfo
from .alsa import AlsaBackend
from .backend import DeviceBackend
from .portaudio import PortAudioBackend

logger = logging.getLogger(__name__)


def default_backends(settings: ScanSettings) -> list[DeviceBackend]:
    """Backends enabled by ``settings``, in aggregation order."""
    backends: list[DeviceBackend] = []
    if settings.enable_portaudio:
        backends.append(PortAudioBackend())
    if settings.enable_alsa:
        backends.append(AlsaBackend(settings))
    return backends


def collect_devices(backends: Sequence[DeviceBackend]) -> list[AudioDeviceInfo]:
    """
    Concatenate the devices of every backend, in backend order.

    A backend that fails is logged and contributes no devices.
    """
    devices: list[AudioDeviceInfo] = []
    for backend in backends:
        try:
            found = backend.enumerate()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to get %s devices: %s", backend.name, exc)
            continue
        devices.extend(found)
    return devices


def build_system_info(
    settings: Optional[ScanSettings] = None,
    backends: Optional[Sequence[DeviceBackend]] = None,
) -> SystemAudioInfo:
    """
    Scan all backends and build a snapshot with totals and default devices.

    Args:
        settings: Scan settings (defaults used when omitted)
        backends: Explicit backends; overrides the ones derived from settings

    Returns:
        SystemAudioInfo in enumeration order
    """
    if backends is None:
        backends = default_backends(settings or ScanSettings())

    info = SystemAudioInfo.from_devices(collect_devices(backends))
    logger.info(
        "Found %d device(s): %d input, %d output",
        len(info.devices),
        info.total_input_devices,
        info.total_output_devices,
    )
    return info
