"""Device enumeration through PortAudio (sounddevice)."""

import logging
from typing import Any, Callable

from ..constants import (
    COMMON_SAMPLE_RATES,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_BUFFER_SIZES,
    DEFAULT_SAMPLE_RATE,
    DRIVER_PORTAUDIO,
    UNKNOWN_DEVICE_NAME,
)
from ..models import AudioDeviceInfo
from .backend import DeviceBackend
from .errors import BackendError

logger = logging.getLogger(__name__)


def _load_sounddevice() -> Any:
    """Import sounddevice; the PortAudio library is loaded at import time."""
    import sounddevice

    return sounddevice


class PortAudioBackend(DeviceBackend):
    """Enumerate the devices of the default PortAudio host API.

    PortAudio does not report configuration ranges, so each candidate rate is
    checked with ``check_input_settings``/``check_output_settings`` and every
    accepted rate counts as a one-rate range. Input ranges take priority over
    output ranges. Buffer sizes are not exposed and use the fixed defaults.
    """

    name = DRIVER_PORTAUDIO

    def enumerate(self) -> list[AudioDeviceInfo]:
        try:
            sd = _load_sounddevice()
        except (ImportError, OSError) as e:
            raise BackendError(
                self.name, f"PortAudio is not available: {e}", unavailable=True
            ) from e

        try:
            hostapi = sd.query_hostapis(sd.default.hostapi)
            indices = list(hostapi["devices"])
        except Exception as e:  # noqa: BLE001
            raise BackendError(
                self.name, f"Cannot list devices of the default host API: {e}"
            ) from e

        devices: list[AudioDeviceInfo] = []
        for index in indices:
            try:
                devices.append(self._describe(sd, index))
            except Exception as e:  # noqa: BLE001
                logger.warning("Skipping PortAudio device %s: %s", index, e)

        logger.debug(
            "PortAudio host API '%s' reported %d device(s)",
            hostapi.get("name", "?"),
            len(devices),
        )
        return devices

    def _describe(self, sd: Any, index: int) -> AudioDeviceInfo:
        info = sd.query_devices(index)

        name = info.get("name") or UNKNOWN_DEVICE_NAME
        input_channels = int(info.get("max_input_channels", 0) or 0)
        output_channels = int(info.get("max_output_channels", 0) or 0)
        device_rate = info.get("default_samplerate")

        rates: list[int] = []
        default_sample_rate = DEFAULT_SAMPLE_RATE

        input_ranges = self._rate_ranges(
            sd, sd.check_input_settings, index, input_channels, device_rate
        )
        for min_rate, max_rate in input_ranges:
            rates.extend((min_rate, max_rate))
            if device_rate:
                default_sample_rate = int(device_rate)

        if not rates:
            output_ranges = self._rate_ranges(
                sd, sd.check_output_settings, index, output_channels, device_rate
            )
            for min_rate, max_rate in output_ranges:
                rates.extend((min_rate, max_rate))
                if device_rate:
                    default_sample_rate = int(device_rate)

        return AudioDeviceInfo(
            name=name,
            input_channels=input_channels,
            output_channels=output_channels,
            supported_sample_rates=sorted(set(rates)),
            supported_buffer_sizes=list(DEFAULT_BUFFER_SIZES),
            default_sample_rate=default_sample_rate,
            default_buffer_size=DEFAULT_BUFFER_SIZE,
            driver=DRIVER_PORTAUDIO,
        )

    @staticmethod
    def _rate_ranges(
        sd: Any,
        check: Callable[..., None],
        index: int,
        channels: int,
        device_rate: Any,
    ) -> list[tuple[int, int]]:
        """Return (min, max) rate ranges the device accepts in one direction."""
        if channels <= 0:
            return []

        candidates = set(COMMON_SAMPLE_RATES)
        if device_rate:
            candidates.add(int(device_rate))

        ranges: list[tuple[int, int]] = []
        for rate in sorted(candidates):
            try:
                check(device=index, channels=channels, samplerate=rate)
            except (sd.PortAudioError, ValueError):
                continue
            ranges.append((rate, rate))
        return ranges
