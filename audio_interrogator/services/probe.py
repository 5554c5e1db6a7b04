"""ALSA device capability probing via aplay/arecord --dump-hw-params."""

import logging
import subprocess
from dataclasses import dataclass, field
from typing import Literal, Optional

from ..constants import (
    CAPTURE_SINK,
    CAPTURE_TOOL,
    COMMON_SAMPLE_RATES,
    NEGOTIATION_FAILURES,
    PLAYBACK_SOURCE,
    PLAYBACK_TOOL,
    PROBE_SAMPLE_FORMAT,
    PROBE_TIMEOUT_SEC,
    SAFE_ALSA_DEVICE_PATTERN,
)

logger = logging.getLogger(__name__)

Direction = Literal["playback", "capture"]

_TOOLS: dict[str, tuple[str, str]] = {
    "playback": (PLAYBACK_TOOL, PLAYBACK_SOURCE),
    "capture": (CAPTURE_TOOL, CAPTURE_SINK),
}


@dataclass
class HwParamsRange:
    """Channel and rate bounds read from one hw params dump."""

    max_channels: Optional[int] = None
    min_rate: Optional[int] = None
    max_rate: Optional[int] = None


@dataclass
class ProbeResult:
    """Capabilities found for one device identifier."""

    input_channels: int = 0
    output_channels: int = 0
    supported_rates: list[int] = field(default_factory=list)

    @property
    def has_capability(self) -> bool:
        return self.input_channels > 0 or self.output_channels > 0


def is_safe_device_name(device: str) -> bool:
    """Check if the device name matches the allowed pattern."""
    return SAFE_ALSA_DEVICE_PATTERN.match(device) is not None


def common_rates_within(min_rate: int, max_rate: int) -> list[int]:
    """
    Return the common sample rates inside [min_rate, max_rate].

    If no common rate falls inside the range, both endpoints are returned so
    that a known range never produces an empty list.

    Examples:
        (44100, 48000) -> [44100, 48000]
        (1000, 2000) -> [1000, 2000]
    """
    rates = [rate for rate in COMMON_SAMPLE_RATES if min_rate <= rate <= max_rate]
    if not rates:
        rates = [min_rate, max_rate]
    return rates


_BRACKETS = str.maketrans("[]()", "    ")


def _parse_values(text: str) -> list[int]:
    """Parse "[1 2]", "(44100 48000]", "2" or "44100 48000" into integers."""
    values: list[int] = []
    for part in text.translate(_BRACKETS).split():
        try:
            values.append(int(part))
        except ValueError:
            pass
    return values


def parse_hw_params_dump(output: str) -> Optional[HwParamsRange]:
    """
    Parse the hardware parameter dump printed by aplay/arecord.

    Format:
        HW Params of device "hw:0,0":
        --------------------
        ACCESS:  MMAP_INTERLEAVED RW_INTERLEAVED
        FORMAT:  S16_LE S32_LE
        CHANNELS: [2 8]
        RATE: [44100 192000]
        --------------------

    Returns None when no dump is present (the device could not be opened).
    """
    if "HW Params of device" not in output:
        return None

    params = HwParamsRange()
    for line in output.split("\n"):
        line = line.strip()

        if line.startswith("CHANNELS:"):
            values = _parse_values(line[len("CHANNELS:") :])
            if values:
                params.max_channels = max(values)

        elif line.startswith("RATE:"):
            values = _parse_values(line[len("RATE:") :])
            if values:
                params.min_rate = min(values)
                params.max_rate = max(values)

    return params


class AlsaProber:
    """Probe ALSA PCM identifiers for channel counts and rate ranges.

    Each direction is probed by running aplay (playback) or arecord (capture)
    with a fixed sample format. The tool opens the PCM, dumps its hardware
    parameter space, and releases the device when it exits. Any failure for a
    direction counts as zero channels in that direction.
    """

    def __init__(
        self,
        timeout_sec: float = PROBE_TIMEOUT_SEC,
        sample_format: str = PROBE_SAMPLE_FORMAT,
    ):
        self.timeout_sec = timeout_sec
        self.sample_format = sample_format

    def probe(self, device: str) -> ProbeResult:
        result = ProbeResult()

        playback = self._probe_direction(device, "playback")
        if playback is not None:
            result.output_channels = playback.max_channels or 0
            result.supported_rates = self._rates_for(playback)

        capture = self._probe_direction(device, "capture")
        if capture is not None:
            result.input_channels = capture.max_channels or 0
            if not result.supported_rates:
                result.supported_rates = self._rates_for(capture)

        return result

    @staticmethod
    def _rates_for(params: HwParamsRange) -> list[int]:
        if params.min_rate is None or params.max_rate is None:
            return []
        return common_rates_within(params.min_rate, params.max_rate)

    def _probe_direction(
        self, device: str, direction: Direction
    ) -> Optional[HwParamsRange]:
        """Open ``device`` in one direction and read its hw params, or None."""
        tool, data_file = _TOOLS[direction]
        cmd = [
            tool,
            "--dump-hw-params",
            "-D",
            device,
            "-f",
            self.sample_format,
            "--samples=1",
            data_file,
        ]

        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
            )
        except subprocess.TimeoutExpired:
            logger.debug("%s timed out probing %s", tool, device)
            return None
        except FileNotFoundError:
            logger.debug("%s command not found", tool)
            return None
        except (subprocess.SubprocessError, OSError, ValueError) as e:
            logger.debug("%s failed probing %s: %s", tool, device, e)
            return None

        # The dump goes to stderr; some builds print it to stdout
        output = (completed.stderr or "") + (completed.stdout or "")
        if any(failure in output for failure in NEGOTIATION_FAILURES):
            logger.debug(
                "%s refused %s with %s", device, direction, self.sample_format
            )
            return None

        params = parse_hw_params_dump(output)
        if params is None:
            logger.debug("%s could not be opened for %s", device, direction)
        return params
