"""ALSA device discovery from /proc/asound and by probing well-known names."""

import logging
import re
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ..constants import (
    ALSA_BUFFER_SIZES,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_SAMPLE_RATE,
    DRIVER_ALSA,
    FALLBACK_CHANNELS,
    IN_USE_SUFFIX,
    PCM_INFO_FILE_NAME,
    STREAM_FILE_NAME,
)
from ..models import AudioDeviceInfo, ScanSettings
from .backend import DeviceBackend
from .cards import (
    Direction,
    card_number,
    list_card_directories,
    parse_stream_channels,
    read_text,
)
from .probe import AlsaProber

logger = logging.getLogger(__name__)

# pcm0p (playback) / pcm3c (capture)
_PCM_DIR_PATTERN = re.compile(r"^pcm(\d+)([pc])$")
_PCM_DIRECTIONS: dict[str, Direction] = {"p": "playback", "c": "capture"}


def iter_probe_names(settings: ScanSettings) -> Iterator[str]:
    """
    Yield the identifiers to probe: symbolic names, then each target range.

    With the default settings this yields "default", "hw:0,0" .. "hw:2,3",
    then "plughw:0,0", "plughw:0,1", "plughw:1,0", "plughw:1,1".
    """
    yield from settings.symbolic_names
    for target in settings.probe_targets:
        for card in range(target.cards):
            for device in range(target.devices):
                yield f"{target.mode}:{card},{device}"


def _parse_pcm_info(content: str) -> dict[str, str]:
    """Parse the "key: value" lines of a pcm info file."""
    fields: dict[str, str] = {}
    for line in content.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip()] = value.strip()
    return fields


def is_in_use(info_content: str) -> bool:
    """A single-subdevice PCM with no subdevice available is in use."""
    fields = _parse_pcm_info(info_content)
    return fields.get("subdevices_avail") == "0" and fields.get("subdevices_count") == "1"


def read_pcm_device(
    card_dir: Path, pcm_dir: str, direction: Direction, card_num: str
) -> Optional[AudioDeviceInfo]:
    """
    Build a device record for one pcm<M>p / pcm<M>c directory.

    Returns None if the pcm info file cannot be read.
    """
    info_content = read_text(card_dir / pcm_dir / PCM_INFO_FILE_NAME)
    if info_content is None:
        return None

    match = _PCM_DIR_PATTERN.match(pcm_dir)
    device_num = match.group(1) if match else "0"

    channels: Optional[int] = None
    stream_content = read_text(card_dir / STREAM_FILE_NAME)
    if stream_content is not None:
        channels = parse_stream_channels(stream_content, direction)
    if channels is None:
        channels = FALLBACK_CHANNELS

    name = f"hw:{card_num},{device_num}"
    if is_in_use(info_content):
        name += IN_USE_SUFFIX

    return AudioDeviceInfo(
        name=name,
        input_channels=channels if direction == "capture" else 0,
        output_channels=channels if direction == "playback" else 0,
        driver=DRIVER_ALSA,
    )


def _pcm_sort_key(name: str) -> tuple[int, int]:
    match = _PCM_DIR_PATTERN.match(name)
    if match is None:
        return (-1, 0)
    return int(match.group(1)), 0 if match.group(2) == "p" else 1


def scan_proc_devices(asound_root: Path) -> list[AudioDeviceInfo]:
    """
    Discover PCM devices from the card directories under ``asound_root``.

    Cards are visited in card-number order; within a card, devices are visited
    in device-number order with playback before capture.
    """
    devices: list[AudioDeviceInfo] = []

    for card_name in list_card_directories(asound_root):
        card_num = card_number(card_name)
        if card_num is None:
            continue
        card_dir = Path(asound_root) / card_name

        try:
            pcm_dirs = [
                entry.name
                for entry in card_dir.iterdir()
                if entry.is_dir() and _PCM_DIR_PATTERN.match(entry.name)
            ]
        except OSError as e:
            logger.debug("Cannot list %s: %s", card_dir, e)
            continue

        for pcm_dir in sorted(pcm_dirs, key=_pcm_sort_key):
            direction = _PCM_DIRECTIONS[pcm_dir[-1]]
            device = read_pcm_device(card_dir, pcm_dir, direction, card_num)
            if device is not None:
                devices.append(device)

    return devices


def probe_devices(prober: AlsaProber, names: Iterable[str]) -> list[AudioDeviceInfo]:
    """Probe each name and keep those with at least one usable direction."""
    devices: list[AudioDeviceInfo] = []
    for name in names:
        result = prober.probe(name)
        if not result.has_capability:
            continue
        devices.append(
            AudioDeviceInfo(
                name=name,
                input_channels=result.input_channels,
                output_channels=result.output_channels,
                supported_sample_rates=result.supported_rates,
                supported_buffer_sizes=list(ALSA_BUFFER_SIZES),
                default_sample_rate=DEFAULT_SAMPLE_RATE,
                default_buffer_size=DEFAULT_BUFFER_SIZE,
                driver=DRIVER_ALSA,
            )
        )
    return devices


class AlsaBackend(DeviceBackend):
    """Linux-only backend combining /proc/asound discovery and name probing.

    Devices found in /proc come first, followed by the probed names. On other
    platforms ``enumerate`` returns an empty list.
    """

    name = DRIVER_ALSA

    def __init__(
        self,
        settings: Optional[ScanSettings] = None,
        prober: Optional[AlsaProber] = None,
        platform: Optional[str] = None,
    ):
        self.settings = settings or ScanSettings()
        self.prober = prober or AlsaProber(timeout_sec=self.settings.probe_timeout_sec)
        self.platform = platform or sys.platform

    def enumerate(self) -> list[AudioDeviceInfo]:
        if not self.platform.startswith("linux"):
            logger.debug("ALSA backend skipped on %s", self.platform)
            return []

        devices = scan_proc_devices(Path(self.settings.asound_root))
        proc_count = len(devices)
        devices.extend(probe_devices(self.prober, iter_probe_names(self.settings)))

        logger.debug(
            "ALSA: %d device(s) from /proc, %d from probing",
            proc_count,
            len(devices) - proc_count,
        )
        return devices
