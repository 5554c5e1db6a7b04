"""Constants for the audio interrogator."""

import re
from pathlib import Path

# ============================================================================
# Paths
# ============================================================================

PACKAGE_DIR = Path(__file__).parent
PROJECT_ROOT = PACKAGE_DIR.parent
CONFIG_PATH = PROJECT_ROOT / "config.json"
ASOUND_ROOT = Path("/proc/asound")
CARDS_FILE_NAME = "cards"
STREAM_FILE_NAME = "stream0"
PCM_INFO_FILE_NAME = "info"

# ============================================================================
# Drivers (provenance tags)
# ============================================================================

DRIVER_PORTAUDIO = "PortAudio"
DRIVER_ALSA = "ALSA"

# ============================================================================
# Device Defaults
# ============================================================================

UNKNOWN_DEVICE_NAME = "Unknown Device"
IN_USE_SUFFIX = " (IN USE)"

DEVICE_TYPE_INPUT = "Input"
DEVICE_TYPE_OUTPUT = "Output"
DEVICE_TYPE_DUPLEX = "Input/Output"
DEVICE_TYPE_UNKNOWN = "Unknown"

# Rates assumed when a device reports none
COMMON_SAMPLE_RATES: tuple[int, ...] = (
    8000,
    11025,
    22050,
    44100,
    48000,
    88200,
    96000,
    176400,
    192000,
)

DEFAULT_BUFFER_SIZES: tuple[int, ...] = (64, 128, 256, 512, 1024, 2048, 4096)
ALSA_BUFFER_SIZES: tuple[int, ...] = DEFAULT_BUFFER_SIZES + (8192,)

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_BUFFER_SIZE = 1024

# Channel count assumed for a /proc PCM whose stream description is unusable
FALLBACK_CHANNELS = 2

# ============================================================================
# Probing
# ============================================================================

PROBE_SAMPLE_FORMAT = "S16_LE"
PROBE_TIMEOUT_SEC = 5.0
PLAYBACK_TOOL = "aplay"
CAPTURE_TOOL = "arecord"

# aplay reads a file header from its input before opening the PCM
PLAYBACK_SOURCE = "/dev/zero"
CAPTURE_SINK = "/dev/null"

# aplay/arecord messages emitted when hw params negotiation is refused
NEGOTIATION_FAILURES: tuple[str, ...] = (
    "Access type not available",
    "Sample format non available",
)

DEFAULT_SYMBOLIC_NAMES: tuple[str, ...] = ("default",)

# (mode, card count, device count), expanded in order
DEFAULT_PROBE_TARGETS: tuple[tuple[str, int, int], ...] = (
    ("hw", 3, 4),
    ("plughw", 2, 2),
)

# ============================================================================
# Default-device heuristic and deduplication
# ============================================================================

DEFAULT_NAME_MARKERS: tuple[str, ...] = ("default", "hw:0")

# Software-mixed or duplicated aliases layered on a physical card
VIRTUAL_DEVICE_PREFIXES: tuple[str, ...] = ("dmix:", "dsnoop:", "surround", "iec958:")

# ============================================================================
# Device Name Validation
# ============================================================================

# Allowed ALSA device name patterns:
# - "default"
# - "hw:N" or "hw:N,M" where N, M are card/device numbers (0-99)
# - "plughw:N" or "plughw:N,M"
# - "sysdefault:CARD=name" format
SAFE_ALSA_DEVICE_PATTERN = re.compile(
    r"^(default|"  # default device
    r"(plug)?hw:\d{1,2}(,\d{1,2})?|"  # hw:0, hw:0,0, plughw:1,0
    r"sysdefault(:CARD=[a-zA-Z0-9_]+)?"  # sysdefault:CARD=PCH
    r")$"
)
