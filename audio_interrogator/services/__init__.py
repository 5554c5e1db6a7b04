"""Services for the audio interrogator."""

from .aggregator import build_system_info, collect_devices, default_backends
from .alsa import AlsaBackend, iter_probe_names, probe_devices, scan_proc_devices
from .backend import DeviceBackend
from .cards import (
    list_card_directories,
    load_card_descriptions,
    load_card_mapping,
    load_card_table,
    parse_cards,
    parse_stream_channels,
)
from .config import load_settings, resolve_cards_file
from .errors import (
    AudioInterrogatorError,
    BackendError,
    DeviceNotFoundError,
    InvalidDeviceNameError,
)
from .filters import apply_filters, deduplicate, filter_devices
from .portaudio import PortAudioBackend
from .probe import AlsaProber, ProbeResult, common_rates_within, is_safe_device_name

__all__ = [
    # aggregator
    "build_system_info",
    "collect_devices",
    "default_backends",
    # alsa
    "AlsaBackend",
    "iter_probe_names",
    "probe_devices",
    "scan_proc_devices",
    # backend
    "DeviceBackend",
    # cards
    "list_card_directories",
    "load_card_descriptions",
    "load_card_mapping",
    "load_card_table",
    "parse_cards",
    "parse_stream_channels",
    # config
    "load_settings",
    "resolve_cards_file",
    # errors
    "AudioInterrogatorError",
    "BackendError",
    "DeviceNotFoundError",
    "InvalidDeviceNameError",
    # filters
    "apply_filters",
    "deduplicate",
    "filter_devices",
    # portaudio
    "PortAudioBackend",
    # probe
    "AlsaProber",
    "ProbeResult",
    "common_rates_within",
    "is_safe_device_name",
]
