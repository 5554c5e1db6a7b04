"""Audio device API endpoints."""

import threading
from pathlib import Path

from fastapi import APIRouter, Depends, Query

from ..models import (
    AudioDeviceInfo,
    CardListResponse,
    DeviceFilter,
    ProbeResponse,
    ScanSettings,
    SystemAudioInfo,
)
from ..services.aggregator import build_system_info
from ..services.cards import list_card_directories, load_card_table
from ..services.config import load_settings, resolve_cards_file
from ..services.errors import DeviceNotFoundError, InvalidDeviceNameError
from ..services.filters import apply_filters
from ..services.probe import AlsaProber, is_safe_device_name

router = APIRouter(prefix="/api/devices", tags=["devices"])

# PortAudio is not thread-safe; endpoints run in the threadpool
_scan_lock = threading.Lock()


def get_settings() -> ScanSettings:
    """Load scan settings for one request."""
    return load_settings()


def scan_devices(settings: ScanSettings) -> SystemAudioInfo:
    """Build a snapshot, one scan at a time."""
    with _scan_lock:
        return build_system_info(settings)


@router.get("", response_model=SystemAudioInfo)
def list_devices(
    card: str | None = Query(
        default=None, description="Card ID filter (e.g. 0, card1, PCH)"
    ),
    device: str | None = Query(
        default=None, description="Device name filter (partial, case-insensitive)"
    ),
    show_all: bool = Query(
        default=False,
        alias="all",
        description="Include virtual devices and plughw/hw duplicates",
    ),
    driver: str | None = Query(
        default=None, description="Only devices from this backend (PortAudio, ALSA)"
    ),
    settings: ScanSettings = Depends(get_settings),
) -> SystemAudioInfo:
    """
    Scan all backends and return the filtered device snapshot.

    Totals are computed from the returned device list. Default device names
    are chosen before filtering.
    """
    criteria = DeviceFilter(card=card, device=device, show_all=show_all)
    info = scan_devices(settings)
    info = apply_filters(info, criteria, cards_file=resolve_cards_file(settings))
    if driver:
        info = info.with_devices(list(info.devices_by_driver(driver)))
    return info


@router.get("/lookup", response_model=AudioDeviceInfo)
def lookup_device(
    name: str = Query(..., min_length=1, description="Exact device name"),
    settings: ScanSettings = Depends(get_settings),
) -> AudioDeviceInfo:
    """Return one device from the unfiltered snapshot by exact name."""
    info = scan_devices(settings)
    found = info.find_device(name)
    if found is None:
        raise DeviceNotFoundError(name)
    return found


@router.get("/cards", response_model=CardListResponse)
def list_cards(settings: ScanSettings = Depends(get_settings)) -> CardListResponse:
    """List the cards from the card listing file and the card directories."""
    table = load_card_table(resolve_cards_file(settings))
    return CardListResponse(
        cards=table.cards,
        card_directories=list_card_directories(Path(settings.asound_root)),
    )


@router.get("/probe", response_model=ProbeResponse)
def probe_device(
    device: str = Query(default="default", description="ALSA device name (e.g., hw:0,0)"),
    settings: ScanSettings = Depends(get_settings),
) -> ProbeResponse:
    """
    Probe one ALSA device identifier for playback and capture capabilities.

    A device that cannot be opened reports zero channels rather than an error.
    """
    if not is_safe_device_name(device):
        raise InvalidDeviceNameError(device)

    result = AlsaProber(timeout_sec=settings.probe_timeout_sec).probe(device)
    return ProbeResponse(
        device=device,
        input_channels=result.input_channels,
        output_channels=result.output_channels,
        supported_rates=result.supported_rates,
    )
