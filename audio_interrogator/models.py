"""Pydantic models for the audio interrogator."""

from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .constants import (
    ASOUND_ROOT,
    COMMON_SAMPLE_RATES,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_BUFFER_SIZES,
    DEFAULT_NAME_MARKERS,
    DEFAULT_PROBE_TARGETS,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_SYMBOLIC_NAMES,
    DEVICE_TYPE_DUPLEX,
    DEVICE_TYPE_INPUT,
    DEVICE_TYPE_OUTPUT,
    DEVICE_TYPE_UNKNOWN,
    PROBE_TIMEOUT_SEC,
)

# ============================================================================
# Device Models
# ============================================================================


class AudioDeviceInfo(BaseModel):
    """One physical or virtual audio endpoint as reported by a backend.

    ``device_type`` is derived from the channel counts on every access and is
    ignored if supplied as input.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    input_channels: int = Field(default=0, ge=0)
    output_channels: int = Field(default=0, ge=0)
    supported_sample_rates: list[int] = Field(default_factory=list)
    supported_buffer_sizes: list[int] = Field(
        default_factory=lambda: list(DEFAULT_BUFFER_SIZES)
    )
    default_sample_rate: int = DEFAULT_SAMPLE_RATE
    default_buffer_size: int = DEFAULT_BUFFER_SIZE
    driver: str

    @field_validator("supported_sample_rates")
    @classmethod
    def _sorted_unique_rates(cls, rates: list[int]) -> list[int]:
        return sorted(set(rates))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def device_type(self) -> str:
        if self.has_input() and self.has_output():
            return DEVICE_TYPE_DUPLEX
        if self.has_input():
            return DEVICE_TYPE_INPUT
        if self.has_output():
            return DEVICE_TYPE_OUTPUT
        return DEVICE_TYPE_UNKNOWN

    @classmethod
    def new(cls, name: str, driver: str) -> "AudioDeviceInfo":
        """Create a device with no channels and default rates/buffers."""
        return cls(name=name, driver=driver)

    def has_input(self) -> bool:
        return self.input_channels > 0

    def has_output(self) -> bool:
        return self.output_channels > 0

    def supports_sample_rate(self, rate: int) -> bool:
        """Check a rate; an empty rate list means the common rates are assumed."""
        if not self.supported_sample_rates:
            return rate in COMMON_SAMPLE_RATES
        return rate in self.supported_sample_rates

    def supports_buffer_size(self, size: int) -> bool:
        return size in self.supported_buffer_sizes


def _is_default_candidate(name: str) -> bool:
    return any(marker in name for marker in DEFAULT_NAME_MARKERS)


class SystemAudioInfo(BaseModel):
    """Aggregate snapshot of every device found in one scan.

    Device totals are computed from ``devices`` so they always describe the
    current list. Default device names are fixed when the snapshot is first
    built and survive filtering.
    """

    model_config = ConfigDict(frozen=True)

    devices: list[AudioDeviceInfo] = Field(default_factory=list)
    default_input: Optional[str] = None
    default_output: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_input_devices(self) -> int:
        return sum(1 for device in self.devices if device.has_input())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_output_devices(self) -> int:
        return sum(1 for device in self.devices if device.has_output())

    @classmethod
    def from_devices(cls, devices: list[AudioDeviceInfo]) -> "SystemAudioInfo":
        """Build a snapshot, picking defaults by the name heuristic."""
        default_input = next(
            (d.name for d in devices if d.has_input() and _is_default_candidate(d.name)),
            None,
        )
        default_output = next(
            (d.name for d in devices if d.has_output() and _is_default_candidate(d.name)),
            None,
        )
        return cls(
            devices=list(devices),
            default_input=default_input,
            default_output=default_output,
        )

    def with_devices(self, devices: list[AudioDeviceInfo]) -> "SystemAudioInfo":
        """Return a copy holding ``devices`` and the same default names."""
        return SystemAudioInfo(
            devices=list(devices),
            default_input=self.default_input,
            default_output=self.default_output,
        )

    def input_devices(self) -> Iterator[AudioDeviceInfo]:
        return (device for device in self.devices if device.has_input())

    def output_devices(self) -> Iterator[AudioDeviceInfo]:
        return (device for device in self.devices if device.has_output())

    def find_device(self, name: str) -> Optional[AudioDeviceInfo]:
        return next((device for device in self.devices if device.name == name), None)

    def devices_by_driver(self, driver: str) -> Iterator[AudioDeviceInfo]:
        return (device for device in self.devices if device.driver == driver)


class DeviceFilter(BaseModel):
    """Filtering options applied to an aggregated device list."""

    card: Optional[str] = Field(
        default=None, description="Card ID filter (e.g. '0', 'card1' or a card name)"
    )
    device: Optional[str] = Field(
        default=None, description="Case-insensitive device name substring"
    )
    show_all: bool = Field(
        default=False, description="Keep virtual devices and plughw/hw aliases"
    )

    @field_validator("card", "device")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


# ============================================================================
# Card Models
# ============================================================================


class CardInfo(BaseModel):
    """One entry of the card listing file."""

    index: str
    id: str
    driver: Optional[str] = None
    description: Optional[str] = None


class CardTable(BaseModel):
    """Parsed card listing."""

    cards: list[CardInfo] = Field(default_factory=list)

    def mapping(self) -> dict[str, str]:
        """Card number -> card short name."""
        return {card.index: card.id for card in self.cards}

    def descriptions(self) -> dict[str, str]:
        """Card short name -> human-readable description."""
        return {
            card.id: card.description
            for card in self.cards
            if card.description is not None
        }


class CardListResponse(BaseModel):
    """Card listing response model."""

    cards: list[CardInfo]
    card_directories: list[str]


# ============================================================================
# Scan Settings
# ============================================================================


class ProbeTarget(BaseModel):
    """Range of canonical hardware names to probe, e.g. hw:<card>,<device>."""

    mode: str = "hw"
    cards: int = Field(default=1, ge=0, le=32)
    devices: int = Field(default=1, ge=0, le=32)


def _default_probe_targets() -> list[ProbeTarget]:
    return [
        ProbeTarget(mode=mode, cards=cards, devices=devices)
        for mode, cards, devices in DEFAULT_PROBE_TARGETS
    ]


class ScanSettings(BaseModel):
    """Settings controlling which backends run and what they look at."""

    asound_root: str = str(ASOUND_ROOT)
    cards_file: Optional[str] = None
    enable_portaudio: bool = True
    enable_alsa: bool = True
    probe_timeout_sec: float = Field(
        default=PROBE_TIMEOUT_SEC, gt=0, allow_inf_nan=False
    )
    symbolic_names: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SYMBOLIC_NAMES)
    )
    probe_targets: list[ProbeTarget] = Field(default_factory=_default_probe_targets)


# ============================================================================
# Probe Response
# ============================================================================


class ProbeResponse(BaseModel):
    """Raw capability probe result for one device identifier."""

    device: str
    input_channels: int
    output_channels: int
    supported_rates: list[int]


# ============================================================================
# Error Response Models (RFC 9457 Problem Details)
# ============================================================================


class InnerError(BaseModel):
    """Details from the layer that failed (backend, device)."""

    backend: Optional[str] = Field(
        default=None, description="Backend that reported the error (e.g. 'ALSA')"
    )
    device: Optional[str] = Field(
        default=None, description="Device identifier involved, if any"
    )


class ErrorResponse(BaseModel):
    """RFC 9457 Problem Details compliant error response.

    Content-Type: application/problem+json

    Example:
        {
            "type": "/errors/device-not-found",
            "title": "Device Not Found",
            "status": 404,
            "detail": "No device named 'hw:9,0'",
            "error_code": "DEVICE_NOT_FOUND",
            "category": "device",
            "inner_error": {"device": "hw:9,0"}
        }
    """

    type: Optional[str] = Field(
        default=None,
        description="URI reference identifying the problem type (e.g., '/errors/device-not-found')",
    )
    title: Optional[str] = Field(
        default=None, description="Short human-readable summary of the problem"
    )
    status: Optional[int] = Field(
        default=None, description="HTTP status code for this error"
    )
    detail: str = Field(description="Human-readable error description")
    error_code: Optional[str] = Field(
        default=None,
        description="Application-specific error code (e.g., 'DEVICE_NOT_FOUND')",
    )
    category: Optional[str] = Field(
        default=None, description="Error category (e.g., 'backend', 'validation')"
    )
    inner_error: Optional[InnerError] = Field(
        default=None, description="Nested error details from lower layers"
    )
