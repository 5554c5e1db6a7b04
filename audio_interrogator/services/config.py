"""Scan settings loading."""

import json
import logging
import math
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from ..constants import CARDS_FILE_NAME, CONFIG_PATH
from ..models import ProbeTarget, ScanSettings

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "AUDIO_INTERROGATOR_CONFIG"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def get_config_path() -> Path:
    """Resolve the config file path, honouring AUDIO_INTERROGATOR_CONFIG."""
    override = os.getenv(CONFIG_PATH_ENV)
    return Path(override) if override else CONFIG_PATH


def _settings_from_config(data: dict[str, Any]) -> ScanSettings:
    """Convert camelCase config keys to ScanSettings."""
    values: dict[str, Any] = {}
    keys = {
        "asoundRoot": "asound_root",
        "cardsFile": "cards_file",
        "enablePortaudio": "enable_portaudio",
        "enableAlsa": "enable_alsa",
        "probeTimeoutSec": "probe_timeout_sec",
        "symbolicNames": "symbolic_names",
    }
    for config_key, field_name in keys.items():
        if config_key in data:
            values[field_name] = data[config_key]

    targets = data.get("probeTargets")
    if isinstance(targets, list):
        values["probe_targets"] = [
            ProbeTarget(**target) for target in targets if isinstance(target, dict)
        ]

    return ScanSettings(**values)


def _load_config_file(path: Path) -> ScanSettings:
    if not path.exists():
        return ScanSettings()
    try:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("config root must be an object")
        return _settings_from_config(data)
    except (OSError, json.JSONDecodeError, ValidationError, TypeError, ValueError) as e:
        logger.warning("Ignoring invalid config %s: %s", path, e)
        return ScanSettings()


def load_settings(path: Optional[Path] = None) -> ScanSettings:
    """
    Load scan settings from the JSON config file and environment.

    Environment variables take precedence over the file:
    AUDIO_INTERROGATOR_ASOUND_ROOT, AUDIO_INTERROGATOR_ENABLE_PORTAUDIO,
    AUDIO_INTERROGATOR_ENABLE_ALSA, AUDIO_INTERROGATOR_PROBE_TIMEOUT.
    """
    settings = _load_config_file(path or get_config_path())

    overrides = {
        "asound_root": _env_str("AUDIO_INTERROGATOR_ASOUND_ROOT", settings.asound_root),
        "enable_portaudio": _env_bool(
            "AUDIO_INTERROGATOR_ENABLE_PORTAUDIO", settings.enable_portaudio
        ),
        "enable_alsa": _env_bool("AUDIO_INTERROGATOR_ENABLE_ALSA", settings.enable_alsa),
        "probe_timeout_sec": _env_float(
            "AUDIO_INTERROGATOR_PROBE_TIMEOUT", settings.probe_timeout_sec
        ),
    }
    if not overrides["probe_timeout_sec"] > 0:
        overrides["probe_timeout_sec"] = settings.probe_timeout_sec

    try:
        return ScanSettings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as e:
        logger.warning("Ignoring invalid environment overrides: %s", e)
        return settings


def resolve_cards_file(settings: ScanSettings) -> Path:
    """Return the card listing path for these settings."""
    if settings.cards_file:
        return Path(settings.cards_file)
    return Path(settings.asound_root) / CARDS_FILE_NAME
