"""Tests for scan settings loading."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from audio_interrogator.models import ScanSettings
from audio_interrogator.services.config import (
    get_config_path,
    load_settings,
    resolve_cards_file,
)

ENV_VARS = (
    "AUDIO_INTERROGATOR_CONFIG",
    "AUDIO_INTERROGATOR_ASOUND_ROOT",
    "AUDIO_INTERROGATOR_ENABLE_PORTAUDIO",
    "AUDIO_INTERROGATOR_ENABLE_ALSA",
    "AUDIO_INTERROGATOR_PROBE_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.json")
        assert settings == ScanSettings()
        assert settings.asound_root == "/proc/asound"
        assert settings.enable_portaudio is True
        assert settings.enable_alsa is True
        assert settings.probe_timeout_sec == 5.0

    def test_camel_case_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "asoundRoot": "/tmp/asound",
                    "enablePortaudio": False,
                    "probeTimeoutSec": 2,
                    "symbolicNames": ["default", "pulse"],
                    "probeTargets": [{"mode": "hw", "cards": 1, "devices": 1}],
                    "unrelatedKey": 1,
                }
            )
        )
        settings = load_settings(path)

        assert settings.asound_root == "/tmp/asound"
        assert settings.enable_portaudio is False
        assert settings.enable_alsa is True
        assert settings.probe_timeout_sec == 2.0
        assert settings.symbolic_names == ["default", "pulse"]
        assert [(t.mode, t.cards, t.devices) for t in settings.probe_targets] == [
            ("hw", 1, 1)
        ]

    @pytest.mark.parametrize(
        "content",
        ["{not json", "[1, 2]", json.dumps({"probeTimeoutSec": -1})],
    )
    def test_invalid_file_uses_defaults(self, tmp_path, caplog, content):
        path = tmp_path / "config.json"
        path.write_text(content)

        with caplog.at_level("WARNING"):
            settings = load_settings(path)

        assert settings == ScanSettings()
        assert "Ignoring invalid config" in caplog.text

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"asoundRoot": "/from/file", "enableAlsa": True}))
        monkeypatch.setenv("AUDIO_INTERROGATOR_ASOUND_ROOT", "/from/env")
        monkeypatch.setenv("AUDIO_INTERROGATOR_ENABLE_ALSA", "false")
        monkeypatch.setenv("AUDIO_INTERROGATOR_ENABLE_PORTAUDIO", "0")
        monkeypatch.setenv("AUDIO_INTERROGATOR_PROBE_TIMEOUT", "0.5")

        settings = load_settings(path)

        assert settings.asound_root == "/from/env"
        assert settings.enable_alsa is False
        assert settings.enable_portaudio is False
        assert settings.probe_timeout_sec == 0.5

    @pytest.mark.parametrize("value", ["abc", "0", "-3", "nan", "inf", "-inf"])
    def test_bad_timeout_env_is_ignored(self, tmp_path, monkeypatch, value):
        monkeypatch.setenv("AUDIO_INTERROGATOR_PROBE_TIMEOUT", value)
        assert load_settings(tmp_path / "missing.json").probe_timeout_sec == 5.0

    def test_non_finite_timeout_in_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"probeTimeoutSec": Infinity}')
        assert load_settings(path).probe_timeout_sec == 5.0

    def test_env_overrides_are_validated(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AUDIO_INTERROGATOR_PROBE_TIMEOUT", "nan")
        monkeypatch.setenv("AUDIO_INTERROGATOR_ASOUND_ROOT", "/from/env")

        settings = load_settings(tmp_path / "missing.json")

        assert isinstance(settings, ScanSettings)
        assert settings.probe_timeout_sec == 5.0
        assert settings.asound_root == "/from/env"

    def test_config_path_env(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"enablePortaudio": False}))
        monkeypatch.setenv("AUDIO_INTERROGATOR_CONFIG", str(path))

        assert get_config_path() == path
        assert load_settings().enable_portaudio is False


class TestResolveCardsFile:
    def test_derived_from_root(self):
        settings = ScanSettings(asound_root="/tmp/asound")
        assert resolve_cards_file(settings) == Path("/tmp/asound/cards")

    def test_explicit_file(self):
        settings = ScanSettings(cards_file="/etc/cards")
        assert resolve_cards_file(settings) == Path("/etc/cards")


class TestScanSettingsTimeout:
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), 0, -1])
    def test_rejected(self, value):
        with pytest.raises(ValidationError):
            ScanSettings(probe_timeout_sec=value)
