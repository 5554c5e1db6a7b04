"""Tests for the ALSA backend."""

from unittest.mock import MagicMock, patch

from audio_interrogator.models import ProbeTarget, ScanSettings
from audio_interrogator.services.alsa import (
    AlsaBackend,
    is_in_use,
    iter_probe_names,
    probe_devices,
    scan_proc_devices,
)
from audio_interrogator.services.probe import ProbeResult

EXPECTED_DEFAULT_NAMES = [
    "default",
    "hw:0,0", "hw:0,1", "hw:0,2", "hw:0,3",
    "hw:1,0", "hw:1,1", "hw:1,2", "hw:1,3",
    "hw:2,0", "hw:2,1", "hw:2,2", "hw:2,3",
    "plughw:0,0", "plughw:0,1", "plughw:1,0", "plughw:1,1",
]  # fmt: skip


def _prober(results):
    """Prober stub answering from a name -> ProbeResult dict."""
    prober = MagicMock()
    prober.probe.side_effect = lambda name: results.get(name, ProbeResult())
    return prober


class TestIterProbeNames:
    def test_default_list(self):
        assert list(iter_probe_names(ScanSettings())) == EXPECTED_DEFAULT_NAMES

    def test_custom_targets(self):
        settings = ScanSettings(
            symbolic_names=["default", "pulse"],
            probe_targets=[ProbeTarget(mode="hw", cards=1, devices=2)],
        )
        assert list(iter_probe_names(settings)) == ["default", "pulse", "hw:0,0", "hw:0,1"]

    def test_empty_target(self):
        settings = ScanSettings(
            symbolic_names=[], probe_targets=[ProbeTarget(mode="hw", cards=0, devices=4)]
        )
        assert list(iter_probe_names(settings)) == []


class TestIsInUse:
    def test_busy_single_subdevice(self):
        assert is_in_use("subdevices_count: 1\nsubdevices_avail: 0\n") is True

    def test_free(self):
        assert is_in_use("subdevices_count: 1\nsubdevices_avail: 1\n") is False

    def test_multiple_subdevices_never_in_use(self):
        assert is_in_use("subdevices_count: 10\nsubdevices_avail: 0\n") is False

    def test_missing_fields(self):
        assert is_in_use("card: 0\n") is False


class TestScanProcDevices:
    def test_devices_from_tree(self, asound_root):
        devices = scan_proc_devices(asound_root)
        names = [d.name for d in devices]
        assert names == [
            "hw:0,3",
            "hw:1,0 (IN USE)",
            "hw:1,0",
            "hw:2,0",
            "hw:2,0",
        ]

    def test_channels_from_stream0(self, asound_root):
        devices = scan_proc_devices(asound_root)
        usb_playback, usb_capture = devices[3], devices[4]
        assert (usb_playback.output_channels, usb_playback.input_channels) == (2, 0)
        assert (usb_capture.output_channels, usb_capture.input_channels) == (0, 1)
        assert usb_playback.device_type == "Output"
        assert usb_capture.device_type == "Input"

    def test_channels_fall_back_to_stereo(self, asound_root):
        hdmi = scan_proc_devices(asound_root)[0]
        assert hdmi.output_channels == 2
        assert hdmi.driver == "ALSA"
        assert hdmi.supported_buffer_sizes == [64, 128, 256, 512, 1024, 2048, 4096]

    def test_unparseable_stream_falls_back_to_stereo(self, asound_root):
        (asound_root / "card2" / "stream0").write_text("Playback:\n  Channels: ?\n")
        devices = scan_proc_devices(asound_root)
        assert devices[3].output_channels == 2
        assert devices[4].input_channels == 2

    def test_pcm_without_info_is_skipped(self, asound_root):
        (asound_root / "card0" / "pcm7c").mkdir()
        names = [d.name for d in scan_proc_devices(asound_root)]
        assert "hw:0,7" not in names

    def test_missing_root(self, tmp_path):
        assert scan_proc_devices(tmp_path / "missing") == []


class TestProbeDevices:
    def test_keeps_capable_devices_in_order(self):
        prober = _prober(
            {
                "hw:0,0": ProbeResult(input_channels=2, output_channels=2, supported_rates=[48000]),
                "default": ProbeResult(output_channels=2),
            }
        )
        devices = probe_devices(prober, ["default", "hw:0,0", "hw:5,0"])

        assert [d.name for d in devices] == ["default", "hw:0,0"]
        assert devices[1].device_type == "Input/Output"
        assert devices[1].supported_sample_rates == [48000]
        assert devices[1].supported_buffer_sizes[-1] == 8192
        assert devices[0].default_sample_rate == 44100
        assert devices[0].default_buffer_size == 1024


class TestAlsaBackend:
    def test_proc_devices_before_probed(self, asound_root):
        settings = ScanSettings(asound_root=str(asound_root))
        prober = _prober({"default": ProbeResult(input_channels=2, output_channels=2)})
        backend = AlsaBackend(settings, prober=prober, platform="linux")

        devices = backend.enumerate()

        assert [d.name for d in devices][-1] == "default"
        assert len(devices) == 6
        assert all(d.driver == "ALSA" for d in devices)
        assert prober.probe.call_count == len(EXPECTED_DEFAULT_NAMES)

    def test_non_linux_returns_empty(self, asound_root):
        prober = _prober({})
        backend = AlsaBackend(
            ScanSettings(asound_root=str(asound_root)), prober=prober, platform="darwin"
        )
        assert backend.enumerate() == []
        prober.probe.assert_not_called()

    def test_prober_uses_settings_timeout(self):
        backend = AlsaBackend(ScanSettings(probe_timeout_sec=1.5), platform="linux")
        assert backend.prober.timeout_sec == 1.5

    def test_prober_errors_keep_proc_devices(self, asound_root):
        backend = AlsaBackend(ScanSettings(asound_root=str(asound_root)), platform="linux")
        with patch(
            "audio_interrogator.services.probe.subprocess.run",
            side_effect=ValueError("cannot convert float NaN to integer"),
        ):
            devices = backend.enumerate()

        assert [d.name for d in devices] == [
            "hw:0,3",
            "hw:1,0 (IN USE)",
            "hw:1,0",
            "hw:2,0",
            "hw:2,0",
        ]
