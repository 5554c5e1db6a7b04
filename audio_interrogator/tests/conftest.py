from pathlib import Path

import pytest

from audio_interrogator.models import AudioDeviceInfo

CARDS_LISTING = """\
 0 [HDMI           ]: HDA-Intel - HDA ATI HDMI
                      HDA ATI HDMI at 0xfcb60000 irq 51
 1 [PCH            ]: HDA-Intel - HDA Intel PCH
                      HDA Intel PCH at 0xfcb20000 irq 52
 2 [Device         ]: USB-Audio - USB Audio Device
                      C-Media Electronics Inc. USB Audio Device at usb-0000:00:14.0-2, full speed
"""

USB_STREAM0 = """\
C-Media Electronics Inc. USB Audio Device at usb-0000:00:14.0-2, full speed : USB Audio

Playback:
  Status: Stop
  Interface 1
    Altset 1
    Format: S16_LE
    Channels: 2
    Endpoint: 0x01 (1 OUT) (ADAPTIVE)
    Rates: 44100, 48000

Capture:
  Status: Stop
  Interface 2
    Altset 1
    Format: S16_LE
    Channels: 1
    Endpoint: 0x82 (2 IN) (ASYNC)
    Rates: 44100, 48000
"""

PCM_INFO_FREE = """\
card: 2
device: 0
subdevice: 0
stream: PLAYBACK
id: USB Audio
name: USB Audio
subdevices_count: 1
subdevices_avail: 1
"""

PCM_INFO_BUSY = PCM_INFO_FREE.replace("subdevices_avail: 1", "subdevices_avail: 0")


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.fixture
def asound_root(tmp_path):
    """Fake /proc/asound tree with an HDMI card, a PCH card and a USB card.

    card0: pcm3p (no stream0, falls back to 2 channels)
    card1: pcm0p, pcm0c (pcm0p is busy)
    card2: pcm0p, pcm0c with stream0 (2 out, 1 in)
    """
    root = tmp_path / "asound"
    _write(root / "cards", CARDS_LISTING)

    _write(root / "card0" / "pcm3p" / "info", PCM_INFO_FREE)

    _write(root / "card1" / "pcm0p" / "info", PCM_INFO_BUSY)
    _write(root / "card1" / "pcm0c" / "info", PCM_INFO_FREE)

    _write(root / "card2" / "pcm0p" / "info", PCM_INFO_FREE)
    _write(root / "card2" / "pcm0c" / "info", PCM_INFO_FREE)
    _write(root / "card2" / "stream0", USB_STREAM0)

    # Non-card entries that must be ignored
    _write(root / "version", "Advanced Linux Sound Architecture Driver Version k6.8.0.\n")
    (root / "seq").mkdir()
    return root


@pytest.fixture
def cards_file(asound_root):
    return asound_root / "cards"


@pytest.fixture
def make_device():
    """Factory for device records."""

    def _make(name, inputs=0, outputs=2, driver="ALSA", **kwargs):
        return AudioDeviceInfo(
            name=name,
            input_channels=inputs,
            output_channels=outputs,
            driver=driver,
            **kwargs,
        )

    return _make
