"""pytest configuration and fixtures for the HTTP API tests."""

import sys
from pathlib import Path

import pytest

# Add project root directory to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def fake_asound(tmp_path):
    """Minimal /proc/asound tree with two cards."""
    root = tmp_path / "asound"
    root.mkdir()
    (root / "cards").write_text(
        " 0 [PCH            ]: HDA-Intel - HDA Intel PCH\n"
        "                      HDA Intel PCH at 0xfcb20000 irq 52\n"
        " 1 [Device         ]: USB-Audio - USB Audio Device\n"
        "                      C-Media USB Audio Device at usb-0000:00:14.0-2\n"
    )
    for card in ("card0", "card1"):
        (root / card).mkdir()
    (root / "seq").mkdir()
    return root


@pytest.fixture
def web_app():
    """FastAPI test client for the web application."""
    from fastapi.testclient import TestClient

    from audio_interrogator import main

    return TestClient(main.app)
