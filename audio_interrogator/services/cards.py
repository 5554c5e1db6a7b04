"""Readers for the ALSA procfs metadata files.

All functions take the file or directory to read as an argument and keep no
state between calls, so tests can point them at fixture trees.
"""

import logging
import re
from pathlib import Path
from typing import Literal, Optional

from ..constants import ASOUND_ROOT, CARDS_FILE_NAME
from ..models import CardInfo, CardTable

logger = logging.getLogger(__name__)

Direction = Literal["playback", "capture"]

# " 0 [HDMI           ]: HDA-Intel - HDA ATI HDMI"
_CARD_LINE_PATTERN = re.compile(r"^\s*(\d+)\s+\[([^\]]*)\]:\s*(.*)$")
_CARD_DIR_PATTERN = re.compile(r"^card(\d+)$")
_DESCRIPTION_SEPARATOR = " - "

_SECTION_HEADINGS: dict[str, str] = {
    "playback": "Playback:",
    "capture": "Capture:",
}


def default_cards_file(asound_root: Path = ASOUND_ROOT) -> Path:
    return Path(asound_root) / CARDS_FILE_NAME


def read_text(path: Path) -> Optional[str]:
    """Read a procfs text file, returning None when it is missing or unreadable."""
    try:
        return Path(path).read_text(errors="replace")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None


def parse_card_line(line: str) -> Optional[CardInfo]:
    """Parse one card listing line, or return None if it is not a card line."""
    match = _CARD_LINE_PATTERN.match(line)
    if match is None:
        return None
    index, short_name, rest = match.groups()

    driver: Optional[str] = rest.strip() or None
    description: Optional[str] = None
    if _DESCRIPTION_SEPARATOR in rest:
        driver_part, description_part = rest.split(_DESCRIPTION_SEPARATOR, 1)
        driver = driver_part.strip() or None
        description = description_part.strip()

    return CardInfo(
        index=index,
        id=short_name.strip(),
        driver=driver,
        description=description,
    )


def parse_cards(content: str) -> CardTable:
    """
    Parse the contents of /proc/asound/cards.

    Headers, continuation lines and blank lines are skipped.

    Example:
        " 1 [PCH            ]: HDA-Intel - HDA Intel PCH"
        -> mapping {"1": "PCH"}, descriptions {"PCH": "HDA Intel PCH"}
    """
    cards = []
    for line in content.splitlines():
        card = parse_card_line(line)
        if card is not None:
            cards.append(card)
    return CardTable(cards=cards)


def load_card_table(cards_file: Optional[Path] = None) -> CardTable:
    """Load the card listing; a missing file gives an empty table."""
    path = Path(cards_file) if cards_file is not None else default_cards_file()
    content = read_text(path)
    if content is None:
        return CardTable()
    return parse_cards(content)


def load_card_mapping(cards_file: Optional[Path] = None) -> dict[str, str]:
    """Card number -> card short name."""
    return load_card_table(cards_file).mapping()


def load_card_descriptions(cards_file: Optional[Path] = None) -> dict[str, str]:
    """Card short name -> description."""
    return load_card_table(cards_file).descriptions()


def parse_stream_channels(content: str, direction: Direction) -> Optional[int]:
    """
    Find the channel count for one direction in a stream0 description.

    Only the lines of the "Playback:" or "Capture:" section are considered; the
    section ends at the next unindented line. The first "Channels:" line wins.

    Format:
      Playback:
        Status: Stop
        Interface 1
          Altset 1
          Channels: 2
      Capture:
        ...
    """
    heading = _SECTION_HEADINGS[direction]
    start = content.find(heading)
    if start == -1:
        return None

    lines = content[start + len(heading) :].split("\n")
    # Remainder of the heading line itself belongs to the section
    for index, line in enumerate(lines):
        if index > 0 and line and not line[0].isspace():
            break
        stripped = line.strip()
        if stripped.startswith("Channels:"):
            try:
                return int(stripped.split(":", 1)[1].strip())
            except ValueError:
                return None
    return None


def card_number(dir_name: str) -> Optional[str]:
    """Return the card number of a ``card<N>`` directory name."""
    match = _CARD_DIR_PATTERN.match(dir_name)
    return match.group(1) if match else None


def list_card_directories(asound_root: Path = ASOUND_ROOT) -> list[str]:
    """Return the ``card<N>`` directories under the root, ordered by card number."""
    try:
        entries = [entry for entry in Path(asound_root).iterdir() if entry.is_dir()]
    except OSError as e:
        logger.debug("Cannot list %s: %s", asound_root, e)
        return []

    cards = [entry.name for entry in entries if card_number(entry.name) is not None]
    return sorted(cards, key=lambda name: int(name[len("card") :]))
