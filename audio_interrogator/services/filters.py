"""Card/name filtering and alias deduplication of device lists."""

import logging
from pathlib import Path
from typing import Optional

from ..constants import VIRTUAL_DEVICE_PREFIXES
from ..models import AudioDeviceInfo, CardTable, DeviceFilter, SystemAudioInfo
from .cards import load_card_table

logger = logging.getLogger(__name__)


def normalize_card_token(card: str) -> str:
    """Strip a leading "card" prefix: "card1" -> "1"."""
    if card.startswith("card"):
        return card[len("card") :]
    return card


def filter_by_card(
    devices: list[AudioDeviceInfo], card: str, mapping: dict[str, str]
) -> list[AudioDeviceInfo]:
    """
    Keep devices belonging to ``card``.

    A device matches if its name contains hw:<num>, card<num>,
    CARD=<name resolved from the card listing>, or CARD=<card as given>.
    """
    card_num = normalize_card_token(card)
    target_name = mapping.get(card_num)

    patterns = [f"hw:{card_num}", f"card{card_num}", f"CARD={card}"]
    if target_name:
        patterns.append(f"CARD={target_name}")

    return [
        device
        for device in devices
        if any(pattern in device.name for pattern in patterns)
    ]


def filter_by_name(
    devices: list[AudioDeviceInfo], name: str, descriptions: dict[str, str]
) -> list[AudioDeviceInfo]:
    """
    Keep devices whose name contains ``name`` (case-insensitive).

    A device also matches when a card description contains ``name`` and the
    device name refers to that card as CARD=<card name>.
    """
    needle = name.lower()
    matching_cards = [
        card_name
        for card_name, description in descriptions.items()
        if needle in description.lower()
    ]

    def matches(device: AudioDeviceInfo) -> bool:
        if needle in device.name.lower():
            return True
        return any(f"CARD={card_name}" in device.name for card_name in matching_cards)

    return [device for device in devices if matches(device)]


def _dedup_key(name: str) -> str:
    if name.startswith("plughw:"):
        return "hw:" + name[len("plughw:") :]
    return name


def deduplicate(devices: list[AudioDeviceInfo]) -> list[AudioDeviceInfo]:
    """
    Drop virtual aliases and repeated devices.

    Names starting with dmix:, dsnoop:, surround or iec958: are removed.
    plughw:X,Y and hw:X,Y count as the same device; the first one seen is kept
    with its name unchanged.
    """
    seen: set[str] = set()
    result: list[AudioDeviceInfo] = []
    for device in devices:
        if device.name.startswith(VIRTUAL_DEVICE_PREFIXES):
            continue
        key = _dedup_key(device.name)
        if key in seen:
            continue
        seen.add(key)
        result.append(device)
    return result


def filter_devices(
    devices: list[AudioDeviceInfo],
    criteria: DeviceFilter,
    cards: Optional[CardTable] = None,
    cards_file: Optional[Path] = None,
) -> list[AudioDeviceInfo]:
    """
    Apply the card filter, the name filter, then deduplication, in that order.

    Args:
        devices: Aggregated device list
        criteria: Requested filters
        cards: Parsed card listing; loaded from ``cards_file`` when omitted
        cards_file: Card listing path used when ``cards`` is omitted

    Returns:
        Filtered list, preserving the input order
    """
    filtered = list(devices)

    if (criteria.card or criteria.device) and cards is None:
        cards = load_card_table(cards_file)

    if criteria.card:
        filtered = filter_by_card(filtered, criteria.card, cards.mapping())

    if criteria.device:
        filtered = filter_by_name(filtered, criteria.device, cards.descriptions())

    if not criteria.show_all:
        filtered = deduplicate(filtered)

    logger.debug("Filtered %d device(s) down to %d", len(devices), len(filtered))
    return filtered


def apply_filters(
    info: SystemAudioInfo,
    criteria: DeviceFilter,
    cards: Optional[CardTable] = None,
    cards_file: Optional[Path] = None,
) -> SystemAudioInfo:
    """Return a new snapshot holding the filtered devices."""
    return info.with_devices(
        filter_devices(info.devices, criteria, cards=cards, cards_file=cards_file)
    )
