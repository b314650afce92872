"""Conversions between inverter serial numbers and nRF24 radio addresses."""

from __future__ import annotations

import string

DTU_RADIO_ID = 0x1234567801
DUMMY_RADIO_ID = 0xDEADBEEF01
RF_MAX_ADDR_WIDTH = 5

_UINT64_MASK = (1 << 64) - 1
_HEX_DIGITS = frozenset(string.hexdigits)


def serial_to_radio_id(serial: int) -> int:
    """Radio id of an inverter: the low four serial bytes reversed, then 0x01."""
    low = (serial & 0xFFFFFFFF).to_bytes(4, "little")
    return int.from_bytes(low + b"\x01", "big")


def _hex_prefix(pair: str) -> int:
    """Value of a two-character chunk read the way strtol reads base 16."""
    text = pair.lstrip()
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]
    digits = ""
    for char in text:
        if char not in _HEX_DIGITS:
            break
        digits += char
    value = int(digits, 16) if digits else 0
    return (-value if negative else value) & _UINT64_MASK


def parse_serial(text: str) -> int:
    """Parse up to twelve hex characters into a 48-bit serial, left aligned.

    The text is read two characters at a time; reading stops at the first
    incomplete pair. Each pair fills the next byte from the most significant.
    """
    result = 0
    for index in range(6):
        pair = text[index * 2:index * 2 + 2]
        if len(pair) < 2 or "\0" in pair:
            break
        result |= (_hex_prefix(pair) << ((5 - index) * 8)) & _UINT64_MASK
    return result


def address_bytes(radio_id: int, width: int = RF_MAX_ADDR_WIDTH) -> bytes:
    """The low ``width`` bytes of ``radio_id``, most significant first."""
    if not 1 <= width <= 8:
        raise ValueError(f"address width must be between 1 and 8, got {width}")
    return (radio_id & ((1 << (width * 8)) - 1)).to_bytes(width, "big")