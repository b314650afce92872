"""Checksums used on the Hoymiles radio link and in stored settings."""

from __future__ import annotations

from typing import Iterable

CRC8_INIT = 0x00
CRC8_POLY = 0x01
CRC16_MODBUS_POLY = 0xA001
CRC16_MODBUS_INIT = 0xFFFF
CRC16_NRF_POLY = 0x1021


def bits_to_bytes(bits: int) -> int:
    """Number of whole bytes needed to hold ``bits`` bits."""
    return (bits + 7) >> 3


def bytes_to_bits(count: int) -> int:
    """Number of bits in ``count`` bytes."""
    return count << 3


def crc8(data: Iterable[int]) -> int:
    """Hoymiles CRC-8: polynomial 0x01, initial value 0x00, no final XOR."""
    crc = CRC8_INIT
    for byte in data:
        crc ^= byte
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ CRC8_POLY) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
    return crc


def crc16_modbus(data: Iterable[int], start: int = CRC16_MODBUS_INIT) -> int:
    """CRC-16/MODBUS (reflected polynomial 0xA001), continuing from ``start``."""
    crc = start & 0xFFFF
    for byte in data:
        crc ^= byte
        for _ in range(8):
            carry = crc & 0x0001
            crc >>= 1
            if carry:
                crc ^= CRC16_MODBUS_POLY
    return crc


def crc16_nrf(data: bytes, start_crc: int, start_bit: int, len_bits: int) -> int:
    """nRF24 CRC-16 (polynomial 0x1021) over a bit range of ``data``.

    The range starts at bit ``start_bit`` (MSB first within each byte) and is
    ``len_bits`` long, so it need not be a whole number of bytes. When
    ``len_bits`` is not positive or exceeds the bits in ``data``, the start
    value is returned unchanged.
    """
    crc = start_crc & 0xFFFF
    data = bytes(data)
    total_bits = bytes_to_bits(len(data))
    if len_bits <= 0 or len_bits > total_bits:
        return crc
    if start_bit < 0 or start_bit + len_bits > total_bits:
        raise ValueError(
            f"bit range {start_bit}..{start_bit + len_bits} exceeds {total_bits} bits of data"
        )
    for offset in range(start_bit, start_bit + len_bits):
        bit = (data[offset >> 3] >> (7 - (offset & 7))) & 1
        crc ^= bit << 15
        if crc & 0x8000:
            crc = ((crc << 1) ^ CRC16_NRF_POLY) & 0xFFFF
        else:
            crc = (crc << 1) & 0xFFFF
    return crc