"""Decoding of raw nRF24 frames captured in promiscuous mode.

Frames are received without the radio's own packet handling, so each one
still carries the 9-bit packet control field and the CRC-16. The functions
here realign such a frame, check its CRC and render it as one line of hex
output.
"""

from __future__ import annotations

import argparse
import enum
import sys
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, TextIO

from hoyradio.addressing import DTU_RADIO_ID, RF_MAX_ADDR_WIDTH, address_bytes
from hoyradio.crc import bytes_to_bits, crc16_nrf

MAX_RF_PAYLOAD_SIZE = 32
_CRC_START = 0xFFFF
_UINT32_MASK = 0xFFFFFFFF


class MessageType(enum.IntEnum):
    """Kind of message carried in the two top bits of a serial header byte."""

    PACKET = 0
    CONFIG = 1


def set_msg_type(var: int, msg_type: int) -> int:
    """Keep the low six length bits of ``var`` and put ``msg_type`` above them."""
    return (var & 0x3F) | (int(msg_type) << 6)


def get_msg_type(var: int) -> int:
    """Message type stored above the six length bits."""
    return var >> 6


def get_msg_len(var: int) -> int:
    """Message length stored in the six low bits."""
    return var & 0x3F


@dataclass(frozen=True)
class RawPacket:
    """One frame as received, padded with zeros to the full radio payload size."""

    timestamp: int
    packets_lost: int = 0
    packet: bytes = field(default=bytes(MAX_RF_PAYLOAD_SIZE))

    def __post_init__(self) -> None:
        data = bytes(self.packet)
        if len(data) > MAX_RF_PAYLOAD_SIZE:
            raise ValueError(
                f"packet holds {len(data)} bytes, at most {MAX_RF_PAYLOAD_SIZE} allowed"
            )
        if not 0 <= self.packets_lost <= 0xFF:
            raise ValueError(f"packets_lost must be a byte, got {self.packets_lost}")
        object.__setattr__(self, "timestamp", self.timestamp & _UINT32_MASK)
        object.__setattr__(self, "packet", data.ljust(MAX_RF_PAYLOAD_SIZE, b"\0"))


def realign(data: bytes) -> bytes:
    """Shift the frame seven bits towards its end.

    After the shift the first bit of the packet control field sits in bit 0 of
    the first byte, and its remaining eight bits fill the second byte.
    """
    data = bytes(data)
    if not data:
        return data
    bits = len(data) * 8
    value = int.from_bytes(data, "big") >> 7
    return (value & ((1 << bits) - 1)).to_bytes(len(data), "big")


def payload_length(data: bytes) -> int:
    """Payload length taken from the packet control field of a realigned frame."""
    if len(data) < 2:
        raise ValueError("a frame needs at least two bytes for its control field")
    return ((data[0] & 0x01) << 5) | (data[1] >> 3)


def packet_crc(address: bytes, data: bytes) -> int:
    """nRF24 CRC-16 over the address, the control field and the payload."""
    address = bytes(address)
    data = bytes(data)
    crc = crc16_nrf(address, _CRC_START, 0, bytes_to_bits(len(address)))
    length = payload_length(data)
    # One byte and one bit of control field precede the payload.
    return crc16_nrf(data, crc, 7, bytes_to_bits(length + 1) + 1)


def _crc_matches(data: bytes, length: int, crc: int) -> bool:
    index = length + 2
    if index + 1 >= len(data):
        return False
    return (crc >> 8) == data[index] and (crc & 0xFF) == data[index + 1]


def _dump(data: Iterable[int]) -> str:
    return bytes(data).hex().upper() + " "


class Sniffer:
    """Turns received frames into printable lines, filtering by CRC if asked."""

    def __init__(self, address: int = DTU_RADIO_ID, check_crc: bool = True) -> None:
        self.address = address_bytes(address, RF_MAX_ADDR_WIDTH)
        self.check_crc = check_crc
        self.last_crc = 0

    def process(self, packet: RawPacket) -> Optional[str]:
        """Decode one frame; None when there is nothing to show for it."""
        data = realign(packet.packet)
        length = payload_length(data)
        crc = packet_crc(self.address, data)
        crc_ok = _crc_matches(data, length, crc)

        if self.check_crc:
            if not crc_ok:
                if packet.packets_lost > 0:
                    return f" Lost: {packet.packets_lost}"
                return None
            if crc == self.last_crc:
                return None
            self.last_crc = crc

        if length == 0:
            return None

        parts = [
            f" {packet.timestamp:09d} ",
            _dump([packet.packets_lost]),
            _dump(self.address),
            _dump(data[0:2]),
            _dump([length]),
            f"{(data[1] >> 1) & 0x03}  ",
        ]
        if length > 9:
            parts.append(_dump(data[2:3]))
            parts.append(_dump(data[3:7]))
            parts.append(_dump(data[7:11]))
            remain = length - 2 - 1 - 4 - 4 + 4
            if remain < 32:
                parts.append(_dump(data[11:11 + remain]))
                parts.append(f"{crc:04X} ")
                parts.append("1" if crc_ok else "0")
            else:
                parts.append(f"Ill remain {remain}")
        else:
            parts.append(_dump(data[2:length + 4]))
            parts.append(f"{crc:04X} ")

        if packet.packets_lost > 0:
            parts.append(f" Lost: {packet.packets_lost}")
        return "".join(parts)

    def run(self, packets: Iterable[RawPacket]) -> Iterator[str]:
        """Decode a stream of frames, yielding only the lines worth showing."""
        for packet in packets:
            line = self.process(packet)
            if line is not None:
                yield line


def _parse_packets(stream: TextIO) -> Iterator[RawPacket]:
    for number, line in enumerate(stream, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        fields = text.split()
        if len(fields) != 3:
            raise ValueError(f"line {number}: expected 'timestamp lost hexdata'")
        try:
            yield RawPacket(int(fields[0]), int(fields[1]), bytes.fromhex(fields[2]))
        except ValueError as exc:
            raise ValueError(f"line {number}: {exc}") from exc


def main(argv: Optional[List[str]] = None) -> int:
    """Decode captured frames, one 'timestamp lost hexdata' per input line."""
    parser = argparse.ArgumentParser(
        prog="hoyradio-sniff", description="Decode raw nRF24 frames captured in promiscuous mode."
    )
    parser.add_argument("input", nargs="?", help="capture file (default: standard input)")
    parser.add_argument(
        "--address",
        type=lambda text: int(text, 16),
        default=DTU_RADIO_ID,
        help="listening radio address in hex",
    )
    parser.add_argument(
        "--no-crc-check", action="store_true", help="show frames whose CRC does not match"
    )
    args = parser.parse_args(argv)

    sniffer = Sniffer(args.address, check_crc=not args.no_crc_check)
    try:
        if args.input:
            with open(args.input, encoding="ascii") as stream:
                for line in sniffer.run(_parse_packets(stream)):
                    print(line)
        else:
            for line in sniffer.run(_parse_packets(sys.stdin)):
                print(line)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0