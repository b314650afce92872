"""Reassembly of multi-frame inverter responses and settings checksums."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from hoyradio.crc import crc16_modbus

MAX_PAYLOAD_ENTRIES = 4
MAX_RF_PAYLOAD_SIZE = 32
LAST_FRAME_FLAG = 0x80
SINGLE_FRAME = 0x01
_FRAME_MASK = 0x7F


def _empty_fragments() -> List[bytes]:
    return [b""] * MAX_PAYLOAD_ENTRIES


@dataclass
class InverterPayload:
    """Collects the numbered frames of one inverter response.

    Frame ids start at 1; the last frame of a response has bit 0x80 set. The
    final two bytes of the last frame hold a CRC-16/MODBUS, big-endian, over
    all payload bytes before it.
    """

    tx_id: int = 0
    timestamp: int = 0
    complete: bool = False
    max_pack_id: int = 0
    retransmits: int = 0
    requested: bool = False
    last_packet_id: int = 0
    fragments: List[bytes] = field(default_factory=_empty_fragments)

    def reset(self, timestamp: int) -> None:
        """Forget received frames and mark a new request sent at ``timestamp``."""
        self.fragments = _empty_fragments()
        self.retransmits = 0
        self.max_pack_id = 0
        self.complete = False
        self.requested = True
        self.timestamp = timestamp

    def add_fragment(self, packet_id: int, data: bytes) -> bool:
        """Record the frame with ``packet_id``; True when its data was stored.

        A frame id of zero is ignored. Frames numbered beyond the storage are
        not stored, but a last-frame flag still counts.
        """
        if not 0 <= packet_id <= 0xFF:
            raise ValueError(f"packet id must be a byte, got {packet_id}")
        data = bytes(data)
        if len(data) > MAX_RF_PAYLOAD_SIZE:
            raise ValueError(
                f"fragment holds {len(data)} bytes, at most {MAX_RF_PAYLOAD_SIZE} allowed"
            )
        if packet_id == 0:
            return False

        number = packet_id & _FRAME_MASK
        stored = False
        if 0 < number <= MAX_PAYLOAD_ENTRIES:
            self.fragments[number - 1] = data
            stored = True

        if packet_id & LAST_FRAME_FLAG and number > self.max_pack_id:
            self.max_pack_id = number
            if packet_id > LAST_FRAME_FLAG | SINGLE_FRAME:
                self.last_packet_id = packet_id
        return stored

    def _frames(self) -> List[bytes]:
        if self.max_pack_id > MAX_PAYLOAD_ENTRIES:
            self.max_pack_id = MAX_PAYLOAD_ENTRIES
        return self.fragments[: self.max_pack_id]

    def is_valid(self) -> bool:
        """True when all frames up to the last are in and the CRC matches."""
        frames = self._frames()
        if not frames:
            return False
        crc = 0xFFFF
        received = 0x0000
        last = len(frames) - 1
        for index, frame in enumerate(frames):
            if not frame:
                continue
            if index == last:
                if len(frame) < 2:
                    return False
                crc = crc16_modbus(frame[:-2], crc)
                received = int.from_bytes(frame[-2:], "big")
            else:
                crc = crc16_modbus(frame, crc)
        return crc == received

    def assemble(self) -> bytes:
        """The joined payload without its CRC; marks the payload complete."""
        if not self.is_valid():
            raise ValueError("payload is incomplete or its CRC does not match")
        joined = b"".join(self._frames())
        self.complete = True
        return joined[:-2]

    def missing_frame(self) -> Optional[int]:
        """Id of the frame to ask for again, or None if none can be named.

        With the last frame known, this is the first gap before it. Without
        it, it is the last-frame id seen in an earlier response, if any.
        """
        if self.max_pack_id != 0:
            for index, frame in enumerate(self._frames()[:-1]):
                if not frame:
                    return SINGLE_FRAME + index
            return None
        return self.last_packet_id or None


def eeprom_crc(data: bytes) -> int:
    """CRC-16/MODBUS over a block of stored settings."""
    return crc16_modbus(bytes(data))