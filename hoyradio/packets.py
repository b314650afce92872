"""Builders for request packets sent from the DTU to an inverter."""

from __future__ import annotations

from hoyradio.crc import crc8, crc16_modbus

TIME_PACKET_LEN = 27
COMMAND_PACKET_LEN = 11
_BUFFER_SIZE = 32
_UINT32_MASK = 0xFFFFFFFF


def _address(value: int, name: str) -> bytes:
    if not 0 <= value <= _UINT32_MASK:
        raise ValueError(f"{name} must fit in 32 bits, got {value:#x}")
    # Addresses are copied in the controller's native (little-endian) order.
    return value.to_bytes(4, "little")


def _byte(value: int, name: str) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be a byte, got {value}")
    return value


class PacketBuilder:
    """Builds time and command packets around a running Unix timestamp."""

    def __init__(self, timestamp: int = 0) -> None:
        self.timestamp = timestamp & _UINT32_MASK

    def tick(self) -> None:
        """Advance the timestamp by one second."""
        self.timestamp = (self.timestamp + 1) & _UINT32_MASK

    def time_packet(self, inverter_addr: int, dtu_addr: int) -> bytes:
        """A 27-byte time-set request carrying the current timestamp."""
        buf = bytearray(_BUFFER_SIZE)
        buf[0] = 0x15
        buf[1:5] = _address(inverter_addr, "inverter_addr")
        buf[5:9] = _address(dtu_addr, "dtu_addr")
        buf[9] = 0x80
        buf[10] = 0x0B
        buf[11] = 0x00
        buf[12:16] = self.timestamp.to_bytes(4, "big")
        buf[19] = 0x05
        crc = crc16_modbus(buf[10:24])
        buf[24:26] = crc.to_bytes(2, "big")
        buf[26] = crc8(buf[:26])
        return bytes(buf[:TIME_PACKET_LEN])

    def command_packet(self, inverter_addr: int, dtu_addr: int, mid: int, cmd: int) -> bytes:
        """An 11-byte command packet with message id ``mid`` and command ``cmd``."""
        buf = bytearray(COMMAND_PACKET_LEN)
        buf[0] = _byte(mid, "mid")
        buf[1:5] = _address(inverter_addr, "inverter_addr")
        buf[5:9] = _address(dtu_addr, "dtu_addr")
        buf[9] = _byte(cmd, "cmd")
        buf[10] = crc8(buf[:10])
        return bytes(buf)