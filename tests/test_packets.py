import pytest

from hoyradio.crc import crc8, crc16_modbus
from hoyradio.packets import PacketBuilder

INVERTER = 0x11223344
DTU = 0x12345678
TS = 0x623C8EA3


def test_time_packet_layout():
    packet = PacketBuilder(TS).time_packet(INVERTER, DTU)
    assert len(packet) == 27
    assert packet[0] == 0x15
    assert packet[1:5] == INVERTER.to_bytes(4, "little")
    assert packet[5:9] == DTU.to_bytes(4, "little")
    assert packet[9:12] == b"\x80\x0b\x00"
    assert packet[12:16] == TS.to_bytes(4, "big")
    assert packet[16:19] == b"\x00\x00\x00"
    assert packet[19] == 0x05
    assert packet[20:24] == b"\x00\x00\x00\x00"


def test_time_packet_checksums():
    packet = PacketBuilder(TS).time_packet(INVERTER, DTU)
    assert int.from_bytes(packet[24:26], "big") == crc16_modbus(packet[10:24])
    assert crc8(packet) == 0


def test_tick_changes_timestamp_in_packet():
    builder = PacketBuilder(TS)
    builder.tick()
    assert builder.timestamp == TS + 1
    assert builder.time_packet(INVERTER, DTU)[12:16] == (TS + 1).to_bytes(4, "big")


def test_tick_wraps_at_32_bits():
    builder = PacketBuilder(0xFFFFFFFF)
    builder.tick()
    assert builder.timestamp == 0


def test_command_packet_layout():
    packet = PacketBuilder(TS).command_packet(INVERTER, DTU, 0x15, 0x81)
    assert len(packet) == 11
    assert packet[0] == 0x15
    assert packet[1:5] == INVERTER.to_bytes(4, "little")
    assert packet[5:9] == DTU.to_bytes(4, "little")
    assert packet[9] == 0x81
    assert packet[10] == crc8(packet[:10])


def test_command_packet_does_not_depend_on_time():
    a = PacketBuilder(1).command_packet(INVERTER, DTU, 0x07, 0x00)
    b = PacketBuilder(2).command_packet(INVERTER, DTU, 0x07, 0x00)
    assert a == b


@pytest.mark.parametrize("inverter,dtu", [(-1, DTU), (1 << 32, DTU), (INVERTER, 1 << 32)])
def test_address_out_of_range(inverter, dtu):
    with pytest.raises(ValueError):
        PacketBuilder(TS).time_packet(inverter, dtu)


@pytest.mark.parametrize("mid,cmd", [(256, 0), (0, 256), (-1, 0)])
def test_command_byte_out_of_range(mid, cmd):
    with pytest.raises(ValueError):
        PacketBuilder(TS).command_packet(INVERTER, DTU, mid, cmd)