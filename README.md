# hoyradio

Pure-Python building blocks for the radio protocol spoken by Hoymiles
micro-inverters over nRF24 transceivers. The package has no dependencies
beyond the standard library.

## Modules

- `hoyradio.crc`: the checksums the protocol uses.
  - `crc8(data)`: polynomial 0x01, initial value 0x00, used on frames.
  - `crc16_modbus(data, start=0xFFFF)`: CRC-16/MODBUS, used on payloads.
  - `crc16_nrf(data, start_crc, start_bit, len_bits)`: the bit-wise CRC-16
    (polynomial 0x1021) an nRF24 computes over its air packets; the range
    need not be a whole number of bytes.
  - `bits_to_bytes` and `bytes_to_bits`.
- `hoyradio.packets`: `PacketBuilder` keeps a running Unix timestamp
  (`tick()` advances it by one second) and builds the 27-byte
  `time_packet(inverter_addr, dtu_addr)` and the 11-byte
  `command_packet(inverter_addr, dtu_addr, mid, cmd)`. Addresses must fit in
  32 bits; `mid` and `cmd` must be bytes, otherwise `ValueError` is raised.
- `hoyradio.addressing`: `serial_to_radio_id` turns an inverter serial number
  into its radio id, `parse_serial` reads up to twelve hex characters into a
  48-bit serial, and `address_bytes` lays out a radio id as bytes, most
  significant first. Also holds `DTU_RADIO_ID` and `DUMMY_RADIO_ID`.
- `hoyradio.ringbuffer`: `CircularBuffer(capacity)`, a fixed-capacity FIFO
  of 1 to 255 records with `push`, `peek`, `pop`, `clear`, `is_empty`,
  `is_full`, `len()` and iteration from oldest to newest. Pushing into a full
  buffer raises `BufferFullError`; `peek` and `pop` on an empty one raise
  `IndexError`.
- `hoyradio.sniff`: decoding of raw frames captured in promiscuous mode.
  `RawPacket` holds one frame; `realign` shifts it so the 9-bit packet
  control field lines up, `payload_length` reads the length from that field
  and `packet_crc` computes the frame's CRC. `Sniffer(address, check_crc)`
  turns frames into printable hex lines with `process` (or `run` over many
  frames), dropping frames whose CRC does not match and repeats of the last
  frame. `MessageType`, `set_msg_type`, `get_msg_type` and `get_msg_len`
  pack and unpack the type/length header byte.
- `hoyradio.payload`: `InverterPayload` collects the numbered frames of a
  multi-frame inverter response (`add_fragment`), checks that all are present
  and the trailing CRC matches (`is_valid`), joins them without the CRC
  (`assemble`) and names the frame to request again (`missing_frame`).
  `reset(timestamp)` starts a new request. `eeprom_crc` checksums a block of
  stored settings.
- `hoyradio.timeutil`: central European summer time
  (`offset_daylight_saving`, `is_day_of_daylight_change`), `is_valid_datetime`,
  the formatters `format_date_time`, `format_date`, `format_time` and
  `format_app_date_time`, and `build_ntp_request` / `parse_ntp_response` for
  the 48-byte NTP packets.
- `hoyradio.scheduler`: `Ticker(interval, deadline)` fires on a 32-bit
  millisecond clock (`check(now)`), `UptimeClock` counts uptime seconds and a
  running timestamp (`advance(millis)`), and `next_inverter` picks the next
  occupied inverter slot in turn.
- `hoyradio.pages`: builds the bodies of a small status web server:
  `help_page()`, `root_page(uri, values)`, `data_text(values)` and
  `not_found_text(uri, method, args)`.

## Installation

    pip install .

## Example

```python
from hoyradio.addressing import DTU_RADIO_ID, serial_to_radio_id
from hoyradio.packets import PacketBuilder

radio_id = serial_to_radio_id(0x112233445566)
builder = PacketBuilder(0x623C8EA3)
frame = builder.time_packet(radio_id >> 8, DTU_RADIO_ID >> 8)
print(frame.hex())
```

## Command line

`hoyradio-sniff` decodes captured frames. Each input line holds three
whitespace-separated fields: a decimal timestamp, a decimal count of lost
packets and the frame as hex (at most 32 bytes). Blank lines and lines
starting with `#` are skipped.

    hoyradio-sniff capture.txt
    hoyradio-sniff < capture.txt

Options:

- `--address HEX`: the listening radio address (default `1234567801`).
- `--no-crc-check`: also show frames whose CRC does not match.

Malformed input or an unreadable file is reported on standard error and the
command exits with status 1.

## What this package does not do

It does not talk to a radio, a network or a device. There is no nRF24
driver, so frames are only built and decoded, never sent or received. The
NTP helpers build and parse packets but do not open a socket. `hoyradio.pages`
only produces page text; no web server is included, and there is no MQTT
publishing and no settings storage.

## Tests

    pip install .[test]
    pytest