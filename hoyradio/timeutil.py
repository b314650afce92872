"""Clock helpers: central European daylight saving, NTP requests and formatting.

Timestamps are plain seconds since 1970-01-01. They are broken down into
calendar fields without applying any zone, so a timestamp that already holds
local time is shown as local time.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from datetime import timezone as _tz

NTP_PACKET_SIZE = 48
NTP_PORT = 123
NTP_UNIX_OFFSET = 2208988800
TIMEZONE = 1
SECS_PER_HOUR = 3600

_EPOCH = datetime(1970, 1, 1, tzinfo=_tz.utc)


def _breakdown(t: int) -> datetime:
    return _EPOCH + timedelta(seconds=int(t))


def _last_sunday_of_march(year: int) -> int:
    return 31 - (5 * year // 4 + 4) % 7


def _last_sunday_of_october(year: int) -> int:
    return 31 - (5 * year // 4 + 1) % 7


def offset_daylight_saving(utc: int, timezone: int = TIMEZONE) -> int:
    """Hours to add for summer time in central Europe: 1 or 0.

    Summer time runs from the last Sunday of March to the last Sunday of
    October; the change happens at one hour past the zone's offset.
    """
    moment = _breakdown(utc)
    month = moment.month
    if month < 3 or month > 10:
        return 0
    if 3 < month < 10:
        return 1
    hours_today = moment.hour + 24 * moment.day
    if month == 3:
        return int(hours_today >= 1 + timezone + 24 * _last_sunday_of_march(moment.year))
    return int(hours_today < 1 + timezone + 24 * _last_sunday_of_october(moment.year))


def is_day_of_daylight_change(t: int) -> bool:
    """True on the last Sunday of March or of October."""
    moment = _breakdown(t)
    if moment.month == 3:
        return moment.day == _last_sunday_of_march(moment.year)
    if moment.month == 10:
        return moment.day == _last_sunday_of_october(moment.year)
    return False


def is_valid_datetime(t: int) -> bool:
    """True when the year lies strictly between 2020 and 2038."""
    return 2020 < _breakdown(t).year < 2038


def format_date_time(t: int) -> str:
    """``YYYY-MM-DD+HH:MM:SS``."""
    m = _breakdown(t)
    return (
        f"{m.year:04d}-{m.month:02d}-{m.day:02d}"
        f"+{m.hour:02d}:{m.minute:02d}:{m.second:02d}"
    )


def format_date(t: int) -> str:
    """``YYYY-MM-DD``."""
    m = _breakdown(t)
    return f"{m.year:04d}-{m.month:02d}-{m.day:02d}"


def format_time(t: int) -> str:
    """``HH:MM:SS``."""
    m = _breakdown(t)
    return f"{m.hour:02d}:{m.minute:02d}:{m.second:02d}"


def format_app_date_time(t: int) -> str:
    """``YYYY-MM-DD HH:MM:SS``, or ``n/a`` for a zero timestamp."""
    if t == 0:
        return "n/a"
    m = _breakdown(t)
    return (
        f"{m.year:04d}-{m.month:02d}-{m.day:02d}"
        f" {m.hour:02d}:{m.minute:02d}:{m.second:02d}"
    )


def build_ntp_request() -> bytes:
    """The 48-byte NTP client request."""
    buf = bytearray(NTP_PACKET_SIZE)
    buf[0] = 0b11100011  # leap indicator, version, mode
    buf[1] = 0  # stratum
    buf[2] = 6  # polling interval
    buf[3] = 0xEC  # clock precision
    buf[12:16] = bytes((49, 0x4E, 49, 52))  # reference id
    return bytes(buf)


def parse_ntp_response(data: bytes, timezone: int = TIMEZONE) -> int:
    """Local time from an NTP reply, with the zone and summer time applied."""
    data = bytes(data)
    if len(data) < NTP_PACKET_SIZE:
        raise ValueError(
            f"NTP reply needs {NTP_PACKET_SIZE} bytes, got {len(data)}"
        )
    secs_since_1900 = int.from_bytes(data[40:44], "big")
    utc = secs_since_1900 - NTP_UNIX_OFFSET
    return utc + (timezone + offset_daylight_saving(utc, timezone)) * SECS_PER_HOUR