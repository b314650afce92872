"""Timing helpers for the main loop: interval tickers, uptime and inverter rotation."""

from __future__ import annotations

from collections.abc import Container
from typing import Optional, Tuple

_UINT32_MASK = 0xFFFFFFFF
_MILLIS_PER_SECOND = 1000


class Ticker:
    """Fires once an interval has passed on a 32-bit millisecond clock.

    The deadline is moved to ``now + interval`` whenever the ticker fires. A
    clock that jumps backwards to before the previous start also fires it, so
    a wrapped or reset clock does not stall the ticker.
    """

    def __init__(self, interval: int, deadline: int = 0) -> None:
        if interval < 0:
            raise ValueError(f"interval must not be negative, got {interval}")
        self.interval = interval & _UINT32_MASK
        self.deadline = deadline & _UINT32_MASK

    def check(self, now: int) -> bool:
        """True when the ticker fires at time ``now`` (in milliseconds)."""
        now &= _UINT32_MASK
        started = (self.deadline - self.interval) & _UINT32_MASK
        if now >= self.deadline or now < started:
            self.deadline = (now + self.interval) & _UINT32_MASK
            return True
        return False


class UptimeClock:
    """Counts uptime seconds and keeps a running Unix timestamp.

    Each call to :meth:`advance` moves the clock by at most one second, the
    way a frequently polled main loop does. A zero timestamp means the time
    is not yet known and is left at zero.
    """

    def __init__(self, timestamp: int = 0) -> None:
        self.timestamp = timestamp & _UINT32_MASK
        self.uptime = 0
        self.prev_millis = 0

    def advance(self, millis: int) -> bool:
        """Step one second if a second has passed since the last step."""
        elapsed = (millis - self.prev_millis) & _UINT32_MASK
        if elapsed < _MILLIS_PER_SECOND:
            return False
        self.prev_millis = (self.prev_millis + _MILLIS_PER_SECOND) & _UINT32_MASK
        self.uptime = (self.uptime + 1) & _UINT32_MASK
        if self.timestamp != 0:
            self.timestamp = (self.timestamp + 1) & _UINT32_MASK
        return True


def next_inverter(
    last: int, present: Container[int], max_inverters: int
) -> Tuple[int, bool]:
    """Rotate to the next occupied inverter slot after ``last``.

    Returns the new position and whether an inverter sits there. When no slot
    is occupied the search gives up after one full turn plus one step and
    reports the position it stopped at.
    """
    if max_inverters < 1:
        raise ValueError(f"max_inverters must be at least 1, got {max_inverters}")
    if not 0 <= last < max_inverters:
        raise ValueError(f"last must lie in 0..{max_inverters - 1}, got {last}")

    position = last
    found: Optional[bool] = None
    remaining = max_inverters
    while True:
        position = 0 if position == max_inverters - 1 else position + 1
        found = position in present
        if found:
            break
        if remaining <= 0:
            break
        remaining -= 1
    return position, bool(found)