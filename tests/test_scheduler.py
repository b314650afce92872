import pytest

from hoyradio.scheduler import Ticker, UptimeClock, next_inverter


def test_ticker_fires_at_start_and_sets_deadline():
    ticker = Ticker(1000)
    assert ticker.check(0) is True
    assert ticker.deadline == 1000


def test_ticker_waits_for_interval():
    ticker = Ticker(1000)
    ticker.check(0)
    assert ticker.check(999) is False
    assert ticker.check(1000) is True
    assert ticker.deadline == 2000


def test_ticker_fires_when_clock_goes_backwards():
    ticker = Ticker(1000, deadline=5000)
    assert ticker.check(100) is True
    assert ticker.deadline == 1100


def test_ticker_inside_interval_does_not_fire():
    ticker = Ticker(1000, deadline=5000)
    assert ticker.check(4500) is False
    assert ticker.deadline == 5000


def test_ticker_deadline_wraps_at_32_bits():
    ticker = Ticker(1000)
    assert ticker.check(0xFFFFFFFF) is True
    assert ticker.deadline == (0xFFFFFFFF + 1000) & 0xFFFFFFFF


def test_ticker_rejects_negative_interval():
    with pytest.raises(ValueError):
        Ticker(-1)


def test_uptime_clock_steps_after_a_second():
    clock = UptimeClock()
    assert clock.advance(999) is False
    assert clock.uptime == 0
    assert clock.advance(1000) is True
    assert clock.uptime == 1
    assert clock.timestamp == 0


def test_uptime_clock_advances_known_timestamp():
    clock = UptimeClock(1_650_000_000)
    clock.advance(1000)
    assert clock.timestamp == 1_650_000_001


def test_uptime_clock_steps_once_per_call():
    clock = UptimeClock(10)
    assert clock.advance(5000) is True
    assert clock.uptime == 1
    assert clock.prev_millis == 1000
    assert clock.advance(5000) is True
    assert clock.uptime == 2
    assert clock.timestamp == 12


def test_next_inverter_skips_empty_slots():
    assert next_inverter(0, {0, 2}, 3) == (2, True)


def test_next_inverter_wraps_around():
    assert next_inverter(2, {0, 2}, 3) == (0, True)


def test_next_inverter_single_present_returns_itself():
    assert next_inverter(1, {1}, 3) == (1, True)


def test_next_inverter_none_present():
    position, found = next_inverter(1, set(), 3)
    assert found is False
    assert position == 2


@pytest.mark.parametrize("last,max_inverters", [(-1, 3), (3, 3), (0, 0)])
def test_next_inverter_rejects_bad_arguments(last, max_inverters):
    with pytest.raises(ValueError):
        next_inverter(last, {0}, max_inverters)