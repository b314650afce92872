import pytest

from hoyradio.ringbuffer import BufferFullError, CircularBuffer


def test_new_buffer_is_empty():
    buf = CircularBuffer(4)
    assert buf.is_empty()
    assert not buf.is_full()
    assert len(buf) == 0


def test_fifo_order():
    buf = CircularBuffer(3)
    for item in ("a", "b", "c"):
        buf.push(item)
    assert [buf.pop(), buf.pop(), buf.pop()] == ["a", "b", "c"]
    assert buf.is_empty()


def test_full_buffer_rejects_push():
    buf = CircularBuffer(2)
    buf.push(1)
    buf.push(2)
    assert buf.is_full()
    with pytest.raises(BufferFullError):
        buf.push(3)
    assert list(buf) == [1, 2]


def test_peek_does_not_remove():
    buf = CircularBuffer(2)
    buf.push("x")
    assert buf.peek() == "x"
    assert len(buf) == 1
    assert buf.pop() == "x"


def test_empty_peek_and_pop_raise():
    buf = CircularBuffer(2)
    with pytest.raises(IndexError):
        buf.peek()
    with pytest.raises(IndexError):
        buf.pop()


def test_wrap_around_keeps_order():
    buf = CircularBuffer(3)
    seen = []
    for value in range(10):
        buf.push(value)
        if len(buf) == 3:
            seen.append(buf.pop())
    while buf:
        seen.append(buf.pop())
    assert seen == list(range(10))


def test_clear_resets():
    buf = CircularBuffer(2)
    buf.push(1)
    buf.push(2)
    buf.clear()
    assert buf.is_empty()
    buf.push(5)
    assert buf.peek() == 5


@pytest.mark.parametrize("capacity", [0, -1, 256])
def test_invalid_capacity(capacity):
    with pytest.raises(ValueError):
        CircularBuffer(capacity)


def test_iteration_oldest_first_after_wrap():
    buf = CircularBuffer(3)
    for value in (1, 2, 3):
        buf.push(value)
    buf.pop()
    buf.push(4)
    assert list(buf) == [2, 3, 4]
    assert len(buf) == 3