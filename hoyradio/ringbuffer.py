"""Fixed-capacity FIFO used between radio reception and packet processing."""

from __future__ import annotations

from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")

_MAX_CAPACITY = 255


class BufferFullError(Exception):
    """Raised when a record is pushed into a full buffer."""


class CircularBuffer(Generic[T]):
    """A bounded first-in, first-out ring of records.

    Records are pushed at the front and taken from the back. The capacity is
    fixed at construction and lies between 1 and 255 records.
    """

    def __init__(self, capacity: int) -> None:
        if not 1 <= capacity <= _MAX_CAPACITY:
            raise ValueError(f"capacity must be between 1 and {_MAX_CAPACITY}, got {capacity}")
        self.capacity = capacity
        self._slots: List[Optional[T]] = [None] * capacity
        self._front = 0
        self._fill = 0

    def clear(self) -> None:
        """Drop all stored records."""
        self._slots = [None] * self.capacity
        self._front = 0
        self._fill = 0

    def is_empty(self) -> bool:
        """True when no records are stored."""
        return self._fill == 0

    def is_full(self) -> bool:
        """True when no further record fits."""
        return self._fill == self.capacity

    def __len__(self) -> int:
        return self._fill

    def __bool__(self) -> bool:
        return self._fill > 0

    def __iter__(self) -> Iterator[T]:
        """Iterate from the oldest to the newest record without removing any."""
        start = self._back()
        for offset in range(self._fill):
            yield self._slots[(start + offset) % self.capacity]  # type: ignore[misc]

    def _back(self) -> int:
        return (self._front - self._fill) % self.capacity

    def push(self, record: T) -> None:
        """Add ``record`` at the front; raise BufferFullError when full."""
        if self.is_full():
            raise BufferFullError(f"buffer holds {self.capacity} records already")
        self._slots[self._front] = record
        self._front = (self._front + 1) % self.capacity
        self._fill += 1

    def peek(self) -> T:
        """Return the oldest record without removing it."""
        if self.is_empty():
            raise IndexError("peek from an empty buffer")
        return self._slots[self._back()]  # type: ignore[return-value]

    def pop(self) -> T:
        """Remove and return the oldest record."""
        if self.is_empty():
            raise IndexError("pop from an empty buffer")
        index = self._back()
        record = self._slots[index]
        self._slots[index] = None
        self._fill -= 1
        return record  # type: ignore[return-value]