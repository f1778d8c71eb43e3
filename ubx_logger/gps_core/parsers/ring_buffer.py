"""Fixed-capacity circular byte buffer for the UBX stream."""

from __future__ import annotations

from typing import Optional

from ..constants import DEFAULT_BUFFER_CAPACITY, UBX_SYNC


class RingBuffer:
    """Bounded byte store addressed by logical offset from the oldest byte.

    Appending past capacity evicts the oldest bytes; the buffer never grows.
    ``peek_byte``/``peek_bytes`` require ``index < available`` and raise
    ``IndexError`` otherwise.
    """

    __slots__ = ("_data", "_capacity", "_start", "_count")

    def __init__(self, capacity: int = DEFAULT_BUFFER_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._data = bytearray(capacity)
        self._capacity = capacity
        self._start = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def available(self) -> int:
        return self._count

    @property
    def free_space(self) -> int:
        return self._capacity - self._count

    def append(self, data: bytes) -> int:
        """Append ``data``, evicting the oldest bytes if needed.

        Returns:
            Number of bytes dropped: evicted buffered bytes plus any leading
            part of ``data`` that did not fit.
        """
        view = memoryview(data)
        size = len(view)
        if size == 0:
            return 0

        evicted = 0
        if size >= self._capacity:
            evicted = self._count + size - self._capacity
            view = view[size - self._capacity:]
            size = self._capacity
            self._start = 0
            self._count = 0
        elif size > self.free_space:
            evicted = size - self.free_space
            self.consume(evicted)

        end = (self._start + self._count) % self._capacity
        first = min(size, self._capacity - end)
        self._data[end:end + first] = view[:first]
        if first < size:
            self._data[0:size - first] = view[first:]
        self._count += size
        return evicted

    def peek_byte(self, index: int) -> int:
        if index < 0 or index >= self._count:
            raise IndexError(f"offset {index} outside buffered range ({self._count} bytes)")
        return self._data[(self._start + index) % self._capacity]

    def peek_bytes(self, index: int, length: int) -> bytes:
        """Copy ``length`` bytes starting at logical offset ``index``."""
        if length < 0 or index < 0 or index + length > self._count:
            raise IndexError(
                f"range [{index}, {index + length}) outside buffered range ({self._count} bytes)"
            )
        begin = (self._start + index) % self._capacity
        if begin + length <= self._capacity:
            return bytes(self._data[begin:begin + length])
        head = self._capacity - begin
        return bytes(self._data[begin:]) + bytes(self._data[:length - head])

    def consume(self, n: int) -> int:
        """Drop up to ``n`` of the oldest bytes. Returns the number dropped."""
        n = max(0, min(n, self._count))
        self._start = (self._start + n) % self._capacity
        self._count -= n
        if self._count == 0:
            self._start = 0
        return n

    def find_sync_pattern(self, pattern: bytes = UBX_SYNC) -> Optional[int]:
        """Return the lowest logical offset of ``pattern``, or None."""
        width = len(pattern)
        if width == 0 or self._count < width:
            return None

        start = self._start
        end = start + self._count
        if end <= self._capacity:
            index = self._data.find(pattern, start, end)
            return None if index < 0 else index - start

        # Window wraps: search the tail segment, the seam, then the head segment.
        index = self._data.find(pattern, start, self._capacity)
        if index >= 0:
            return index - start
        tail = self._capacity - start
        for offset in range(max(0, tail - width + 1), tail):
            if offset + width > self._count:
                break
            if all(self.peek_byte(offset + k) == pattern[k] for k in range(width)):
                return offset
        index = self._data.find(pattern, 0, end - self._capacity)
        return None if index < 0 else tail + index

    def clear(self) -> None:
        self._start = 0
        self._count = 0


__all__ = ["RingBuffer"]
