"""Abstract byte-source transport."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class TransportError(Exception):
    """The byte source failed or disconnected; the stream cannot continue."""


class TransportOpenError(TransportError):
    """The byte source could not be opened."""


class EndOfStream(TransportError):
    """The byte source reached end of stream."""


class BaseByteTransport(ABC):
    """Read-only byte source with timeout-bounded reads.

    ``read_bytes`` returns ``b""`` when the timeout elapses with no data.
    A timeout is not an error. Unrecoverable failures raise TransportError.
    """

    def __init__(self) -> None:
        self._connected = False
        self._last_error: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def description(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def connect(self) -> bool:
        """Open the source. Returns True on success."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the source."""

    @abstractmethod
    async def read_bytes(self, max_bytes: int, timeout: float) -> bytes:
        """Read up to ``max_bytes``, waiting at most ``timeout`` seconds."""

    async def __aenter__(self):
        if not await self.connect():
            raise TransportOpenError(self._last_error or f"Failed to open {self.description}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
        return False


__all__ = ["BaseByteTransport", "EndOfStream", "TransportError", "TransportOpenError"]
