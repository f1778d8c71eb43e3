"""Replay transport that streams a captured receiver log from disk."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import aiofiles

from .base_transport import BaseByteTransport, EndOfStream, TransportError

logger = logging.getLogger(__name__)


class FileByteTransport(BaseByteTransport):
    """Byte source backed by a raw capture file (e.g. a u-center .ubx log).

    Args:
        path: Capture file to replay
        chunk_delay: Seconds to sleep before each read, to mimic serial pacing
    """

    def __init__(self, path: Path, chunk_delay: float = 0.0):
        super().__init__()
        self.path = Path(path)
        self.chunk_delay = chunk_delay
        self._handle: Optional[Any] = None
        self._bytes_read = 0

    @property
    def description(self) -> str:
        return str(self.path)

    @property
    def bytes_read(self) -> int:
        return self._bytes_read

    async def connect(self) -> bool:
        if self._connected:
            return True
        try:
            self._handle = await aiofiles.open(self.path, "rb")
        except OSError as exc:
            self._last_error = str(exc)
            logger.warning("Failed to open capture %s: %s", self.path, exc)
            return False
        self._connected = True
        self._last_error = None
        self._bytes_read = 0
        logger.info("Replaying capture %s", self.path)
        return True

    async def disconnect(self) -> None:
        handle = self._handle
        self._handle = None
        self._connected = False
        if handle is not None:
            await handle.close()

    async def read_bytes(self, max_bytes: int, timeout: float) -> bytes:
        if not self._connected or self._handle is None:
            raise TransportError(f"Capture {self.path} is not open")

        if self.chunk_delay > 0:
            await asyncio.sleep(min(self.chunk_delay, timeout))

        data = await self._handle.read(max_bytes)
        if not data:
            self._connected = False
            raise EndOfStream(f"End of capture {self.path} ({self._bytes_read} bytes)")
        self._bytes_read += len(data)
        return data


__all__ = ["FileByteTransport"]
