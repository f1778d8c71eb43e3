"""Serial transport for u-blox receivers.

Uses serial_asyncio for non-blocking reads so the driver loop can wait on the
port with a timeout and still notice cancellation promptly.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

import serial
import serial_asyncio

from .base_transport import BaseByteTransport, EndOfStream, TransportError
from ..constants import DEFAULT_BAUD_RATE

logger = logging.getLogger(__name__)


class SerialByteTransport(BaseByteTransport):
    """Serial port byte source.

    Example:
        transport = SerialByteTransport("/dev/ttyACM0", 38400)
        async with transport:
            chunk = await transport.read_bytes(1024, timeout=0.5)
    """

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUD_RATE,
        dtr: bool = True,
    ):
        """Initialize the serial transport.

        Args:
            port: Serial port path (e.g., '/dev/ttyACM0' or 'COM3')
            baudrate: Serial baudrate
            dtr: Assert DTR after opening (some USB receivers only stream with DTR set)
        """
        super().__init__()
        self.port = port
        self.baudrate = baudrate
        self.dtr = dtr

        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None

    @property
    def is_connected(self) -> bool:
        return self._connected and self._reader is not None

    @property
    def description(self) -> str:
        return f"{self.port} @ {self.baudrate}"

    async def connect(self) -> bool:
        """Open the serial connection.

        Returns:
            True if connection was successful
        """
        if self.is_connected:
            logger.debug("Already connected to %s", self.port)
            return True

        try:
            self._reader, self._writer = await serial_asyncio.open_serial_connection(
                url=self.port,
                baudrate=self.baudrate,
            )
        except asyncio.CancelledError:
            raise
        except (serial.SerialException, OSError, ValueError) as exc:
            self._last_error = str(exc)
            logger.warning("Failed to open %s at %d baud: %s", self.port, self.baudrate, exc)
            self._connected = False
            return False

        if self.dtr:
            serial_port = getattr(self._writer.transport, "serial", None)
            if serial_port is not None:
                serial_port.dtr = True

        self._connected = True
        self._last_error = None
        logger.info("Connected to receiver on %s at %d baud", self.port, self.baudrate)
        return True

    async def disconnect(self) -> None:
        """Close the serial connection."""
        if self._writer is None:
            self._connected = False
            return

        writer = self._writer
        self._writer = None
        self._reader = None
        self._connected = False

        with contextlib.suppress(Exception):
            writer.close()

        try:
            await asyncio.wait_for(writer.wait_closed(), timeout=1.0)
        except asyncio.TimeoutError:
            logger.debug("Timeout waiting for serial close on %s", self.port)
        except (OSError, serial.SerialException) as exc:
            logger.debug("Error closing serial on %s: %s", self.port, exc)

        logger.info("Disconnected from receiver on %s", self.port)

    async def read_bytes(self, max_bytes: int, timeout: float) -> bytes:
        """Read whatever is available, up to ``max_bytes``.

        Returns:
            The bytes read, or b"" if nothing arrived within ``timeout``

        Raises:
            TransportError: the port is closed, failed, or reached EOF
        """
        if not self.is_connected or self._reader is None:
            raise TransportError(f"Serial port {self.port} is not open")

        try:
            data = await asyncio.wait_for(self._reader.read(max_bytes), timeout=timeout)
        except asyncio.TimeoutError:
            return b""
        except (serial.SerialException, OSError) as exc:
            self._last_error = str(exc)
            self._connected = False
            raise TransportError(f"Read error on {self.port}: {exc}") from exc

        if not data:
            self._last_error = "Stream ended (EOF)"
            self._connected = False
            raise EndOfStream(f"Serial stream ended on {self.port} (EOF)")

        return data


__all__ = ["SerialByteTransport"]
