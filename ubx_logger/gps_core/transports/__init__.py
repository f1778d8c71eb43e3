"""Byte-source transports."""

from .base_transport import BaseByteTransport, EndOfStream, TransportError, TransportOpenError
from .file_transport import FileByteTransport
from .serial_transport import SerialByteTransport

__all__ = [
    "BaseByteTransport",
    "EndOfStream",
    "FileByteTransport",
    "SerialByteTransport",
    "TransportError",
    "TransportOpenError",
]
