"""GPS core package - UBX stream parsing, transports and track logging."""

from .constants import (
    DEFAULT_BAUD_RATE,
    DEFAULT_BUFFER_CAPACITY,
    MAX_EXTRACT_ITERATIONS,
    NAV_PVT_CLASS,
    NAV_PVT_ID,
    NAV_PVT_PAYLOAD_LEN,
    TRACK_CSV_HEADER,
    UBX_MAX_PAYLOAD_LEN,
    UBX_SYNC,
)
from .parsers import (
    FixType,
    FrameHeader,
    NavPvtSample,
    ParserContext,
    RingBuffer,
    SampleDeduplicator,
    UBXFrame,
    UBXFrameExtractor,
    decode_nav_pvt,
    encode_frame,
    ubx_checksum,
)
from .transports import (
    BaseByteTransport,
    EndOfStream,
    FileByteTransport,
    SerialByteTransport,
    TransportError,
    TransportOpenError,
)
from .data_logger import TrackCsvLogger
from .track_reader import TrackFix, read_track
from .handlers import ProbeResult, UBXStreamHandler, probe_byte_flow
from .config import UBXLoggerConfig

__all__ = [
    # Constants
    "DEFAULT_BAUD_RATE",
    "DEFAULT_BUFFER_CAPACITY",
    "MAX_EXTRACT_ITERATIONS",
    "NAV_PVT_CLASS",
    "NAV_PVT_ID",
    "NAV_PVT_PAYLOAD_LEN",
    "TRACK_CSV_HEADER",
    "UBX_MAX_PAYLOAD_LEN",
    "UBX_SYNC",
    # Types
    "FixType",
    "FrameHeader",
    "NavPvtSample",
    "ParserContext",
    "UBXFrame",
    # Parser
    "RingBuffer",
    "SampleDeduplicator",
    "UBXFrameExtractor",
    "decode_nav_pvt",
    "encode_frame",
    "ubx_checksum",
    # Transport
    "BaseByteTransport",
    "EndOfStream",
    "FileByteTransport",
    "SerialByteTransport",
    "TransportError",
    "TransportOpenError",
    # Track files
    "TrackCsvLogger",
    "TrackFix",
    "read_track",
    # Handlers
    "ProbeResult",
    "UBXStreamHandler",
    "probe_byte_flow",
    # Config
    "UBXLoggerConfig",
]
