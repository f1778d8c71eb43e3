"""UBX parsing components."""

from .dedup import SampleDeduplicator
from .nav_pvt import decode_nav_pvt
from .ring_buffer import RingBuffer
from .ubx_parser import UBXFrameExtractor, encode_frame, ubx_checksum
from .ubx_types import FixType, FrameHeader, NavPvtSample, ParserContext, UBXFrame

__all__ = [
    "FixType",
    "FrameHeader",
    "NavPvtSample",
    "ParserContext",
    "RingBuffer",
    "SampleDeduplicator",
    "UBXFrame",
    "UBXFrameExtractor",
    "decode_nav_pvt",
    "encode_frame",
    "ubx_checksum",
]
