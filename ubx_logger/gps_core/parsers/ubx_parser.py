"""Streaming UBX frame extraction.

The extractor walks a RingBuffer looking for ``0xB5 0x62`` sync markers,
validates the header length and the Fletcher-8 checksum, and hands back
complete frames. Every iteration either shrinks the buffer or stops to wait
for more input, so a call always terminates. Corrupt or foreign data (NMEA
text, truncated frames, bit errors) is skipped by discarding the smallest
possible number of bytes so that a valid frame overlapping the bad one is
still found.
"""

from __future__ import annotations

import struct
import time
from typing import Callable, List, Optional, Tuple

from ...core.logging_utils import get_module_logger
from ..constants import (
    MAX_EXTRACT_ITERATIONS,
    NO_SYNC_DIAGNOSTIC_BYTES,
    UBX_HEADER_LEN,
    UBX_MAX_PAYLOAD_LEN,
    UBX_SYNC,
)
from .ring_buffer import RingBuffer
from .ubx_types import FrameHeader, ParserContext, UBXFrame

logger = get_module_logger(__name__)


def ubx_checksum(data: bytes) -> Tuple[int, int]:
    """Fletcher-8 checksum over class, id, length and payload bytes."""
    ck_a = 0
    ck_b = 0
    for byte in data:
        ck_a = (ck_a + byte) & 0xFF
        ck_b = (ck_b + ck_a) & 0xFF
    return ck_a, ck_b


def encode_frame(msg_class: int, msg_id: int, payload: bytes) -> bytes:
    """Build a complete UBX frame (sync, header, payload, checksum)."""
    if len(payload) > 0xFFFF:
        raise ValueError(f"payload too long for UBX frame: {len(payload)} bytes")
    body = struct.pack("<BBH", msg_class, msg_id, len(payload)) + bytes(payload)
    return UBX_SYNC + body + bytes(ubx_checksum(body))


class UBXFrameExtractor:
    """Resynchronizing, checksum-validating UBX frame extractor.

    The extractor holds no stream state of its own: the buffer and the
    ParserContext are passed in on every call, so one instance can serve
    several independent streams.
    """

    def __init__(
        self,
        max_iterations: int = MAX_EXTRACT_ITERATIONS,
        max_payload_len: int = UBX_MAX_PAYLOAD_LEN,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_iterations = max_iterations
        self.max_payload_len = max_payload_len
        self._clock = clock

    def extract(
        self,
        buffer: RingBuffer,
        context: ParserContext,
        cancelled: Optional[Callable[[], bool]] = None,
    ) -> List[UBXFrame]:
        """Pull every complete, valid frame out of ``buffer``.

        Returns frames in stream order. Incomplete trailing data stays
        buffered for the next call.
        """
        frames: List[UBXFrame] = []
        iterations = 0

        while iterations < self.max_iterations:
            if cancelled is not None and cancelled():
                break
            iterations += 1

            available = buffer.available
            if available < 2:
                break

            sync_index = buffer.find_sync_pattern()
            if sync_index is None:
                if available > NO_SYNC_DIAGNOSTIC_BYTES and context.diagnostic_due(self._clock()):
                    logger.debug("No sync yet, buffering ... (%d bytes)", available)
                # Keep the last byte: it may be the first half of a sync marker.
                context.discarded_bytes += buffer.consume(available - 1)
                break

            if sync_index > 0:
                context.discarded_bytes += buffer.consume(sync_index)
                continue

            if available < UBX_HEADER_LEN:
                self._waiting(context, UBX_HEADER_LEN, available)
                break

            header = self._read_header(buffer)
            if header.payload_len > self.max_payload_len:
                # Implausible length: treat the marker as a false sync.
                context.false_syncs += 1
                context.discarded_bytes += buffer.consume(len(UBX_SYNC))
                continue

            frame_len = header.frame_len
            if available < frame_len:
                self._waiting(context, frame_len, available)
                break

            body = buffer.peek_bytes(2, UBX_HEADER_LEN - 2 + header.payload_len)
            expected = (
                buffer.peek_byte(frame_len - 2),
                buffer.peek_byte(frame_len - 1),
            )
            if ubx_checksum(body) != expected:
                context.checksum_failures += 1
                context.discarded_bytes += buffer.consume(len(UBX_SYNC))
                continue

            context.valid_frames += 1
            frames.append(UBXFrame(header.msg_class, header.msg_id, body[4:]))
            buffer.consume(frame_len)
        else:
            logger.warning(
                "Extraction loop hit %d iterations without settling. Clearing buffer (%d bytes).",
                self.max_iterations,
                buffer.available,
            )
            context.discarded_bytes += buffer.available
            context.forced_clears += 1
            buffer.clear()

        return frames

    @staticmethod
    def _read_header(buffer: RingBuffer) -> FrameHeader:
        return FrameHeader(
            msg_class=buffer.peek_byte(2),
            msg_id=buffer.peek_byte(3),
            payload_len=buffer.peek_byte(4) | (buffer.peek_byte(5) << 8),
        )

    def _waiting(self, context: ParserContext, needed: int, available: int) -> None:
        if context.diagnostic_due(self._clock()):
            logger.debug("SYNC found, waiting for more bytes... (need %d, have %d)", needed, available)


__all__ = ["UBXFrameExtractor", "encode_frame", "ubx_checksum"]
