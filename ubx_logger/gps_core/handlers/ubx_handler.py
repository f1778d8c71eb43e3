"""UBX stream handler: the read/extract/decode/log driver loop.

One cycle performs a single timeout-bounded read from the transport, appends
the bytes to the ring buffer and runs the frame extractor until it settles.
Validated NAV-PVT frames are decoded, filtered to one per timestamp and
passed to the sink. Everything runs in one asyncio task; the read is the only
suspension point.
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

from ...core.logging_utils import get_module_logger
from ..constants import DEFAULT_BUFFER_CAPACITY, DEFAULT_READ_SIZE, DEFAULT_READ_TIMEOUT
from ..parsers.nav_pvt import decode_nav_pvt
from ..parsers.ring_buffer import RingBuffer
from ..parsers.ubx_parser import UBXFrameExtractor
from ..parsers.ubx_types import NavPvtSample, ParserContext, UBXFrame
from ..transports import BaseByteTransport, TransportOpenError

logger = get_module_logger(__name__)

SampleSink = Callable[[NavPvtSample], object]


class UBXStreamHandler:
    """Drives a byte transport through the UBX parser into a sample sink.

    Example:
        transport = SerialByteTransport("/dev/ttyACM0", 38400)
        with TrackCsvLogger(Path("track.csv")) as track:
            handler = UBXStreamHandler(transport, sink=track.log_sample)
            await handler.run(stop_event)
    """

    def __init__(
        self,
        transport: BaseByteTransport,
        sink: Optional[SampleSink] = None,
        *,
        buffer_capacity: int = DEFAULT_BUFFER_CAPACITY,
        read_size: int = DEFAULT_READ_SIZE,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        require_fully_resolved: bool = False,
        extractor: Optional[UBXFrameExtractor] = None,
    ):
        self.transport = transport
        self.sink = sink
        self.read_size = read_size
        self.read_timeout = read_timeout
        self.require_fully_resolved = require_fully_resolved

        self._buffer = RingBuffer(buffer_capacity)
        self._extractor = extractor or UBXFrameExtractor()
        self._context = ParserContext()
        self._read_loops = 0
        self._running = False

    @property
    def buffer(self) -> RingBuffer:
        return self._buffer

    @property
    def context(self) -> ParserContext:
        return self._context

    @property
    def read_loops(self) -> int:
        return self._read_loops

    @property
    def is_running(self) -> bool:
        return self._running

    # =========================================================================
    # Driver loop
    # =========================================================================

    async def run(self, stop_event: asyncio.Event) -> None:
        """Read and parse until ``stop_event`` is set.

        A transport that is not yet connected is opened here and closed
        again when the run ends; an already-open transport is left open.

        Raises:
            TransportOpenError: the transport could not be opened
            TransportError: the transport failed or reached end of stream
        """
        opened_here = False
        if not self.transport.is_connected:
            if not await self.transport.connect():
                raise TransportOpenError(
                    f"Failed to open {self.transport.description}: {self.transport.last_error}"
                )
            opened_here = True

        self._running = True
        logger.info("Starting UBX frame parser (continuous mode)")
        try:
            while not stop_event.is_set():
                chunk = await self.transport.read_bytes(self.read_size, self.read_timeout)
                self._read_loops += 1
                if chunk:
                    self._append(chunk)
                self.process_buffer(stop_event.is_set)
        finally:
            self._running = False
            if opened_here:
                await self.transport.disconnect()
            logger.info(
                "Stopped. Parsed %d valid UBX frames in %d read loops.",
                self._context.valid_frames,
                self._read_loops,
            )

    def feed(self, data: bytes) -> List[NavPvtSample]:
        """Append ``data`` and process it synchronously.

        Returns:
            Samples emitted to the sink during this call
        """
        self._append(data)
        return self.process_buffer()

    def process_buffer(self, cancelled: Optional[Callable[[], bool]] = None) -> List[NavPvtSample]:
        """Extract frames from the buffer and emit any new samples."""
        emitted: List[NavPvtSample] = []
        for frame in self._extractor.extract(self._buffer, self._context, cancelled):
            sample = self._handle_frame(frame)
            if sample is not None:
                emitted.append(sample)
        return emitted

    def reset(self) -> None:
        """Drop buffered bytes, counters and dedup state."""
        self._buffer.clear()
        self._context.reset()
        self._read_loops = 0

    # =========================================================================
    # Internals
    # =========================================================================

    def _append(self, data: bytes) -> None:
        evicted = self._buffer.append(data)
        if evicted:
            self._context.discarded_bytes += evicted
            logger.warning("Ring buffer full, evicted %d oldest bytes", evicted)

    def _handle_frame(self, frame: UBXFrame) -> Optional[NavPvtSample]:
        if not frame.is_nav_pvt():
            return None

        ctx = self._context
        ctx.nav_pvt_frames += 1
        sample = decode_nav_pvt(frame.payload, require_fully_resolved=self.require_fully_resolved)
        if sample is None:
            return None
        ctx.decoded_samples += 1

        if not ctx.dedup.accept(sample):
            return None
        ctx.emitted_samples += 1

        if self.sink is not None:
            self.sink(sample)

        logger.info(
            "LOG %s lat=%.6f lon=%.6f speed=%.2f sv=%d fix=%s",
            sample.timestamp.isoformat(),
            sample.latitude_deg,
            sample.longitude_deg,
            sample.speed_mps,
            sample.num_satellites,
            sample.fix_type.value,
        )
        return sample


__all__ = ["UBXStreamHandler", "SampleSink"]
