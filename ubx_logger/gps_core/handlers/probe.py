"""Start-up check that bytes are actually arriving from the receiver."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from ...core.logging_utils import get_module_logger
from ..constants import (
    DEFAULT_PROBE_MAX_BYTES,
    DEFAULT_PROBE_MAX_READS,
    DEFAULT_READ_SIZE,
    DEFAULT_READ_TIMEOUT,
)
from ..transports import BaseByteTransport

logger = get_module_logger(__name__)


@dataclass(slots=True)
class ProbeResult:
    total_bytes: int = 0
    reads: int = 0
    timeouts: int = 0

    @property
    def saw_data(self) -> bool:
        return self.total_bytes > 0


async def probe_byte_flow(
    transport: BaseByteTransport,
    *,
    max_bytes: int = DEFAULT_PROBE_MAX_BYTES,
    max_reads: int = DEFAULT_PROBE_MAX_READS,
    read_size: int = DEFAULT_READ_SIZE,
    read_timeout: float = DEFAULT_READ_TIMEOUT,
    stop_event: Optional[asyncio.Event] = None,
) -> ProbeResult:
    """Read and discard bytes until ``max_bytes`` or ``max_reads`` is reached.

    Timeouts count as reads so a silent port still ends the probe.
    """
    result = ProbeResult()
    logger.info("Reading bytes to confirm data flow")

    while result.total_bytes < max_bytes and result.reads < max_reads:
        if stop_event is not None and stop_event.is_set():
            break
        chunk = await transport.read_bytes(read_size, read_timeout)
        result.reads += 1
        if not chunk:
            result.timeouts += 1
            continue
        result.total_bytes += len(chunk)
        logger.debug("read %d bytes (total %d)", len(chunk), result.total_bytes)

    logger.info("Probe complete: %d bytes in %d reads.", result.total_bytes, result.reads)
    if not result.saw_data:
        logger.warning("No data received from %s during probe", transport.description)
    return result


__all__ = ["ProbeResult", "probe_byte_flow"]
