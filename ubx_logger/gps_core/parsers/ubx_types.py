"""UBX frame and NAV-PVT data types."""

from __future__ import annotations

from dataclasses import dataclass, field
import datetime as dt
from enum import Enum
from typing import Optional

from ..constants import (
    DIAGNOSTIC_INTERVAL_S,
    NAV_PVT_CLASS,
    NAV_PVT_ID,
    NAV_PVT_PAYLOAD_LEN,
    UBX_FRAME_OVERHEAD,
)
from .dedup import SampleDeduplicator


class FixType(Enum):
    """GNSS solution quality reported in NAV-PVT ``fixType``."""

    NO_FIX = "NoFix"
    DEAD_RECKONING = "DR"
    FIX_2D = "2D"
    FIX_3D = "3D"
    GNSS_DEAD_RECKONING = "GNSS+DR"
    TIME_ONLY = "TimeOnly"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: int) -> "FixType":
        """Map a raw fixType byte; unrecognized codes become UNKNOWN."""
        return _FIX_TYPE_CODES.get(code, cls.UNKNOWN)

    def __str__(self) -> str:
        return self.value


_FIX_TYPE_CODES = {
    0: FixType.NO_FIX,
    1: FixType.DEAD_RECKONING,
    2: FixType.FIX_2D,
    3: FixType.FIX_3D,
    4: FixType.GNSS_DEAD_RECKONING,
    5: FixType.TIME_ONLY,
}


@dataclass(frozen=True, slots=True)
class FrameHeader:
    """Class, id and payload length following the sync bytes."""

    msg_class: int
    msg_id: int
    payload_len: int

    @property
    def frame_len(self) -> int:
        return UBX_FRAME_OVERHEAD + self.payload_len

    def is_nav_pvt(self) -> bool:
        return (
            self.msg_class == NAV_PVT_CLASS
            and self.msg_id == NAV_PVT_ID
            and self.payload_len == NAV_PVT_PAYLOAD_LEN
        )


@dataclass(frozen=True, slots=True)
class UBXFrame:
    """A checksum-validated UBX frame."""

    msg_class: int
    msg_id: int
    payload: bytes

    @property
    def header(self) -> FrameHeader:
        return FrameHeader(self.msg_class, self.msg_id, len(self.payload))

    @property
    def frame_len(self) -> int:
        return UBX_FRAME_OVERHEAD + len(self.payload)

    def is_nav_pvt(self) -> bool:
        return self.header.is_nav_pvt()


@dataclass(frozen=True, slots=True)
class NavPvtSample:
    """Position/velocity/time sample decoded from a NAV-PVT payload."""

    timestamp: dt.datetime
    latitude_deg: float
    longitude_deg: float
    speed_mps: float
    num_satellites: int
    fix_type: FixType


@dataclass(slots=True)
class ParserContext:
    """Extraction bookkeeping for one parser instance.

    Counters only ever increase; ``last_diagnostic`` is a monotonic timestamp
    used to rate-limit progress messages.
    """

    valid_frames: int = 0
    nav_pvt_frames: int = 0
    decoded_samples: int = 0
    emitted_samples: int = 0
    checksum_failures: int = 0
    false_syncs: int = 0
    discarded_bytes: int = 0
    forced_clears: int = 0
    last_diagnostic: Optional[float] = None
    diagnostic_interval: float = DIAGNOSTIC_INTERVAL_S
    dedup: SampleDeduplicator = field(default_factory=SampleDeduplicator)

    @property
    def last_emitted_timestamp(self) -> Optional[dt.datetime]:
        return self.dedup.last_emitted

    def diagnostic_due(self, now: float) -> bool:
        """Return True (and arm the limiter) if a diagnostic may be emitted."""
        if self.last_diagnostic is not None and now - self.last_diagnostic < self.diagnostic_interval:
            return False
        self.last_diagnostic = now
        return True

    def reset(self) -> None:
        """Reset all counters and the dedup state."""
        self.valid_frames = 0
        self.nav_pvt_frames = 0
        self.decoded_samples = 0
        self.emitted_samples = 0
        self.checksum_failures = 0
        self.false_syncs = 0
        self.discarded_bytes = 0
        self.forced_clears = 0
        self.last_diagnostic = None
        self.dedup.reset()
