"""Rate limiting of decoded samples to one per distinct timestamp."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .ubx_types import NavPvtSample


class SampleDeduplicator:
    """Pass a sample only when its timestamp differs from the last one passed.

    The receiver reports whole-second timestamps and may emit several NAV-PVT
    frames per second, so this bounds output to one row per epoch.
    """

    __slots__ = ("_last_emitted",)

    def __init__(self) -> None:
        self._last_emitted: Optional[dt.datetime] = None

    @property
    def last_emitted(self) -> Optional[dt.datetime]:
        return self._last_emitted

    def accept(self, sample: "NavPvtSample") -> bool:
        if self._last_emitted is not None and sample.timestamp == self._last_emitted:
            return False
        self._last_emitted = sample.timestamp
        return True

    def reset(self) -> None:
        self._last_emitted = None


__all__ = ["SampleDeduplicator"]
