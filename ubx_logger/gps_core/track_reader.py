"""Read track CSV files written by TrackCsvLogger."""

from __future__ import annotations

import csv
from dataclasses import dataclass
import datetime as dt
from pathlib import Path
import re
from typing import List, Optional

# .NET-style round-trip timestamps carry 7 fractional digits; datetime takes 6.
_FRACTION_RE = re.compile(r"\.(\d+)")


@dataclass(frozen=True, slots=True)
class TrackFix:
    """One row of a track file."""

    timestamp: dt.datetime
    latitude_deg: float
    longitude_deg: float
    speed_mps: Optional[float] = None
    num_satellites: Optional[int] = None
    fix_type: Optional[str] = None


def _parse_timestamp(value: str) -> dt.datetime:
    """Parse an ISO-8601 timestamp, truncating the fraction to microseconds."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def _parse_float(value: str | None) -> Optional[float]:
    """Parse string to float, None on failure."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_int(value: str | None) -> Optional[int]:
    """Parse string to int, None on failure."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def read_track(path: Path) -> List[TrackFix]:
    """Load every fix from a track CSV.

    The header row is skipped, as are blank rows and rows with fewer than
    three columns. Timestamp, latitude and longitude are required; a
    malformed value raises ValueError. The remaining columns are optional.
    """
    fixes: List[TrackFix] = []
    with Path(path).open("r", encoding="utf-8", newline="") as handle:
        reader = csv.reader(handle)
        header = next(reader, None)
        if header is None:
            return fixes

        for row in reader:
            if not row or all(not cell.strip() for cell in row):
                continue
            if len(row) < 3:
                continue

            fixes.append(
                TrackFix(
                    timestamp=_parse_timestamp(row[0]),
                    latitude_deg=float(row[1]),
                    longitude_deg=float(row[2]),
                    speed_mps=_parse_float(row[3]) if len(row) > 3 else None,
                    num_satellites=_parse_int(row[4]) if len(row) > 4 else None,
                    fix_type=(row[5] or None) if len(row) > 5 else None,
                )
            )
    return fixes


__all__ = ["TrackFix", "read_track"]
