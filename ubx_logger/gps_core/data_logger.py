"""Track CSV logger for decoded NAV-PVT samples.

Rows are written synchronously and flushed one at a time: the driver loop
emits at most one row per receiver epoch, and a crash or power loss should
lose no more than the row being written.
"""

from __future__ import annotations

import csv
import datetime as dt
from pathlib import Path
from typing import List, Optional, TextIO

from ..core.logging_utils import get_module_logger
from .constants import TRACK_CSV_HEADER
from .parsers.ubx_types import NavPvtSample

logger = get_module_logger(__name__)


def format_timestamp(timestamp: dt.datetime) -> str:
    """ISO-8601 UTC with 7 fractional digits, e.g. 2024-05-01T12:00:00.0000000+00:00."""
    utc = timestamp.astimezone(dt.timezone.utc)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond:06d}0+00:00"


def format_sample_row(sample: NavPvtSample) -> List[str]:
    """Build a CSV row matching TRACK_CSV_HEADER order."""
    return [
        format_timestamp(sample.timestamp),
        f"{sample.latitude_deg:.7f}",
        f"{sample.longitude_deg:.7f}",
        f"{sample.speed_mps:.2f}",
        str(sample.num_satellites),
        sample.fix_type.value,
    ]


class TrackCsvLogger:
    """Appends decoded samples to a track CSV file.

    A new file gets the header row; an existing file is appended to as-is,
    so restarting the logger continues the same track.

    Example:
        track = TrackCsvLogger(Path("track.csv"))
        track.start_recording()
        track.log_sample(sample)
        track.stop_recording()
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._handle: Optional[TextIO] = None
        self._writer = None
        self._rows_written = 0

    @property
    def is_recording(self) -> bool:
        return self._handle is not None

    @property
    def filepath(self) -> Optional[Path]:
        return self.path if self.is_recording else None

    @property
    def rows_written(self) -> int:
        return self._rows_written

    def start_recording(self) -> Path:
        """Open the track file, writing the header if it is new.

        Raises:
            OSError: the file or its directory cannot be created
        """
        if self._handle is not None:
            logger.debug("Recording already active: %s", self.path)
            return self.path

        self.path.parent.mkdir(parents=True, exist_ok=True)
        is_new = not self.path.exists() or self.path.stat().st_size == 0

        handle = self.path.open("a", encoding="utf-8", newline="")
        writer = csv.writer(handle, lineterminator="\n")
        if is_new:
            writer.writerow(TRACK_CSV_HEADER)
            handle.flush()
            logger.info("Created %s", self.path)

        self._handle = handle
        self._writer = writer
        self._rows_written = 0
        logger.info("Recording track to %s", self.path)
        return self.path

    def stop_recording(self) -> None:
        """Close the track file."""
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        self._writer = None
        try:
            handle.close()
        except OSError as exc:
            logger.debug("Error closing track file: %s", exc)
        logger.info("Stopped recording %s (%d rows)", self.path, self._rows_written)

    def log_sample(self, sample: NavPvtSample) -> bool:
        """Write one sample and flush.

        Returns:
            True if the row was written, False if recording is not active
        """
        if self._handle is None or self._writer is None:
            return False

        row = format_sample_row(sample)
        self._writer.writerow(row)
        self._handle.flush()
        self._rows_written += 1
        return True

    __call__ = log_sample

    def __enter__(self) -> "TrackCsvLogger":
        self.start_recording()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop_recording()
        return False


__all__ = ["TrackCsvLogger", "format_sample_row", "format_timestamp"]
