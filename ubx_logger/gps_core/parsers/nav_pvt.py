"""NAV-PVT (class 0x01, id 0x07) payload decoding."""

from __future__ import annotations

import datetime as dt
import struct
from typing import Optional

from ..constants import FULLY_RESOLVED, NAV_PVT_PAYLOAD_LEN, VALID_DATE, VALID_TIME
from .ubx_types import FixType, NavPvtSample

# year(u16) month day hour min sec valid(u8 each)
_TIME_FIELDS = struct.Struct("<HBBBBBB")
_TIME_OFFSET = 4
_FIX_TYPE_OFFSET = 20
_NUM_SV_OFFSET = 23
# lon, lat (i32, 1e-7 deg)
_POSITION = struct.Struct("<ii")
_POSITION_OFFSET = 24
# gSpeed (i32, mm/s)
_GROUND_SPEED = struct.Struct("<i")
_GROUND_SPEED_OFFSET = 60

DEG_SCALE = 1e7
MM_PER_M = 1000.0


def decode_nav_pvt(
    payload: bytes,
    *,
    require_fully_resolved: bool = False,
) -> Optional[NavPvtSample]:
    """Decode a NAV-PVT payload into a sample.

    Returns None when the payload has the wrong length, the receiver has not
    flagged date and time as valid (and fully resolved, when required), or
    the calendar fields do not form a real UTC time.
    """
    if len(payload) != NAV_PVT_PAYLOAD_LEN:
        return None

    year, month, day, hour, minute, second, valid = _TIME_FIELDS.unpack_from(payload, _TIME_OFFSET)

    if not (valid & VALID_DATE and valid & VALID_TIME):
        return None
    if require_fully_resolved and not valid & FULLY_RESOLVED:
        return None

    try:
        timestamp = dt.datetime(year, month, day, hour, minute, second, tzinfo=dt.timezone.utc)
    except ValueError:
        return None

    lon_raw, lat_raw = _POSITION.unpack_from(payload, _POSITION_OFFSET)
    (speed_raw,) = _GROUND_SPEED.unpack_from(payload, _GROUND_SPEED_OFFSET)

    return NavPvtSample(
        timestamp=timestamp,
        latitude_deg=lat_raw / DEG_SCALE,
        longitude_deg=lon_raw / DEG_SCALE,
        speed_mps=speed_raw / MM_PER_M,
        num_satellites=payload[_NUM_SV_OFFSET],
        fix_type=FixType.from_code(payload[_FIX_TYPE_OFFSET]),
    )


__all__ = ["decode_nav_pvt"]
