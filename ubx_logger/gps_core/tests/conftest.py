"""Shared fixtures for UBX parser tests."""

import datetime as dt
import struct
from typing import Callable, Optional

import pytest

from ubx_logger.gps_core.constants import NAV_PVT_CLASS, NAV_PVT_ID, NAV_PVT_PAYLOAD_LEN
from ubx_logger.gps_core.parsers.ubx_parser import encode_frame
from ubx_logger.gps_core.parsers.ubx_types import FixType, NavPvtSample


def build_nav_pvt_payload(
    *,
    year: int = 2024,
    month: int = 5,
    day: int = 17,
    hour: int = 12,
    minute: int = 34,
    second: int = 56,
    valid: int = 0x07,
    fix_type: int = 3,
    num_sv: int = 6,
    lon_raw: int = 227905170,
    lat_raw: int = 513456780,
    ground_speed_mm_s: int = 50,
) -> bytes:
    """Build a 92-byte NAV-PVT payload with the fields the decoder reads."""
    payload = bytearray(NAV_PVT_PAYLOAD_LEN)
    struct.pack_into("<I", payload, 0, 123456000)  # iTOW, not decoded
    struct.pack_into("<HBBBBBB", payload, 4, year, month, day, hour, minute, second, valid)
    payload[20] = fix_type
    payload[23] = num_sv
    struct.pack_into("<ii", payload, 24, lon_raw, lat_raw)
    struct.pack_into("<i", payload, 60, ground_speed_mm_s)
    return bytes(payload)


@pytest.fixture
def nav_pvt_payload() -> Callable[..., bytes]:
    """Factory for NAV-PVT payloads; keyword overrides per field."""
    return build_nav_pvt_payload


@pytest.fixture
def nav_pvt_frame() -> Callable[..., bytes]:
    """Factory for complete NAV-PVT frames; keyword overrides per payload field."""

    def _build(**overrides) -> bytes:
        return encode_frame(NAV_PVT_CLASS, NAV_PVT_ID, build_nav_pvt_payload(**overrides))

    return _build


@pytest.fixture
def make_sample() -> Callable[..., NavPvtSample]:
    """Factory for decoded samples."""

    def _build(
        timestamp: Optional[dt.datetime] = None,
        latitude_deg: float = 47.3769,
        longitude_deg: float = 8.5417,
        speed_mps: float = 1.25,
        num_satellites: int = 9,
        fix_type: FixType = FixType.FIX_3D,
    ) -> NavPvtSample:
        return NavPvtSample(
            timestamp=timestamp or dt.datetime(2024, 5, 17, 12, 34, 56, tzinfo=dt.timezone.utc),
            latitude_deg=latitude_deg,
            longitude_deg=longitude_deg,
            speed_mps=speed_mps,
            num_satellites=num_satellites,
            fix_type=fix_type,
        )

    return _build
