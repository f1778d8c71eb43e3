"""Unit tests for capture-file replay."""

import asyncio

import pytest

from ubx_logger.gps_core.handlers.ubx_handler import UBXStreamHandler
from ubx_logger.gps_core.transports.base_transport import EndOfStream, TransportError, TransportOpenError
from ubx_logger.gps_core.transports.file_transport import FileByteTransport


class TestFileByteTransport:
    """Test replay of raw receiver captures."""

    @pytest.mark.asyncio
    async def test_reads_in_chunks(self, tmp_path):
        capture = tmp_path / "capture.ubx"
        capture.write_bytes(bytes(range(10)))

        async with FileByteTransport(capture) as transport:
            assert await transport.read_bytes(4, timeout=0.5) == b"\x00\x01\x02\x03"
            assert await transport.read_bytes(100, timeout=0.5) == bytes(range(4, 10))
            assert transport.bytes_read == 10
            with pytest.raises(EndOfStream):
                await transport.read_bytes(4, timeout=0.5)
            assert transport.is_connected is False

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        transport = FileByteTransport(tmp_path / "missing.ubx")
        assert await transport.connect() is False
        assert transport.last_error is not None

        with pytest.raises(TransportOpenError):
            async with FileByteTransport(tmp_path / "missing.ubx"):
                pass

    @pytest.mark.asyncio
    async def test_read_before_connect(self, tmp_path):
        transport = FileByteTransport(tmp_path / "capture.ubx")
        with pytest.raises(TransportError):
            await transport.read_bytes(4, timeout=0.5)

    @pytest.mark.asyncio
    async def test_replay_through_handler(self, tmp_path, nav_pvt_frame):
        capture = tmp_path / "capture.ubx"
        capture.write_bytes(
            b"$GPTXT,01,01,02,u-blox ag*50\r\n"
            + nav_pvt_frame(second=1)
            + nav_pvt_frame(second=1)
            + nav_pvt_frame(second=2)
        )

        rows = []
        transport = FileByteTransport(capture, chunk_delay=0.001)
        handler = UBXStreamHandler(transport, sink=rows.append, read_size=50)

        with pytest.raises(EndOfStream):
            await handler.run(asyncio.Event())

        assert [r.timestamp.second for r in rows] == [1, 2]
        assert handler.context.valid_frames == 3
        assert transport.is_connected is False
