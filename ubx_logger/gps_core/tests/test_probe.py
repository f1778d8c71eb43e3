"""Unit tests for the start-up data-flow probe."""

import asyncio
import logging

import pytest

from ubx_logger.gps_core.handlers.probe import probe_byte_flow
from ubx_logger.gps_core.transports.base_transport import BaseByteTransport, TransportError


class ScriptedTransport(BaseByteTransport):
    """Returns scripted reads, then repeats the final entry."""

    def __init__(self, script):
        super().__init__()
        self._script = list(script)
        self._connected = True

    async def connect(self) -> bool:
        return True

    async def disconnect(self) -> None:
        self._connected = False

    async def read_bytes(self, max_bytes: int, timeout: float) -> bytes:
        item = self._script.pop(0) if len(self._script) > 1 else self._script[0]
        if isinstance(item, Exception):
            raise item
        return item[:max_bytes]


class TestProbeByteFlow:
    """Test probe stopping conditions."""

    @pytest.mark.asyncio
    async def test_stops_at_byte_limit(self):
        transport = ScriptedTransport([b"x" * 100])
        result = await probe_byte_flow(transport, max_bytes=250, max_reads=50)
        assert result.total_bytes == 300
        assert result.reads == 3
        assert result.saw_data is True

    @pytest.mark.asyncio
    async def test_stops_at_read_limit(self):
        transport = ScriptedTransport([b"ab", b""])
        result = await probe_byte_flow(transport, max_bytes=1000, max_reads=5)
        assert result.reads == 5
        assert result.timeouts == 4
        assert result.total_bytes == 2

    @pytest.mark.asyncio
    async def test_silent_port_warns(self, caplog):
        transport = ScriptedTransport([b""])
        with caplog.at_level(logging.WARNING, logger="ubx_logger"):
            result = await probe_byte_flow(transport, max_reads=3)
        assert result.saw_data is False
        assert "No data received" in caplog.text

    @pytest.mark.asyncio
    async def test_stop_event(self):
        stop_event = asyncio.Event()
        stop_event.set()
        result = await probe_byte_flow(ScriptedTransport([b"x"]), stop_event=stop_event)
        assert result.reads == 0

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        transport = ScriptedTransport([TransportError("port vanished")])
        with pytest.raises(TransportError):
            await probe_byte_flow(transport)
