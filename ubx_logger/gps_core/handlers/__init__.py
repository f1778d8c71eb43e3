"""Stream driver loop and start-up probe."""

from .probe import ProbeResult, probe_byte_flow
from .ubx_handler import SampleSink, UBXStreamHandler

__all__ = ["ProbeResult", "SampleSink", "UBXStreamHandler", "probe_byte_flow"]
