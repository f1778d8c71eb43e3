"""UBX protocol constants and configuration defaults."""

# Frame layout: sync(2) + class(1) + id(1) + length(2) + payload + checksum(2)
UBX_SYNC = b"\xb5\x62"
UBX_HEADER_LEN = 6
UBX_FRAME_OVERHEAD = 8
UBX_MAX_PAYLOAD_LEN = 4096

# NAV-PVT message signature
NAV_PVT_CLASS = 0x01
NAV_PVT_ID = 0x07
NAV_PVT_PAYLOAD_LEN = 92

# NAV-PVT "valid" flag bits
VALID_DATE = 0x01
VALID_TIME = 0x02
FULLY_RESOLVED = 0x04

# Extraction limits
DEFAULT_BUFFER_CAPACITY = 8192
MAX_EXTRACT_ITERATIONS = 1000
DIAGNOSTIC_INTERVAL_S = 1.0
NO_SYNC_DIAGNOSTIC_BYTES = 100

# Track CSV header
TRACK_CSV_HEADER = [
    "timestamp",
    "lat",
    "lon",
    "speed_mps",
    "num_sv",
    "fix_type",
]

# Default serial configuration
DEFAULT_SERIAL_PORT = "/dev/ttyACM0"
DEFAULT_BAUD_RATE = 38400
DEFAULT_READ_TIMEOUT = 0.5
DEFAULT_READ_SIZE = 1024

# Data-flow probe limits
DEFAULT_PROBE_MAX_BYTES = 50000
DEFAULT_PROBE_MAX_READS = 200
