"""UBX logger entry point.

Opens the receiver (or a capture file), optionally confirms bytes are
flowing, then parses NAV-PVT messages into a track CSV until interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from ubx_logger.cli.common import (
    add_common_cli_arguments,
    install_signal_handlers,
    positive_float,
    positive_int,
    setup_logging,
)
from ubx_logger.core.logging_utils import get_module_logger
from ubx_logger.gps_core.config import UBXLoggerConfig
from ubx_logger.gps_core.data_logger import TrackCsvLogger
from ubx_logger.gps_core.handlers import UBXStreamHandler, probe_byte_flow
from ubx_logger.gps_core.transports import (
    BaseByteTransport,
    EndOfStream,
    FileByteTransport,
    SerialByteTransport,
    TransportError,
)

logger = get_module_logger("MainGPS")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Log u-blox NAV-PVT fixes from a serial UBX stream to CSV",
    )
    parser.add_argument(
        "port",
        nargs="?",
        default=None,
        help="Serial port of the receiver (default from config: /dev/ttyACM0)",
    )
    parser.add_argument(
        "baud",
        nargs="?",
        type=positive_int,
        default=None,
        help="Baud rate (default from config: 38400)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Track CSV file to append to (default: track.csv)",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Read a raw capture file instead of a serial port",
    )
    parser.add_argument(
        "--read-timeout",
        dest="read_timeout",
        type=positive_float,
        default=None,
        help="Seconds to wait per serial read (bounds Ctrl+C latency)",
    )
    parser.add_argument(
        "--require-fully-resolved",
        dest="require_fully_resolved",
        action="store_true",
        default=None,
        help="Drop fixes whose UTC time is not flagged fully resolved",
    )
    parser.add_argument(
        "--no-probe",
        dest="probe_enabled",
        action="store_false",
        default=None,
        help="Skip the start-up data-flow probe",
    )
    add_common_cli_arguments(parser)
    return parser.parse_args(argv)


def build_transport(config: UBXLoggerConfig, replay: Optional[Path] = None) -> BaseByteTransport:
    if replay is not None:
        return FileByteTransport(replay)
    return SerialByteTransport(config.serial_port, config.baud_rate, dtr=config.dtr)


async def run_logger(
    config: UBXLoggerConfig,
    transport: BaseByteTransport,
    stop_event: asyncio.Event,
    *,
    probe: bool = True,
) -> UBXStreamHandler:
    """Open ``transport`` and log fixes until ``stop_event`` is set.

    Raises:
        TransportError: the source failed to open, failed, or ended
        OSError: the track file cannot be opened
    """
    logger.info("Opening %s ...", transport.description)
    async with transport:
        logger.info("Opened. Press Ctrl+C to stop.")

        if probe and config.probe_enabled:
            await probe_byte_flow(
                transport,
                max_bytes=config.probe_max_bytes,
                max_reads=config.probe_max_reads,
                read_size=config.read_size,
                read_timeout=config.read_timeout_s,
                stop_event=stop_event,
            )

        with TrackCsvLogger(config.output_path) as track:
            handler = UBXStreamHandler(
                transport,
                sink=track.log_sample,
                buffer_capacity=config.buffer_capacity,
                read_size=config.read_size,
                read_timeout=config.read_timeout_s,
                require_fully_resolved=config.require_fully_resolved,
            )
            try:
                await handler.run(stop_event)
            except EndOfStream as exc:
                logger.info("%s", exc)
            return handler


async def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    args = parse_args(argv)
    config = UBXLoggerConfig.from_file(args.config, args)
    setup_logging(
        config.log_level,
        config.log_file,
        max_bytes=config.log_max_bytes,
        backup_count=config.log_backup_count,
    )

    stop_event = asyncio.Event()
    install_signal_handlers(stop_event, asyncio.get_running_loop())

    transport = build_transport(config, args.replay)
    try:
        handler = await run_logger(config, transport, stop_event, probe=args.replay is None)
    except TransportError as exc:
        logger.error("%s", exc)
        return 1
    except OSError:
        logger.exception("Cannot write track file %s", config.output_path)
        return 1

    ctx = handler.context
    logger.info(
        "Frames: %d valid, %d NAV-PVT, %d checksum failures, %d false syncs; %d rows written",
        ctx.valid_frames,
        ctx.nav_pvt_frames,
        ctx.checksum_failures,
        ctx.false_syncs,
        ctx.emitted_samples,
    )
    return 0


__all__ = ["build_transport", "main", "parse_args", "run_logger"]
