"""Typed configuration for the UBX logger."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from ..core.config_loader import ConfigLoader
from ..core.logging_config import DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_MAX_BYTES
from .constants import (
    DEFAULT_BAUD_RATE,
    DEFAULT_BUFFER_CAPACITY,
    DEFAULT_PROBE_MAX_BYTES,
    DEFAULT_PROBE_MAX_READS,
    DEFAULT_READ_SIZE,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_SERIAL_PORT,
)


@dataclass(slots=True)
class UBXLoggerConfig:
    """Typed configuration for the UBX logger."""

    # Serial configuration
    serial_port: str = DEFAULT_SERIAL_PORT
    baud_rate: int = DEFAULT_BAUD_RATE
    dtr: bool = True
    read_timeout_s: float = DEFAULT_READ_TIMEOUT
    read_size: int = DEFAULT_READ_SIZE

    # Parser settings
    buffer_capacity: int = DEFAULT_BUFFER_CAPACITY
    require_fully_resolved: bool = False

    # Start-up data-flow probe
    probe_enabled: bool = True
    probe_max_bytes: int = DEFAULT_PROBE_MAX_BYTES
    probe_max_reads: int = DEFAULT_PROBE_MAX_READS

    # Output settings
    output_path: Path = field(default_factory=lambda: Path("track.csv"))
    log_level: str = "info"
    log_file: Optional[Path] = None
    log_max_bytes: int = DEFAULT_LOG_MAX_BYTES
    log_backup_count: int = DEFAULT_LOG_BACKUP_COUNT

    @classmethod
    def from_file(cls, config_path: Optional[Path], args: Any = None) -> "UBXLoggerConfig":
        """Build config from a ``key = value`` file with optional CLI overrides."""
        defaults = cls().to_dict()
        values = defaults
        if config_path is not None:
            values = ConfigLoader.load(Path(config_path), defaults=defaults, strict=True)
        config = cls._from_values(values)

        if args is not None:
            config = config._apply_args_override(args)

        return config

    @classmethod
    def _from_values(cls, values: dict[str, Any]) -> "UBXLoggerConfig":
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in values.items() if key in known}
        if kwargs.get("output_path") is not None:
            kwargs["output_path"] = Path(kwargs["output_path"])
        if kwargs.get("log_file"):
            kwargs["log_file"] = Path(kwargs["log_file"])
        else:
            kwargs["log_file"] = None
        return cls(**kwargs)

    def _apply_args_override(self, args: Any) -> "UBXLoggerConfig":
        """Apply CLI argument overrides to config values."""
        values = asdict(self)

        arg_mappings = {
            "port": "serial_port",
            "baud": "baud_rate",
            "read_timeout": "read_timeout_s",
            "output": "output_path",
            "log_level": "log_level",
            "log_file": "log_file",
            "require_fully_resolved": "require_fully_resolved",
            "probe_enabled": "probe_enabled",
        }

        for arg_name, config_key in arg_mappings.items():
            if hasattr(args, arg_name):
                val = getattr(args, arg_name)
                if val is not None:
                    values[config_key] = val

        return UBXLoggerConfig._from_values(values)

    def to_dict(self) -> dict[str, Any]:
        """Export config values as dictionary."""
        return asdict(self)


__all__ = ["UBXLoggerConfig"]
