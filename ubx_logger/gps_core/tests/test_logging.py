"""Tests for the shared logging helpers."""

import logging

import pytest

from ubx_logger.core import logging_config
from ubx_logger.core.logging_utils import get_module_logger


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


class TestStructuredLogger:
    def test_namespace_and_component(self):
        log = get_module_logger("ubx_logger.gps_core.data_logger")
        assert log.name == "ubx_logger.gps_core.data_logger"
        assert log.component == "data_logger"
        assert get_module_logger("MainGPS").name == "ubx_logger.MainGPS"

    def test_prefixes_component(self, caplog):
        log = get_module_logger("MainGPS")
        with caplog.at_level(logging.INFO, logger="ubx_logger"):
            log.info("Opened %s", "/dev/ttyACM0")
        assert caplog.records[-1].getMessage() == "[MainGPS] Opened /dev/ttyACM0"

    def test_disabled_level_is_skipped(self, caplog):
        log = get_module_logger("MainGPS")
        with caplog.at_level(logging.INFO, logger="ubx_logger"):
            log.debug("hidden")
        assert "hidden" not in caplog.text


class TestConfigureLogging:
    def test_rotating_file_handler(self, tmp_path, restore_root_logging):
        log_path = tmp_path / "logs" / "ubx.log"
        logging_config.configure_logging("debug", console=False, log_file=log_path)
        get_module_logger("MainGPS").info("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "[MainGPS] written to file" in log_path.read_text(encoding="utf-8")

    def test_rotation_limits_are_applied(self, tmp_path, restore_root_logging):
        log_path = tmp_path / "ubx.log"
        logging_config.configure_logging(
            "info", console=False, log_file=log_path, max_bytes=200, backup_count=1
        )
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 200
        assert handlers[0].backupCount == 1

        log = get_module_logger("MainGPS")
        for i in range(20):
            log.info("fix line %02d padded to fill the log file", i)
        handlers[0].flush()

        assert log_path.with_name("ubx.log.1").exists()
        assert not log_path.with_name("ubx.log.2").exists()

    def test_replaces_existing_handlers(self, tmp_path, restore_root_logging):
        logging_config.configure_logging("info", console=True)
        logging_config.configure_logging("info", console=False, log_file=tmp_path / "a.log")
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].baseFilename == str(tmp_path / "a.log")

    def test_resolve_level(self):
        assert logging_config.resolve_level("debug") == logging.DEBUG
        assert logging_config.resolve_level("WARNING") == logging.WARNING
        assert logging_config.resolve_level(logging.ERROR) == logging.ERROR

    def test_unknown_level(self, restore_root_logging):
        with pytest.raises(ValueError):
            logging_config.configure_logging("chatty")
