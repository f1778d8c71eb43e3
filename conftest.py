"""Shared pytest configuration for the UBX logger test suite."""

import pytest


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "hardware: mark test as requiring a connected u-blox receiver"
    )


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="Run tests that require a connected receiver",
    )
    parser.addoption(
        "--serial-port",
        default="/dev/ttyACM0",
        help="Receiver port used by hardware tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip hardware tests unless --run-hardware is specified."""
    if config.getoption("--run-hardware"):
        return

    skip_hardware = pytest.mark.skip(reason="Need --run-hardware option to run")
    for item in items:
        if "hardware" in item.keywords:
            item.add_marker(skip_hardware)


@pytest.fixture
def serial_port(request) -> str:
    """Port of the receiver for hardware tests."""
    return request.config.getoption("--serial-port")
