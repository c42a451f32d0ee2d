"""
Pytest configuration and fixtures for linkdetail tests.
"""

import logging

import pytest

from linkdetail.config import LinkDetailConfig, set_config
from linkdetail.link.models import IpPrefix, LinkAddress, LinkSnapshot, RouteInfo
from linkdetail.logging_config import LOGGER_NAME, reset_error_stats


@pytest.fixture(autouse=True)
def default_config():
    """Pin the global config so .env files on the test machine are never read."""
    config = LinkDetailConfig()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo handlers installed by setup_logging() so caplog keeps working."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    reset_error_stats()


def _addr(text: str) -> LinkAddress:
    return LinkAddress.parse(text)


def _route(destination: str | None = None, gateway: str | None = None) -> RouteInfo:
    return RouteInfo(
        destination=IpPrefix.parse(destination) if destination else None,
        gateway=_addr(gateway) if gateway else None,
    )


@pytest.fixture
def home_wifi_snapshot() -> LinkSnapshot:
    """A typical dual-stack home Wi-Fi link."""
    return LinkSnapshot(
        addresses=[
            _addr("fe80::1c2b:3cff:fe4d:5e6f"),
            _addr("192.168.1.23"),
            _addr("2001:db8:1::23"),
        ],
        routes=[
            _route("fe80::/64"),
            _route("192.168.1.0/24"),
            _route("0.0.0.0/0", "192.168.1.1"),
            _route("::/0", "fe80::1"),
        ],
        dns_servers=[
            _addr("2001:4860:4860::8888"),
            _addr("8.8.8.8"),
            _addr("8.8.4.4"),
        ],
    )


@pytest.fixture
def snapshot_json() -> dict:
    return {
        "addresses": ["192.168.1.23", "fe80::1"],
        "routes": [
            {"destination": "192.168.1.0/24"},
            {"destination": "0.0.0.0/0", "gateway": "192.168.1.1"},
        ],
        "dns_servers": ["2001:4860:4860::8888", "8.8.8.8", "8.8.4.4"],
    }
