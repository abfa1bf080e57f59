import json
from unittest.mock import AsyncMock

import platformdirs
import pytest

from fwcatalog.scrape.interfaces import DeviceRecord, FirmwareDescriptor

_ASYNC_NETWORK_BLOCK_MSG = (
    "Async network access is blocked during tests. Mock AsyncCatalogClient.fetch."
)


async def _async_block_network(*_args, **_kwargs):
    """
    Prevent async network calls during tests by raising a RuntimeError.

    Raises:
        RuntimeError: `_ASYNC_NETWORK_BLOCK_MSG` suggesting the fetcher be mocked.
    """
    raise RuntimeError(_ASYNC_NETWORK_BLOCK_MSG)


def pytest_configure(config):
    """
    Register the `asyncio` marker so strict-marker runs accept it.
    """
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test (auto-detected)"
    )


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Point platformdirs and the working directory at a temporary layout.

    The default store file is relative to the working directory, so every test
    runs from its own empty directory.
    """
    base = tmp_path_factory.mktemp("fwcatalog")
    config_dir = base / "config"
    log_dir = base / "log"
    work_dir = base / "work"
    for path in (config_dir, log_dir, work_dir):
        path.mkdir(parents=True, exist_ok=True)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.delenv("FWCATALOG_LOG_LEVEL", raising=False)
    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    monkeypatch.setattr(
        platformdirs, "user_log_dir", lambda *_args, **_kwargs: str(log_dir)
    )
    monkeypatch.chdir(work_dir)
    yield base


def pytest_runtest_setup():
    """
    Prevent real network requests during tests by replacing aiohttp's HTTP entry points.
    """
    import aiohttp

    aiohttp.ClientSession.request = _async_block_network  # type: ignore[assignment]
    aiohttp.ClientSession.get = _async_block_network  # type: ignore[assignment]


# =============================================================================
# Shared sample data
# =============================================================================


@pytest.fixture
def firmware_payload():
    """Firmware objects as they appear in a device listing page."""
    return [
        {
            "build_disp": "G991BXXU5CVLL",
            "utc": 1672531200,
            "patch": "2023-01-01",
            "build_id": "TP1A.220624.014",
            "build_inc": "G991BXXU5CVLL",
            "source": "FOTA",
            "source_id": 3,
            "id": 101,
            "android": "13",
        },
        {
            "build_disp": "G991BXXU5CWA1",
            "utc": 1675209600,
            "patch": "2023-02-01",
            "build_id": "TP1A.220624.014",
            "build_inc": "G991BXXU5CWA1",
            "source": "FOTA",
            "source_id": 3,
            "id": 102,
            "android": "13",
        },
        {
            "build_disp": "G991BXXU6DWB5",
            "utc": 1677628800,
            "patch": "2023-03-01",
            "build_id": "TP1A.220624.014",
            "build_inc": "G991BXXU6DWB5",
            "source": "Smart Switch",
            "source_id": 1,
            "id": 103,
            "android": "13",
        },
    ]


def _listing_html(firmwares):
    return (
        "<html><head><script>\n"
        f"var firmwares = {json.dumps(firmwares)};\n"
        "</script></head><body><h1>Device</h1></body></html>"
    )


def _detail_html(block):
    return f"<html><body><h2>Build</h2><pre>{block}</pre></body></html>"


@pytest.fixture
def make_listing_html():
    """Build a device listing page embedding the given firmware objects."""
    return _listing_html


@pytest.fixture
def make_detail_html():
    """Build a firmware detail page whose <pre> holds the given block."""
    return _detail_html


@pytest.fixture
def listing_html(firmware_payload):
    return _listing_html(firmware_payload)


@pytest.fixture
def sample_record(firmware_payload):
    return DeviceRecord(
        device_id=7,
        firmware=FirmwareDescriptor.from_dict(firmware_payload[0]),
        url="https://desktop.firmware.mobi/device:7/firmware:101",
        data={"ro.product.model": "SM-G991B", "ro.build.version.release": "13"},
    )


@pytest.fixture
def mock_client(mocker):
    """
    Provide an AsyncCatalogClient whose fetch is an AsyncMock.

    The real session is still opened and closed by `async with`, but no request is made.
    """
    from fwcatalog.scrape.client import AsyncCatalogClient

    client = AsyncCatalogClient()
    mocker.patch.object(client, "fetch", AsyncMock())
    return client
