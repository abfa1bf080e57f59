"""
fwcatalog scrape subsystem.

Fetches catalog pages, extracts firmware and configuration data and persists
device records.
"""

from .client import AsyncCatalogClient
from .extract import extract_firmwares, extract_pre_text
from .interfaces import (
    DeviceRecord,
    FirmwareDescriptor,
    ScrapeState,
    ScrapeStatistics,
    StageResult,
)
from .keyvalue import format_key_values, parse_key_values
from .orchestrator import ScrapeOrchestrator
from .records import assemble_device_record
from .store import DeviceStore
from .urls import get_device_url, get_firmware_url

__all__ = [
    "AsyncCatalogClient",
    "DeviceRecord",
    "DeviceStore",
    "FirmwareDescriptor",
    "ScrapeOrchestrator",
    "ScrapeState",
    "ScrapeStatistics",
    "StageResult",
    "assemble_device_record",
    "extract_firmwares",
    "extract_pre_text",
    "format_key_values",
    "get_device_url",
    "get_firmware_url",
    "parse_key_values",
]
