"""
Core Interfaces for the fwcatalog Scrape Subsystem

This module defines the data structures shared by the extractors, the
record assembler, the store and the orchestrator.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

Pathish = Union[str, Path]


class ScrapeState(str, Enum):
    """Phases of a scrape run, in the order a single device id passes through them."""

    IDLE = "idle"
    ENUMERATING_DEVICES = "enumerating_devices"
    FETCHING_FIRMWARE_LIST = "fetching_firmware_list"
    FETCHING_DEVICE_DATA = "fetching_device_data"
    FLUSHING = "flushing"
    DONE = "done"


@dataclass(frozen=True)
class FirmwareDescriptor:
    """Represents one firmware build listed on a device page."""

    build_disp: Optional[str] = None
    """Display build label"""

    utc: Optional[int] = None
    """Build timestamp (UTC, seconds)"""

    patch: Optional[str] = None
    """Security patch level"""

    build_id: Optional[str] = None
    """Build identifier"""

    build_inc: Optional[str] = None
    """Build increment"""

    source: Optional[str] = None
    """Source label"""

    source_id: Optional[int] = None
    """Numeric source identifier"""

    id: Optional[int] = None
    """Numeric firmware identifier, used in the detail page URL"""

    android: Optional[str] = None
    """Android version string"""

    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    """The source object exactly as decoded from the listing page"""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FirmwareDescriptor":
        """
        Build a descriptor from a decoded JSON object without validating it.

        Missing fields become None; unknown fields are kept in `raw` only.
        """
        return cls(
            build_disp=data.get("build_disp"),
            utc=data.get("utc"),
            patch=data.get("patch"),
            build_id=data.get("build_id"),
            build_inc=data.get("build_inc"),
            source=data.get("source"),
            source_id=data.get("source_id"),
            id=data.get("id"),
            android=data.get("android"),
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the source object verbatim, as persisted in the store."""
        return dict(self.raw)


@dataclass(frozen=True)
class DeviceRecord:
    """One parsed (device, firmware) pair."""

    device_id: int
    """Enumeration index the record was scraped under"""

    firmware: FirmwareDescriptor
    """Firmware this record describes"""

    url: str
    """Firmware detail page URL"""

    data: Dict[str, str] = field(default_factory=dict)
    """Configuration key/value pairs parsed from the detail page"""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.device_id,
            "firmware": self.firmware.to_dict(),
            "url": self.url,
            "data": dict(self.data),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeviceRecord":
        return cls(
            device_id=data["device_id"],
            firmware=FirmwareDescriptor.from_dict(data.get("firmware") or {}),
            url=data.get("url", ""),
            data=dict(data.get("data") or {}),
        )


@dataclass
class StageResult:
    """Result of one orchestrator stage (firmware listing or detail page)."""

    success: bool
    """Whether the stage produced a value"""

    device_id: int
    """Device id being processed"""

    value: Any = None
    """List of FirmwareDescriptor (listing stage) or DeviceRecord (detail stage)"""

    url: Optional[str] = None
    """URL fetched by the stage"""

    firmware_id: Optional[int] = None
    """Firmware id, for detail stage results"""

    error_message: Optional[str] = None
    """Human-readable cause (if failed)"""

    error_type: Optional[str] = None
    """Type/category of error (fetch, extraction, unknown)"""

    status_code: Optional[int] = None
    """HTTP status code if the stage failed on a non-2xx response"""


@dataclass
class ScrapeStatistics:
    """Counters for a single scrape run."""

    devices_visited: int = 0
    devices_skipped: int = 0
    records_written: int = 0
    firmwares_skipped: int = 0
    elapsed_seconds: float = 0.0
    failures: List[StageResult] = field(default_factory=list)
