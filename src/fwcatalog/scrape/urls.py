"""URL construction for catalog pages."""

from typing import Optional

from fwcatalog.constants import (
    CATALOG_BASE_URL,
    DEVICE_PATH_TEMPLATE,
    FIRMWARE_PATH_TEMPLATE,
)


def _normalize_base(base_url: Optional[str]) -> str:
    return (base_url or CATALOG_BASE_URL).rstrip("/")


def get_device_url(device_id: int, base_url: Optional[str] = None) -> str:
    return DEVICE_PATH_TEMPLATE.format(
        base=_normalize_base(base_url), device_id=device_id
    )


def get_firmware_url(
    device_id: int, firmware_id: int, base_url: Optional[str] = None
) -> str:
    return FIRMWARE_PATH_TEMPLATE.format(
        base=_normalize_base(base_url),
        device_id=device_id,
        firmware_id=firmware_id,
    )
