"""Assembly of DeviceRecord values from a fetched detail page."""

from .interfaces import DeviceRecord, FirmwareDescriptor
from .keyvalue import parse_key_values


def assemble_device_record(
    device_id: int, firmware: FirmwareDescriptor, url: str, raw_text: str
) -> DeviceRecord:
    """
    Package one (device, firmware) pair with its parsed configuration block.

    Never raises; a block without the expected keys yields a smaller mapping.
    """
    return DeviceRecord(
        device_id=device_id,
        firmware=firmware,
        url=url,
        data=parse_key_values(raw_text),
    )
