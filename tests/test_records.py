"""
Tests for record assembly, data classes and URL construction.
"""

import dataclasses

import pytest

from fwcatalog.scrape.interfaces import DeviceRecord, FirmwareDescriptor
from fwcatalog.scrape.records import assemble_device_record
from fwcatalog.scrape.urls import get_device_url, get_firmware_url

pytestmark = [pytest.mark.unit, pytest.mark.core_scrape]


class TestAssembleDeviceRecord:
    """Test assemble_device_record."""

    def test_packages_all_fields(self, firmware_payload):
        firmware = FirmwareDescriptor.from_dict(firmware_payload[1])
        url = get_firmware_url(12, 102)

        record = assemble_device_record(12, firmware, url, "# header\nro.a=1\nro.b = 2")

        assert record.device_id == 12
        assert record.firmware is firmware
        assert record.url == url
        assert record.data == {"ro.a": "1", "ro.b": "2"}

    def test_empty_block_gives_empty_mapping(self, firmware_payload):
        firmware = FirmwareDescriptor.from_dict(firmware_payload[0])

        record = assemble_device_record(0, firmware, "u", "")

        assert record.data == {}

    def test_record_is_immutable(self, sample_record):
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_record.device_id = 8


class TestDataClasses:
    """Test FirmwareDescriptor and DeviceRecord serialization."""

    def test_firmware_from_dict_copies_source(self, firmware_payload):
        source = dict(firmware_payload[0])
        firmware = FirmwareDescriptor.from_dict(source)
        source["id"] = 999

        assert firmware.id == 101
        assert firmware.to_dict()["id"] == 101

    def test_record_to_dict_shape(self, sample_record, firmware_payload):
        assert sample_record.to_dict() == {
            "device_id": 7,
            "firmware": firmware_payload[0],
            "url": "https://desktop.firmware.mobi/device:7/firmware:101",
            "data": {
                "ro.product.model": "SM-G991B",
                "ro.build.version.release": "13",
            },
        }

    def test_record_from_dict(self, sample_record):
        rebuilt = DeviceRecord.from_dict(sample_record.to_dict())

        assert rebuilt == sample_record
        assert rebuilt.firmware.to_dict() == sample_record.firmware.to_dict()


class TestUrls:
    """Test catalog URL construction."""

    def test_device_url(self):
        assert get_device_url(42) == "https://desktop.firmware.mobi/device:42"

    def test_firmware_url(self):
        assert (
            get_firmware_url(42, 7)
            == "https://desktop.firmware.mobi/device:42/firmware:7"
        )

    def test_custom_base_url_trailing_slash(self):
        assert get_device_url(1, "http://localhost:8080/") == (
            "http://localhost:8080/device:1"
        )
