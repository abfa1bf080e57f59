"""
Tests for the incremental JSON device store and its atomic write helpers.
"""

import json
import os
import stat

import pytest

from fwcatalog.exceptions import StoreError
from fwcatalog.scrape import files
from fwcatalog.scrape.interfaces import DeviceRecord, FirmwareDescriptor
from fwcatalog.scrape.store import DeviceStore

pytestmark = [pytest.mark.unit, pytest.mark.core_scrape]


def _record(device_id, firmware_id, data=None):
    return DeviceRecord(
        device_id=device_id,
        firmware=FirmwareDescriptor.from_dict({"id": firmware_id, "android": "12"}),
        url=f"https://desktop.firmware.mobi/device:{device_id}/firmware:{firmware_id}",
        data=data or {"ro.product.model": f"model-{device_id}"},
    )


class TestDeviceStoreAppend:
    """Test DeviceStore.append."""

    def test_append_creates_file(self, tmp_path):
        store = DeviceStore(tmp_path / "devices.json")
        r1 = _record(1, 10)

        store.append([r1])

        with open(store.path, encoding="utf-8") as f:
            assert json.load(f) == [r1.to_dict()]

    def test_append_extends_existing_file_in_order(self, tmp_path):
        store = DeviceStore(tmp_path / "devices.json")
        r1, r2 = _record(1, 10), _record(2, 20)

        store.append([r1])
        store.append([r2])

        assert store.load() == [r1.to_dict(), r2.to_dict()]

    def test_written_file_uses_two_space_indent(self, tmp_path):
        store = DeviceStore(tmp_path / "devices.json")
        record = _record(1, 10)

        store.append([record])

        with open(store.path, encoding="utf-8") as f:
            assert f.read() == json.dumps([record.to_dict()], indent=2)

    def test_non_ascii_values_are_written_as_utf8(self, tmp_path):
        store = DeviceStore(tmp_path / "devices.json")

        store.append([_record(1, 10, {"ro.product.name": "Galaxy S21 Ultra ™"})])

        with open(store.path, encoding="utf-8") as f:
            assert "™" in f.read()

    def test_empty_batch_is_a_no_op(self, tmp_path):
        store = DeviceStore(tmp_path / "devices.json")

        store.append([])

        assert not store.exists()

    def test_empty_batch_leaves_existing_file_untouched(self, tmp_path):
        path = tmp_path / "devices.json"
        path.write_text("[]", encoding="utf-8")
        store = DeviceStore(path)

        store.append([])

        assert path.read_text(encoding="utf-8") == "[]"

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "devices.json"
        path.write_text("[{not json", encoding="utf-8")
        store = DeviceStore(path)

        with pytest.raises(StoreError) as exc_info:
            store.append([_record(1, 10)])

        assert exc_info.value.message == "corrupt store"
        assert path.read_text(encoding="utf-8") == "[{not json"

    def test_non_array_file_is_corrupt(self, tmp_path):
        path = tmp_path / "devices.json"
        path.write_text('{"device_id": 1}', encoding="utf-8")

        with pytest.raises(StoreError, match="corrupt store"):
            DeviceStore(path).append([_record(1, 10)])

    def test_unwritable_location_raises(self, tmp_path):
        store = DeviceStore(tmp_path / "missing-dir" / "devices.json")

        with pytest.raises(StoreError):
            store.append([_record(1, 10)])

    def test_failed_write_keeps_previous_content(self, tmp_path, mocker):
        store = DeviceStore(tmp_path / "devices.json")
        store.append([_record(1, 10)])
        before = (tmp_path / "devices.json").read_text(encoding="utf-8")
        mocker.patch("os.replace", side_effect=OSError("disk full"))

        with pytest.raises(StoreError):
            store.append([_record(2, 20)])

        assert (tmp_path / "devices.json").read_text(encoding="utf-8") == before
        assert [p.name for p in tmp_path.iterdir()] == ["devices.json"]


class TestDeviceStoreLoad:
    """Test DeviceStore.load and summarize."""

    def test_load_missing_file(self, tmp_path):
        assert DeviceStore(tmp_path / "devices.json").load() == []

    def test_default_path_is_relative_to_working_directory(self):
        store = DeviceStore()

        store.append([_record(3, 30)])

        assert os.path.exists("devices.json")

    def test_summarize(self, tmp_path):
        store = DeviceStore(tmp_path / "devices.json")
        store.append([_record(4, 40), _record(4, 41)])
        store.append([_record(9, 90)])

        summary = store.summarize()

        assert summary["records"] == 3
        assert summary["devices"] == 2
        assert summary["first_device_id"] == 4
        assert summary["last_device_id"] == 9

    def test_summarize_empty(self, tmp_path):
        summary = DeviceStore(tmp_path / "devices.json").summarize()

        assert summary["records"] == 0
        assert summary["first_device_id"] is None


class TestAtomicWrite:
    """Test the atomic write helpers."""

    def test_atomic_write_json(self, tmp_path):
        target = tmp_path / "out.json"

        assert files._atomic_write_json(str(target), [{"a": 1}]) is True
        assert json.loads(target.read_text(encoding="utf-8")) == [{"a": 1}]

    def test_atomic_write_returns_false_and_cleans_up_on_error(self, tmp_path):
        target = tmp_path / "out.json"

        def _explode(_f):
            raise OSError("boom")

        assert files._atomic_write(str(target), _explode) is False
        assert list(tmp_path.iterdir()) == []

    def test_atomic_write_unserializable_data(self, tmp_path):
        target = tmp_path / "out.json"

        assert files._atomic_write_json(str(target), [object()]) is False
        assert not target.exists()

    def test_atomic_write_keeps_existing_file_mode(self, tmp_path):
        target = tmp_path / "out.json"
        target.write_text("[]", encoding="utf-8")
        os.chmod(target, 0o644)

        assert files._atomic_write_json(str(target), [{"a": 1}]) is True
        assert stat.S_IMODE(os.stat(target).st_mode) == 0o644
        assert json.loads(target.read_text(encoding="utf-8")) == [{"a": 1}]
