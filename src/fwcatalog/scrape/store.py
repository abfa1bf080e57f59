"""
Incremental JSON Store for Device Records

The store is a single JSON array on disk. Every append reads the whole
array, extends it and rewrites the whole file; there is no locking, so
appends must be issued one at a time from a single process.
"""

import json
import os
from typing import Any, Dict, List, Sequence

from fwcatalog.constants import DEFAULT_STORE_FILE
from fwcatalog.exceptions import StoreError
from fwcatalog.log_utils import logger

from .files import _atomic_write_json
from .interfaces import DeviceRecord, Pathish


class DeviceStore:
    """
    Append-only collection of DeviceRecord objects backed by a JSON file.

    The file, when present, always holds a complete JSON array: writes go to a
    temporary file that replaces the target only once fully written.
    """

    def __init__(self, path: Pathish = DEFAULT_STORE_FILE):
        self.path = os.fspath(path)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load(self) -> List[Dict[str, Any]]:
        """
        Read the persisted array.

        Returns:
            List[Dict[str, Any]]: Stored record objects in insertion order; empty when the file does not exist.

        Raises:
            StoreError: "corrupt store" if the content is not a JSON array, or an I/O error message if the file cannot be read.
        """
        if not self.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError("corrupt store", path=self.path, details=str(e)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(
                f"Could not read store {self.path}", path=self.path, details=str(e)
            ) from e

        if not isinstance(content, list):
            raise StoreError(
                "corrupt store",
                path=self.path,
                details=f"expected JSON array, got {type(content).__name__}",
            )
        return content

    def append(self, batch: Sequence[DeviceRecord]) -> None:
        """
        Append a batch of records to the end of the persisted array.

        An empty batch leaves the file untouched. When the file does not exist
        yet, it is created holding just the batch.

        Raises:
            StoreError: If the existing file is corrupt or the file cannot be read or written.
        """
        if not batch:
            logger.debug("Empty batch; store left unchanged")
            return

        records = self.load()
        records.extend(record.to_dict() for record in batch)

        if not _atomic_write_json(self.path, records):
            raise StoreError(f"Could not write store {self.path}", path=self.path)

        logger.debug(
            f"Appended {len(batch)} records to {self.path} ({len(records)} total)"
        )

    def summarize(self) -> Dict[str, Any]:
        """
        Summarize the persisted collection.

        Returns:
            dict: Mapping with keys "path", "records", "devices" (distinct device ids),
            "first_device_id" and "last_device_id" (None when the store is empty).
        """
        records = self.load()
        device_ids = [
            record.get("device_id")
            for record in records
            if isinstance(record, dict) and isinstance(record.get("device_id"), int)
        ]
        return {
            "path": self.path,
            "records": len(records),
            "devices": len(set(device_ids)),
            "first_device_id": min(device_ids) if device_ids else None,
            "last_device_id": max(device_ids) if device_ids else None,
        }
