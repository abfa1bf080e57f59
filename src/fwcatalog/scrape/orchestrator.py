"""
Scrape Pipeline Orchestrator

This module drives a fwcatalog scrape run: it walks device ids in ascending
order, collects the records of each device's firmware builds and flushes them
to the store once per device id.
"""

import time
from typing import Any, Dict, List, Optional

from fwcatalog.constants import (
    CONFIG_KEY_BASE_URL,
    CONFIG_KEY_MAX_DEVICE_ID,
    CONFIG_KEY_REQUEST_DELAY,
    CONFIG_KEY_START_DEVICE_ID,
    CONFIG_KEY_STORE_PATH,
    DEFAULT_MAX_DEVICE_ID,
    DEFAULT_REQUEST_DELAY,
    DEFAULT_START_DEVICE_ID,
    DEFAULT_STORE_FILE,
    ERROR_TYPE_EXTRACTION,
    ERROR_TYPE_FETCH,
    ERROR_TYPE_UNKNOWN,
)
from fwcatalog.exceptions import ExtractionError, FetchError
from fwcatalog.log_utils import logger

from .client import AsyncCatalogClient
from .extract import extract_firmwares, extract_pre_text
from .interfaces import (
    DeviceRecord,
    FirmwareDescriptor,
    ScrapeState,
    ScrapeStatistics,
    StageResult,
)
from .records import assemble_device_record
from .store import DeviceStore
from .urls import get_device_url, get_firmware_url


class ScrapeOrchestrator:
    """
    Orchestrates a sequential scrape of the firmware catalog.

    Each device id is an independent unit of work: a failed firmware listing
    skips the device without flushing, a failed detail page skips only that
    firmware. Store failures are not caught and end the run.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        client: Optional[AsyncCatalogClient] = None,
        store: Optional[DeviceStore] = None,
    ):
        """
        Create a ScrapeOrchestrator.

        Parameters:
            config (Dict[str, Any]): Configuration mapping (BASE_URL, START_DEVICE_ID, MAX_DEVICE_ID, STORE_PATH, REQUEST_DELAY).
            client (Optional[AsyncCatalogClient]): Page fetcher; built from config when omitted.
            store (Optional[DeviceStore]): Record store; built from config when omitted.
        """
        self.config = config
        self.base_url: Optional[str] = config.get(CONFIG_KEY_BASE_URL)
        self.start_device_id: int = config.get(
            CONFIG_KEY_START_DEVICE_ID, DEFAULT_START_DEVICE_ID
        )
        self.max_device_id: int = config.get(
            CONFIG_KEY_MAX_DEVICE_ID, DEFAULT_MAX_DEVICE_ID
        )
        self.client = client or AsyncCatalogClient(
            request_delay=config.get(CONFIG_KEY_REQUEST_DELAY, DEFAULT_REQUEST_DELAY)
        )
        self.store = store or DeviceStore(
            config.get(CONFIG_KEY_STORE_PATH) or DEFAULT_STORE_FILE
        )

        self.state = ScrapeState.IDLE
        self.statistics = ScrapeStatistics()

    async def run(self) -> ScrapeStatistics:
        """
        Scrape every device id in [start_device_id, max_device_id).

        Returns:
            ScrapeStatistics: Counters for the run.

        Raises:
            StoreError: If the store cannot be read or written; records flushed before the failure stay on disk.
        """
        start_time = time.time()
        self.statistics = ScrapeStatistics()
        logger.info(
            f"Starting scrape of device ids {self.start_device_id}..{self.max_device_id - 1} "
            f"into {self.store.path}"
        )

        try:
            async with self.client:
                for device_id in range(self.start_device_id, self.max_device_id):
                    self.state = ScrapeState.ENUMERATING_DEVICES
                    await self._process_device(device_id)
        finally:
            self.statistics.elapsed_seconds = time.time() - start_time

        self.state = ScrapeState.DONE
        self._log_scrape_summary()
        return self.statistics

    async def _process_device(self, device_id: int) -> None:
        self.statistics.devices_visited += 1

        listing = await self._fetch_firmware_list(device_id)
        if not listing.success:
            logger.error(
                f"Failed to scrape firmware data for device {device_id}: {listing.error_message}"
            )
            self.statistics.devices_skipped += 1
            self.statistics.failures.append(listing)
            return

        batch: List[DeviceRecord] = []
        for firmware in listing.value:
            result = await self._fetch_device_record(device_id, firmware)
            if not result.success:
                logger.error(
                    f"Failed to scrape device data for device {device_id} "
                    f"firmware {result.firmware_id}: {result.error_message}"
                )
                self.statistics.firmwares_skipped += 1
                self.statistics.failures.append(result)
                continue
            batch.append(result.value)

        self._flush(batch)
        logger.info(
            f"Scraped data for device {device_id} ({len(batch)}/{len(listing.value)} firmwares)"
        )

    async def _fetch_firmware_list(self, device_id: int) -> StageResult:
        """
        Fetch a device listing page and extract its firmware list.

        Returns:
            StageResult: On success `value` is a list of FirmwareDescriptor; on failure the error fields describe the cause.
        """
        self.state = ScrapeState.FETCHING_FIRMWARE_LIST
        url = get_device_url(device_id, self.base_url)
        try:
            html = await self.client.fetch(url)
            firmwares = extract_firmwares(html, url=url)
        except FetchError as e:
            return self._failure(device_id, url, e, ERROR_TYPE_FETCH, e.status_code)
        except ExtractionError as e:
            return self._failure(device_id, url, e, ERROR_TYPE_EXTRACTION)
        except Exception as e:
            logger.debug(f"Unexpected error listing device {device_id}", exc_info=True)
            return self._failure(device_id, url, e, ERROR_TYPE_UNKNOWN)

        logger.debug(f"Device {device_id}: {len(firmwares)} firmwares listed")
        return StageResult(success=True, device_id=device_id, value=firmwares, url=url)

    async def _fetch_device_record(
        self, device_id: int, firmware: FirmwareDescriptor
    ) -> StageResult:
        """
        Fetch one firmware detail page and assemble its DeviceRecord.

        Returns:
            StageResult: On success `value` is the DeviceRecord; on failure the error fields describe the cause.
        """
        self.state = ScrapeState.FETCHING_DEVICE_DATA
        if firmware.id is None:
            return StageResult(
                success=False,
                device_id=device_id,
                error_message="firmware entry has no id",
                error_type=ERROR_TYPE_EXTRACTION,
            )

        url = get_firmware_url(device_id, firmware.id, self.base_url)
        try:
            html = await self.client.fetch(url)
            record = assemble_device_record(
                device_id, firmware, url, extract_pre_text(html)
            )
        except FetchError as e:
            result = self._failure(device_id, url, e, ERROR_TYPE_FETCH, e.status_code)
        except Exception as e:
            logger.debug(
                f"Unexpected error on device {device_id} firmware {firmware.id}",
                exc_info=True,
            )
            result = self._failure(device_id, url, e, ERROR_TYPE_UNKNOWN)
        else:
            result = StageResult(
                success=True, device_id=device_id, value=record, url=url
            )
        result.firmware_id = firmware.id
        return result

    def _flush(self, batch: List[DeviceRecord]) -> None:
        self.state = ScrapeState.FLUSHING
        self.store.append(batch)
        self.statistics.records_written += len(batch)

    @staticmethod
    def _failure(
        device_id: int,
        url: str,
        error: Exception,
        error_type: str,
        status_code: Optional[int] = None,
    ) -> StageResult:
        return StageResult(
            success=False,
            device_id=device_id,
            url=url,
            error_message=str(error),
            error_type=error_type,
            status_code=status_code,
        )

    def _log_scrape_summary(self) -> None:
        stats = self.statistics
        logger.info("Scrape completed")
        logger.info(f"Time taken: {stats.elapsed_seconds:.2f} seconds")
        logger.info(
            "Devices: %d visited, %d skipped; records: %d written, %d firmwares skipped",
            stats.devices_visited,
            stats.devices_skipped,
            stats.records_written,
            stats.firmwares_skipped,
        )
        if stats.failures:
            logger.warning(
                f"{len(stats.failures)} pages failed - check logs for details"
            )

    def get_scrape_statistics(self) -> Dict[str, Any]:
        """
        Summarize the current run as a plain mapping.

        Returns:
            dict: "devices_visited", "devices_skipped", "records_written",
            "firmwares_skipped", "failed_pages" and "elapsed_seconds".
        """
        stats = self.statistics
        return {
            "devices_visited": stats.devices_visited,
            "devices_skipped": stats.devices_skipped,
            "records_written": stats.records_written,
            "firmwares_skipped": stats.firmwares_skipped,
            "failed_pages": len(stats.failures),
            "elapsed_seconds": round(stats.elapsed_seconds, 2),
        }
