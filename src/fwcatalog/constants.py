"""
Constants and configuration values for fwcatalog.

This module contains all hardcoded values, URLs, patterns, and other constants
used throughout the application.
"""

# Catalog site
CATALOG_BASE_URL = "https://desktop.firmware.mobi"
DEVICE_PATH_TEMPLATE = "{base}/device:{device_id}"
FIRMWARE_PATH_TEMPLATE = "{base}/device:{device_id}/firmware:{firmware_id}"

# Enumeration bounds (half-open range [start, max))
DEFAULT_START_DEVICE_ID = 0
DEFAULT_MAX_DEVICE_ID = 2334

# Delay before each request (in seconds); 0 disables it
DEFAULT_REQUEST_DELAY = 0.0

# Regex for the firmware array assigned in the device listing page.
# The first "]" ends the capture; nested brackets are not supported.
FIRMWARES_ASSIGNMENT_PATTERN = r"firmwares\s*=\s*(\[[^\]]*\])"

# Key/value block syntax
KEY_VALUE_SEPARATOR = "="
KEY_VALUE_COMMENT_PREFIX = "#"

# HTML element holding the configuration block on the firmware detail page
DETAIL_BLOCK_TAG = "pre"
HTML_PARSER = "html.parser"

# Store
DEFAULT_STORE_FILE = "devices.json"
STORE_JSON_INDENT = 2

# Error types recorded on stage results
ERROR_TYPE_FETCH = "fetch"
ERROR_TYPE_EXTRACTION = "extraction"
ERROR_TYPE_UNKNOWN = "unknown"

# Logging configuration
LOGGER_NAME = "fwcatalog"
LOG_FILE_NAME = "fwcatalog.log"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INFO_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUP_COUNT = 5

# Configuration file
APP_NAME = "fwcatalog"
CONFIG_FILE_NAME = "fwcatalog.yaml"

# Configuration keys
CONFIG_KEY_BASE_URL = "BASE_URL"
CONFIG_KEY_START_DEVICE_ID = "START_DEVICE_ID"
CONFIG_KEY_MAX_DEVICE_ID = "MAX_DEVICE_ID"
CONFIG_KEY_STORE_PATH = "STORE_PATH"
CONFIG_KEY_REQUEST_DELAY = "REQUEST_DELAY"
CONFIG_KEY_LOG_LEVEL = "LOG_LEVEL"
CONFIG_KEY_LOG_DIR = "LOG_DIR"

# Environment variable names
LOG_LEVEL_ENV_VAR = "FWCATALOG_LOG_LEVEL"
