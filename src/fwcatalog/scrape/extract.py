"""
HTML extraction helpers for catalog pages.

Device listing pages carry their firmware list as a JavaScript assignment
(``firmwares = [...]``); firmware detail pages carry the configuration block
inside a ``<pre>`` element.
"""

import json
import re
from typing import List, Optional

from bs4 import BeautifulSoup

from fwcatalog.constants import (
    DETAIL_BLOCK_TAG,
    FIRMWARES_ASSIGNMENT_PATTERN,
    HTML_PARSER,
)
from fwcatalog.exceptions import ExtractionError
from fwcatalog.log_utils import logger

from .interfaces import FirmwareDescriptor

_FIRMWARES_RE = re.compile(FIRMWARES_ASSIGNMENT_PATTERN)


def extract_firmwares(
    html: str, url: Optional[str] = None
) -> List[FirmwareDescriptor]:
    """
    Extract the firmware list embedded in a device listing page.

    The search is a plain substring match over the whole page; the first
    assignment wins and the first "]" closes the captured array.

    Parameters:
        html (str): Raw page text.
        url (Optional[str]): Page URL, attached to raised errors.

    Returns:
        List[FirmwareDescriptor]: Descriptors in source order; fields are not validated.

    Raises:
        ExtractionError: "pattern not found" when the assignment is absent,
            "invalid JSON" when the captured array cannot be decoded.
    """
    match = _FIRMWARES_RE.search(html or "")
    if match is None:
        raise ExtractionError("pattern not found", url=url)

    try:
        items = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise ExtractionError("invalid JSON", url=url, details=str(e)) from e

    firmwares: List[FirmwareDescriptor] = []
    for item in items:
        if not isinstance(item, dict):
            raise ExtractionError(
                "invalid JSON",
                url=url,
                details=f"expected object, got {type(item).__name__}",
            )
        firmwares.append(FirmwareDescriptor.from_dict(item))

    logger.debug(f"Extracted {len(firmwares)} firmware entries from {url or 'page'}")
    return firmwares


def extract_pre_text(html: str) -> str:
    """
    Return the text content of the first <pre> element, or "" when there is none.
    """
    soup = BeautifulSoup(html or "", HTML_PARSER)
    block = soup.find(DETAIL_BLOCK_TAG)
    if block is None:
        return ""
    return block.get_text()
