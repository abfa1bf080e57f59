"""
File Operations for the fwcatalog Scrape Subsystem

Atomic write helpers used by the device store.

The store rewrites its whole JSON array on every flush, so the new content is
written next to the target and swapped in with os.replace; an interrupted or
failed flush leaves the previous array intact.
"""

import json
import os
import shutil
import tempfile
from typing import Any, Callable

from fwcatalog.constants import STORE_JSON_INDENT
from fwcatalog.log_utils import logger


def _atomic_write(
    file_path: str, writer_func: Callable[[Any], None], suffix: str = ".tmp"
) -> bool:
    """
    Write data to a file atomically by writing to a temporary file and atomically replacing the target on success.

    When the target already exists its permission bits are copied onto the
    temporary file first, so a rewrite keeps the original mode.

    Parameters:
        file_path (str): Destination file path to be written.
        writer_func (Callable[[Any], None]): Callable that receives an open text file-like object and writes the desired content to it.
        suffix (str): Suffix to use for the temporary file name (default ".tmp").

    Returns:
        bool: `True` if the temporary write and atomic replace succeeded, `False` on any error.
    """
    target_dir = os.path.dirname(os.path.abspath(file_path))
    try:
        temp_fd, temp_path = tempfile.mkstemp(
            dir=target_dir, prefix="tmp-", suffix=suffix
        )
    except OSError as e:
        logger.error(f"Could not create temporary file for {file_path}: {e}")
        return False

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as temp_f:
            writer_func(temp_f)
        if os.path.exists(file_path):
            shutil.copymode(file_path, temp_path)
        os.replace(temp_path, file_path)
    except (UnicodeEncodeError, OSError, TypeError, ValueError) as e:
        logger.error(f"Could not write to {file_path}: {e}")
        return False
    finally:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError as e:
                logger.debug(f"Could not remove temporary file {temp_path}: {e}")
    return True


def _atomic_write_json(file_path: str, data: Any) -> bool:
    """
    Atomically write JSON-serializable data to the target file, pretty-printed with a 2-space indent.

    Returns:
        bool: `True` if the file was written and moved into place successfully, `False` on error.
    """
    return _atomic_write(
        file_path,
        lambda f: json.dump(data, f, indent=STORE_JSON_INDENT, ensure_ascii=False),
        suffix=".json",
    )
