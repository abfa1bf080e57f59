"""
Parser for the key/value configuration blocks shown on firmware detail pages.

The blocks look like a build.prop file::

    # begin build properties
    ro.product.model=SM-G991B
    ro.build.version.release = 13
"""

from typing import Dict, Mapping

from fwcatalog.constants import KEY_VALUE_COMMENT_PREFIX, KEY_VALUE_SEPARATOR


def parse_key_values(raw_text: str) -> Dict[str, str]:
    """
    Parse a multi-line key=value block into a flat mapping.

    Lines starting with "#" and lines without a "=" are dropped. Only the text
    between the first and second "=" is kept as the value. Keys and values are
    stripped; a repeated key keeps its last value.

    Parameters:
        raw_text (str): Block text, possibly empty.

    Returns:
        Dict[str, str]: Parsed pairs; empty for empty input. Never raises.
    """
    result: Dict[str, str] = {}
    if not raw_text:
        return result

    for line in raw_text.split("\n"):
        if line.startswith(KEY_VALUE_COMMENT_PREFIX):
            continue

        parts = line.split(KEY_VALUE_SEPARATOR)
        if len(parts) < 2:
            continue

        result[parts[0].strip()] = parts[1].strip()

    return result


def format_key_values(pairs: Mapping[str, str]) -> str:
    """Render a mapping back into canonical key=value lines."""
    return "\n".join(
        f"{key}{KEY_VALUE_SEPARATOR}{value}" for key, value in pairs.items()
    )
