"""
Color normalization for HueKeeper.

All colors are stored and compared in a single canonical form: a leading
'#' followed by six uppercase hex digits (e.g. "#1A2B3C"). Anything that
can't be brought into that form is rejected and never persisted.
"""

import re
from typing import Iterable, List, Optional

# Optional leading '#', then exactly six hex digits
_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")


def normalize(value) -> Optional[str]:
    """
    Bring a color string into canonical '#RRGGBB' form.

    Args:
        value: Raw color text, e.g. "aabbcc", "#AaBbCc" or " #aabbcc\\n"

    Returns:
        Canonical color string, or None if the input is not a valid color
    """
    if not isinstance(value, str):
        return None

    match = _HEX_PATTERN.match(value.strip())
    if not match:
        return None

    return f"#{match.group(1).upper()}"


def dedupe(colors: Iterable) -> List[str]:
    """
    Normalize a sequence of colors and drop invalid entries and duplicates.

    The first occurrence of each color wins, so the original order is kept.

    Args:
        colors: Raw color values

    Returns:
        List of unique canonical colors
    """
    seen = set()
    result = []
    for raw in colors:
        color = normalize(raw)
        if color is None or color in seen:
            continue
        seen.add(color)
        result.append(color)
    return result
