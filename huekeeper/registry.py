"""
Color registry for HueKeeper.

The registry owns the three persisted collections:

- history: recently picked colors, newest first, at most MAX_HISTORY entries
- favorites: starred colors, newest first, unbounded
- keywords: free-text tags per color

Every operation loads its collection fresh from the settings store, changes
it and writes it back. A write the store rejects raises SettingsWriteError.
There is no lock: two concurrent writes to the same collection resolve as
last-write-wins, and writes to different collections never interfere.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from huekeeper.utils.color_codec import normalize
from huekeeper.utils.settings_store import (
    KeywordMap,
    SettingsAdapter,
    SettingsWriteError,
    unique_keywords,
)

logger = logging.getLogger(__name__)

MAX_HISTORY = 50


def parse_keyword_input(raw: str) -> List[str]:
    """
    Split user keyword text into a keyword list.

    "brand, primary,, primary " -> ["brand", "primary"]

    Args:
        raw: Comma separated keyword text

    Returns:
        Trimmed, non-empty keywords without exact duplicates
    """
    return unique_keywords((raw or "").split(","))


def _check_saved(ok: bool, what: str) -> None:
    if not ok:
        raise SettingsWriteError(f"Could not save {what}")


@dataclass
class RegistrySnapshot:
    """All three collections as loaded at one point in time."""

    history: List[str]
    favorites: List[str]
    keywords: KeywordMap


class ColorRegistry:
    """Reads and mutates the persisted color collections."""

    def __init__(self, settings: SettingsAdapter):
        self.settings = settings

    def history(self) -> List[str]:
        return self.settings.load_history()

    def favorites(self) -> List[str]:
        return self.settings.load_favorites()

    def keywords(self) -> KeywordMap:
        return self.settings.load_keywords()

    def snapshot(self) -> RegistrySnapshot:
        """Load all collections. The loads are independent and read-only."""
        return RegistrySnapshot(
            history=self.history(),
            favorites=self.favorites(),
            keywords=self.keywords(),
        )

    def record_pick(self, raw: str) -> Optional[str]:
        """
        Put a picked color at the front of the history.

        Args:
            raw: Color text as produced by the picker or typed by the user

        Returns:
            The canonical color, or None if raw wasn't a valid color

        Raises:
            SettingsWriteError: If the history could not be saved
        """
        color = normalize(raw)
        if color is None:
            logger.warning(f"Ignoring invalid color: {raw!r}")
            return None

        history = [c for c in self.history() if c != color]
        history.insert(0, color)
        _check_saved(self.settings.save_history(history[:MAX_HISTORY]), "color history")

        logger.info(f"Recorded {color} in history")
        return color

    def toggle_favorite(self, raw: str) -> bool:
        """
        Add a color to favorites, or remove it if it's already there.

        Args:
            raw: Color to toggle

        Returns:
            True if the color is a favorite afterwards
        """
        color = normalize(raw)
        if color is None:
            logger.warning(f"Cannot toggle favorite for invalid color: {raw!r}")
            return False

        favorites = self.favorites()
        if color in favorites:
            updated = [c for c in favorites if c != color]
            is_favorite = False
        else:
            updated = [color] + favorites
            is_favorite = True

        _check_saved(self.settings.save_favorites(updated), "favorites")
        logger.info(f"{color} {'added to' if is_favorite else 'removed from'} favorites")
        return is_favorite

    def set_keywords(self, raw: str, keyword_text: str) -> List[str]:
        """
        Replace the keywords of a color.

        Args:
            raw: Color to tag
            keyword_text: Comma separated keywords; empty text clears the tags

        Returns:
            The keywords now stored for the color
        """
        color = normalize(raw)
        if color is None:
            logger.warning(f"Cannot set keywords for invalid color: {raw!r}")
            return []

        keywords = parse_keyword_input(keyword_text)
        current = self.keywords()
        if keywords:
            current[color] = keywords
        else:
            current.pop(color, None)

        _check_saved(self.settings.save_keywords(current), f"keywords for {color}")
        logger.info(f"Keywords for {color}: {keywords}")
        return keywords

    def remove_from_history(self, raw: str) -> bool:
        """
        Drop a color from the history. Favorites and keywords are untouched.

        Args:
            raw: Color to remove

        Returns:
            True if the color was in the history
        """
        color = normalize(raw)
        if color is None:
            logger.warning(f"Cannot remove invalid color: {raw!r}")
            return False

        history = self.history()
        updated = [c for c in history if c != color]
        _check_saved(self.settings.save_history(updated), "color history")
        return len(updated) != len(history)
