"""
Settings persistence for HueKeeper.

HueKeeper keeps three collections in a plain string key/value store:

- colorHistory: JSON array of recently picked colors
- favoriteColors: JSON array of favorite colors
- colorKeywords: JSON object mapping a color to its keyword list

Each slot has a codec that turns the stored string into a clean Python value.
Decoding never raises: corrupted or foreign data falls back to an empty
collection so a broken settings file can't break a query. Codecs report
whether the fallback was used so callers (and tests) can tell the two apart.
"""

import json
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from PyQt6.QtCore import QSettings

from .color_codec import dedupe, normalize
from .process import HueKeeperError

logger = logging.getLogger(__name__)

# Slot keys (kept identical to the launcher plugin's stored settings)
SETTINGS_COLOR_HISTORY = "colorHistory"
SETTINGS_FAVORITES = "favoriteColors"
SETTINGS_KEYWORDS = "colorKeywords"

KeywordMap = Dict[str, List[str]]


class SettingsWriteError(HueKeeperError):
    """The settings store did not persist a write."""


class SettingsStore:
    """String key/value store interface.

    Backends return None for keys that were never written and report write
    success with a bool instead of raising.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> bool:
        raise NotImplementedError


class MemorySettingsStore(SettingsStore):
    """In-memory store, used for ephemeral runs and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True


class QSettingsStore(SettingsStore):
    """Settings store backed by an INI file through Qt's QSettings."""

    def __init__(self, path: str):
        """
        Open (or lazily create) the settings file.

        Args:
            path: Path to the INI file
        """
        self.path = path
        self._settings = QSettings(path, QSettings.Format.IniFormat)

    def get(self, key: str) -> Optional[str]:
        value = self._settings.value(key)
        if value is None:
            return None
        if not isinstance(value, str):
            # Qt hands back a list when an unquoted value contains commas
            logger.warning(f"Setting {key} in {self.path} is not a string, ignoring it")
            return None
        return value

    def set(self, key: str, value: str) -> bool:
        self._settings.setValue(key, value)
        self._settings.sync()

        status = self._settings.status()
        if status != QSettings.Status.NoError:
            logger.error(f"Failed to write setting {key} to {self.path}: {status}")
            return False
        return True


def unique_keywords(items: Iterable) -> List[str]:
    """
    Clean a keyword list: trim, drop empty and non-string items, drop exact duplicates.

    Keywords differing only in case are kept as separate entries.
    """
    seen = set()
    result = []
    for item in items:
        if not isinstance(item, str):
            continue
        keyword = item.strip()
        if not keyword or keyword in seen:
            continue
        seen.add(keyword)
        result.append(keyword)
    return result


class ColorListCodec:
    """Codec for the history and favorites slots (JSON array of colors)."""

    default_raw = "[]"

    def decode(self, raw: Optional[str]) -> Tuple[List[str], bool]:
        """
        Decode a stored color list.

        Args:
            raw: Stored string, or None/empty if nothing was stored yet

        Returns:
            Tuple of (colors, used_fallback)
        """
        if not raw:
            raw = self.default_raw

        try:
            parsed = json.loads(raw)
        except ValueError:
            return [], True

        if not isinstance(parsed, list):
            return [], True

        return dedupe(parsed), False

    def encode(self, colors: List[str]) -> str:
        return json.dumps(list(colors))


class KeywordMapCodec:
    """Codec for the keyword slot (JSON object of color -> keyword array)."""

    default_raw = "{}"

    def decode(self, raw: Optional[str]) -> Tuple[KeywordMap, bool]:
        """
        Decode a stored keyword map.

        Invalid color keys and non-array values are skipped, keyword lists are
        cleaned with unique_keywords(), and colors left without any keyword
        are omitted.

        Args:
            raw: Stored string, or None/empty if nothing was stored yet

        Returns:
            Tuple of (keyword map, used_fallback)
        """
        if not raw:
            raw = self.default_raw

        try:
            parsed = json.loads(raw)
        except ValueError:
            return {}, True

        if not isinstance(parsed, dict):
            return {}, True

        result: KeywordMap = {}
        for key, value in parsed.items():
            color = normalize(key)
            if color is None or not isinstance(value, list):
                continue
            keywords = unique_keywords(result.get(color, []) + value)
            if keywords:
                result[color] = keywords

        return result, False

    def encode(self, keywords: KeywordMap) -> str:
        return json.dumps({color: list(words) for color, words in keywords.items()})


class SettingsAdapter:
    """Typed read/modify/write access to the three HueKeeper slots.

    Nothing is cached: every load reads the store again, so each operation
    sees whatever the last writer persisted.
    """

    def __init__(self, store: SettingsStore):
        self.store = store
        self.list_codec = ColorListCodec()
        self.keyword_codec = KeywordMapCodec()

    def _read(self, key: str) -> Optional[str]:
        try:
            return self.store.get(key)
        except Exception as e:
            logger.warning(f"Failed to read setting {key}: {e}")
            return None

    def _write(self, key: str, raw: str) -> bool:
        try:
            ok = self.store.set(key, raw)
        except Exception as e:
            logger.error(f"Failed to save setting {key}: {e}")
            return False
        if not ok:
            logger.error(f"Settings store rejected write for {key}")
        return ok

    def _load_colors(self, key: str) -> List[str]:
        colors, used_fallback = self.list_codec.decode(self._read(key))
        if used_fallback:
            logger.warning(f"Setting {key} is corrupted, using an empty list")
        return colors

    def load_history(self) -> List[str]:
        return self._load_colors(SETTINGS_COLOR_HISTORY)

    def save_history(self, colors: List[str]) -> bool:
        return self._write(SETTINGS_COLOR_HISTORY, self.list_codec.encode(colors))

    def load_favorites(self) -> List[str]:
        return self._load_colors(SETTINGS_FAVORITES)

    def save_favorites(self, colors: List[str]) -> bool:
        return self._write(SETTINGS_FAVORITES, self.list_codec.encode(colors))

    def load_keywords(self) -> KeywordMap:
        keywords, used_fallback = self.keyword_codec.decode(self._read(SETTINGS_KEYWORDS))
        if used_fallback:
            logger.warning(f"Setting {SETTINGS_KEYWORDS} is corrupted, using an empty map")
        return keywords

    def save_keywords(self, keywords: KeywordMap) -> bool:
        return self._write(SETTINGS_KEYWORDS, self.keyword_codec.encode(keywords))
