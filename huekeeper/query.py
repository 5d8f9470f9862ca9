"""
Color search for HueKeeper.

Queries are matched against favorites and history. A query is split into
lowercase terms; a color matches when every term occurs either in its hex
code or in one of its keywords. Favorites are listed first, then the
history colors that aren't favorites, each group newest first.
"""

import logging
from typing import Dict, List

from huekeeper.context import HueKeeperContext
from huekeeper.registry import ColorRegistry
from huekeeper.results import (
    ICON_EMOJI,
    ICON_RELATIVE,
    ICON_SVG,
    FormField,
    Icon,
    ResultAction,
    ResultEntry,
)
from huekeeper.utils.process import ProcessLaunchError

logger = logging.getLogger(__name__)

GROUP_FAVORITES = "Favorites"
GROUP_HISTORY = "History"
GROUP_SCORES = {
    GROUP_FAVORITES: 100,
    GROUP_HISTORY: 10,
}

APP_ICON = Icon(ICON_RELATIVE, "images/app.png")

_STAR_PATH = "M16 2l4.2 8.6 9.4 1.4-6.8 6.6 1.6 9.4L16 23.6 7.6 28l1.6-9.4L2.4 12l9.4-1.4z"
FAVORITE_ICON = Icon(
    ICON_SVG,
    f'<svg viewBox="0 0 32 32" xmlns="http://www.w3.org/2000/svg"><path d="{_STAR_PATH}" fill="#FE9803"/></svg>',
)
UNFAVORITE_ICON = Icon(
    ICON_SVG,
    f'<svg viewBox="0 0 32 32" xmlns="http://www.w3.org/2000/svg"><path d="{_STAR_PATH}" '
    f'fill="none" stroke="#BF873E" stroke-width="2" stroke-linejoin="round"/></svg>',
)
KEYWORD_ICON = Icon(ICON_EMOJI, "\U0001F3F7\uFE0F")
DELETE_ICON = Icon(ICON_EMOJI, "\U0001F5D1\uFE0F")

ACTION_COPY = "Copy"
ACTION_FAVORITE = "Add to favorites"
ACTION_UNFAVORITE = "Remove from favorites"
ACTION_EDIT_KEYWORDS = "Edit keywords"
ACTION_REMOVE_HISTORY = "Remove from history"
ACTION_PICK = "Pick color"

KEYWORD_FIELD = "keyword"


def color_icon(color: str) -> Icon:
    """Build a square swatch icon filled with the color."""
    return Icon(
        ICON_SVG,
        '<svg width="512" height="512" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="512" height="512" fill="{color}" rx="32"/></svg>',
    )


def tokenize(raw_query: str) -> List[str]:
    """Split a query into lowercase search terms."""
    return (raw_query or "").lower().split()


def matches_terms(color: str, keywords: List[str], terms: List[str]) -> bool:
    """
    Check whether a color matches all search terms.

    Args:
        color: Canonical color
        keywords: The color's keywords
        terms: Lowercase search terms

    Returns:
        True if every term is found in the hex code or any keyword
    """
    if not terms:
        return True
    color_lower = color.lower()
    keywords_lower = [k.lower() for k in keywords]
    return all(
        term in color_lower or any(term in k for k in keywords_lower)
        for term in terms
    )


class QueryEngine:
    """Turns a search string into grouped color results."""

    def __init__(self, context: HueKeeperContext, registry: ColorRegistry):
        self.context = context
        self.registry = registry

    @property
    def host(self):
        return self.context.host

    def search(self, raw_query: str) -> List[ResultEntry]:
        """
        Search favorites and history.

        Args:
            raw_query: Free text typed by the user

        Returns:
            Favorite matches, then history matches; or a single informational
            entry when nothing matches
        """
        snapshot = self.registry.snapshot()
        terms = tokenize(raw_query)
        favorite_set = set(snapshot.favorites)
        history_set = set(snapshot.history)

        results = []
        for color in snapshot.favorites:
            keywords = snapshot.keywords.get(color, [])
            if matches_terms(color, keywords, terms):
                results.append(
                    self.build_color_result(
                        color, keywords, GROUP_FAVORITES,
                        is_favorite=True,
                        can_delete_from_history=color in history_set,
                    )
                )

        for color in snapshot.history:
            if color in favorite_set:
                continue
            keywords = snapshot.keywords.get(color, [])
            if matches_terms(color, keywords, terms):
                results.append(
                    self.build_color_result(
                        color, keywords, GROUP_HISTORY,
                        is_favorite=False,
                        can_delete_from_history=True,
                    )
                )

        logger.debug(f"Query {raw_query!r}: {len(results)} result(s)")

        if not results:
            has_any = bool(snapshot.favorites or snapshot.history)
            return [self.build_empty_result(has_any)]
        return results

    def build_color_result(
        self,
        color: str,
        keywords: List[str],
        group: str,
        is_favorite: bool,
        can_delete_from_history: bool,
    ) -> ResultEntry:
        """Build the result entry and actions for one color."""
        keyword_text = ", ".join(keywords)
        notify_error = self._notify_error

        actions = [
            ResultAction(
                name=ACTION_COPY,
                callback=lambda _values: self.copy_color(color),
                is_default=True,
                on_error=notify_error,
            ),
            ResultAction(
                name=ACTION_UNFAVORITE if is_favorite else ACTION_FAVORITE,
                callback=lambda _values: self.toggle_favorite(color),
                icon=FAVORITE_ICON if is_favorite else UNFAVORITE_ICON,
                prevent_hide=True,
                on_error=notify_error,
            ),
            ResultAction(
                name=ACTION_EDIT_KEYWORDS,
                callback=lambda values: self.edit_keywords(color, values),
                icon=KEYWORD_ICON,
                prevent_hide=True,
                form=[
                    FormField(
                        key=KEYWORD_FIELD,
                        label="Keywords",
                        default_value=keyword_text,
                        tooltip="Comma separated, e.g. brand, primary",
                        max_lines=2,
                    )
                ],
                on_error=notify_error,
            ),
        ]

        if can_delete_from_history:
            actions.append(
                ResultAction(
                    name=ACTION_REMOVE_HISTORY,
                    callback=lambda _values: self.remove_from_history(color),
                    icon=DELETE_ICON,
                    prevent_hide=True,
                    on_error=notify_error,
                )
            )

        return ResultEntry(
            id=f"color:{color}",
            title=color,
            subtitle=f"Keywords: {keyword_text}" if keywords else "Click to copy",
            icon=color_icon(color),
            group=group,
            group_score=GROUP_SCORES[group],
            actions=actions,
        )

    def build_empty_result(self, has_any: bool) -> ResultEntry:
        """Build the informational entry shown when nothing matched."""
        pick_query = f"{self.context.trigger_keyword} pick"
        return ResultEntry(
            title="No colors match this query" if has_any else "No colors recorded yet",
            subtitle=f"Type '{pick_query}' to pick a color from the screen",
            icon=APP_ICON,
            actions=[
                ResultAction(
                    name=ACTION_PICK,
                    callback=lambda _values: self.host.change_query(pick_query),
                    is_default=True,
                    on_error=self._notify_error,
                )
            ],
        )

    # Action callbacks

    def copy_color(self, color: str) -> None:
        try:
            self.context.clipboard.copy(color)
        except ProcessLaunchError as e:
            self.host.notify(f"Copy failed: {e}", error=True)
            return
        self.host.notify(f"Copied {color}")

    def toggle_favorite(self, color: str) -> None:
        self.registry.toggle_favorite(color)
        self.host.refresh_results(preserve_selected_index=True)

    def edit_keywords(self, color: str, values: Dict[str, str]) -> None:
        raw = str(values.get(KEYWORD_FIELD) or "")
        self.registry.set_keywords(color, raw)
        self.host.refresh_results(preserve_selected_index=True)

    def remove_from_history(self, color: str) -> None:
        self.registry.remove_from_history(color)
        self.host.refresh_results(preserve_selected_index=True)

    def _notify_error(self, message: str) -> None:
        self.host.notify(message, error=True)
