"""Tests for color search, grouping and result actions."""

import json

import pytest

from huekeeper.query import (
    ACTION_COPY,
    ACTION_EDIT_KEYWORDS,
    ACTION_FAVORITE,
    ACTION_PICK,
    ACTION_REMOVE_HISTORY,
    ACTION_UNFAVORITE,
    GROUP_FAVORITES,
    GROUP_HISTORY,
    KEYWORD_FIELD,
    matches_terms,
    tokenize,
)
from huekeeper.utils.process import ProcessLaunchError
from huekeeper.utils.settings_store import (
    SETTINGS_COLOR_HISTORY,
    SETTINGS_FAVORITES,
    SETTINGS_KEYWORDS,
)


def seed(store, history=(), favorites=(), keywords=None):
    store.values[SETTINGS_COLOR_HISTORY] = json.dumps(list(history))
    store.values[SETTINGS_FAVORITES] = json.dumps(list(favorites))
    store.values[SETTINGS_KEYWORDS] = json.dumps(keywords or {})


def titles(results):
    return [entry.title for entry in results]


def test_tokenize():
    assert tokenize("  Brand   BLUE ") == ["brand", "blue"]
    assert tokenize("") == []
    assert tokenize(None) == []


def test_matches_terms_is_and_across_terms():
    keywords = ["Brand", "Logo"]
    assert matches_terms("#AABBCC", keywords, [])
    assert matches_terms("#AABBCC", keywords, ["aab"])
    assert matches_terms("#AABBCC", keywords, ["brand", "bbc"])
    assert matches_terms("#AABBCC", keywords, ["#aa"])
    assert not matches_terms("#AABBCC", keywords, ["brand", "zz"])
    assert not matches_terms("#AABBCC", [], ["brand"])


class TestSearch:
    def test_single_history_color(self, handler, store):
        seed(store, history=["#112233"])

        results = handler.handle("", "")

        assert len(results) == 1
        entry = results[0]
        assert entry.title == "#112233"
        assert entry.id == "color:#112233"
        assert entry.group == GROUP_HISTORY
        assert entry.find_action(ACTION_REMOVE_HISTORY) is not None

    def test_no_match_entry_when_history_not_empty(self, handler, store, host):
        seed(store, history=["#112233"])

        results = handler.handle("", "zz")

        assert len(results) == 1
        assert results[0].title == "No colors match this query"
        action = results[0].default_action()
        assert action.name == ACTION_PICK
        action.invoke()
        assert host.queries == ["color pick"]

    def test_no_colors_entry_when_everything_empty(self, handler):
        results = handler.handle("", "")
        assert titles(results) == ["No colors recorded yet"]

    def test_favorites_group_before_history(self, handler, store):
        seed(store, history=["#AABBCC", "#DDEEFF"], favorites=["#AABBCC"])

        results = handler.handle("", "")

        assert titles(results) == ["#AABBCC", "#DDEEFF"]
        favorite, other = results
        assert favorite.group == GROUP_FAVORITES
        assert other.group == GROUP_HISTORY
        assert favorite.group_score > other.group_score
        # Both are in history, so both can be removed from it
        assert favorite.find_action(ACTION_REMOVE_HISTORY) is not None
        assert other.find_action(ACTION_REMOVE_HISTORY) is not None

    def test_favorite_not_in_history_is_not_deletable(self, handler, store):
        seed(store, history=["#112233"], favorites=["#AABBCC"])

        favorite = handler.handle("", "")[0]

        assert favorite.title == "#AABBCC"
        assert favorite.find_action(ACTION_REMOVE_HISTORY) is None

    def test_empty_query_keeps_source_order(self, handler, store):
        seed(
            store,
            history=["#000003", "#000002", "#000001", "#AAAAA2"],
            favorites=["#AAAAA1", "#AAAAA2"],
        )

        results = handler.handle("", "")

        assert titles(results) == ["#AAAAA1", "#AAAAA2", "#000003", "#000002", "#000001"]

    def test_keyword_match_without_hex_match(self, handler, store):
        seed(store, history=["#112233", "#445566"], keywords={"#445566": ["Ocean Blue"]})

        results = handler.handle("", "ocean")

        assert titles(results) == ["#445566"]
        assert results[0].subtitle == "Keywords: Ocean Blue"

    def test_all_terms_must_match(self, handler, store):
        seed(store, history=["#112233", "#445566"],
             keywords={"#112233": ["brand"], "#445566": ["brand", "dark"]})

        assert titles(handler.handle("", "brand dark")) == ["#445566"]
        assert titles(handler.handle("", "brand 1122")) == ["#112233"]

    def test_untagged_subtitle(self, handler, store):
        seed(store, history=["#112233"])
        assert handler.handle("", "")[0].subtitle == "Click to copy"

    def test_corrupted_settings_do_not_break_search(self, handler, store):
        store.values[SETTINGS_COLOR_HISTORY] = '["#112233"]'
        store.values[SETTINGS_FAVORITES] = "{broken"
        store.values[SETTINGS_KEYWORDS] = "[1, 2]"

        assert titles(handler.handle("", "")) == ["#112233"]


class TestColorActions:
    def test_action_set(self, handler, store):
        seed(store, history=["#112233"], keywords={"#112233": ["sky", "calm"]})

        entry = handler.handle("", "")[0]

        assert [a.name for a in entry.actions] == [
            ACTION_COPY, ACTION_FAVORITE, ACTION_EDIT_KEYWORDS, ACTION_REMOVE_HISTORY,
        ]
        assert entry.default_action().name == ACTION_COPY
        assert not entry.find_action(ACTION_COPY).prevent_hide
        assert entry.find_action(ACTION_FAVORITE).prevent_hide

        form = entry.find_action(ACTION_EDIT_KEYWORDS).form
        assert len(form) == 1
        assert form[0].key == KEYWORD_FIELD
        assert form[0].default_value == "sky, calm"

    def test_favorite_entry_offers_unfavorite(self, handler, store):
        seed(store, favorites=["#AABBCC"])

        entry = handler.handle("", "")[0]

        assert entry.find_action(ACTION_UNFAVORITE) is not None
        assert entry.find_action(ACTION_FAVORITE) is None

    def test_copy_uses_clipboard_and_notifies(self, handler, store, host, clipboard_runner):
        seed(store, history=["#112233"])

        entry = handler.handle("", "")[0]
        assert entry.default_action().invoke() is True

        assert clipboard_runner.calls[0]["path"] == "pbcopy"
        assert clipboard_runner.calls[0]["stdin"] == b"#112233"
        assert host.notifications == [("Copied #112233", False)]

    def test_copy_failure_is_notified(self, handler, store, host, clipboard_runner):
        seed(store, history=["#112233"])
        clipboard_runner.error = ProcessLaunchError("pbcopy: not found")

        entry = handler.handle("", "")[0]
        entry.default_action().invoke()

        assert host.notifications == [("Copy failed: pbcopy: not found", True)]

    def test_toggle_favorite_refreshes(self, handler, store, host):
        seed(store, history=["#112233"])

        entry = handler.handle("", "")[0]
        entry.find_action(ACTION_FAVORITE).invoke()

        assert host.refreshes == [True]
        refreshed = handler.handle("", "")[0]
        assert refreshed.group == GROUP_FAVORITES
        assert refreshed.find_action(ACTION_UNFAVORITE) is not None

    def test_edit_keywords_commits_form_value(self, handler, store, host):
        seed(store, history=["#112233"])

        entry = handler.handle("", "")[0]
        entry.find_action(ACTION_EDIT_KEYWORDS).invoke({KEYWORD_FIELD: " sky, calm ,sky "})

        assert handler.registry.keywords() == {"#112233": ["sky", "calm"]}
        assert host.refreshes == [True]
        assert titles(handler.handle("", "calm")) == ["#112233"]

    def test_edit_keywords_with_empty_form_clears(self, handler, store):
        seed(store, history=["#112233"], keywords={"#112233": ["sky"]})

        entry = handler.handle("", "")[0]
        entry.find_action(ACTION_EDIT_KEYWORDS).invoke({})

        assert handler.registry.keywords() == {}

    def test_remove_from_history_refreshes(self, handler, store, host):
        seed(store, history=["#112233", "#445566"], favorites=["#112233"])

        favorite = handler.handle("", "")[0]
        favorite.find_action(ACTION_REMOVE_HISTORY).invoke()

        assert handler.registry.history() == ["#445566"]
        assert handler.registry.favorites() == ["#112233"]
        assert host.refreshes == [True]
        assert handler.handle("", "")[0].find_action(ACTION_REMOVE_HISTORY) is None

    def test_unexpected_error_is_contained(self, handler, store, host, monkeypatch):
        seed(store, history=["#112233"])
        entry = handler.handle("", "")[0]

        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(handler.registry, "toggle_favorite", explode)

        assert entry.find_action(ACTION_FAVORITE).invoke() is False
        assert host.notifications == [(f"{ACTION_FAVORITE} failed: boom", True)]

    def test_rejected_write_is_notified_without_refresh(self, handler, store, host, monkeypatch):
        seed(store, history=["#112233"])
        entry = handler.handle("", "")[0]
        monkeypatch.setattr(store, "set", lambda key, value: False)

        assert entry.find_action(ACTION_FAVORITE).invoke() is False
        assert host.notifications == [(f"{ACTION_FAVORITE} failed: Could not save favorites", True)]
        assert host.refreshes == []
        assert handler.registry.favorites() == []


@pytest.mark.parametrize("query", ["", "AABB", "aabb", "#aabbcc"])
def test_hex_queries_are_case_insensitive(handler, store, query):
    seed(store, history=["#AABBCC"])
    assert titles(handler.handle("", query)) == ["#AABBCC"]
