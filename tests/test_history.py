"""Tests for PasswordHistory."""

from __future__ import annotations

import pytest

from keysmith.history import DEFAULT_HISTORY_SIZE, PasswordHistory, truncate_for_display


class TestPasswordHistory:
    def test_newest_first(self):
        history = PasswordHistory()
        history.add("one")
        history.add("two")
        assert list(history) == ["two", "one"]

    def test_duplicates_ignored(self):
        history = PasswordHistory()
        assert history.add("same")
        history.add("other")
        assert not history.add("same")
        assert history.items() == ["other", "same"]

    def test_bounded(self):
        history = PasswordHistory()
        for i in range(DEFAULT_HISTORY_SIZE + 5):
            history.add(f"pw{i}")
        assert len(history) == DEFAULT_HISTORY_SIZE
        assert history.items()[0] == f"pw{DEFAULT_HISTORY_SIZE + 4}"
        assert "pw0" not in history

    def test_remove_and_clear(self):
        history = PasswordHistory()
        for pw in ("a", "b", "c"):
            history.add(pw)
        assert history.remove(1) == "b"
        assert history.items() == ["c", "a"]
        history.clear()
        assert len(history) == 0

    def test_items_is_a_copy(self):
        history = PasswordHistory()
        history.add("x")
        history.items().append("y")
        assert len(history) == 1

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            PasswordHistory(max_size=0)


class TestTruncate:
    def test_short_unchanged(self):
        assert truncate_for_display("a" * 30) == "a" * 30

    def test_long_truncated(self):
        assert truncate_for_display("b" * 31) == "b" * 30 + "..."
