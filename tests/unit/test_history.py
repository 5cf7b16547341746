"""Tests for search/command history recall."""

from vimsearch.engine import History, HistoryCursor


class TestHistory:
    """Tests for the shared history list."""

    def test_add_appends(self):
        history = History()
        history.add("foo")
        history.add("bar")
        assert history.entries == ("foo", "bar")

    def test_empty_and_repeated_entries_are_skipped(self):
        history = History(["foo"])
        history.add("")
        history.add("foo")
        assert len(history) == 1


class TestHistoryCursor:
    """Tests for recall bounds."""

    def test_older_walks_back_and_stops_at_oldest(self):
        cursor = HistoryCursor(History(["one", "two"]))
        assert cursor.older("typed") == "two"
        assert cursor.older("two") == "one"
        assert cursor.older("one") is None
        assert cursor.index == 0

    def test_newer_restores_typed_text(self):
        """Moving past the newest entry gives back what was typed before recall."""
        cursor = HistoryCursor(History(["one", "two"]))
        cursor.older("typed")
        cursor.older("two")
        assert cursor.newer() == "two"
        assert cursor.newer() == "typed"
        assert cursor.newer() is None
        assert cursor.index == 2

    def test_empty_history(self):
        cursor = HistoryCursor(History())
        assert cursor.older("x") is None
        assert cursor.newer() is None
        assert cursor.index == 0

    def test_index_stays_in_bounds(self):
        history = History(["a", "b", "c"])
        cursor = HistoryCursor(history)
        for step in ["older"] * 5 + ["newer"] * 7 + ["older"] * 2:
            if step == "older":
                cursor.older("typed")
            else:
                cursor.newer()
            assert 0 <= cursor.index <= len(history)
