"""Tests for search motions (*, #, g*, g#, n, N)."""

from tests.fixtures.editor import make_doc, new_state
from vimsearch.engine import SearchDirection, SearchSettings, SearchState
from vimsearch.engine.motions import (
    MOTION_HANDLERS,
    get_motion_handler,
    motion_search_next,
    motion_search_partial_forward,
    motion_search_previous,
    motion_search_word_backward,
    motion_search_word_forward,
    search_current_selection,
)
from vimsearch.engine.state import VimMode


class TestSearchWordUnderCursor:
    """Tests for * and #."""

    def test_star_moves_to_next_occurrence(self):
        """* on the first foo lands on the second and reports its index."""
        doc = make_doc("foo bar foo baz foo")
        state = new_state()

        result = motion_search_word_forward(doc, state, 1)

        assert not result.failed
        assert result.position == (0, 8)
        assert state.status.text == "[2/3]"
        assert state.status.is_error is False

    def test_star_sets_last_search_register_and_history(self):
        doc = make_doc("foo bar foo")
        state = new_state()

        motion_search_word_forward(doc, state, 1)

        last = state.search.last_search
        assert last is not None
        assert last.direction is SearchDirection.FORWARD
        assert last.search_string == "\\<foo\\>"
        assert state.registers.get("/").as_text() == "\\<foo\\>"
        assert state.search.history.entries == ("\\<foo\\>",)
        assert state.search.highlight is True

    def test_star_with_count(self):
        doc = make_doc("foo bar foo baz foo")
        state = new_state()

        result = motion_search_word_forward(doc, state, 2)

        assert result.position == (0, 16)
        assert state.status.text == "[3/3]"

    def test_star_wraps_to_only_match(self):
        doc = make_doc("foo foobar")
        state = new_state()

        result = motion_search_word_forward(doc, state, 1)

        assert result.position == (0, 0)
        assert state.status.text == "[1/1]"

    def test_star_from_middle_of_word(self):
        doc = make_doc("foo bar foo", cursor=(0, 1))
        state = new_state()

        result = motion_search_word_forward(doc, state, 1)

        assert result.position == (0, 8)

    def test_star_skips_blanks_to_next_word(self):
        doc = make_doc("   bar x bar", cursor=(0, 0))
        state = new_state()

        result = motion_search_word_forward(doc, state, 1)

        assert not result.failed
        assert state.search.last_search.search_string == "\\<bar\\>"

    def test_star_on_punctuation_is_not_exact(self):
        doc = make_doc("a -> b -> c")
        state = new_state()
        doc.move_cursor((0, 2))

        result = motion_search_word_forward(doc, state, 1)

        assert result.position == (0, 7)
        assert state.search.last_search.pattern.is_exact is False

    def test_no_string_under_cursor(self):
        """A blank line tail fails with E348 and leaves the last search alone."""
        doc = make_doc("foo   ", cursor=(0, 4))
        state = new_state()

        result = motion_search_word_forward(doc, state, 1)

        assert result.failed
        assert state.status.text == "E348: No string under cursor"
        assert state.status.is_error is True
        assert state.search.last_search is None

    def test_hash_moves_to_previous_occurrence(self):
        doc = make_doc("foo bar foo baz foo", cursor=(0, 9))
        state = new_state()

        result = motion_search_word_backward(doc, state, 1)

        assert result.position == (0, 0)
        assert state.status.text == "[1/3]"
        assert state.search.last_search.direction is SearchDirection.BACKWARD

    def test_hash_wraps_to_last(self):
        doc = make_doc("foo bar foo baz foo")
        state = new_state()

        result = motion_search_word_backward(doc, state, 1)

        assert result.position == (0, 16)

    def test_star_ignores_smartcase(self):
        doc = make_doc("Foo foo")
        state = new_state(ignorecase=True, smartcase=True)

        result = motion_search_word_forward(doc, state, 1)

        assert result.position == (0, 4)
        assert state.status.text == "[2/2]"

    def test_partial_word_search(self):
        doc = make_doc("foo foobar")
        state = new_state()

        result = motion_search_partial_forward(doc, state, 1)

        assert result.position == (0, 4)
        assert state.search.last_search.search_string == "foo"


class TestSearchSelection:
    """Tests for * and # on a visual selection."""

    def test_selection_search_forward(self):
        doc = make_doc("a.b x a.b")
        state = new_state(visualstar=True)
        state.start_visual((0, 0))
        doc.set_selection((0, 0), (0, 2))

        result = search_current_selection(doc, state, 1, SearchDirection.FORWARD)

        assert result.position == (0, 6)
        assert state.mode == VimMode.NORMAL
        assert state.search.last_search.search_string == "a\\.b"

    def test_selection_search_backward(self):
        doc = make_doc("a.b x a.b", cursor=(0, 6))
        state = new_state(visualstar=True)
        state.start_visual((0, 6))
        doc.set_selection((0, 6), (0, 8))

        result = search_current_selection(doc, state, 1, SearchDirection.BACKWARD)

        assert result.position == (0, 0)


class TestRepeatSearch:
    """Tests for n and N."""

    def test_no_previous_search(self):
        doc = make_doc("foo")
        state = new_state()

        result = motion_search_next(doc, state, 1)

        assert result.failed
        assert state.status.text == "E35: No previous regular expression"

    def test_next_and_previous(self):
        doc = make_doc("foo bar foo baz foo")
        state = new_state()
        state.search.replace_last_search(
            SearchState.create(SearchDirection.FORWARD, (0, 0), "foo", state.settings)
        )

        assert motion_search_next(doc, state, 1).position == (0, 8)
        assert motion_search_next(doc, state, 2).position == (0, 16)
        assert motion_search_previous(doc, state, 1).position == (0, 16)
        assert state.status.text == "[3/3]"

    def test_previous_of_backward_search_goes_forward(self):
        doc = make_doc("foo bar foo", cursor=(0, 0))
        state = new_state()
        state.search.replace_last_search(
            SearchState.create(SearchDirection.BACKWARD, (0, 0), "foo", state.settings)
        )

        assert motion_search_previous(doc, state, 1).position == (0, 8)
        assert motion_search_next(doc, state, 1).position == (0, 8)

    def test_not_found_reports_bottom(self):
        doc = make_doc("foo")
        state = new_state()
        state.search.replace_last_search(
            SearchState.create(SearchDirection.FORWARD, (0, 0), "zzz", state.settings)
        )

        result = motion_search_next(doc, state, 1)

        assert result.failed
        assert state.status.text == "E385: Search hit BOTTOM without match for: zzz"

    def test_not_found_backward_reports_top(self):
        doc = make_doc("foo")
        state = new_state()
        state.search.replace_last_search(
            SearchState.create(SearchDirection.FORWARD, (0, 0), "zzz", state.settings)
        )

        motion_search_previous(doc, state, 1)

        assert state.status.text == "E384: Search hit TOP without match for: zzz"

    def test_next_turns_highlight_back_on(self):
        doc = make_doc("foo foo")
        state = new_state()
        state.search.replace_last_search(
            SearchState.create(SearchDirection.FORWARD, (0, 0), "foo", state.settings)
        )
        state.search.highlight = False

        motion_search_next(doc, state, 1)

        assert state.search.highlight is True


class TestMotionRegistry:
    """Tests for handler lookup."""

    def test_all_keymap_handlers_are_registered(self):
        from vimsearch.engine import get_vim_keymap

        config = get_vim_keymap().get_config()
        for bindings in (config.motions, config.visual_motions):
            for binding in bindings.values():
                assert binding.handler in MOTION_HANDLERS

    def test_unknown_handler(self):
        assert get_motion_handler("motion_nope") is None
