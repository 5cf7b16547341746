"""Tests for VimEngine key routing."""

import asyncio

import pytest

from tests.fixtures.editor import FakeClipboard, make_engine, press
from vimsearch.engine import (
    CommandAction,
    SearchDirection,
    SearchSettings,
    SearchState,
    VimMode,
)
from vimsearch.engine.completion import PathDetails


class TreeLister:
    """Lister over a fixed set of entries, or failing when ``error`` is set."""

    def __init__(self, entries=None, error=None):
        self.entries = entries or []
        self.error = error

    def resolve(self, partial_path: str) -> PathDetails:
        return PathDetails(directory=".", base_name=partial_path, partial_path=partial_path)

    async def list(self, directory: str, include_dot_entries: bool = False) -> list[str]:
        if self.error is not None:
            raise self.error
        return list(self.entries)


def set_last_search(engine, needle, direction=SearchDirection.FORWARD):
    state = engine.state
    state.search.replace_last_search(SearchState.create(direction, (0, 0), needle, state.settings))


class TestSearchFromCursor:
    """Tests for * and # through the engine."""

    @pytest.mark.asyncio
    async def test_star_moves_cursor_and_reports(self):
        engine = make_engine("foo bar foo baz foo")

        result = await press(engine, "*")

        assert result.consumed
        assert engine.document.cursor_location == (0, 8)
        assert result.message == "[2/3]"
        assert result.error is False

    @pytest.mark.asyncio
    async def test_count_prefix(self):
        engine = make_engine("foo bar foo baz foo")

        await press(engine, "2", "*")

        assert engine.document.cursor_location == (0, 16)

    @pytest.mark.asyncio
    async def test_hash_then_n_keeps_direction(self):
        engine = make_engine("foo bar foo baz foo", cursor=(0, 16))

        await press(engine, "#")
        assert engine.document.cursor_location == (0, 8)

        await press(engine, "n")
        assert engine.document.cursor_location == (0, 0)

        await press(engine, "N")
        assert engine.document.cursor_location == (0, 8)

    @pytest.mark.asyncio
    async def test_partial_word_search(self):
        engine = make_engine("foo foobar")

        await press(engine, "g", "*")

        assert engine.document.cursor_location == (0, 4)

    @pytest.mark.asyncio
    async def test_error_is_returned(self):
        engine = make_engine("    ")

        result = await press(engine, "*")

        assert result.message == "E348: No string under cursor"
        assert result.error is True
        assert engine.document.cursor_location == (0, 0)

    @pytest.mark.asyncio
    async def test_n_without_previous_search(self):
        engine = make_engine("foo")

        result = await press(engine, "n")

        assert result.message == "E35: No previous regular expression"


class TestSearchPrompt:
    """Tests for the / and ? prompts."""

    @pytest.mark.asyncio
    async def test_open_type_and_confirm(self):
        engine = make_engine("foo bar baz")

        result = await press(engine, "/")
        assert result.show_command_line
        assert result.command_text == "/"
        assert engine.mode == VimMode.SEARCH

        await press(engine, "b", "a", "z")
        assert engine.search_preview.start == (0, 8)

        result = await press(engine, "enter")

        assert engine.mode == VimMode.NORMAL
        assert engine.command_line is None
        assert engine.document.cursor_location == (0, 8)
        assert result.message == "[1/1]"
        assert [m.start for m in engine.highlighted_matches()] == [(0, 8)]

    @pytest.mark.asyncio
    async def test_backward_prompt(self):
        engine = make_engine("foo bar foo", cursor=(0, 8))

        await press(engine, "?", "f", "o", "o", "enter")

        assert engine.document.cursor_location == (0, 0)
        assert engine.state.search.last_search.direction is SearchDirection.BACKWARD

    @pytest.mark.asyncio
    async def test_escape_cancels_without_side_effects(self):
        engine = make_engine("foo bar")

        await press(engine, "/", "b", "a", "escape")

        assert engine.mode == VimMode.NORMAL
        assert engine.document.cursor_location == (0, 0)
        assert engine.state.search.last_search is None
        assert len(engine.state.search.history) == 0

    @pytest.mark.asyncio
    async def test_backspace_on_empty_prompt_cancels(self):
        engine = make_engine("foo")

        await press(engine, "/", "x", "backspace")
        assert engine.mode == VimMode.SEARCH

        await press(engine, "backspace")
        assert engine.mode == VimMode.NORMAL

    @pytest.mark.asyncio
    async def test_history_recall(self):
        engine = make_engine("foo bar")

        await press(engine, "/", "b", "a", "r", "enter", "/", "up")

        assert engine.command_line.text == "bar"

    @pytest.mark.asyncio
    async def test_ctrl_l_appends_match_char(self):
        engine = make_engine("xx foobar")

        await press(engine, "/", "f", "o", "o", "ctrl+l")

        assert engine.command_line.text == "foob"

    @pytest.mark.asyncio
    async def test_search_extends_visual_selection(self):
        engine = make_engine("foo bar foo")

        await press(engine, "v", "/", "b", "a", "r", "enter")

        assert engine.mode == VimMode.VISUAL
        assert engine.state.visual_anchor == (0, 0)
        assert engine.document.selection_range == ((0, 0), (0, 4))

    @pytest.mark.asyncio
    async def test_update_callback_includes_prefix(self):
        engine = make_engine("foo")
        updates = []
        engine.set_command_update_callback(lambda text, cursor: updates.append((text, cursor)))

        await press(engine, "/", "f")

        assert updates == [("/f", 2)]


class TestOperatorsWithSearch:
    """Tests for d/, dn, dgn and cgn."""

    @pytest.mark.asyncio
    async def test_delete_to_search_match(self):
        engine = make_engine("foo bar")

        await press(engine, "d", "/", "b", "a", "r", "enter")

        assert engine.document.text == "bar"
        assert engine.mode == VimMode.NORMAL
        assert engine.state.pending_operator is None

    @pytest.mark.asyncio
    async def test_cancelled_search_cancels_operator(self):
        engine = make_engine("foo bar")

        await press(engine, "d", "/", "b", "escape")

        assert engine.document.text == "foo bar"
        assert engine.mode == VimMode.NORMAL
        assert engine.state.pending_operator is None

    @pytest.mark.asyncio
    async def test_delete_to_next_match(self):
        engine = make_engine("x foo y foo")

        await press(engine, "/", "f", "o", "o", "enter")
        assert engine.document.cursor_location == (0, 2)

        await press(engine, "d", "n")

        assert engine.document.text == "x foo"

    @pytest.mark.asyncio
    async def test_delete_match(self):
        engine = make_engine("foo bar foo", cursor=(0, 4))
        set_last_search(engine, "foo")

        await press(engine, "d", "g", "n")

        assert engine.document.text == "foo bar "
        assert engine.state.registers.get('"').as_text() == "foo"

    @pytest.mark.asyncio
    async def test_change_match_enters_insert(self):
        engine = make_engine("foo bar foo", cursor=(0, 4))
        set_last_search(engine, "foo")

        result = await press(engine, "c", "g", "n")

        assert result.enter_insert
        assert engine.mode == VimMode.INSERT
        assert engine.document.text == "foo bar "

    @pytest.mark.asyncio
    async def test_dgn_without_last_search_cancels(self):
        engine = make_engine("foo bar")

        await press(engine, "d", "g", "n")

        assert engine.document.text == "foo bar"
        assert engine.mode == VimMode.NORMAL


class TestOperatorTargets:
    """Tests for what d can and cannot act on."""

    @pytest.mark.asyncio
    async def test_doubled_operator_is_not_a_motion(self):
        engine = make_engine("one\ntwo")

        await press(engine, "d", "d")

        assert engine.document.text == "one\ntwo"
        assert engine.mode == VimMode.NORMAL
        assert engine.state.pending_operator is None

    @pytest.mark.asyncio
    async def test_visual_line_delete_removes_whole_lines(self):
        engine = make_engine("one\ntwo\nthree", cursor=(1, 1))

        await press(engine, "V", "d")

        assert engine.document.text == "one\nthree"
        assert engine.state.registers.get('"').as_text() == "two\n"
        assert engine.mode == VimMode.NORMAL


class TestSearchObjectSelection:
    """Tests for gn / gN outside operators."""

    @pytest.mark.asyncio
    async def test_gn_starts_visual_mode(self):
        engine = make_engine("foo bar foo", cursor=(0, 4))
        set_last_search(engine, "foo")
        modes = []
        engine.set_mode_callback(modes.append)

        await press(engine, "g", "n")

        assert engine.mode == VimMode.VISUAL
        assert modes == [VimMode.VISUAL]
        assert engine.document.selection_range == ((0, 8), (0, 10))

    @pytest.mark.asyncio
    async def test_visual_delete_of_match(self):
        engine = make_engine("foo bar foo", cursor=(0, 4))
        set_last_search(engine, "foo")

        await press(engine, "g", "N", "d")

        assert engine.document.text == " bar foo"
        assert engine.mode == VimMode.NORMAL


class TestVisualStar:
    """Tests for * in visual mode."""

    @pytest.mark.asyncio
    async def test_visualstar_searches_selection(self):
        engine = make_engine("a.b x a.b", settings=SearchSettings(visualstar=True))

        await press(engine, "v")
        engine.document.move_cursor((0, 2), select=True)
        await press(engine, "*")

        assert engine.mode == VimMode.NORMAL
        assert engine.document.cursor_location == (0, 6)
        assert engine.state.search.last_search.search_string == "a\\.b"

    @pytest.mark.asyncio
    async def test_without_visualstar_searches_word(self):
        engine = make_engine("foo x foo")

        await press(engine, "v", "*")

        assert engine.mode == VimMode.VISUAL
        assert engine.state.search.last_search.search_string == "\\<foo\\>"
        assert engine.document.selection_range == ((0, 0), (0, 6))


class TestCommandPrompt:
    """Tests for the : prompt."""

    @pytest.mark.asyncio
    async def test_write(self):
        engine = make_engine("foo")

        result = await press(engine, ":", "w", "enter")

        assert result.command_action == CommandAction.WRITE
        assert result.message == "Written"
        assert engine.mode == VimMode.NORMAL
        assert engine.state.command_history.entries == ("w",)

    @pytest.mark.asyncio
    async def test_edit_argument(self):
        engine = make_engine("foo")

        result = await press(engine, ":", *"e a.txt", "enter")

        assert result.command_action == CommandAction.EDIT
        assert result.command_argument == "a.txt"

    @pytest.mark.asyncio
    async def test_unknown_command(self):
        engine = make_engine("foo")

        result = await press(engine, ":", "z", "z", "enter")

        assert result.error
        assert result.message == "E492: Not an editor command: zz"

    @pytest.mark.asyncio
    async def test_nohlsearch_hides_matches(self):
        engine = make_engine("foo foo")

        await press(engine, "*")
        assert engine.highlighted_matches()

        result = await press(engine, ":", "n", "o", "h", "enter")

        assert result.command_action == CommandAction.NO_HIGHLIGHT
        assert engine.highlighted_matches() == []

        await press(engine, "n")
        assert engine.highlighted_matches()

    @pytest.mark.asyncio
    async def test_insert_register(self):
        engine = make_engine("foo")
        engine.state.registers.set("a", "notes.txt")

        await press(engine, ":", "e", " ", "ctrl+r", "a")

        assert engine.command_line.text == "e notes.txt"

    @pytest.mark.asyncio
    async def test_insert_empty_register_reports(self):
        engine = make_engine("foo")

        result = await press(engine, ":", "ctrl+r", "q")

        assert result.message == "E353: Nothing in register q"
        assert engine.mode == VimMode.COMMAND

    @pytest.mark.asyncio
    async def test_insert_word_under_cursor(self):
        engine = make_engine("alpha beta")

        await press(engine, "/", "ctrl+r", "ctrl+w")

        assert engine.command_line.text == "alpha"

    @pytest.mark.asyncio
    async def test_tab_completes_command(self):
        engine = make_engine("foo")

        await press(engine, ":", "n", "o", "tab")

        assert engine.command_line.display == ":nohlsearch"

    @pytest.mark.asyncio
    async def test_tab_completes_path(self):
        engine = make_engine("foo", lister=TreeLister(["main.py", "mod/"]))

        await press(engine, ":", "e", " ", "m", "tab")
        assert engine.command_line.text == "e main.py"

        await press(engine, "tab")
        assert engine.command_line.text == "e mod/"

    @pytest.mark.asyncio
    async def test_repeated_tab_cycles(self):
        engine = make_engine("foo")

        await press(engine, ":", "e", "tab", "tab")

        assert engine.command_line.text == "enew"

    @pytest.mark.parametrize(
        "keys",
        [
            ("ctrl+r", "!"),
            ("ctrl+r", "a"),
            ("ctrl+r", "f5"),
            ("f5",),
        ],
    )
    @pytest.mark.asyncio
    async def test_keys_that_change_nothing_end_the_cycle(self, keys):
        """Tab after any other key looks candidates up afresh instead of cycling."""
        engine = make_engine("foo")

        await press(engine, ":", "e", "tab")
        assert engine.command_line.text == "edit"

        await press(engine, *keys, "tab")

        assert engine.command_line.text == "edit"

    @pytest.mark.asyncio
    async def test_listing_error_leaves_buffer(self):
        engine = make_engine("foo", lister=TreeLister(error=PermissionError("denied")))

        result = await press(engine, ":", "e", " ", "m", "tab")

        assert result.consumed
        assert engine.mode == VimMode.COMMAND
        assert engine.command_line.text == "e m"

    @pytest.mark.asyncio
    async def test_tab_is_not_bound_in_search_prompt(self):
        engine = make_engine("foo")

        await press(engine, "/", "f", "tab")

        assert engine.command_line.text == "f"

    @pytest.mark.asyncio
    async def test_cancel_during_paste(self):
        """Escape while the clipboard is read closes the prompt for good."""
        clipboard = FakeClipboard("late")
        clipboard.started = asyncio.Event()
        clipboard.release = asyncio.Event()
        engine = make_engine("foo", clipboard=clipboard)

        await press(engine, ":")
        task = asyncio.create_task(engine.handle_key("ctrl+v"))
        await clipboard.started.wait()
        await press(engine, "escape")
        clipboard.release.set()
        result = await task

        assert result.consumed
        assert engine.mode == VimMode.NORMAL
        assert engine.command_line is None

    @pytest.mark.asyncio
    async def test_paste(self):
        engine = make_engine("foo", clipboard=FakeClipboard("a.txt"))

        await press(engine, ":", "e", " ", "ctrl+v")

        assert engine.command_line.text == "e a.txt"

    @pytest.mark.asyncio
    async def test_command_from_visual_exits_visual(self):
        engine = make_engine("foo")

        await press(engine, "v", ":", "w", "enter")

        assert engine.mode == VimMode.NORMAL
        assert engine.state.visual_anchor is None


class TestInsertMode:
    """Tests for insert mode passthrough."""

    @pytest.mark.asyncio
    async def test_keys_pass_through(self):
        engine = make_engine("foo")

        result = await press(engine, "i")
        assert result.enter_insert
        assert (await press(engine, "x")).consumed is False

        await press(engine, "escape")
        assert engine.mode == VimMode.NORMAL

    @pytest.mark.asyncio
    async def test_unbound_normal_key(self):
        engine = make_engine("foo")

        assert (await press(engine, "z")).consumed is False
