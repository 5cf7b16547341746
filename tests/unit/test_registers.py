"""Tests for the register store."""

from vimsearch.engine import RegisterMode, RegisterStore
from vimsearch.engine.registers import RecordedKeys, Register


class TestRegisterStore:
    """Tests for RegisterStore."""

    def test_unset_register_is_none(self):
        assert RegisterStore().get("a") is None

    def test_uppercase_appends(self):
        registers = RegisterStore()
        registers.set("a", "foo")
        registers.set("A", "bar")
        assert registers.get("a").as_text() == "foobar"

    def test_readonly_registers_reject_set(self):
        registers = RegisterStore()
        registers.set("/", "foo")
        assert registers.get("/") is None
        registers.set_readonly("/", "foo")
        assert registers.get("/").as_text() == "foo"

    def test_is_valid(self):
        assert RegisterStore.is_valid("a")
        assert RegisterStore.is_valid('"')
        assert RegisterStore.is_valid("/")
        assert not RegisterStore.is_valid("!")
        assert not RegisterStore.is_valid("ab")

    def test_yank_updates_unnamed_and_zero(self):
        registers = RegisterStore()
        registers.yank("foo")
        assert registers.get('"').as_text() == "foo"
        assert registers.get("0").as_text() == "foo"
        assert registers.get("-") is None

    def test_small_delete(self):
        registers = RegisterStore()
        registers.yank("foo", is_delete=True)
        assert registers.get("-").as_text() == "foo"
        assert registers.get("0") is None

    def test_yank_to_named_register(self):
        registers = RegisterStore()
        registers.yank("foo", register="b")
        assert registers.get("b").as_text() == "foo"


class TestRegister:
    """Tests for register text rendering."""

    def test_list_content(self):
        register = Register(["a", "b"], RegisterMode.CHARACTER_WISE)
        assert register.as_text() == "a\nb"

    def test_linewise_content(self):
        register = Register("a", RegisterMode.LINE_WISE)
        assert register.linewise
        assert register.as_text() == "a\n"

    def test_recorded_keys(self):
        keys = RecordedKeys([["/", "f"], ["enter"]])
        assert keys.keystrokes() == ["/", "f", "enter"]
        assert Register(keys).as_text() == "/\nf\nenter"
