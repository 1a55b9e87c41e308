"""Test keyboard input handling."""

import pytest
from curtsies.events import PasteEvent

from ate.keyboard import KeyboardHandler, KeyEvent, KeyType, Paste, ctrl, key


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, token):
        self._key_queue.append(token)


@pytest.fixture
def terminal():
    return MockTerminal()


@pytest.fixture
def handler(terminal):
    return KeyboardHandler(terminal)


@pytest.mark.parametrize("token, key_type, value", [
    ("n", KeyType.REGULAR, "n"),
    ("N", KeyType.REGULAR, "N"),
    ("/", KeyType.REGULAR, "/"),
    ("<SPACE>", KeyType.REGULAR, " "),
    (" ", KeyType.REGULAR, " "),
    ("<UP>", KeyType.SPECIAL, "up"),
    ("<DOWN>", KeyType.SPECIAL, "down"),
    ("<PAGEDOWN>", KeyType.SPECIAL, "page_down"),
    ("<Ctrl-j>", KeyType.SPECIAL, "enter"),
    ("\n", KeyType.SPECIAL, "enter"),
    ("<BACKSPACE>", KeyType.SPECIAL, "backspace"),
    ("\x7f", KeyType.SPECIAL, "backspace"),
    ("<ESC>", KeyType.SPECIAL, "escape"),
    ("\x1b", KeyType.SPECIAL, "escape"),
    ("<Ctrl-c>", KeyType.CTRL, "c"),
    ("\x03", KeyType.CTRL, "c"),
    ("<Esc+n>", KeyType.ALT, "n"),
    ("<", KeyType.REGULAR, "<"),
    ("宽", KeyType.REGULAR, "宽"),
])
def test_parse_key(handler, token, key_type, value):
    event = handler.parse_key(token)
    assert event.key_type == key_type
    assert event.value == value
    assert event.raw == token


def test_get_event_returns_none_without_input(handler):
    assert handler.get_event(timeout=0) is None


def test_get_event_parses_queued_key(handler, terminal):
    terminal.add_key("<UP>")
    event = handler.get_event()
    assert isinstance(event, KeyEvent)
    assert event.value == "up"
    assert event.is_sequence


def test_paste_collects_characters(handler, terminal):
    paste = PasteEvent()
    paste.events.extend(["h", "i", "<SPACE>", "x", "<Ctrl-j>"])
    terminal.add_key(paste)
    assert handler.get_event() == Paste("hi x")


def test_synthesized_keys():
    assert key("enter") == KeyEvent(KeyType.SPECIAL, "enter", "enter", is_sequence=True)
    assert key("n").key_type == KeyType.REGULAR
    assert key("escape").key_type == KeyType.SPECIAL
    assert ctrl("c") == KeyEvent(KeyType.CTRL, "c", "<Ctrl-c>", is_ctrl=True)
