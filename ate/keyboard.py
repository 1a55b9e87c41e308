"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional, Union
from dataclasses import dataclass
from enum import Enum

from curtsies.events import PasteEvent


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'n', 'up', 'backspace')
    raw: str  # The raw token from curtsies
    is_alt: bool = False
    is_ctrl: bool = False
    is_sequence: bool = False


@dataclass
class Paste:
    """Text pasted with bracketed paste, delivered in one piece."""
    text: str


InputEvent = Union[KeyEvent, Paste]

SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert',
}


def key(value: str) -> KeyEvent:
    """Build the KeyEvent for a named special key or a regular character.

    Used where events are synthesized rather than read, e.g. startup keys
    and tests: key('enter'), key('n'), key(' ').
    """
    if value in SPECIAL_KEYS or value == 'escape':
        return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=value, is_sequence=True)
    return KeyEvent(key_type=KeyType.REGULAR, value=value, raw=value)


def ctrl(letter: str) -> KeyEvent:
    return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=f'<Ctrl-{letter}>', is_ctrl=True)


class KeyboardHandler:
    """Turns curtsies events from the terminal into KeyEvent and Paste."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Get the next input event, or None if nothing arrived in time."""
        event = self.terminal.get_key(timeout)
        if event is None:
            return None
        if isinstance(event, PasteEvent):
            return self.parse_paste(event)
        return self.parse_key(event)

    def parse_paste(self, event: PasteEvent) -> Paste:
        """Collect the printable keys of a paste into one string."""
        chars = []
        for token in event.events:
            parsed = self.parse_key(token)
            if parsed.key_type == KeyType.REGULAR:
                chars.append(parsed.value)
        return Paste(''.join(chars))

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent.

        Args:
            key: curtsies key name such as 'n', '<SPACE>', '<Ctrl-c>', '<UP>'

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # curtsies-style key names like '<UP>', '<Ctrl-c>', '<Esc+n>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-')
            base = parts[-1]
            mods = set(parts[:-1])
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=key_str)
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are what Enter sends
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
                return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
            if base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (10, 13):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if o in (8, 127):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if o == 27:
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if 1 <= o <= 26:
                return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + o - 1), raw=key_str, is_ctrl=True)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
