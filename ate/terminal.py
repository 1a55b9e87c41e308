"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
from typing import IO, Optional

import blessed
from curtsies import Input

from .attributes import (
    Blink,
    CellAttributes,
    Color,
    Intensity,
    PaletteIndex,
    TrueColor,
    Underline,
)
from .surface import Cell, Surface

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Draws surfaces with Blessed and reads keys from the controlling tty.

    stdin carries the document, so keyboard input is read from tty_path
    instead.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, tty_path: str = '/dev/tty'):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.tty_path = tty_path
        self.is_fullscreen = False
        self._tty: Optional[IO[str]] = None
        self._curtsies_input: Optional[Input] = None
        # Virtual screen state for minimal updates
        self._last_rows: list[str] | None = None

    def setup(self):
        """Enter fullscreen mode and start reading keys from the tty."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            self._tty = open(self.tty_path)
            # Enter cbreak mode immediately so reads work
            self._curtsies_input = Input(in_stream=self._tty, keynames='curtsies')
            self._curtsies_input.__enter__()
            logger.debug("Reading keys from %s", self.tty_path)

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        try:
            if self._curtsies_input is not None:
                self._curtsies_input.__exit__(None, None, None)
        finally:
            self._curtsies_input = None
            if self._tty is not None:
                self._tty.close()
                self._tty = None
            if self.is_fullscreen:
                print(self.term.normal + self.term.exit_fullscreen, end='')
                print(self.term.normal_cursor, end='', flush=True)
                self.is_fullscreen = False

    def fileno(self) -> int:
        """File descriptor to select on for key input."""
        if self._tty is None:
            raise RuntimeError("Terminal input is not set up")
        return self._tty.fileno()

    def invalidate_frame(self) -> None:
        """Invalidate cached frame so the next present does a full clear."""
        self._last_rows = None

    def _color(self, color: Color, background: bool) -> str:
        if isinstance(color, PaletteIndex):
            return self.term.on_color(color.index) if background else self.term.color(color.index)
        if isinstance(color, TrueColor):
            if background:
                return self.term.on_color_rgb(color.red, color.green, color.blue)
            return self.term.color_rgb(color.red, color.green, color.blue)
        return ''

    def _sgr(self, attrs: CellAttributes) -> str:
        """Sequence that switches from any state to attrs."""
        # Reset then enable desired to avoid sticky state issues
        out = [self.term.normal]
        if attrs.intensity == Intensity.BOLD:
            out.append(self.term.bold)
        elif attrs.intensity == Intensity.HALF:
            out.append(self.term.dim)
        if attrs.italic:
            out.append(self.term.italic)
        if attrs.underline != Underline.NONE:
            out.append(self.term.underline)
        if attrs.blink != Blink.NONE:
            out.append(self.term.blink)
        if attrs.reverse:
            out.append(self.term.reverse)
        if attrs.invisible:
            out.append(self.term.invis)
        if attrs.strikethrough:
            out.append(self.term.smxx)
        out.append(self._color(attrs.foreground, background=False))
        out.append(self._color(attrs.background, background=True))
        return ''.join(out)

    def _compose_row(self, cells: list[Cell]) -> str:
        out = []
        active: Optional[CellAttributes] = None
        for cell in cells:
            if not cell.text:
                # Covered by the wide cluster before it
                continue
            if cell.attributes != active:
                out.append(self._sgr(cell.attributes))
                active = cell.attributes
            out.append(cell.text)
        out.append(self.term.normal)
        return ''.join(out)

    def present(self, surface: Surface) -> None:
        """Diff surface against last frame and write only changed rows.

        Falls back to a full clear on first paint or when geometry changes.
        """
        rows = [self._compose_row(cells) for cells in surface.screen_cells()]
        if self._last_rows is None or len(self._last_rows) != len(rows):
            print(self.term.normal + self.term.home + self.term.clear, end='')
            self._last_rows = ['' for _ in rows]

        for y, row in enumerate(rows):
            if row != self._last_rows[y]:
                print(self.term.move_yx(y, 0) + row, end='')
                self._last_rows[y] = row

        if surface.cursor is not None:
            x, y = surface.cursor
            print(self.term.move_yx(y, x) + self.term.normal_cursor, end='', flush=True)
        else:
            print(self.term.hide_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single input event from the tty.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name or PasteEvent, or None on timeout
        """
        if self._curtsies_input is None:
            return None
        # Keys curtsies has already read come back without touching the tty
        return self._curtsies_input.send(timeout)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
