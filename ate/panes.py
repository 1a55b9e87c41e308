"""Screen regions of the pager and the container that lays them out.

There are exactly four kinds of pane. MainPane owns the other three,
stacks them top to bottom and routes input: the focused pane sees a key
first and anything it leaves unhandled bubbles up to MainPane.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from wcwidth import wcswidth

from .attributes import DEFAULT_ATTRIBUTES, PaletteIndex
from .changes import Change, ClearScreen, CursorPosition, NewRow, SetAttributes, Text
from .commands import CommandRegistry, document_commands, main_commands, search_commands
from .constants import PagerConstants
from .keyboard import InputEvent, KeyEvent, Paste
from .render import render_lines
from .session import Session
from .surface import Surface

logger = logging.getLogger(__name__)


def _text_width(text: str) -> int:
    return max(0, wcswidth(text))


class Pane(ABC):
    """One rectangular region of the screen."""

    def __init__(self, commands: Optional[CommandRegistry] = None):
        self.commands = commands or CommandRegistry()

    @abstractmethod
    def height(self, session: Session) -> int:
        """Rows this pane wants given the session state."""

    @abstractmethod
    def render(self, session: Session, surface: Surface) -> Optional[CursorPosition]:
        """Draw onto a surface sized for this pane.

        Returns:
            Where to show the cursor, in pane coordinates, or None to hide it
        """

    def process_key(self, session: Session, event: KeyEvent) -> bool:
        return self.commands.execute(session, event)

    def process_paste(self, session: Session, paste: Paste) -> bool:
        return False


class DocumentPane(Pane):
    """The scrolled, reflowed document."""

    def __init__(self):
        super().__init__(document_commands())

    def height(self, session):
        return session.doc_height()

    def render(self, session, surface):
        width, height = surface.dimensions()
        view = session.view
        view.set_size(width, height)
        changes: list[Change] = [ClearScreen(), CursorPosition(0, 0)]
        changes += render_lines(session.document, view.lines, view.line, width, height, view.highlights)
        surface.add_changes(changes)
        return None


class SearchPane(Pane):
    """Matching links above a query prompt."""

    def __init__(self):
        super().__init__(search_commands())

    def height(self, session):
        return session.search_height()

    def process_paste(self, session, paste):
        session.search.push_str(paste.text, session.view)
        return True

    def _render_matches(self, session: Session, width: int, rows: int) -> list[Change]:
        """One display row per match, starting where the selection is visible."""
        search = session.search
        view = session.view
        if not search.matches or rows <= 0:
            return []
        selected = search.selected or 0
        first = max(0, selected - (rows - 1))
        link = search.document.links[search.matches[selected]]
        highlights = [(link.start, link.end)]
        changes: list[Change] = []
        for match in search.matches[first:first + rows]:
            line = view.find_line(search.document.links[match].start)
            changes += render_lines(session.document, view.lines, line, width, 1, highlights)
            changes.append(NewRow())
        return changes

    def render(self, session, surface):
        width, height = surface.dimensions()
        changes: list[Change] = [ClearScreen(), CursorPosition(0, 0)]
        if height > 3:
            changes += [Text(PagerConstants.SEARCH_SEPARATOR * width), NewRow()]
            changes += self._render_matches(session, width, height - 2)
        label = PagerConstants.SEARCH_PROMPT + session.search.query
        changes += [CursorPosition(0, height - 1), SetAttributes(DEFAULT_ATTRIBUTES), Text(label)]
        surface.add_changes(changes)
        return CursorPosition(min(_text_width(label), max(0, width - 1)), height - 1)


class StatusPane(Pane):
    """Last error on the left, progress on the right."""

    BACKGROUND = PaletteIndex(PagerConstants.STATUS_BACKGROUND_INDEX)

    def height(self, session):
        return PagerConstants.STATUS_ROWS

    def render(self, session, surface):
        width, _ = surface.dimensions()
        error = ' '.join((session.last_error or '').split())
        progress = f"{session.view.percent()}%"
        changes: list[Change] = [ClearScreen(self.BACKGROUND), Text(error)]
        progress_width = _text_width(progress)
        if width - (_text_width(error) + progress_width) >= 1:
            changes += [CursorPosition(width - progress_width, 0), Text(progress)]
        surface.add_changes(changes)
        return None


class MainPane(Pane):
    """Container for the document, search and status panes.

    Attributes:
        document_pane: Top region, focused when not searching
        search_pane: Middle region, shown and focused while searching
        status_pane: Bottom row
    """

    def __init__(self):
        super().__init__(main_commands())
        self.document_pane = DocumentPane()
        self.search_pane = SearchPane()
        self.status_pane = StatusPane()

    @property
    def children(self) -> list[Pane]:
        return [self.document_pane, self.search_pane, self.status_pane]

    def focused(self, session: Session) -> Pane:
        return self.search_pane if session.searching else self.document_pane

    def height(self, session):
        return session.term_height

    def dispatch(self, session: Session, event: InputEvent) -> None:
        """Deliver an input event to the focused pane, bubbling to this one."""
        session.last_error = None
        focused = self.focused(session)
        if isinstance(event, Paste):
            if not focused.process_paste(session, event):
                self.process_paste(session, event)
            return
        if not focused.process_key(session, event):
            if not self.process_key(session, event):
                logger.debug("Unhandled key %s", event.raw)

    def render(self, session, surface):
        """Lay the child panes out top to bottom and draw them."""
        width, height = surface.dimensions()
        session.term_height = height
        heights = [pane.height(session) for pane in self.children]
        cursor = None
        y = 0
        for pane, pane_height in zip(self.children, heights):
            pane_height = min(pane_height, height - y)
            if pane_height <= 0:
                continue
            pane_surface = Surface(width, pane_height)
            pane_cursor = pane.render(session, pane_surface)
            surface.draw_from(pane_surface, 0, y)
            if pane_cursor is not None:
                cursor = CursorPosition(pane_cursor.x, y + pane_cursor.y)
            y += pane_height
        surface.cursor = (cursor.x, cursor.y) if cursor is not None else None
        return cursor
