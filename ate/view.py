"""Scroll position, highlight and reflow cache for a document."""

import logging
from bisect import bisect_right

from .constants import PagerConstants
from .document import Document
from .flow import Line, flow

logger = logging.getLogger(__name__)


class DocumentView:
    """Which part of a document is on screen.

    Attributes:
        line: Index into lines of the first displayed row
        width: Columns the lines were flowed at
        height: Rows in the document pane
        highlights: Byte ranges whose reverse video is inverted
        lines: Rows of the document at width; replaced whole on reflow
    """

    CONTEXT_LINES: int = PagerConstants.CONTEXT_LINES

    def __init__(self, document: Document, width: int, height: int):
        self.document = document
        self.width = width
        self.height = height
        self.line = 0
        self.highlights: list[tuple[int, int]] = []
        self.lines: list[Line] = flow(document, width)

    @property
    def last_page_line(self) -> int:
        """First row of the last full page, or 0 for a short document."""
        return max(0, len(self.lines) - self.height)

    @property
    def first_visible_byte(self) -> int:
        return self.lines[self.line].start_byte

    def backward(self, lines: int) -> None:
        self.line = max(0, self.line - lines)

    def forward(self, lines: int) -> None:
        self.line = min(self.last_page_line, self.line + max(1, lines))

    def set_size(self, width: int, height: int) -> None:
        """Resize the page, reflowing when the width changes.

        The first visible row keeps showing the same text across a reflow:
        its start byte is looked up in the new rows.
        """
        self.height = height
        if width == self.width:
            return
        first_byte = self.first_visible_byte
        self.width = width
        self.lines = flow(self.document, width)
        self.line = min(self.find_line(first_byte), self.last_page_line)
        logger.debug("Reflowed to width %d: %d rows, line %d", width, len(self.lines), self.line)

    def find_line(self, byte: int) -> int:
        """Index of the row containing byte."""
        return bisect_right(self.lines, byte, key=lambda l: l.start_byte) - 1

    def scroll_to_byte(self, byte: int) -> None:
        self.line = self.find_line(byte)

    def highlight(self, start: int, end: int) -> None:
        """Highlight [start, end) and scroll it into view."""
        self.highlights = [(start, end)]
        self._make_line_visible(self.find_line(start))

    def _make_line_visible(self, line: int) -> None:
        logger.debug("Current %d New %d, Height %d", self.line, line, self.height)
        context = self.CONTEXT_LINES
        if max(0, line - context) < self.line or line + context > self.line + self.height:
            self.line = max(0, line - context)

    def percent(self) -> int:
        """How far through the document the page is, 0 to 100."""
        if self.line == 0 or len(self.lines) < self.height:
            return 0
        final_page_line = len(self.lines) - self.height
        if self.line >= final_page_line:
            return 100
        return (100 * self.line) // final_page_line
