"""Incremental search over a document's hyperlinks."""

import logging
from bisect import bisect_left
from typing import Callable, Optional

import grapheme

from .document import Document, LinkRange
from .view import DocumentView

logger = logging.getLogger(__name__)


class SearchEngine:
    """Filters links by the text they cover and tracks a selected match.

    Every selection change highlights the selected link in the view, which
    also scrolls it into sight.

    Attributes:
        query: Current search text
        matches: Indices into document.links whose text contains query,
            in document order
        selected: Index into matches, or None
    """

    def __init__(self, document: Document, open_link: Callable[[str], None]):
        self.document = document
        self._open_link = open_link
        self.query = ""
        self.selected: Optional[int] = None
        self.matches: list[int] = list(range(len(document.links)))

    @property
    def selected_link(self) -> Optional[LinkRange]:
        if self.selected is None:
            return None
        return self.document.links[self.matches[self.selected]]

    def _select(self, index: int, view: DocumentView) -> None:
        if 0 <= index < len(self.matches):
            self.selected = index
            link = self.document.links[self.matches[index]]
            view.highlight(link.start, link.end)

    def _update_matches(self, view: DocumentView) -> None:
        """Refilter after a query edit, keeping the selection stable.

        The new selection is the first match at or after the previously
        selected link, else the last match. The highlight is left alone
        when nothing matches.
        """
        previous_link = self.matches[self.selected or 0] if self.matches else 0
        self.matches = [
            i for i, link in enumerate(self.document.links)
            if self.query in self.document.link_text(link)
        ]
        if not self.matches:
            self.selected = None
            return
        index = bisect_left(self.matches, previous_link)
        if index == len(self.matches):
            index = len(self.matches) - 1
        self._select(index, view)

    def activate(self, view: DocumentView) -> None:
        """Highlight the current selection, or the first match if none."""
        self._select(self.selected if self.selected is not None else 0, view)

    def select_next(self, view: DocumentView) -> None:
        if self.selected is not None and self.selected < len(self.matches) - 1:
            self._select(self.selected + 1, view)
        else:
            self._select(0, view)

    def select_prev(self, view: DocumentView) -> None:
        if self.selected is None or self.selected == 0:
            self._select(len(self.matches) - 1, view)
        else:
            self._select(self.selected - 1, view)

    def push_char(self, char: str, view: DocumentView) -> None:
        self.query += char
        self._update_matches(view)

    def push_str(self, text: str, view: DocumentView) -> None:
        self.query += text
        self._update_matches(view)

    def pop_char(self, view: DocumentView) -> None:
        """Remove the last grapheme cluster of the query."""
        self.query = ''.join(list(grapheme.graphemes(self.query))[:-1])
        self._update_matches(view)

    def open_selected(self, view: DocumentView) -> None:
        """Open the selected link, selecting the first match if needed.

        Raises:
            OpenLinkFailed: The opener could not open the link
        """
        if not self.matches:
            return
        if self.selected is None:
            self._select(0, view)
        uri = self.selected_link.uri
        logger.info("Opening %s", uri)
        self._open_link(uri)
