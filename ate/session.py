"""State of one pager session.

A single Session owns the document, its view and the search engine.
Key handlers receive it explicitly and mutate it; nothing else holds a
reference to its parts.
"""

import logging
from typing import Callable, Optional

from .constants import PagerConstants
from .document import Document
from .errors import OpenLinkFailed
from .search import SearchEngine
from .view import DocumentView

logger = logging.getLogger(__name__)


class Session:
    """Everything the panes read and the commands change.

    Attributes:
        document: The parsed input
        view: Scroll position and highlight of the document pane
        search: Link search state
        last_error: One-line message shown in the status pane
        quit: Set when the user asks to leave
        searching: Whether the search pane has focus
        term_height: Rows of the whole terminal
    """

    def __init__(self, document: Document, open_link: Callable[[str], None],
                 width: int, height: int):
        self.document = document
        self.view = DocumentView(document, width, height)
        self.search = SearchEngine(document, open_link)
        self.last_error: Optional[str] = None
        self.quit = False
        self.searching = False
        self.term_height = height
        # Where the page started when search was opened, for cancelling
        self._search_origin_byte = 0

    def open_search(self) -> None:
        self.searching = True
        self._search_origin_byte = self.view.first_visible_byte
        self.search.activate(self.view)

    def close_search(self) -> None:
        """Leave search, keeping the current highlight and position."""
        self.searching = False

    def cancel_search(self) -> None:
        """Leave search and return to the page shown before it opened."""
        self.close_search()
        self.view.scroll_to_byte(self._search_origin_byte)

    def open_selected(self) -> None:
        """Open the selected link; a failure becomes last_error."""
        try:
            self.search.open_selected(self.view)
        except OpenLinkFailed as e:
            logger.warning("Opening selection failed with %s", e)
            self.last_error = str(e)

    def _all_but_status_height(self) -> int:
        return max(0, self.term_height - PagerConstants.STATUS_ROWS)

    def search_height(self) -> int:
        """Rows of the search pane: 0 unless searching.

        Shows up to MAX_SEARCH_MATCH_ROWS matches plus separator and query
        rows, but never more than half the screen or more rows than there
        are matches, and always at least the query row.
        """
        if not self.searching:
            return 0
        chrome = PagerConstants.SEARCH_CHROME_ROWS
        height = min(
            PagerConstants.MAX_SEARCH_MATCH_ROWS + chrome,
            self._all_but_status_height() // 2,
            len(self.search.matches) + chrome,
        )
        return max(1, height)

    def doc_height(self) -> int:
        return max(0, self._all_but_status_height() - self.search_height())
