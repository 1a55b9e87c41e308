"""Test session state: search mode, layout heights and open errors."""

import unittest
from unittest.mock import Mock

from ate.document import Document
from ate.errors import OpenLinkFailed
from ate.session import Session


def linked_rows(count: int, linked: set[int]) -> Document:
    """count rows 'row N', the rows in linked wrapped in a hyperlink."""
    rows = []
    for i in range(count):
        text = f"row {i}"
        if i in linked:
            text = f"\x1b]8;;http://x/{i}\x1b\\{text}\x1b]8;;\x1b\\"
        rows.append(text)
    return Document.from_bytes("\n".join(rows).encode())


class TestLayoutHeights(unittest.TestCase):
    """Test how rows are shared between the panes."""

    def test_not_searching(self):
        session = Session(linked_rows(5, {1, 2}), Mock(), 10, 13)
        self.assertEqual(session.search_height(), 0)
        self.assertEqual(session.doc_height(), 12)

    def test_search_limited_by_matches(self):
        session = Session(linked_rows(5, {1, 2}), Mock(), 10, 40)
        session.open_search()
        self.assertEqual(session.search_height(), 4)
        self.assertEqual(session.doc_height(), 35)

    def test_search_limited_by_half_screen(self):
        session = Session(linked_rows(20, set(range(20))), Mock(), 10, 13)
        session.open_search()
        self.assertEqual(session.search_height(), 6)

    def test_search_limited_to_ten_matches(self):
        session = Session(linked_rows(30, set(range(30))), Mock(), 10, 100)
        session.open_search()
        self.assertEqual(session.search_height(), 12)

    def test_search_keeps_query_row_on_tiny_screen(self):
        session = Session(linked_rows(3, {0}), Mock(), 10, 1)
        session.open_search()
        self.assertEqual(session.search_height(), 1)
        self.assertEqual(session.doc_height(), 0)


class TestSearchMode(unittest.TestCase):
    """Test opening, closing and cancelling search."""

    def setUp(self):
        self.session = Session(linked_rows(30, {25}), Mock(), 10, 6)

    def test_open_search_highlights_first_match(self):
        self.session.open_search()
        self.assertTrue(self.session.searching)
        self.assertEqual(self.session.view.line, 22)

    def test_close_keeps_position(self):
        self.session.open_search()
        self.session.close_search()
        self.assertFalse(self.session.searching)
        self.assertEqual(self.session.view.line, 22)

    def test_cancel_restores_position(self):
        self.session.view.forward(2)
        self.session.open_search()
        self.session.cancel_search()
        self.assertFalse(self.session.searching)
        self.assertEqual(self.session.view.line, 2)


class TestOpenSelected(unittest.TestCase):
    """Test that open failures become the status message."""

    def test_failure_sets_last_error(self):
        opener = Mock(side_effect=OpenLinkFailed("ATE_OPENER must be defined to open links"))
        session = Session(linked_rows(3, {1}), opener, 10, 6)
        session.open_selected()
        opener.assert_called_once_with("http://x/1")
        self.assertEqual(session.last_error, "ATE_OPENER must be defined to open links")

    def test_success_leaves_last_error_alone(self):
        opener = Mock()
        session = Session(linked_rows(3, {1}), opener, 10, 6)
        session.open_selected()
        opener.assert_called_once_with("http://x/1")
        self.assertIsNone(session.last_error)
