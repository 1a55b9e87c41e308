"""Test the composed screen: panes, key routing and layout."""

from ate.attributes import PaletteIndex
from ate.document import Document
from ate.errors import OpenLinkFailed
from ate.keyboard import Paste, ctrl, key
from ate.panes import MainPane
from ate.session import Session
from ate.surface import Surface


class Context:
    """A session drawn onto an in-memory surface, driven by key presses."""

    def __init__(self, text: str, width: int, height: int):
        self.visited: list[str] = []
        self.session = Session(Document.from_bytes(text.encode()), self.visited.append, width, height)
        self.panes = MainPane()
        self.surface = Surface(width, height)
        # Render twice to check rendering does not disturb state
        self.render()
        self.render()

    def render(self):
        self.panes.render(self.session, self.surface)

    def press_keys(self, *keys):
        for k in keys:
            self.panes.dispatch(self.session, key(k) if isinstance(k, str) else k)
        self.render()

    def screen(self) -> str:
        return self.surface.screen_chars_to_string()

    def cells(self, row: int):
        return self.surface.screen_cells()[row]


def check_rev(ctx: Context, reversed_row: int, first: int = 0):
    """Rows show lines first..5 of SIX_LINES; only reversed_row is reversed."""
    cells = ctx.surface.screen_cells()
    for i in range(first, 6):
        cell = cells[i - first][0]
        assert cell.text == str(i)
        assert cell.attributes.reverse == (i == reversed_row), f"i = {i}"


SIX_LINES = (
    "0\n"
    "\x1b]8;;1\x1b\\1\x1b]8;;2\x1b\\\n"
    "2\n"
    "\x1b]8;;3\x1b\\3\n"
    "\x1b]8;;\x1b\\4\n"
    "\x1b]8;;5\x1b\\5"
)


def test_render_color():
    ctx = Context("D\x1b[31mR\x1b[mD", 3, 2)
    cells = ctx.cells(0)
    assert cells[0].attributes.foreground is None
    assert cells[1].attributes.foreground == PaletteIndex(1)
    assert cells[2].attributes.foreground is None
    assert ctx.screen() == "DRD\n 0%\n"


def test_render_short_doc():
    ctx = Context("Hi Bye", 3, 3)
    assert ctx.screen() == "Hi \nBye\n 0%\n"


def test_status_row_is_grey():
    ctx = Context("Hi", 4, 2)
    assert all(cell.attributes.background == PaletteIndex(8) for cell in ctx.cells(1))
    assert ctx.cells(0)[0].attributes.background is None


def test_page():
    ctx = Context("1\n2\n3\n4\n5\n6", 5, 6)
    assert ctx.cells(0)[0].text == "1"

    # Going forward while at the last screen shouldn't keep the whole screen
    ctx.press_keys(" ", " ")
    assert ctx.screen() == "2    \n3    \n4    \n5    \n6    \n 100%\n"

    # Going back while at the first line should stay at the first line
    ctx.press_keys("b", "b")
    assert ctx.screen() == "1    \n2    \n3    \n4    \n5    \n   0%\n"


def test_arrows_scroll_one_row():
    ctx = Context("1\n2\n3\n4\n5\n6", 5, 4)
    ctx.press_keys("down")
    assert ctx.cells(0)[0].text == "2"
    ctx.press_keys("up", "up")
    assert ctx.cells(0)[0].text == "1"


def test_visit_link():
    text = "Before\n\x1b]8;;http://a.b\x1b\\\x1b[31mL\x1b[m\x1binked\x1b]8;;\x1b\\\nNot Linked"
    ctx = Context(text, 10, 4)
    assert ctx.cells(0)[0].text == "B"
    assert ctx.cells(1)[0].text == "L"
    assert not ctx.cells(1)[0].attributes.reverse
    assert not ctx.cells(1)[1].attributes.reverse
    assert ctx.visited == []

    ctx.press_keys("enter")
    assert ctx.cells(0)[0].text == "B"
    assert ctx.cells(1)[0].text == "L"
    assert ctx.cells(1)[0].attributes.reverse
    assert ctx.cells(1)[1].attributes.reverse
    assert ctx.visited == ["http://a.b"]


def test_next_links():
    ctx = Context(SIX_LINES, 10, 13)

    # Nothing should be highlighted
    check_rev(ctx, -1)

    ctx.press_keys("n", "n")
    check_rev(ctx, 2)

    ctx.press_keys("n", "n")
    check_rev(ctx, 5)

    # Wrap!
    ctx.press_keys("n")
    check_rev(ctx, 1)

    # Wrap back!
    ctx.press_keys("N")
    check_rev(ctx, 5)

    ctx.press_keys("N")
    check_rev(ctx, 3)

    # Search for missing character doesn't change highlight
    ctx.press_keys("/", "6")
    check_rev(ctx, 3)

    # Search for a different character changes highlight
    ctx.press_keys("backspace", "1")
    check_rev(ctx, 1)


def test_search_pane_layout():
    ctx = Context(SIX_LINES, 10, 13)
    ctx.press_keys("/")
    rows = ctx.screen().splitlines()
    # 6 document rows, separator, 4 match rows, prompt, status
    assert rows[6] == "━" * 10
    # Each match shows the row its link starts on; link "2" starts on row "1"
    assert [row[0] for row in rows[7:11]] == ["1", "1", "3", "5"]
    assert rows[11] == "Search:   "
    assert ctx.surface.cursor == (8, 11)
    # The selected link is highlighted wherever its row is shown
    assert ctx.cells(7)[0].attributes.reverse
    assert ctx.cells(8)[0].attributes.reverse
    assert not ctx.cells(9)[0].attributes.reverse


def test_search_query_is_shown():
    ctx = Context(SIX_LINES, 12, 13)
    ctx.press_keys("/", "3")
    rows = ctx.screen().splitlines()
    assert rows[-2].startswith("Search: 3")
    assert ctx.surface.cursor == (9, 11)


def test_keys_type_into_query_while_searching():
    ctx = Context(SIX_LINES, 10, 13)
    ctx.press_keys("/", "q", "n")
    assert not ctx.session.quit
    assert ctx.session.search.query == "qn"


def test_paste_goes_to_query():
    ctx = Context(SIX_LINES, 10, 13)
    ctx.press_keys("/", Paste("3\n"))
    assert ctx.session.search.query == "3\n"
    assert ctx.session.search.matches == [2]


def test_escape_cancels_search():
    ctx = Context("\n".join(str(i) for i in range(30)) + "\x1b]8;;u\x1b\\link\x1b]8;;\x1b\\", 10, 8)
    ctx.press_keys("/")
    assert ctx.session.view.line > 0
    ctx.press_keys("escape")
    assert not ctx.session.searching
    assert ctx.session.view.line == 0
    assert ctx.screen().splitlines()[0].startswith("0")


def test_enter_closes_search_and_keeps_highlight():
    ctx = Context(SIX_LINES, 10, 13)
    ctx.press_keys("/", "3", "enter")
    assert not ctx.session.searching
    assert ctx.visited == []
    check_rev(ctx, 3)
    # A second enter opens the link
    ctx.press_keys("enter")
    assert ctx.visited == ["3"]


def test_search_arrows_select():
    ctx = Context(SIX_LINES, 10, 13)
    ctx.press_keys("/", "down")
    check_rev(ctx, 2)
    # Wraps to the last link; the 6-row page scrolls to keep 3 rows of context above it
    ctx.press_keys("up", "up")
    assert ctx.session.view.line == 2
    check_rev(ctx, 5, first=2)


def test_quit_keys():
    ctx = Context("x", 5, 3)
    ctx.press_keys("q")
    assert ctx.session.quit

    ctx = Context("x", 5, 3)
    ctx.press_keys(ctrl("c"))
    assert ctx.session.quit


def test_ctrl_c_quits_while_searching():
    ctx = Context(SIX_LINES, 10, 13)
    ctx.press_keys("/", ctrl("c"))
    assert ctx.session.quit


def test_open_error_shown_until_next_key():
    ctx = Context("\x1b]8;;http://x\x1b\\link\x1b]8;;\x1b\\", 30, 3)

    def fail(uri):
        raise OpenLinkFailed("ATE_OPENER must be defined")

    ctx.session.search._open_link = fail
    ctx.press_keys("enter")
    status = ctx.screen().splitlines()[-1]
    assert status.startswith("ATE_OPENER must be defined")
    assert status.endswith("0%")
    ctx.press_keys("down")
    assert ctx.screen().splitlines()[-1].strip() == "0%"


def test_progress_hidden_when_error_fills_row():
    ctx = Context("x", 6, 2)
    ctx.session.last_error = "long error"
    ctx.render()
    assert ctx.screen().splitlines()[-1] == "long e"


def test_resize_reflows():
    ctx = Context("abcdefghijkl", 4, 4)
    assert ctx.screen().splitlines()[:3] == ["abcd", "efgh", "ijkl"]
    ctx.surface = Surface(6, 4)
    ctx.render()
    assert ctx.screen().splitlines()[:2] == ["abcdef", "ghijkl"]


def test_wide_characters():
    ctx = Context("a宽b", 3, 3)
    assert [cell.text for cell in ctx.cells(0)] == ["a", "宽", ""]
    assert ctx.cells(1)[0].text == "b"
