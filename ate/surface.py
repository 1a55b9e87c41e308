"""In-memory screen: a grid of styled cells built from a change list."""

from typing import Iterable, NamedTuple, Optional

from .attributes import DEFAULT_ATTRIBUTES, CellAttributes
from .changes import (
    ApplyAttribute,
    Change,
    ClearScreen,
    CursorPosition,
    NewRow,
    SetAttributes,
    Text,
)
from .textwidth import clusters


class Cell(NamedTuple):
    text: str
    attributes: CellAttributes


class Surface:
    """A width x height grid of cells with a drawing position and pen.

    Text that runs past the right edge or the bottom row is clipped.
    A wide cluster fills its first cell; the cells it covers hold ''.

    Attributes:
        cursor: Where the visible cursor should be shown, or None to hide it
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.x = 0
        self.y = 0
        self.cursor: Optional[tuple[int, int]] = None
        self._pen = DEFAULT_ATTRIBUTES
        self._cells = [[Cell(' ', DEFAULT_ATTRIBUTES)] * width for _ in range(height)]

    def dimensions(self) -> tuple[int, int]:
        return self.width, self.height

    def add_changes(self, changes: Iterable[Change]) -> None:
        for change in changes:
            self.add_change(change)

    def add_change(self, change: Change) -> None:
        if isinstance(change, Text):
            self._print(change.text)
        elif isinstance(change, ApplyAttribute):
            self._pen = self._pen.apply_change(change.change)
        elif isinstance(change, SetAttributes):
            self._pen = change.attributes
        elif isinstance(change, NewRow):
            self.x = 0
            self.y += 1
        elif isinstance(change, CursorPosition):
            self.x, self.y = change.x, change.y
        elif isinstance(change, ClearScreen):
            self._pen = CellAttributes(background=change.background)
            blank = Cell(' ', self._pen)
            self._cells = [[blank] * self.width for _ in range(self.height)]
            self.x = self.y = 0
        else:
            raise TypeError(f"Unknown change {change!r}")

    def _print(self, text: str) -> None:
        for cluster in clusters(text):
            if cluster.width == 0:
                # Zero-width clusters join the cell before them
                if 0 < self.x <= self.width and self.y < self.height:
                    row = self._cells[self.y]
                    before = row[self.x - 1]
                    row[self.x - 1] = Cell(before.text + cluster.text, before.attributes)
                continue
            if self.y < self.height and self.x + cluster.width <= self.width:
                row = self._cells[self.y]
                row[self.x] = Cell(cluster.text, self._pen)
                for i in range(1, cluster.width):
                    row[self.x + i] = Cell('', self._pen)
            self.x += cluster.width

    def draw_from(self, other: "Surface", x: int, y: int) -> None:
        """Copy other's cells onto this surface with its top left at (x, y)."""
        for row_index, row in enumerate(other.screen_cells()):
            target_y = y + row_index
            if target_y >= self.height:
                break
            for col, cell in enumerate(row):
                if x + col < self.width:
                    self._cells[target_y][x + col] = cell

    def screen_cells(self) -> list[list[Cell]]:
        return self._cells

    def screen_chars_to_string(self) -> str:
        return ''.join(''.join(cell.text for cell in row) + '\n' for row in self._cells)
