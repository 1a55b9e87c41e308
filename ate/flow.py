"""Reflow of document text into display rows of a given width."""

from typing import NamedTuple, Sequence

from .attributes import DEFAULT_ATTRIBUTES, CellAttributes
from .changes import SetAttributes, StyleChange
from .document import Document
from .textwidth import Cluster, clusters


class Line(NamedTuple):
    """A display row. Only valid for the width it was flowed at.

    start_attributes is the style with every change before start_byte
    applied, so a row can be drawn without replaying from the top.
    """
    start_byte: int
    start_attributes: CellAttributes


def apply_style_change(attributes: CellAttributes, change: StyleChange) -> CellAttributes:
    if isinstance(change, SetAttributes):
        return change.attributes
    return attributes.apply_change(change.change)


def breaks_row(cluster: Cluster, cells_in_line: int, width: int) -> bool:
    """Whether cluster ends the current row.

    A line feed always does. Any other cluster does when it would not fit
    beside what is already on the row; an oversized cluster on an empty
    row stays there rather than leaving an empty row behind it.
    """
    if cluster.text == '\n':
        return True
    return cells_in_line > 0 and cells_in_line + cluster.width > width


class _StyleReplay:
    """Applies a document's style changes in order, up to a byte limit."""

    def __init__(self, attrs: Sequence[tuple[int, StyleChange]]):
        self._attrs = attrs
        self._index = 0
        self.attributes = DEFAULT_ATTRIBUTES

    def apply_before(self, limit: int) -> None:
        while self._index < len(self._attrs) and self._attrs[self._index][0] < limit:
            self.attributes = apply_style_change(self.attributes, self._attrs[self._index][1])
            self._index += 1


def flow(document: Document, width: int) -> list[Line]:
    """Split the document into rows no wider than width columns.

    Clusters are never split across rows. The result always has at least
    one Line, starting at byte 0.
    """
    style = _StyleReplay(document.attrs)
    lines = [Line(0, style.attributes)]
    cells_in_line = 0
    for cluster in clusters(document.text):
        newline = cluster.text == '\n'
        if breaks_row(cluster, cells_in_line, width):
            start = cluster.byte + 1 if newline else cluster.byte
            style.apply_before(start)
            lines.append(Line(start, style.attributes))
            cells_in_line = 0
        if not newline:
            style.apply_before(cluster.byte + 1)
            cells_in_line += cluster.width
    return lines
