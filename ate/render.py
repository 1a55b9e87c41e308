"""Drawing a range of display rows with reverse-video highlights."""

from bisect import bisect_left, bisect_right
from typing import Sequence

from .attributes import Attribute
from .changes import Change, NewRow, SetAttributes, Text, reverse_change
from .document import Document
from .flow import Line, breaks_row
from .textwidth import clusters


def render_lines(
    document: Document,
    lines: Sequence[Line],
    line: int,
    width: int,
    height: int,
    highlights: Sequence[tuple[int, int]],
) -> list[Change]:
    """Produce the changes that draw height rows starting at lines[line].

    Rows are separated by NewRow. Bytes inside a highlight range are drawn
    with reverse video inverted relative to the document's own style,
    whatever that style does inside the range.

    Args:
        document: The document the lines were flowed from
        lines: The Line cache for width
        line: Index of the first row to draw
        width: Columns per row, the width lines was flowed at
        height: Maximum number of rows to draw
        highlights: Sorted, disjoint, half-open byte ranges
    """
    assert 0 <= line < len(lines), f"line {line} outside 0..{len(lines)}"
    start = lines[line]
    changes: list[Change] = [SetAttributes(start.start_attributes)]
    # Reverse state the document asks for, ignoring highlights
    reversed_ = start.start_attributes.reverse

    attrs = document.attrs
    attr_idx = bisect_left(attrs, start.start_byte, key=lambda a: a[0])
    highlight_idx = bisect_right(highlights, start.start_byte, key=lambda h: h[1])
    in_highlight = False

    last_line = min(len(lines), line + height) - 1
    cells_in_line = 0
    for cluster in clusters(document.text_from(start.start_byte), start.start_byte):
        if breaks_row(cluster, cells_in_line, width):
            if line == last_line:
                break
            changes.append(NewRow())
            line += 1
            cells_in_line = 0
        if cluster.text == '\n':
            continue

        if in_highlight and highlights[highlight_idx][1] <= cluster.byte:
            in_highlight = False
            highlight_idx += 1
            changes.append(reverse_change(reversed_))
        while highlight_idx < len(highlights) and highlights[highlight_idx][1] <= cluster.byte:
            highlight_idx += 1
        if (not in_highlight and highlight_idx < len(highlights)
                and highlights[highlight_idx][0] <= cluster.byte):
            in_highlight = True
            changes.append(reverse_change(not reversed_))

        while attr_idx < len(attrs) and attrs[attr_idx][0] <= cluster.byte:
            change = attrs[attr_idx][1]
            attr_idx += 1
            if isinstance(change, SetAttributes):
                reversed_ = change.attributes.reverse
                if in_highlight:
                    change = SetAttributes(change.attributes.with_reverse(not reversed_))
            elif change.change.attribute is Attribute.REVERSE:
                reversed_ = change.change.value
                if in_highlight:
                    change = reverse_change(not reversed_)
            changes.append(change)

        changes.append(Text(cluster.text))
        cells_in_line += cluster.width
    return changes
