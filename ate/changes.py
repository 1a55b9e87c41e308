"""Operations handed to a screen surface.

Panes describe what to draw as an ordered list of these values; the
surface (in-memory or the real terminal) is the only thing that turns
them into cells or bytes.
"""

from typing import NamedTuple, Union

from .attributes import Attribute, AttributeChange, CellAttributes, Color


class SetAttributes(NamedTuple):
    """Replace the whole current style."""
    attributes: CellAttributes


class ApplyAttribute(NamedTuple):
    """Change one attribute of the current style."""
    change: AttributeChange


class Text(NamedTuple):
    text: str


class NewRow(NamedTuple):
    """Move to the first column of the next row."""


class ClearScreen(NamedTuple):
    background: Color = None


class CursorPosition(NamedTuple):
    x: int
    y: int


Change = Union[SetAttributes, ApplyAttribute, Text, NewRow, ClearScreen, CursorPosition]

# A document's style changes are restricted to these two kinds
StyleChange = Union[SetAttributes, ApplyAttribute]


def reverse_change(reverse: bool) -> ApplyAttribute:
    return ApplyAttribute(AttributeChange(Attribute.REVERSE, reverse))
