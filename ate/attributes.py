"""Cell style state and the single-attribute changes that modify it."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple, Optional, Union

from .errors import UnsupportedStyle


class Intensity(Enum):
    NORMAL = "normal"
    BOLD = "bold"
    HALF = "half"


class Underline(Enum):
    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"
    CURLY = "curly"
    DOTTED = "dotted"
    DASHED = "dashed"


class Blink(Enum):
    NONE = "none"
    SLOW = "slow"
    RAPID = "rapid"


class PaletteIndex(NamedTuple):
    """One of the 256 indexed terminal colors."""
    index: int


class TrueColor(NamedTuple):
    red: int
    green: int
    blue: int


# None means the terminal's default color
Color = Optional[Union[PaletteIndex, TrueColor]]


class Attribute(Enum):
    """Attributes that a single change can set.

    The value of each member is the matching CellAttributes field name.
    """
    INTENSITY = "intensity"
    UNDERLINE = "underline"
    ITALIC = "italic"
    BLINK = "blink"
    REVERSE = "reverse"
    STRIKETHROUGH = "strikethrough"
    INVISIBLE = "invisible"
    FOREGROUND = "foreground"
    BACKGROUND = "background"
    HYPERLINK = "hyperlink"


class AttributeChange(NamedTuple):
    attribute: Attribute
    value: object


@dataclass(frozen=True)
class CellAttributes:
    """The fully resolved style of a cell.

    Instances are immutable; apply_change returns a new value.
    """
    intensity: Intensity = Intensity.NORMAL
    underline: Underline = Underline.NONE
    italic: bool = False
    blink: Blink = Blink.NONE
    reverse: bool = False
    strikethrough: bool = False
    invisible: bool = False
    foreground: Color = None
    background: Color = None
    hyperlink: Optional[str] = None

    def apply_change(self, change: AttributeChange) -> "CellAttributes":
        return replace(self, **{change.attribute.value: change.value})

    def with_reverse(self, reverse: bool) -> "CellAttributes":
        return replace(self, reverse=reverse)


DEFAULT_ATTRIBUTES = CellAttributes()

_UNDERLINE_STYLES = {
    0: Underline.NONE,
    1: Underline.SINGLE,
    2: Underline.DOUBLE,
    3: Underline.CURLY,
    4: Underline.DOTTED,
    5: Underline.DASHED,
}

# Codes that map to exactly one change with a fixed value
_SIMPLE_CODES = {
    1: AttributeChange(Attribute.INTENSITY, Intensity.BOLD),
    2: AttributeChange(Attribute.INTENSITY, Intensity.HALF),
    22: AttributeChange(Attribute.INTENSITY, Intensity.NORMAL),
    3: AttributeChange(Attribute.ITALIC, True),
    23: AttributeChange(Attribute.ITALIC, False),
    21: AttributeChange(Attribute.UNDERLINE, Underline.DOUBLE),
    24: AttributeChange(Attribute.UNDERLINE, Underline.NONE),
    5: AttributeChange(Attribute.BLINK, Blink.SLOW),
    6: AttributeChange(Attribute.BLINK, Blink.RAPID),
    25: AttributeChange(Attribute.BLINK, Blink.NONE),
    7: AttributeChange(Attribute.REVERSE, True),
    27: AttributeChange(Attribute.REVERSE, False),
    8: AttributeChange(Attribute.INVISIBLE, True),
    28: AttributeChange(Attribute.INVISIBLE, False),
    9: AttributeChange(Attribute.STRIKETHROUGH, True),
    29: AttributeChange(Attribute.STRIKETHROUGH, False),
    39: AttributeChange(Attribute.FOREGROUND, None),
    49: AttributeChange(Attribute.BACKGROUND, None),
}


def _extended_color(code: int, args: tuple[int, ...]) -> Color:
    """Decode the arguments of an extended color (38/48) code.

    Accepts ``5;n`` / ``5:n`` for indexed colors and ``2;r;g;b``,
    ``2:r:g:b`` or ``2:colorspace:r:g:b`` for direct colors.
    """
    if args and args[0] == 5 and len(args) >= 2 and 0 <= args[1] <= 255:
        return PaletteIndex(args[1])
    if args and args[0] == 2 and len(args) >= 4:
        red, green, blue = args[-3:]
        if all(0 <= c <= 255 for c in (red, green, blue)):
            return TrueColor(red, green, blue)
    raise UnsupportedStyle(code)


def attribute_change_for_sgr(code: int, args: tuple[int, ...] = ()) -> AttributeChange:
    """Translate one SGR code (other than reset) into an attribute change.

    Args:
        code: The SGR parameter, e.g. 31 for a red foreground
        args: Sub-parameters that belong to the code (``4:3`` or ``38;5;n``)

    Raises:
        UnsupportedStyle: The code has no attribute mapping (fonts,
            overline, underline color, vertical alignment, unknown codes)
    """
    if code == 4:
        style = _UNDERLINE_STYLES.get(args[0] if args else 1)
        if style is None:
            raise UnsupportedStyle(code)
        return AttributeChange(Attribute.UNDERLINE, style)
    if code in _SIMPLE_CODES:
        return _SIMPLE_CODES[code]
    if 30 <= code <= 37:
        return AttributeChange(Attribute.FOREGROUND, PaletteIndex(code - 30))
    if 90 <= code <= 97:
        return AttributeChange(Attribute.FOREGROUND, PaletteIndex(code - 90 + 8))
    if 40 <= code <= 47:
        return AttributeChange(Attribute.BACKGROUND, PaletteIndex(code - 40))
    if 100 <= code <= 107:
        return AttributeChange(Attribute.BACKGROUND, PaletteIndex(code - 100 + 8))
    if code == 38:
        return AttributeChange(Attribute.FOREGROUND, _extended_color(code, args))
    if code == 48:
        return AttributeChange(Attribute.BACKGROUND, _extended_color(code, args))
    raise UnsupportedStyle(code)
