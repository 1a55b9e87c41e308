"""Tokenizer for the escape sequences found in terminal output.

Turns decoded text into a stream of actions: printable runs, line feeds,
SGR codes and OSC 8 hyperlink commands. Every other escape sequence and
control character is consumed and dropped.
"""

import re
from typing import Iterator, NamedTuple, Optional, Union


class Print(NamedTuple):
    """A run of printable characters."""
    text: str


class LineFeed(NamedTuple):
    pass


class Sgr(NamedTuple):
    """One SGR parameter together with its sub-parameters."""
    code: int
    args: tuple[int, ...] = ()


class SetHyperlink(NamedTuple):
    """An OSC 8 command. A uri of None closes the current link."""
    uri: Optional[str]
    params: dict[str, str]


Action = Union[Print, LineFeed, Sgr, SetHyperlink]

_SEQUENCE_RE = re.compile(
    # CSI, 7-bit or 8-bit introducer
    r"(?:\x1b\[|\x9b)(?P<csi_params>[\x30-\x3f]*)(?P<csi_inter>[\x20-\x2f]*)(?P<csi_final>[\x40-\x7e])"
    # CSI cut off by the end of input
    r"|(?:\x1b\[|\x9b)[\x20-\x3f]*\Z"
    # OSC ends at BEL or ST; an ESC that does not start ST also ends it.
    # Reaching the end of input leaves osc_end unset.
    r"|(?:\x1b\]|\x9d)(?P<osc>[^\x07\x1b\x9c]*)(?:(?P<osc_end>\x07|\x9c|\x1b\\|(?=\x1b))|\Z)"
    # DCS, SOS, PM and APC strings
    r"|(?:\x1b[PX^_]|[\x90\x98\x9e\x9f])[^\x1b\x9c]*(?:\x1b\\|\x9c)?"
    # Any other escape sequence
    r"|\x1b[\x20-\x2f]*[\x30-\x7e]"
)

# C0 and C1 controls, DEL included
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")

_PRIVATE_MARKERS = frozenset("<=>?")


def _number(field: str) -> int:
    if not field:
        return 0
    try:
        return int(field)
    except ValueError:
        # Longer than int() converts; -1 maps to no style
        return -1


def _sgr_actions(params: str) -> Iterator[Sgr]:
    """Split SGR parameters into one Sgr per code.

    Extended colors given in the semicolon form (``38;5;n``,
    ``38;2;r;g;b``) are folded into a single Sgr with their arguments,
    the same shape the colon form (``38:5:n``) produces.
    """
    if not params:
        yield Sgr(0)
        return
    fields = params.split(';')
    i = 0
    while i < len(fields):
        parts = [_number(p) for p in fields[i].split(':')]
        code, args = parts[0], tuple(parts[1:])
        i += 1
        if code in (38, 48, 58) and not args and i < len(fields):
            mode = _number(fields[i])
            count = {5: 1, 2: 3}.get(mode, 0)
            args = tuple(_number(f) for f in fields[i:i + 1 + count])
            i += 1 + count
        yield Sgr(code, args)


def _hyperlink_action(body: str) -> Optional[SetHyperlink]:
    parts = body.split(';', 2)
    if len(parts) != 3 or parts[0] != '8':
        return None
    _, raw_params, uri = parts
    params = {}
    for item in raw_params.split(':'):
        key, sep, value = item.partition('=')
        if sep:
            params[key] = value
    return SetHyperlink(uri or None, params)


def _text_actions(segment: str) -> Iterator[Action]:
    start = 0
    for match in _CONTROL_RE.finditer(segment):
        if match.start() > start:
            yield Print(segment[start:match.start()])
        if match.group() == '\n':
            yield LineFeed()
        start = match.end()
    if start < len(segment):
        yield Print(segment[start:])


def parse_text(text: str) -> Iterator[Action]:
    """Tokenize already decoded terminal output."""
    position = 0
    for match in _SEQUENCE_RE.finditer(text):
        yield from _text_actions(text[position:match.start()])
        position = match.end()
        if match.group('csi_final') is not None:
            params = match.group('csi_params')
            if (match.group('csi_final') == 'm' and not match.group('csi_inter')
                    and not (_PRIVATE_MARKERS & set(params))):
                yield from _sgr_actions(params)
        elif match.group('osc') is not None and match.group('osc_end') is not None:
            action = _hyperlink_action(match.group('osc'))
            if action is not None:
                yield action
    yield from _text_actions(text[position:])


def parse(data: bytes) -> Iterator[Action]:
    """Tokenize raw terminal output. Invalid UTF-8 becomes U+FFFD."""
    return parse_text(data.decode('utf-8', errors='replace'))
