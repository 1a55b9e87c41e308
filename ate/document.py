"""The parsed input: display text, style changes and hyperlink ranges."""

import logging
from dataclasses import dataclass, field
from functools import cached_property
from typing import BinaryIO, Optional

from .attributes import DEFAULT_ATTRIBUTES, attribute_change_for_sgr
from .changes import ApplyAttribute, SetAttributes, StyleChange
from .errors import InputReadError, UnsupportedStyle
from .escapes import Action, LineFeed, Print, SetHyperlink, Sgr, parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkRange:
    """A hyperlinked span of the document text, in UTF-8 byte offsets."""
    start: int
    end: int
    uri: str
    params: dict[str, str] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Document:
    """Immutable result of parsing the input.

    Attributes:
        text: Printable characters of the input; line feeds kept as '\\n',
            every other control character removed
        attrs: (byte offset, change) pairs in ascending offset order. All
            changes at an offset apply, in order, before the character at
            that offset is drawn. The first entry resets to the default style.
        links: Hyperlink ranges in the order they were closed
    """
    text: str
    attrs: tuple[tuple[int, StyleChange], ...]
    links: tuple[LinkRange, ...]

    @cached_property
    def data(self) -> bytes:
        """The text as UTF-8; all offsets index into this."""
        return self.text.encode('utf-8')

    def text_from(self, byte: int) -> str:
        return self.data[byte:].decode('utf-8')

    def link_text(self, link: LinkRange) -> str:
        return self.data[link.start:link.end].decode('utf-8')

    @classmethod
    def from_bytes(cls, data: bytes) -> "Document":
        builder = DocumentBuilder()
        for action in parse(data):
            builder.feed(action)
        return builder.finish()

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "Document":
        """Read a stream to the end and parse it.

        Raises:
            InputReadError: Reading the stream failed
        """
        try:
            data = stream.read()
        except OSError as e:
            raise InputReadError(e) from e
        logger.info("Read %d bytes of input", len(data))
        return cls.from_bytes(data)


class DocumentBuilder:
    """Accumulates parser actions into a Document."""

    def __init__(self):
        self._pieces: list[str] = []
        self._length = 0  # bytes of UTF-8 text so far
        self._attrs: list[tuple[int, StyleChange]] = [(0, SetAttributes(DEFAULT_ATTRIBUTES))]
        self._links: list[LinkRange] = []
        # (start, uri, params) of a link that has been opened but not closed
        self._open_link: Optional[tuple[int, str, dict[str, str]]] = None

    def feed(self, action: Action) -> None:
        if isinstance(action, Print):
            self._append(action.text)
        elif isinstance(action, LineFeed):
            self._append('\n')
        elif isinstance(action, Sgr):
            self._style(action)
        elif isinstance(action, SetHyperlink):
            self._hyperlink(action)

    def _append(self, text: str) -> None:
        self._pieces.append(text)
        self._length += len(text.encode('utf-8'))

    def _style(self, sgr: Sgr) -> None:
        # Offsets are not grapheme aligned. A change inside a cluster is
        # applied before the next cluster is drawn.
        if sgr.code == 0:
            self._attrs.append((self._length, SetAttributes(DEFAULT_ATTRIBUTES)))
            return
        try:
            change = attribute_change_for_sgr(sgr.code, sgr.args)
        except UnsupportedStyle as e:
            logger.debug("Ignoring style at byte %d: %s", self._length, e)
            return
        self._attrs.append((self._length, ApplyAttribute(change)))

    def _hyperlink(self, command: SetHyperlink) -> None:
        # Repeated announcements of the same link are kept as separate
        # ranges, zero-length ones included.
        self._close_link()
        if command.uri is not None:
            self._open_link = (self._length, command.uri, command.params)

    def _close_link(self) -> None:
        if self._open_link is None:
            return
        start, uri, params = self._open_link
        self._links.append(LinkRange(start, self._length, uri, params))
        self._open_link = None

    def finish(self) -> Document:
        self._close_link()
        return Document(
            text=''.join(self._pieces),
            attrs=tuple(self._attrs),
            links=tuple(self._links),
        )


def build_document(stream: BinaryIO) -> Document:
    """Build a Document from everything readable on stream."""
    return Document.from_stream(stream)
