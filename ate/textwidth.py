"""Grapheme cluster iteration and terminal column widths."""

from functools import lru_cache
from typing import Iterator, NamedTuple

import grapheme
import wcwidth

# Variation selector 16 requests emoji presentation
EMOJI_PRESENTATION = '\ufe0f'


class Cluster(NamedTuple):
    """A grapheme cluster with its UTF-8 byte offset and column width."""
    text: str
    byte: int
    width: int


@lru_cache(maxsize=4096)
def cluster_width(cluster: str) -> int:
    """Return the number of terminal columns a grapheme cluster occupies.

    A multi-codepoint cluster is as wide as its widest code point, not the
    sum of them: a family emoji joined with ZWJ is 2 columns, 'e' plus a
    combining accent is 1. Code points without a width (controls) count
    as 0.
    """
    widest = 0
    for ch in cluster:
        if ch == EMOJI_PRESENTATION:
            width = 2
        else:
            width = max(wcwidth.wcwidth(ch), 0)
        widest = max(widest, width)
    return widest


def clusters(text: str, start_byte: int = 0) -> Iterator[Cluster]:
    """Iterate the grapheme clusters of text.

    Args:
        text: Text to segment
        start_byte: Byte offset of text[0] within the enclosing document
    """
    byte = start_byte
    for g in grapheme.graphemes(text):
        yield Cluster(g, byte, cluster_width(g))
        byte += len(g.encode('utf-8'))
