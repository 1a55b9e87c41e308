"""ate - a terminal pager that follows hyperlinks."""

from .document import Document, DocumentBuilder, LinkRange, build_document
from .flow import Line, flow
from .render import render_lines
from .search import SearchEngine
from .session import Session
from .view import DocumentView

__all__ = [
    'Document',
    'DocumentBuilder',
    'LinkRange',
    'build_document',
    'Line',
    'flow',
    'render_lines',
    'SearchEngine',
    'Session',
    'DocumentView',
]
