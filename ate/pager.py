"""Main pager controller: the input, render and resize loop."""

import logging
import os
import select
import signal
from collections import deque
from typing import Callable, Optional

from .config import PagerConfig
from .constants import PagerConstants
from .document import Document
from .keyboard import InputEvent, KeyboardHandler, ctrl, key
from .opener import LinkOpener
from .panes import MainPane
from .session import Session
from .surface import Surface
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class Pager:
    """Shows one document until the user quits.

    Input events are queued and handled in order before each redraw.
    Startup keys requested by the configuration are queued first.
    """

    def __init__(self, document: Document, config: Optional[PagerConfig] = None,
                 terminal: Optional[TerminalInterface] = None,
                 open_link: Optional[Callable[[str], None]] = None):
        self.config = config or PagerConfig()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.session = Session(
            document,
            open_link or LinkOpener(self.config.opener),
            self.terminal.width,
            self.terminal.height,
        )
        self.panes = MainPane()
        self.surface = Surface(self.terminal.width, self.terminal.height)
        self._events: deque[InputEvent] = deque()
        if self.config.open_first:
            self.queue_event(key('enter'))
        if self.config.goto_last:
            self.queue_event(key('N'))
        self._ctrl_c_pressed = False
        # Create pipe for resize and interrupt signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, PagerConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) as a key press."""
        del signum, frame  # Unused
        self._ctrl_c_pressed = True
        os.write(self._resize_pipe_w, PagerConstants.INTERRUPT_PIPE_MARKER)

    def queue_event(self, event: InputEvent) -> None:
        self._events.append(event)

    def step(self) -> bool:
        """Handle every queued event, then redraw the surface.

        Returns:
            False once the user has asked to quit
        """
        while self._events and not self.session.quit:
            self.panes.dispatch(self.session, self._events.popleft())
        if self.session.quit:
            return False
        self.panes.render(self.session, self.surface)
        return True

    def resize(self, width: int, height: int) -> None:
        logger.debug("Resized to %dx%d", width, height)
        self.surface = Surface(width, height)
        self.terminal.invalidate_frame()

    def run(self):
        """Run the main pager loop."""
        self.terminal.setup()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        try:
            tty_fd = self.terminal.fileno()
            while self.step():
                self.terminal.present(self.surface)
                # Wait for input on the tty or the signal pipe
                ready, _, _ = select.select([tty_fd, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    if self._ctrl_c_pressed:
                        self._ctrl_c_pressed = False
                        self.queue_event(ctrl('c'))
                    else:
                        self.resize(self.terminal.width, self.terminal.height)
                elif tty_fd in ready:
                    # One read can carry several keys
                    event = self.keyboard.get_event(timeout=0)
                    while event is not None:
                        self.queue_event(event)
                        event = self.keyboard.get_event(timeout=0)
        finally:
            # Restore original signal handlers
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
