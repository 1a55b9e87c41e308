"""Command pattern implementation for pager actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .constants import PagerConstants
from .keyboard import KeyType

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .session import Session


class PagerCommand(ABC):
    """Base class for pager commands."""

    @abstractmethod
    def execute(self, session: 'Session', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            session: State to act on
            key_event: The key event that triggered this command
        """


class ScrollCommand(PagerCommand):
    """Base class for commands that move the document page."""

    def execute(self, session: 'Session', key_event: 'KeyEvent') -> None:
        self._scroll(session)

    @abstractmethod
    def _scroll(self, session: 'Session'):
        """Perform the movement."""


def _page_step(session: 'Session') -> int:
    return max(1, session.view.height - PagerConstants.PAGE_OVERLAP)


class LineUpCommand(ScrollCommand):
    def _scroll(self, session):
        session.view.backward(1)


class LineDownCommand(ScrollCommand):
    def _scroll(self, session):
        session.view.forward(1)


class PageDownCommand(ScrollCommand):
    def _scroll(self, session):
        session.view.forward(_page_step(session))


class PageUpCommand(ScrollCommand):
    def _scroll(self, session):
        session.view.backward(_page_step(session))


class SearchCommand(PagerCommand):
    """Base class for commands that work on the link search."""

    def execute(self, session: 'Session', key_event: 'KeyEvent') -> None:
        self._search(session, key_event)

    @abstractmethod
    def _search(self, session: 'Session', key_event: 'KeyEvent'):
        """Perform the search action."""


class OpenSearchCommand(SearchCommand):
    def _search(self, session, key_event):
        session.open_search()


class CloseSearchCommand(SearchCommand):
    def _search(self, session, key_event):
        session.close_search()


class CancelSearchCommand(SearchCommand):
    def _search(self, session, key_event):
        session.cancel_search()


class NextLinkCommand(SearchCommand):
    def _search(self, session, key_event):
        session.search.select_next(session.view)


class PrevLinkCommand(SearchCommand):
    def _search(self, session, key_event):
        session.search.select_prev(session.view)


class QueryInsertCommand(SearchCommand):
    def _search(self, session, key_event):
        session.search.push_char(key_event.value, session.view)


class QueryBackspaceCommand(SearchCommand):
    def _search(self, session, key_event):
        session.search.pop_char(session.view)


class OpenLinkCommand(PagerCommand):
    def execute(self, session, key_event):
        session.open_selected()


class QuitCommand(PagerCommand):
    def execute(self, session, key_event):
        session.quit = True


class CommandRegistry:
    """Registry for mapping key combinations to commands.

    A registry may have a fallback command that receives every regular
    character no binding claims.
    """

    def __init__(self, fallback: Optional[PagerCommand] = None):
        self._commands: Dict[Tuple[KeyType, str], PagerCommand] = {}
        self._fallback = fallback

    def register(self, key: Tuple[KeyType, str], command: PagerCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[PagerCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, session: 'Session', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if a command handled the key
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None and key_event.key_type == KeyType.REGULAR:
            command = self._fallback
        if command is None:
            return False
        command.execute(session, key_event)
        return True


def main_commands() -> CommandRegistry:
    """Keys that work whichever pane has focus, unless it claims them."""
    registry = CommandRegistry()
    registry.register((KeyType.REGULAR, '/'), OpenSearchCommand())
    registry.register((KeyType.REGULAR, 'n'), NextLinkCommand())
    registry.register((KeyType.REGULAR, 'N'), PrevLinkCommand())
    registry.register((KeyType.SPECIAL, 'enter'), OpenLinkCommand())
    registry.register((KeyType.REGULAR, 'q'), QuitCommand())
    registry.register((KeyType.CTRL, 'c'), QuitCommand())
    return registry


def document_commands() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register((KeyType.SPECIAL, 'up'), LineUpCommand())
    registry.register((KeyType.SPECIAL, 'down'), LineDownCommand())
    registry.register((KeyType.REGULAR, ' '), PageDownCommand())
    registry.register((KeyType.REGULAR, 'b'), PageUpCommand())
    return registry


def search_commands() -> CommandRegistry:
    """Keys of the search prompt; any other character extends the query."""
    registry = CommandRegistry(fallback=QueryInsertCommand())
    registry.register((KeyType.SPECIAL, 'enter'), CloseSearchCommand())
    registry.register((KeyType.SPECIAL, 'escape'), CancelSearchCommand())
    registry.register((KeyType.SPECIAL, 'backspace'), QueryBackspaceCommand())
    registry.register((KeyType.SPECIAL, 'up'), PrevLinkCommand())
    registry.register((KeyType.SPECIAL, 'down'), NextLinkCommand())
    return registry
