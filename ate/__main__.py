"""ate CLI entry point.

Allows running via `python -m ate` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys

from .version import get_version_string

logger = logging.getLogger(__name__)


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print the parsed form of each key read from the tty. Quit with ESC."""
    from .keyboard import KeyboardHandler, KeyEvent, KeyType, Paste
    from .terminal import TerminalInterface

    term = TerminalInterface()
    term.setup()
    print("Keyboard test mode: press keys to see parsed events.\r")
    print("Quit with ESC.\r", flush=True)
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_event(timeout=None)
            if ev is None:
                continue
            if isinstance(ev, Paste):
                print(f"paste text='{_escape_bytes(ev.text)}'\r", flush=True)
                continue
            assert isinstance(ev, KeyEvent)
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{_escape_bytes(ev.raw)}'"]
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl), ('seq', ev.is_sequence)) if on]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts) + '\r', flush=True)
    finally:
        term.cleanup()


def run_pager() -> int:
    """Page stdin. Returns the process exit status."""
    from .config import PagerConfig
    from .constants import PagerConstants
    from .document import Document
    from .errors import AteError
    from .log import setup_logging

    if sys.stdin.isatty():
        print(PagerConstants.STDIN_IS_TTY_MESSAGE, file=sys.stderr)
        return 1

    config = PagerConfig.from_env()
    setup_logging(config.log_file)
    logger.info("ate %s starting", get_version_string())

    try:
        document = Document.from_stream(sys.stdin.buffer)
    except AteError as e:
        logger.error("%s", e)
        print(f"ate: {e}", file=sys.stderr)
        return 1
    logger.info("Document has %d links", len(document.links))

    # Lazy import to avoid importing UI deps for --version
    from .pager import Pager
    try:
        Pager(document, config).run()
    except AteError as e:
        # The terminal has been restored by the time this is printed
        logger.exception("ate failed")
        print(f"ate: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("ate crashed")
        raise
    return 0


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return
    sys.exit(run_pager())


if __name__ == "__main__":  # pragma: no cover
    main()
