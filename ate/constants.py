"""Constants and configuration for the ate pager."""


class PagerConstants:
    """Central configuration constants for the pager."""

    # Scrolling
    CONTEXT_LINES = 3  # Rows kept above/below a highlight when scrolling to it
    PAGE_OVERLAP = 2  # Rows repeated between pages on Space / b

    # Search pane
    MAX_SEARCH_MATCH_ROWS = 10  # Match rows shown while searching
    SEARCH_CHROME_ROWS = 2  # Separator row + query row
    SEARCH_SEPARATOR = "━"
    SEARCH_PROMPT = "Search: "

    # Status pane
    STATUS_ROWS = 1
    STATUS_BACKGROUND_INDEX = 8  # Palette grey

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    INTERRUPT_PIPE_MARKER = b'C'  # Byte written to pipe on SIGINT

    # Messages
    STDIN_IS_TTY_MESSAGE = "ate displays data from stdin i.e. pipe or redirect to ate"
    MISSING_OPENER_MESSAGE = "ATE_OPENER must be defined to open links"

    # Environment variables
    OPENER_ENV = "ATE_OPENER"
    OPEN_FIRST_ENV = "ATE_OPEN_FIRST"
    GOTO_LAST_ENV = "ATE_GOTO_LAST"
    LOG_FILE_ENV = "ATE_LOG"
