"""Error kinds raised by the pager."""


class AteError(Exception):
    """Base class for errors the pager reports to the user."""


class InputReadError(AteError):
    """Reading the input stream failed; the document cannot be built."""

    def __init__(self, cause: OSError):
        super().__init__(f"Failed to read input: {cause}")
        self.cause = cause


class UnsupportedStyle(AteError):
    """An SGR code has no attribute mapping."""

    def __init__(self, code: int):
        super().__init__(f"Unsupported SGR code {code}")
        self.code = code


class OpenLinkFailed(AteError):
    """The URI opener could not open a link."""
