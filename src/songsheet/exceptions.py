class SongsheetError(Exception):
    """Base exception for songsheet."""


class InvalidKeyError(SongsheetError):
    """Raised when a key string has no recognisable root note."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Not a valid key: {key!r}")


class UnsupportedFormatError(SongsheetError):
    """Raised when no output adapter matches the requested format."""

    def __init__(self, fmt: str):
        self.fmt = fmt
        super().__init__(f"No adapter found for format: {fmt}")
