"""Exception taxonomy for filesystem inspection.

Fatal conditions (missing root, malformed filter, unwritable export
destination) are raised as exceptions. Per-entry conditions raised by
the probe are caught by the traverser and recorded as
:class:`~filebyte.filesystem.models.SkippedEntry` records instead.
"""


class FilebyteError(Exception):
    """Base exception for filebyte errors.

    Attributes:
        path: Filesystem path the error relates to (may be empty).
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class PathNotFoundError(FilebyteError):
    """Raised when a path does not exist or vanished before it was stat'ed."""


class AccessError(FilebyteError):
    """Raised when permission is denied on an entry or subtree."""


class ReadError(FilebyteError):
    """Raised when a file cannot be read while hashing its content."""


class WriteError(FilebyteError):
    """Raised when an export destination cannot be written."""


class InvalidFilterError(FilebyteError):
    """Raised when an include or exclude pattern is not a valid regex.

    Attributes:
        pattern: The offending pattern text.
    """

    def __init__(self, message: str, pattern: str) -> None:
        super().__init__(message)
        self.pattern = pattern
