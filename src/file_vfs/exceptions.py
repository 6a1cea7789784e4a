"""Exception hierarchy for the virtual file system."""
from typing import Optional


class VfsError(Exception):
    """Base class for all errors raised by file_vfs."""


class InvalidArgumentError(VfsError, TypeError):
    """An index or value of the wrong type or range was supplied."""


class ClosedFileError(VfsError, ValueError):
    """An operation was attempted on a closed file iterable."""


class FileError(VfsError):
    """Base exception for errors tied to a specific file."""

    def __init__(self, filename: str, message: str):
        self.filename = filename
        super().__init__(f'{message}: "{filename}"')


class NotFoundError(FileError):
    """The requested file or directory does not exist."""

    def __init__(self, filename: str):
        super().__init__(filename, "File not found")


class InaccessibleFileError(FileError):
    """The requested path lies outside the file system root."""

    def __init__(self, filename: str):
        super().__init__(filename, "File is not accessible")


class LockContentionError(FileError):
    """The exclusive lock is held by another writer.

    The operation made no modifications and can be retried.
    """

    def __init__(self, filename: str):
        super().__init__(filename, "File locked")


class CouldNotNormalizeError(FileError):
    """A file could not be decoded into a value."""

    def __init__(self, filename: str, reason: Optional[BaseException] = None):
        super().__init__(filename, f"Could not normalize file ({reason})")


class CouldNotDenormalizeError(FileError):
    """A value could not be encoded and written to a file."""

    def __init__(self, filename: str, reason: Optional[BaseException] = None):
        super().__init__(filename, f"Could not denormalize file ({reason})")
