"""Virtual file system over local directories with chunk and line level random access."""

from .core import (
    DEFAULT_CHUNK_SIZE,
    FileIterable,
    Mode,
    RandomAccessEditor,
    RetryableOperation,
    SequentialCursor,
    lock_path_for,
)
from .exceptions import (
    ClosedFileError,
    CouldNotDenormalizeError,
    CouldNotNormalizeError,
    FileError,
    InaccessibleFileError,
    InvalidArgumentError,
    LockContentionError,
    NotFoundError,
    VfsError,
)
from .filesystem import LocalFileSystem, LocalFileSystemDriver
from .formats import CodecRegistry, FileSystemNormalizer, Translator, VoidFileSystemNormalizer

__version__ = "0.1.0"

__all__ = [
    # File iterable
    "FileIterable",
    "Mode",
    "RandomAccessEditor",
    "SequentialCursor",
    "RetryableOperation",
    "DEFAULT_CHUNK_SIZE",
    "lock_path_for",
    # File system
    "LocalFileSystem",
    "LocalFileSystemDriver",
    # Normalizers
    "FileSystemNormalizer",
    "VoidFileSystemNormalizer",
    "CodecRegistry",
    "Translator",
    # Errors
    "VfsError",
    "FileError",
    "InvalidArgumentError",
    "ClosedFileError",
    "NotFoundError",
    "InaccessibleFileError",
    "LockContentionError",
    "CouldNotNormalizeError",
    "CouldNotDenormalizeError",
]
