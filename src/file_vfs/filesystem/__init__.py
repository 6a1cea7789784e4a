"""Local file system and driver."""

from .driver import LocalFileSystemDriver
from .local import LocalFileSystem

__all__ = ["LocalFileSystem", "LocalFileSystemDriver"]
