"""Local directory tree exposed as a jailed virtual file system."""
import logging
import os
import shutil
import stat
from collections.abc import Iterator
from pathlib import Path
from typing import IO, Any, Optional, Union

from ..core.iterable import FileIterable, Mode
from ..exceptions import InaccessibleFileError, NotFoundError

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """File system rooted at a local directory.

    Every path is interpreted relative to the root; a leading ``/`` refers
    to the root itself. Paths that resolve outside the root, including
    through symlinks, are rejected.
    """

    def __init__(self, root: Union[str, Path]):
        """Initialize local file system.

        Args:
            root: Directory that becomes the root of the file system
        """
        self.root = Path(root).resolve()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root)!r})"

    def _resolve(self, filename: Union[str, Path]) -> Path:
        """Resolve a path within the root.

        Args:
            filename: Path relative to the root

        Returns:
            Absolute path within the root

        Raises:
            InaccessibleFileError: If the path is outside the root
        """
        relative = str(filename).lstrip("/")
        full_path = (self.root / relative).resolve()

        try:
            full_path.relative_to(self.root)
        except ValueError:
            raise InaccessibleFileError(str(filename)) from None

        return full_path

    def _existing(self, filename: Union[str, Path]) -> Path:
        full_path = self._resolve(filename)
        if not full_path.exists():
            raise NotFoundError(str(filename))
        return full_path

    def touch(self, filename: str):
        """Create a file without content, or update its modification time."""
        self._resolve(filename).touch()

    def make_directory(self, filename: str):
        full_path = self._resolve(filename)
        full_path.mkdir()
        logger.info(f"Created directory {full_path}")

    def remove_directory(self, filename: str):
        full_path = self._existing(filename)
        full_path.rmdir()
        logger.info(f"Removed directory {full_path}")

    def move(self, current: str, new_filename: str):
        """Move a file to a new location within the root.

        Args:
            current: Current path
            new_filename: Destination path
        """
        source = self._existing(current)
        destination = self._resolve(new_filename)
        source.replace(destination)
        logger.info(f"Moved {source} -> {destination}")

    def put(self, filename: str, content: Union[bytes, str]):
        """Write content to a file, creating or overwriting it."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._resolve(filename).write_bytes(content)

    def write(self, filename: str, content: Union[bytes, str]):
        """Append content to an existing file."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        with open(self._existing(filename), "ab") as f:
            f.write(content)

    def truncate(self, filename: str):
        """Remove all content from an existing file."""
        with open(self._existing(filename), "wb"):
            pass

    def get(self, filename: str) -> bytes:
        """Read the entire content of a file."""
        return self._existing(filename).read_bytes()

    def unlink(self, filename: str):
        full_path = self._existing(filename)
        full_path.unlink()
        logger.info(f"Unlinked {full_path}")

    def copy(self, source: str, destination: str):
        shutil.copy2(self._existing(source), self._resolve(destination))

    def size(self, filename: str) -> int:
        """Size of a file in bytes."""
        return self._existing(filename).stat().st_size

    def realpath(self, filename: str) -> str:
        """Absolute path of an existing file on the host."""
        return str(self._existing(filename))

    def set_file_mode(self, filename: str, mode: int):
        """Change permission bits, e.g. ``0o644``."""
        self._existing(filename).chmod(mode)

    def get_file_mode(self, filename: str) -> int:
        """Permission bits of a file, e.g. ``0o644``."""
        return stat.S_IMODE(self._existing(filename).stat().st_mode) & 0o777

    def get_file_iterable(
        self,
        filename: str,
        mode: Optional[Union[Mode, str]] = None,
        chunk_size: Optional[int] = None,
    ) -> FileIterable:
        """Open a file for chunk or line level random access.

        Args:
            filename: Path of an existing regular file
            mode: Chunk or line mode (default chunk)
            chunk_size: Chunk width, or maximum line length in line mode

        Returns:
            FileIterable owning the opened file

        Raises:
            NotFoundError: If the path is not a regular file
        """
        if not self.is_file(filename):
            raise NotFoundError(filename)

        return FileIterable(open(self._resolve(filename), "r+b"), mode, chunk_size)

    def get_directory_iterable(self, path: str) -> Iterator[os.DirEntry]:
        """Iterate over the entries of a directory.

        Raises:
            NotFoundError: If the path is not a directory
        """
        if not self.is_directory(path):
            raise NotFoundError(path)
        return os.scandir(self._resolve(path))

    def list(self, path: str = "") -> list[str]:
        """Names of the entries in a directory, or [] for a non-directory."""
        if not self.is_directory(path):
            return []
        return sorted(entry.name for entry in self._resolve(path).iterdir())

    def is_readable(self, filename: str) -> bool:
        full_path = self._resolve(filename)
        return full_path.exists() and os.access(full_path, os.R_OK)

    def is_writeable(self, filename: str) -> bool:
        full_path = self._resolve(filename)
        return full_path.exists() and os.access(full_path, os.W_OK)

    def is_executable(self, filename: str) -> bool:
        full_path = self._resolve(filename)
        return full_path.exists() and os.access(full_path, os.X_OK)

    def is_file(self, filename: str) -> bool:
        return self._resolve(filename).is_file()

    def is_directory(self, filename: str) -> bool:
        return self._resolve(filename).is_dir()

    def get_path_info(self, filename: str) -> dict[str, str]:
        """Split a path into directory, base name, extension and stem.

        Returns:
            Dictionary with ``dirname``, ``basename``, ``extension`` (without
            the dot, empty if none) and ``filename``
        """
        full_path = self._existing(filename)
        return {
            "dirname": str(full_path.parent),
            "basename": full_path.name,
            "extension": full_path.suffix[1:],
            "filename": full_path.stem,
        }

    def get_file_info(self, filename: str) -> Path:
        return self._existing(filename)

    def get_file_object(self, filename: str, mode: str = "r", **kwargs: Any) -> IO:
        """Open a file within the root with the builtin ``open``.

        Args:
            filename: Path relative to the root
            mode: File open mode
            **kwargs: Passed through to ``open``
        """
        return open(self._resolve(filename), mode, **kwargs)
