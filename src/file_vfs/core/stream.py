"""Seekable byte stream primitive shared by the file iterable components."""
import hashlib
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Optional, Union

from filelock import FileLock, Timeout

from ..exceptions import ClosedFileError, LockContentionError

logger = logging.getLogger(__name__)


def lock_path_for(path: Union[str, Path]) -> Path:
    """Lock file guarding writes to ``path``.

    Lock files live in the temporary directory so they never show up in
    the edited tree; every opener of the same resolved path shares one.
    """
    digest = hashlib.sha1(str(Path(path).resolve()).encode("utf-8")).hexdigest()
    return Path(tempfile.gettempdir()) / f"file-vfs-{digest}.lock"


def _stream_path(stream: BinaryIO) -> Optional[Path]:
    """Return the filesystem path behind a stream, if it has one."""
    name = getattr(stream, "name", None)
    if isinstance(name, (str, os.PathLike)):
        return Path(name)
    return None


class StreamPrimitive:
    """Owner of one open, seekable binary stream.

    Provides positioned reads and writes, truncation, a reliable end of
    stream probe and a non-blocking exclusive lock. The stream is closed
    exactly once, by ``close()``.
    """

    def __init__(self, stream: BinaryIO, lock_path: Optional[Union[str, Path]] = None):
        """Take ownership of an open stream.

        Args:
            stream: Seekable binary stream opened for reading and writing
            lock_path: Lock file to use (defaults to ``lock_path_for(path)``)
        """
        self._stream: Optional[BinaryIO] = stream
        self.path = _stream_path(stream)
        self._owns_lock_file = False

        if lock_path is None:
            if self.path is not None:
                lock_path = lock_path_for(self.path)
            else:
                # Anonymous streams get a private lock file.
                lock_path = Path(tempfile.gettempdir()) / (
                    f".file-vfs-{os.getpid()}-{id(stream)}.lock"
                )
                self._owns_lock_file = True

        self.lock_path = Path(lock_path)
        self._lock = FileLock(self.lock_path)

    @property
    def name(self) -> str:
        """Human readable name of the stream for error messages."""
        if self.path is not None:
            return str(self.path)
        return f"<stream {self.lock_path.name}>"

    @property
    def closed(self) -> bool:
        return self._stream is None

    def _handle(self) -> BinaryIO:
        if self._stream is None:
            raise ClosedFileError(f"Stream {self.name} is closed")
        return self._stream

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Seek to position in the stream.

        Args:
            offset: Byte offset
            whence: Reference point (0=start, 1=current, 2=end)
        """
        return self._handle().seek(offset, whence)

    def tell(self) -> int:
        """Get current stream position."""
        return self._handle().tell()

    def read(self, size: int = -1) -> bytes:
        return self._handle().read(size)

    def readline(self, size: int = -1) -> bytes:
        """Read up to and including the next newline, bounded by ``size``."""
        return self._handle().readline(size)

    def write(self, data: bytes) -> int:
        return self._handle().write(data)

    def truncate(self, length: int) -> int:
        """Truncate the stream to ``length`` bytes."""
        handle = self._handle()
        handle.flush()
        return handle.truncate(length)

    def size(self) -> int:
        """Get stream size without moving the position."""
        current = self.tell()
        end = self.seek(0, os.SEEK_END)
        self.seek(current)
        return end

    def probe_eof(self) -> bool:
        """Check whether the current position is at the end of the stream.

        A one byte read is attempted and the position restored afterwards;
        the only reliable signal is whether that read returned data.
        """
        handle = self._handle()
        position = handle.tell()
        data = handle.read(1)
        handle.seek(position)
        return not data

    def lock_exclusive(self) -> bool:
        """Try to take the exclusive lock without blocking.

        Returns:
            False when another writer currently holds the lock
        """
        self._handle()
        try:
            self._lock.acquire(timeout=0)
        except Timeout:
            logger.warning(f"Lock contention on {self.lock_path}")
            return False
        return True

    def unlock(self):
        """Release the exclusive lock."""
        if self._stream is not None:
            self._stream.flush()
        self._lock.release()

    @contextmanager
    def exclusive(self) -> Iterator["StreamPrimitive"]:
        """Hold the exclusive lock for the duration of the block.

        Raises:
            LockContentionError: If the lock is held elsewhere
        """
        if not self.lock_exclusive():
            raise LockContentionError(self.name)
        try:
            yield self
        finally:
            self.unlock()

    def close(self):
        """Close the stream. Safe to call more than once."""
        if self._stream is None:
            return

        stream, self._stream = self._stream, None
        try:
            stream.close()
        finally:
            if self._lock.is_locked:
                self._lock.release(force=True)
            if self._owns_lock_file:
                self.lock_path.unlink(missing_ok=True)
            logger.debug(f"Closed stream {self.name}")
