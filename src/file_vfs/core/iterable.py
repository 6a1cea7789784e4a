"""Random-access editor and iterable view of a flat file."""
import logging
from collections.abc import Iterator
from enum import Enum
from typing import BinaryIO, Optional, Union

from ..exceptions import InvalidArgumentError
from .accessors import ChunkAccessor, LineAccessor
from .cursor import SequentialCursor
from .line_index import LineIndex
from .stream import StreamPrimitive

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096

Value = Union[bytes, bytearray, str]


class Mode(str, Enum):
    """How a file is split into addressable units."""

    CHUNK = "chunk"
    LINE = "line"


def _validate_index(index) -> int:
    # bool is an int subclass but never a meaningful index
    if not isinstance(index, int) or isinstance(index, bool):
        raise InvalidArgumentError(
            f"Tried to access file unit with a non-integer key: {index!r}"
        )
    if index < 0:
        raise InvalidArgumentError(f"Tried to access file unit at negative key {index}")
    return index


def _validate_options(mode, chunk_size) -> tuple[Mode, int]:
    try:
        mode = Mode(mode) if mode is not None else Mode.CHUNK
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown file iterable mode: {mode!r}") from e

    if chunk_size is None:
        chunk_size = DEFAULT_CHUNK_SIZE
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise InvalidArgumentError(f"Chunk size must be an integer: {chunk_size!r}")
    if chunk_size < 1:
        raise InvalidArgumentError(f"Chunk size must be positive: {chunk_size}")
    return mode, chunk_size


class RandomAccessEditor:
    """Validated exists/get/set/delete over the accessor for one mode."""

    def __init__(
        self,
        stream: StreamPrimitive,
        mode: Mode,
        chunk_size: int,
        line_index: Optional[LineIndex] = None,
        encoding: str = "utf-8",
    ):
        """Initialize editor.

        Args:
            stream: Shared stream
            mode: Chunk or line addressing
            chunk_size: Chunk width or maximum line length
            line_index: Shared line index (required for line mode)
            encoding: Encoding applied to ``str`` values before writing
        """
        self.mode = mode
        self.encoding = encoding
        if mode is Mode.CHUNK:
            self._accessor = ChunkAccessor(stream, chunk_size)
        else:
            if line_index is None:
                line_index = LineIndex(stream, chunk_size)
            self._accessor = LineAccessor(stream, line_index)

    def _coerce_value(self, value) -> Optional[bytes]:
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode(self.encoding)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        raise InvalidArgumentError(
            f"Value for file units can only be bytes, str or None, got {type(value).__name__}"
        )

    def exists(self, index: int) -> bool:
        return self._accessor.exists(_validate_index(index))

    def get(self, index: int) -> Optional[bytes]:
        return self._accessor.get(_validate_index(index))

    def set(self, index: Optional[int], value: Optional[Value]):
        """Write a unit.

        Args:
            index: Target index, or None to append
            value: New content, or None to remove the unit at ``index``

        Raises:
            InvalidArgumentError: If the index or value has the wrong type
            LockContentionError: If another writer holds the lock
        """
        if index is not None:
            _validate_index(index)
        self._accessor.set(index, self._coerce_value(value))

    def delete(self, index: int):
        """Remove a unit, shifting all following units forward."""
        self.set(_validate_index(index), None)


class FileIterable:
    """A flat file exposed as a mutable, iterable sequence of units.

    In chunk mode every unit is a ``chunk_size`` byte window; in line mode
    every unit is a newline-delimited record of at most ``chunk_size``
    bytes. Supports ``iterable[i]``, ``iterable[i] = value``,
    ``del iterable[i]``, ``append(value)`` and iteration.

    Reads never take the lock, so a read concurrent with another process's
    staged rewrite may observe a half-written file.
    """

    def __init__(
        self,
        stream: BinaryIO,
        mode: Optional[Union[Mode, str]] = None,
        chunk_size: Optional[int] = None,
        encoding: str = "utf-8",
    ):
        """Take ownership of an open stream.

        Args:
            stream: Seekable binary stream opened for reading and writing
            mode: Chunk or line mode (default chunk)
            chunk_size: Chunk width or maximum line length (default 4096)
            encoding: Encoding applied to ``str`` values before writing
        """
        try:
            self.mode, self.chunk_size = _validate_options(mode, chunk_size)
        except InvalidArgumentError:
            # The stream is owned from the start, even when rejected
            stream.close()
            raise

        self._stream = StreamPrimitive(stream)
        self.line_index: Optional[LineIndex] = None
        if self.mode is Mode.LINE:
            self.line_index = LineIndex(self._stream, self.chunk_size)

        self.editor = RandomAccessEditor(
            self._stream, self.mode, self.chunk_size, self.line_index, encoding
        )
        self.cursor = SequentialCursor(self._stream, self.chunk_size, self.line_index)
        logger.debug(f"Opened {self.name} in {self.mode.value} mode, unit size {self.chunk_size}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def __del__(self):
        # __init__ may have failed before the stream was wrapped
        stream = self.__dict__.get("_stream")
        if stream is not None:
            stream.close()

    @property
    def name(self) -> str:
        return self._stream.name

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def close(self):
        """Close the underlying stream. Safe to call more than once."""
        self._stream.close()

    # Random access

    def exists(self, index: int) -> bool:
        return self.editor.exists(index)

    def get(self, index: int) -> Optional[bytes]:
        return self.editor.get(index)

    def set(self, index: Optional[int], value: Optional[Value]):
        self.editor.set(index, value)

    def delete(self, index: int):
        self.editor.delete(index)

    def append(self, value: Value):
        """Add a unit after the current end of the file."""
        self.editor.set(None, value)

    def __getitem__(self, index: int) -> Optional[bytes]:
        return self.editor.get(index)

    def __setitem__(self, index: int, value: Optional[Value]):
        self.editor.set(_validate_index(index), value)

    def __delitem__(self, index: int):
        self.editor.delete(index)

    # Sequential traversal

    def rewind(self):
        self.cursor.rewind()

    def advance(self):
        self.cursor.advance()

    def current(self) -> bytes:
        return self.cursor.current()

    def position(self) -> int:
        return self.cursor.position()

    def is_valid(self) -> bool:
        return self.cursor.is_valid()

    def items(self) -> Iterator[tuple[int, bytes]]:
        """Iterate over ``(position, unit)`` pairs from the start."""
        self.cursor.rewind()
        while self.cursor.is_valid():
            yield self.cursor.position(), self.cursor.current()
            self.cursor.advance()

    def __iter__(self) -> Iterator[bytes]:
        for _, unit in self.items():
            yield unit
