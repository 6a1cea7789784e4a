"""Forward-only traversal over chunks or lines."""
import os
from typing import Optional

from ..exceptions import ClosedFileError
from .accessors import strip_separator
from .line_index import LineIndex
from .stream import StreamPrimitive


class SequentialCursor:
    """Sequential traversal state layered over a shared stream.

    Random access moves the physical stream position independently of the
    cursor, so every read first reconciles the physical position with the
    logical one.
    """

    def __init__(
        self,
        stream: StreamPrimitive,
        chunk_size: int,
        line_index: Optional[LineIndex] = None,
    ):
        """Initialize cursor.

        Args:
            stream: Stream to traverse
            chunk_size: Chunk width, or maximum line length for line traversal
            line_index: Shared line index; when given, traversal is per line
        """
        self._stream = stream
        self.chunk_size = chunk_size
        self._line_index = line_index
        self._position = 0

    def _check_open(self):
        if self._stream.closed:
            raise ClosedFileError(f"Stream {self._stream.name} is closed")

    def position(self) -> int:
        self._check_open()
        return self._position

    def rewind(self):
        """Go back to the first unit."""
        self._stream.seek(0)
        self._position = 0

    def advance(self):
        """Step to the next unit. Does not touch the stream."""
        self._check_open()
        self._position += 1

    def reconcile_position(self):
        """Seek the stream to the offset of the unit under the cursor."""
        if self._line_index is None:
            expected = self.chunk_size * self._position
        else:
            self._line_index.extend_to(self._position)
            if self._position in self._line_index:
                expected = self._line_index[self._position]
            else:
                expected = self._stream.size()

        if self._stream.tell() != expected:
            self._stream.seek(expected, os.SEEK_SET)

    def is_valid(self) -> bool:
        """Check whether the cursor points at an existing unit."""
        self.reconcile_position()
        return not self._stream.probe_eof()

    def current(self) -> bytes:
        """Read the unit under the cursor."""
        self.reconcile_position()

        if self._line_index is None:
            return self._stream.read(self.chunk_size)

        line = self._stream.readline(self.chunk_size)
        if not self._stream.probe_eof():
            self._line_index.learn(self._position + 1, self._stream.tell())
        return strip_separator(line)
