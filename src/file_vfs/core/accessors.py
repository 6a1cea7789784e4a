"""Random access to fixed-size chunks and newline-delimited records."""
import logging
import os
from typing import Optional

from .line_index import LineIndex
from .safety import staged_replace
from .stream import StreamPrimitive

logger = logging.getLogger(__name__)

LINE_SEPARATOR = b"\n"

# Lower bound for the block size used when copying during staged rewrites.
COPY_BLOCK_SIZE = 64 * 1024


def terminate_record(value: bytes) -> bytes:
    """Strip trailing separators and append exactly one."""
    return value.rstrip(LINE_SEPARATOR) + LINE_SEPARATOR


def strip_separator(line: bytes) -> bytes:
    """Remove the trailing separator from a record read from disk."""
    if line.endswith(LINE_SEPARATOR):
        return line[: -len(LINE_SEPARATOR)]
    return line


class ChunkAccessor:
    """Get, set and delete fixed-width byte chunks by index.

    Chunk ``i`` occupies bytes ``[i * chunk_size, (i + 1) * chunk_size)``;
    only the final chunk may be shorter. No index is needed, offsets are
    pure arithmetic.
    """

    def __init__(self, stream: StreamPrimitive, chunk_size: int):
        self._stream = stream
        self.chunk_size = chunk_size
        self._block_size = max(chunk_size, COPY_BLOCK_SIZE)

    def _offset(self, index: int) -> int:
        return index * self.chunk_size

    def exists(self, index: int) -> bool:
        self._stream.seek(self._offset(index))
        return not self._stream.probe_eof()

    def get(self, index: int) -> Optional[bytes]:
        self._stream.seek(self._offset(index))
        if self._stream.probe_eof():
            return None
        return self._stream.read(self.chunk_size)

    def set(self, index: Optional[int], value: Optional[bytes]):
        """Write a chunk, holding the exclusive lock throughout.

        Args:
            index: Chunk index, or None to append at the end of the stream
            value: New chunk content, or None to remove the chunk
        """
        with self._stream.exclusive():
            if index is None:
                if value:
                    self._stream.seek(0, os.SEEK_END)
                    self._stream.write(value)
                return

            self._write(index, value or b"")

    def _write(self, index: int, value: bytes):
        offset = self._offset(index)
        at_or_past_end = not self.exists(index)
        is_last_chunk = not self.exists(index + 1)
        same_width = len(value) == self.chunk_size

        if at_or_past_end:
            if value:
                logger.debug(f"Chunk {index} is past the end, appending")
                self._stream.seek(0, os.SEEK_END)
                self._stream.write(value)
            return

        if same_width:
            self._stream.seek(offset)
            self._stream.write(value)
        elif is_last_chunk:
            logger.debug(f"Resizing last chunk {index} to {len(value)} bytes")
            self._stream.seek(offset)
            self._stream.write(value)
            self._stream.truncate(self._stream.tell())
        else:
            staged_replace(
                self._stream, offset, offset + self.chunk_size, value, self._block_size
            )


class LineAccessor:
    """Get, set and delete newline-delimited records by line number.

    Records are located through a shared ``LineIndex``. Records read back
    never include their terminator; records written always get exactly one.
    """

    def __init__(self, stream: StreamPrimitive, line_index: LineIndex):
        self._stream = stream
        self._index = line_index
        self.max_line_length = line_index.max_line_length
        self._block_size = max(self.max_line_length, COPY_BLOCK_SIZE)

    def exists(self, index: int) -> bool:
        self._index.extend_to(index)
        if index not in self._index:
            return False
        self._stream.seek(self._index[index])
        return not self._stream.probe_eof()

    def get(self, index: int) -> Optional[bytes]:
        if not self.exists(index):
            return None
        self._stream.seek(self._index[index])
        return strip_separator(self._stream.readline(self.max_line_length))

    def set(self, index: Optional[int], value: Optional[bytes]):
        """Write a record, holding the exclusive lock throughout.

        Args:
            index: Line number, or None to append a record
            value: New record content, or None to remove the record
        """
        with self._stream.exclusive():
            if index is None:
                if value is not None:
                    self._append(value)
                return

            if self.exists(index):
                self._replace(index, value)
            elif value is not None:
                self._pad_and_write(index, value)

    def _terminate_last_record(self):
        """Seek to the end, first terminating a record missing its separator."""
        end = self._stream.seek(0, os.SEEK_END)
        if end == 0:
            return
        self._stream.seek(end - len(LINE_SEPARATOR))
        if self._stream.read(len(LINE_SEPARATOR)) != LINE_SEPARATOR:
            self._stream.seek(end)
            self._stream.write(LINE_SEPARATOR)

    def _append(self, value: bytes):
        self._index.reset()
        self._terminate_last_record()
        self._stream.write(terminate_record(value))

    def _replace(self, index: int, value: Optional[bytes]):
        offset = self._index[index]
        self._stream.seek(offset)
        current = self._stream.readline(self.max_line_length)
        end = offset + len(current)
        is_last_line = self._stream.probe_eof()

        if value is None:
            if is_last_line:
                self._stream.truncate(offset)
            else:
                staged_replace(self._stream, offset, end, b"", self._block_size)
            self._index.reset()
            return

        record = terminate_record(value)
        if is_last_line:
            self._stream.seek(offset)
            self._stream.write(record)
            self._stream.truncate(self._stream.tell())
            self._index.reset()
        elif current.endswith(LINE_SEPARATOR) and len(record) == len(current):
            self._stream.seek(offset)
            self._stream.write(record)
            if LINE_SEPARATOR in value:
                # The value splits into several records
                self._index.reset()
        else:
            logger.debug(
                f"Line {index} changes from {len(current)} to {len(record)} bytes, "
                f"staging rewrite"
            )
            staged_replace(self._stream, offset, end, record, self._block_size)
            self._index.reset()

    def _pad_and_write(self, index: int, value: bytes):
        """Write a record past the end, padding the gap with blank records."""
        count = self._index.last_line + 1 if self.exists(0) else 0
        padding = index - count
        logger.debug(f"Padding {padding} blank lines before line {index}")

        self._terminate_last_record()
        self._stream.write(LINE_SEPARATOR * padding + terminate_record(value))
        self._index.reset()
