"""Lazily built line offset index."""
import logging

from .stream import StreamPrimitive

logger = logging.getLogger(__name__)


class LineIndex:
    """Mapping of line number to the byte offset where that line starts.

    Line 0 always starts at offset 0. Further positions are learned on
    demand by reading forward from the highest known line, so only the
    part of the file up to the furthest line requested is ever scanned.
    Offsets at the end of the stream are never recorded.

    Reads are bounded by ``max_line_length``, so a longer line is indexed as
    several segments. When its length is an exact multiple of the bound the
    terminator is left over as a segment of its own and reads as an empty
    record: ``b"abcdefgh\\n"`` with a bound of 4 is ``abcd``, ``efgh`` and ``""``.
    """

    def __init__(self, stream: StreamPrimitive, max_line_length: int):
        """Initialize line index.

        Args:
            stream: Stream to index
            max_line_length: Upper bound for a single line read
        """
        self._stream = stream
        self.max_line_length = max_line_length
        self.line_positions: list[int] = [0]

    def __contains__(self, line_num: int) -> bool:
        return 0 <= line_num < len(self.line_positions)

    def __getitem__(self, line_num: int) -> int:
        return self.line_positions[line_num]

    def __len__(self) -> int:
        return len(self.line_positions)

    @property
    def last_line(self) -> int:
        """Highest line number with a known offset."""
        return len(self.line_positions) - 1

    def extend_to(self, target: int):
        """Learn line offsets up to ``target`` or the end of the stream.

        Args:
            target: Line number that should become known
        """
        if target in self:
            return

        self._stream.seek(self.line_positions[-1])
        while len(self.line_positions) <= target:
            if not self._stream.readline(self.max_line_length):
                break
            position = self._stream.tell()
            if self._stream.probe_eof():
                break
            self.line_positions.append(position)

    def learn(self, line_num: int, offset: int):
        """Record an offset discovered while reading sequentially.

        Only the next unknown line can be learned; anything else would
        leave a gap in the index and is ignored.
        """
        if line_num == len(self.line_positions) and offset > self.line_positions[-1]:
            self.line_positions.append(offset)

    def reset(self):
        """Forget every offset except that of line 0."""
        if len(self.line_positions) > 1:
            logger.debug(f"Resetting line index after {len(self.line_positions)} lines")
        self.line_positions = [0]
