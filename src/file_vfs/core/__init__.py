"""Core file editing modules."""

from .accessors import LINE_SEPARATOR, ChunkAccessor, LineAccessor
from .cursor import SequentialCursor
from .iterable import DEFAULT_CHUNK_SIZE, FileIterable, Mode, RandomAccessEditor
from .line_index import LineIndex
from .safety import RetryableOperation, staged_replace, staging_buffer
from .stream import StreamPrimitive, lock_path_for

__all__ = [
    # Editor
    'FileIterable',
    'Mode',
    'RandomAccessEditor',
    'SequentialCursor',
    'DEFAULT_CHUNK_SIZE',

    # Building blocks
    'StreamPrimitive',
    'lock_path_for',
    'LineIndex',
    'ChunkAccessor',
    'LineAccessor',
    'LINE_SEPARATOR',

    # Safety mechanisms
    'RetryableOperation',
    'staged_replace',
    'staging_buffer',
]
