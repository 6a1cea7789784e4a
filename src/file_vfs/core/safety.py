"""Staged rewrites and retry helpers for file mutations."""
import logging
import tempfile
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import IO, Any, Optional

from ..exceptions import LockContentionError
from .stream import StreamPrimitive

logger = logging.getLogger(__name__)

# Staged content above this size spills from memory to a temporary file.
STAGING_SPOOL_SIZE = 1024 * 1024


@contextmanager
def staging_buffer(max_size: int = STAGING_SPOOL_SIZE) -> Iterator[IO[bytes]]:
    """Temporary buffer for staged rewrites.

    The buffer is private to the process and discarded when the block
    exits, whether it succeeded or not.
    """
    with tempfile.SpooledTemporaryFile(max_size=max_size, mode="w+b") as buffer:
        yield buffer


def copy_stream(
    source: Any, destination: Any, length: Optional[int], block_size: int
) -> int:
    """Copy bytes between streams in bounded blocks.

    Args:
        source: Object with a ``read(size)`` method
        destination: Object with a ``write(data)`` method
        length: Number of bytes to copy (None for everything remaining)
        block_size: Maximum bytes held in memory at once

    Returns:
        Number of bytes copied
    """
    copied = 0
    while length is None or copied < length:
        size = block_size if length is None else min(block_size, length - copied)
        block = source.read(size)
        if not block:
            break
        destination.write(block)
        copied += len(block)
    return copied


def staged_replace(
    stream: StreamPrimitive,
    start: int,
    end: int,
    replacement: bytes,
    block_size: int,
) -> int:
    """Replace the byte range ``[start, end)`` when the length changes.

    Everything before ``start``, the replacement and everything from ``end``
    onwards is staged into a temporary buffer, then copied back over the
    stream from offset 0 and the stream truncated to the staged length.
    A failure during the copy back leaves the stream partially rewritten.

    Args:
        stream: Stream to rewrite (caller holds the exclusive lock)
        start: Start offset of the replaced range
        end: End offset of the replaced range (exclusive)
        replacement: New bytes for the range
        block_size: Copy block size

    Returns:
        New stream size
    """
    with staging_buffer() as staging:
        stream.seek(0)
        copy_stream(stream, staging, start, block_size)
        staging.write(replacement)
        stream.seek(end)
        copy_stream(stream, staging, None, block_size)

        size = staging.tell()
        staging.seek(0)
        stream.seek(0)
        copy_stream(staging, stream, None, block_size)
        stream.truncate(size)

    logger.debug(
        f"Staged rewrite of {stream.name}: [{start}, {end}) -> "
        f"{len(replacement)} bytes, new size {size}"
    )
    return size


class RetryableOperation:
    """Retry an operation that failed on lock contention, with exponential backoff."""

    def __init__(
        self, max_retries: int = 3, base_delay: float = 0.05, max_delay: float = 2.0
    ):
        """Initialize retryable operation.

        Args:
            max_retries: Maximum number of retry attempts
            base_delay: Base delay between retries in seconds
            max_delay: Maximum delay between retries in seconds
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

    def execute(
        self,
        operation: Callable[[], Any],
        retry_exceptions: tuple = (LockContentionError,),
    ) -> Any:
        """Execute operation with retry logic.

        Args:
            operation: Function to execute
            retry_exceptions: Tuple of exceptions that should trigger retry

        Returns:
            Result of operation

        Raises:
            Last exception if all retries failed
        """
        last_exception = None

        for attempt in range(self.max_retries + 1):
            try:
                return operation()

            except retry_exceptions as e:
                last_exception = e

                if attempt < self.max_retries:
                    delay = min(self.base_delay * (2**attempt), self.max_delay)
                    logger.warning(
                        f"Attempt {attempt + 1} failed: {e}. "
                        f"Retrying in {delay:.2f} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(f"All {self.max_retries + 1} attempts failed")

        raise last_exception
