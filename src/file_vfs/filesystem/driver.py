"""Driver that connects to local file systems."""
import logging
from pathlib import Path
from typing import Optional, Union

from ..exceptions import NotFoundError
from ..formats.normalizer import FileSystemNormalizer, VoidFileSystemNormalizer
from .local import LocalFileSystem

logger = logging.getLogger(__name__)


class LocalFileSystemDriver:
    """Opens local directories as file systems sharing one normalizer."""

    def __init__(self, normalizer: Optional[FileSystemNormalizer] = None):
        """Initialize driver.

        Args:
            normalizer: Normalizer handed out to callers (defaults to the
                void normalizer, which refuses every conversion)
        """
        self._normalizer = normalizer if normalizer is not None else VoidFileSystemNormalizer()

    def get_file_system_normalizer(self) -> FileSystemNormalizer:
        return self._normalizer

    def connect(self, path: Union[str, Path]) -> LocalFileSystem:
        """Connect to a directory.

        Raises:
            NotFoundError: If the path is not an existing directory
        """
        root = Path(path).expanduser()
        if not root.is_dir():
            raise NotFoundError(str(path))

        file_system = LocalFileSystem(root)
        logger.debug(f"Connected to {file_system.root}")
        return file_system

    def disconnect(self, file_system: LocalFileSystem):
        """Disconnect from a file system. Local roots hold no resources."""
        logger.debug(f"Disconnected from {file_system.root}")
