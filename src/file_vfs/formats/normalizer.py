"""Normalizers that turn whole files into values and values into files."""
import logging
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Optional

from ..exceptions import (
    CouldNotDenormalizeError,
    CouldNotNormalizeError,
    FileError,
    NotFoundError,
)
from .codecs import default_registry
from .registry import EXTENSION_TO_MIME, MIME_TO_CODEC, CodecRegistry, Translator

if TYPE_CHECKING:
    from ..filesystem.local import LocalFileSystem

logger = logging.getLogger(__name__)


class FileSystemNormalizer:
    """Decodes and encodes files through codecs chosen by file extension.

    The extension is translated to a MIME type, the MIME type to a codec
    key, and the codec is looked up in the registry.
    """

    def __init__(
        self,
        codec_registry: Optional[CodecRegistry] = None,
        extension_to_mime: Optional[Translator] = None,
        mime_to_codec: Optional[Translator] = None,
    ):
        """Initialize normalizer.

        Args:
            codec_registry: Codecs by key (defaults to json, yaml, csv, text)
            extension_to_mime: Extension to MIME type translator
            mime_to_codec: MIME type to codec key translator
        """
        self.codec_registry = codec_registry if codec_registry is not None else default_registry()
        self.extension_to_mime = extension_to_mime or Translator(EXTENSION_TO_MIME)
        self.mime_to_codec = mime_to_codec or Translator(MIME_TO_CODEC)

    def _extension_to_codec(self, extension: str) -> str:
        return self.mime_to_codec.get_right(self.extension_to_mime.get_right(extension.lower()))

    def normalize_from_file(self, file_system: "LocalFileSystem", filename: str) -> Any:
        """Decode a file into a value.

        Raises:
            CouldNotNormalizeError: If the file is missing or cannot be decoded
        """
        try:
            if not file_system.is_file(filename):
                raise NotFoundError(filename)

            extension = file_system.get_path_info(filename)["extension"]
            decoder = self.codec_registry.get_decoder(self._extension_to_codec(extension))
            return decoder.decode(file_system.get(filename))

        except Exception as e:
            logger.error(f"Failed to normalize {filename}: {e}")
            raise CouldNotNormalizeError(filename, e) from e

    def denormalize_to_file(self, file_system: "LocalFileSystem", filename: str, value: Any):
        """Encode a value and write it to a file, replacing any content.

        Raises:
            CouldNotDenormalizeError: If the value cannot be encoded or written
        """
        try:
            extension = PurePosixPath(filename).suffix[1:]
            if not extension:
                raise FileError(filename, "No extension to select a codec")

            encoder = self.codec_registry.get_encoder(self._extension_to_codec(extension))
            file_system.put(filename, encoder.encode(value))

        except Exception as e:
            logger.error(f"Failed to denormalize {filename}: {e}")
            raise CouldNotDenormalizeError(filename, e) from e


class VoidFileSystemNormalizer(FileSystemNormalizer):
    """Normalizer that refuses every conversion."""

    def __init__(self):
        super().__init__(CodecRegistry(), Translator(), Translator())

    def normalize_from_file(self, file_system: "LocalFileSystem", filename: str) -> Any:
        raise CouldNotNormalizeError(filename, FileError(filename, "Using void normalizer"))

    def denormalize_to_file(self, file_system: "LocalFileSystem", filename: str, value: Any):
        raise CouldNotDenormalizeError(filename, FileError(filename, "Using void normalizer"))
