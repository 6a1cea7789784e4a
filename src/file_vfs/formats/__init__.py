"""Content codecs and file normalizers."""

from .codecs import CSVCodec, JSONCodec, TextCodec, YAMLCodec, default_registry
from .normalizer import FileSystemNormalizer, VoidFileSystemNormalizer
from .registry import CodecNotFoundError, CodecRegistry, TranslationError, Translator

__all__ = [
    "CodecRegistry",
    "CodecNotFoundError",
    "Translator",
    "TranslationError",
    "JSONCodec",
    "YAMLCodec",
    "CSVCodec",
    "TextCodec",
    "default_registry",
    "FileSystemNormalizer",
    "VoidFileSystemNormalizer",
]
