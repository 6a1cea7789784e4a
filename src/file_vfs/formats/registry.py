"""Codec registry and key translation tables."""
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Encoder(Protocol):
    def encode(self, value: Any) -> bytes: ...


@runtime_checkable
class Decoder(Protocol):
    def decode(self, data: bytes) -> Any: ...


class CodecNotFoundError(KeyError):
    """No encoder or decoder is registered under the requested key."""


class TranslationError(KeyError):
    """A translator has no entry for the requested key."""


class CodecRegistry:
    """Encoders and decoders registered by codec key, e.g. ``"json"``."""

    def __init__(self):
        self._encoders: dict[str, Encoder] = {}
        self._decoders: dict[str, Decoder] = {}

    def register_encoder(self, key: str, encoder: Encoder):
        self._encoders[key] = encoder

    def register_decoder(self, key: str, decoder: Decoder):
        self._decoders[key] = decoder

    def register(self, key: str, codec: Any):
        """Register an object implementing both ``encode`` and ``decode``."""
        self.register_encoder(key, codec)
        self.register_decoder(key, codec)

    def has_encoder(self, key: str) -> bool:
        return key in self._encoders

    def has_decoder(self, key: str) -> bool:
        return key in self._decoders

    def get_encoder(self, key: str) -> Encoder:
        try:
            return self._encoders[key]
        except KeyError:
            raise CodecNotFoundError(f"No encoder registered for '{key}'") from None

    def get_decoder(self, key: str) -> Decoder:
        try:
            return self._decoders[key]
        except KeyError:
            raise CodecNotFoundError(f"No decoder registered for '{key}'") from None


class Translator:
    """Bidirectional lookup table between two vocabularies.

    Several left keys may map to the same right value; ``get_left`` then
    returns the first one registered.
    """

    def __init__(self, pairs: Optional[dict[str, str]] = None):
        self._right: dict[str, str] = {}
        self._left: dict[str, str] = {}
        for left, right in (pairs or {}).items():
            self.register(left, right)

    def register(self, left: str, right: str):
        self._right[left] = right
        self._left.setdefault(right, left)

    def get_right(self, left: str) -> str:
        try:
            return self._right[left]
        except KeyError:
            raise TranslationError(f"No translation for '{left}'") from None

    def get_left(self, right: str) -> str:
        try:
            return self._left[right]
        except KeyError:
            raise TranslationError(f"No translation for '{right}'") from None


EXTENSION_TO_MIME = {
    "json": "application/json",
    "yaml": "application/yaml",
    "yml": "application/yaml",
    "csv": "text/csv",
    "txt": "text/plain",
    "md": "text/markdown",
}

MIME_TO_CODEC = {
    "application/json": "json",
    "application/yaml": "yaml",
    "text/csv": "csv",
    "text/plain": "text",
    "text/markdown": "text",
}
