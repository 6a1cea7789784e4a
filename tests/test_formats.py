"""Tests for codecs, translators and file system normalizers."""
import json
import tempfile
from pathlib import Path

import pytest
from file_vfs.exceptions import (
    CouldNotDenormalizeError,
    CouldNotNormalizeError,
    FileError,
    NotFoundError,
)
from file_vfs.filesystem import LocalFileSystem
from file_vfs.formats import (
    CodecNotFoundError,
    CodecRegistry,
    CSVCodec,
    FileSystemNormalizer,
    JSONCodec,
    TextCodec,
    TranslationError,
    Translator,
    VoidFileSystemNormalizer,
    YAMLCodec,
    default_registry,
)
from file_vfs.formats.registry import Decoder, Encoder
from hypothesis import given
from hypothesis import strategies as st

KEY_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789 _-"


class TestCodecRegistry:
    """Test codec registration and lookup."""

    def test_default_codecs(self) -> None:
        """The default registry knows json, yaml, csv and text."""
        registry = default_registry()

        for key in ("json", "yaml", "csv", "text"):
            assert registry.has_encoder(key)
            assert registry.has_decoder(key)
            assert isinstance(registry.get_encoder(key), Encoder)
            assert isinstance(registry.get_decoder(key), Decoder)

    def test_missing_codec(self) -> None:
        """Unknown keys raise CodecNotFoundError."""
        registry = CodecRegistry()

        assert not registry.has_encoder("json")
        with pytest.raises(CodecNotFoundError):
            registry.get_encoder("json")
        with pytest.raises(CodecNotFoundError):
            registry.get_decoder("json")

    def test_separate_encoder_and_decoder(self) -> None:
        """Encoders and decoders are registered independently."""
        registry = CodecRegistry()
        registry.register_decoder("text", TextCodec())

        assert registry.has_decoder("text")
        assert not registry.has_encoder("text")


class TestTranslator:
    """Test bidirectional key translation."""

    def test_both_directions(self) -> None:
        """Test lookups from either side."""
        translator = Translator({"json": "application/json"})

        assert translator.get_right("json") == "application/json"
        assert translator.get_left("application/json") == "json"

    def test_first_left_key_wins(self) -> None:
        """Several left keys may share one right value."""
        translator = Translator()
        translator.register("yaml", "application/yaml")
        translator.register("yml", "application/yaml")

        assert translator.get_right("yml") == "application/yaml"
        assert translator.get_left("application/yaml") == "yaml"

    def test_missing_key(self) -> None:
        """Unknown keys raise TranslationError."""
        translator = Translator()

        with pytest.raises(TranslationError):
            translator.get_right("json")
        with pytest.raises(TranslationError):
            translator.get_left("application/json")


class TestCodecs:
    """Test the individual codecs."""

    def test_json(self) -> None:
        """Test JSON encoding and decoding."""
        codec = JSONCodec()

        data = codec.encode({"name": "test", "items": [1, 2]})

        assert json.loads(data) == {"name": "test", "items": [1, 2]}
        assert codec.decode(b'{"a": null}') == {"a": None}

    def test_yaml(self) -> None:
        """Test YAML encoding and decoding."""
        codec = YAMLCodec()

        data = codec.encode({"name": "test", "items": [1, 2]})

        assert b"name: test" in data
        assert codec.decode(data) == {"name": "test", "items": [1, 2]}
        assert codec.decode(b"- a\n- b\n") == ["a", "b"]

    def test_csv(self) -> None:
        """Test CSV rows with a header."""
        codec = CSVCodec()

        data = codec.encode([{"name": "John", "age": 30}, {"name": "Jane", "age": 25}])

        assert data == b"name,age\nJohn,30\nJane,25\n"
        assert codec.decode(data) == [
            {"name": "John", "age": "30"},
            {"name": "Jane", "age": "25"},
        ]

    def test_csv_quoting_and_delimiter(self) -> None:
        """Fields containing the delimiter are quoted."""
        codec = CSVCodec(delimiter=";")

        data = codec.encode([{"text": "a;b", "n": "1"}])

        assert data == b'text;n\n"a;b";1\n'
        assert codec.decode(data) == [{"text": "a;b", "n": "1"}]

    def test_csv_empty(self) -> None:
        """No rows encode to no bytes."""
        codec = CSVCodec()

        assert codec.encode([]) == b""
        assert codec.decode(b"") == []

    def test_text(self) -> None:
        """Test plain text."""
        codec = TextCodec()

        assert codec.encode("héllo") == "héllo".encode("utf-8")
        assert codec.decode(b"hello\n") == "hello\n"

    @given(
        st.dictionaries(
            st.text(KEY_ALPHABET, max_size=10),
            st.one_of(st.integers(), st.text(KEY_ALPHABET, max_size=10), st.booleans(), st.none()),
            max_size=8,
        )
    )
    def test_json_and_yaml_agree(self, value: dict) -> None:
        """Both structured codecs reproduce the same mappings."""
        assert JSONCodec().decode(JSONCodec().encode(value)) == value
        assert YAMLCodec().decode(YAMLCodec().encode(value)) == value


class TestFileSystemNormalizer:
    """Test whole-file normalization through a file system."""

    def setup_method(self) -> None:
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()
        self.fs = LocalFileSystem(self.temp_dir)
        self.normalizer = FileSystemNormalizer()

    def teardown_method(self) -> None:
        """Clean up test environment."""
        import shutil

        shutil.rmtree(self.temp_dir)

    def test_json_file(self) -> None:
        """Test writing and reading a JSON file."""
        value = {"name": "config", "enabled": True, "retries": 3}

        self.normalizer.denormalize_to_file(self.fs, "config.json", value)

        assert json.loads(self.fs.get("config.json")) == value
        assert self.normalizer.normalize_from_file(self.fs, "config.json") == value

    def test_yaml_extensions(self) -> None:
        """Both yaml and yml files use the YAML codec."""
        value = {"servers": ["a", "b"]}

        self.normalizer.denormalize_to_file(self.fs, "one.yaml", value)
        self.normalizer.denormalize_to_file(self.fs, "two.YML", value)

        assert self.normalizer.normalize_from_file(self.fs, "one.yaml") == value
        assert self.normalizer.normalize_from_file(self.fs, "two.YML") == value

    def test_csv_file(self) -> None:
        """Test writing and reading a CSV file."""
        rows = [{"id": "1", "name": "a"}, {"id": "2", "name": "b"}]

        self.normalizer.denormalize_to_file(self.fs, "rows.csv", rows)

        assert self.fs.get("rows.csv") == b"id,name\n1,a\n2,b\n"
        assert self.normalizer.normalize_from_file(self.fs, "rows.csv") == rows

    def test_text_and_markdown_files(self) -> None:
        """Text and markdown files decode to strings."""
        self.fs.put("notes.txt", "plain\n")
        self.fs.put("README.md", "# Title\n")

        assert self.normalizer.normalize_from_file(self.fs, "notes.txt") == "plain\n"
        assert self.normalizer.normalize_from_file(self.fs, "README.md") == "# Title\n"

    def test_denormalize_overwrites(self) -> None:
        """Denormalizing replaces existing content."""
        self.fs.put("config.json", "x" * 100)

        self.normalizer.denormalize_to_file(self.fs, "config.json", [])

        assert self.fs.get("config.json") == b"[]"

    def test_missing_file(self) -> None:
        """Normalizing a missing file fails with the cause attached."""
        with pytest.raises(CouldNotNormalizeError) as exc_info:
            self.normalizer.normalize_from_file(self.fs, "missing.json")

        assert exc_info.value.filename == "missing.json"
        assert isinstance(exc_info.value.__cause__, NotFoundError)

    def test_unknown_extension(self) -> None:
        """Files without a known extension cannot be normalized."""
        self.fs.put("data.bin", b"\x00\x01")

        with pytest.raises(CouldNotNormalizeError) as exc_info:
            self.normalizer.normalize_from_file(self.fs, "data.bin")
        assert isinstance(exc_info.value.__cause__, TranslationError)

        with pytest.raises(CouldNotDenormalizeError):
            self.normalizer.denormalize_to_file(self.fs, "data.bin", b"")

    def test_invalid_content(self) -> None:
        """Decoder failures are wrapped."""
        self.fs.put("broken.json", "{not json")

        with pytest.raises(CouldNotNormalizeError, match="Could not normalize file") as exc_info:
            self.normalizer.normalize_from_file(self.fs, "broken.json")
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_unencodable_value(self) -> None:
        """Encoder failures are wrapped and nothing is written."""
        with pytest.raises(CouldNotDenormalizeError) as exc_info:
            self.normalizer.denormalize_to_file(self.fs, "bad.json", {"a": object()})

        assert isinstance(exc_info.value.__cause__, TypeError)
        assert not self.fs.is_file("bad.json")

    def test_no_extension(self) -> None:
        """A codec cannot be chosen without an extension."""
        with pytest.raises(CouldNotDenormalizeError) as exc_info:
            self.normalizer.denormalize_to_file(self.fs, "Makefile", "all:")

        assert isinstance(exc_info.value.__cause__, FileError)

    def test_custom_tables(self) -> None:
        """Translators and registries can be replaced."""
        normalizer = FileSystemNormalizer(
            extension_to_mime=Translator({"conf": "application/x-conf"}),
            mime_to_codec=Translator({"application/x-conf": "yaml"}),
        )

        normalizer.denormalize_to_file(self.fs, "app.conf", {"debug": False})

        assert normalizer.normalize_from_file(self.fs, "app.conf") == {"debug": False}
        with pytest.raises(CouldNotNormalizeError):
            normalizer.normalize_from_file(self.fs, "missing.conf")


class TestVoidFileSystemNormalizer:
    """Test the normalizer that refuses every conversion."""

    def setup_method(self) -> None:
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()
        self.fs = LocalFileSystem(self.temp_dir)
        self.normalizer = VoidFileSystemNormalizer()

    def teardown_method(self) -> None:
        """Clean up test environment."""
        import shutil

        shutil.rmtree(self.temp_dir)

    def test_normalize_always_fails(self) -> None:
        """Even existing, decodable files are refused."""
        self.fs.put("config.json", "{}")

        with pytest.raises(CouldNotNormalizeError, match="Using void normalizer"):
            self.normalizer.normalize_from_file(self.fs, "config.json")

    def test_denormalize_always_fails(self) -> None:
        """Nothing is written."""
        with pytest.raises(CouldNotDenormalizeError, match="Using void normalizer"):
            self.normalizer.denormalize_to_file(self.fs, "config.json", {})

        assert not (Path(self.temp_dir) / "config.json").exists()
