"""Codecs converting whole-file bytes to values and back."""
import csv
import io
import json
from typing import Any

import yaml

from .registry import CodecRegistry


class JSONCodec:
    def __init__(self, indent: int = 2):
        self.indent = indent

    def encode(self, value: Any) -> bytes:
        return json.dumps(value, indent=self.indent).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return json.loads(data)


class YAMLCodec:
    """YAML documents through PyYAML's safe loader and dumper."""

    def encode(self, value: Any) -> bytes:
        return yaml.safe_dump(value, default_flow_style=False).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return yaml.safe_load(data)


class CSVCodec:
    """CSV files as lists of row dictionaries keyed by the header row."""

    def __init__(self, delimiter: str = ",", quotechar: str = '"', encoding: str = "utf-8"):
        """Initialize CSV codec.

        Args:
            delimiter: CSV delimiter character
            quotechar: Quote character for CSV
            encoding: File encoding
        """
        self.delimiter = delimiter
        self.quotechar = quotechar
        self.encoding = encoding

    def encode(self, value: list[dict[str, Any]]) -> bytes:
        buffer = io.StringIO()
        if value:
            # Header comes from the first row
            writer = csv.DictWriter(
                buffer,
                fieldnames=list(value[0].keys()),
                delimiter=self.delimiter,
                quotechar=self.quotechar,
                lineterminator="\n",
            )
            writer.writeheader()
            writer.writerows(value)
        return buffer.getvalue().encode(self.encoding)

    def decode(self, data: bytes) -> list[dict[str, str]]:
        reader = csv.DictReader(
            io.StringIO(data.decode(self.encoding), newline=""),
            delimiter=self.delimiter,
            quotechar=self.quotechar,
        )
        return list(reader)


class TextCodec:
    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def encode(self, value: str) -> bytes:
        return value.encode(self.encoding)

    def decode(self, data: bytes) -> str:
        return data.decode(self.encoding)


def default_registry() -> CodecRegistry:
    """Registry with the json, yaml, csv and text codecs."""
    registry = CodecRegistry()
    registry.register("json", JSONCodec())
    registry.register("yaml", YAMLCodec())
    registry.register("csv", CSVCodec())
    registry.register("text", TextCodec())
    return registry
