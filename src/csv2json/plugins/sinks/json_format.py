"""Compact and pretty JSON framing for the streaming sink.

A JSONFormat bundles how one record is encoded with the line break the
sink puts around array elements, so the sink itself has no mode branches.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass

from csv2json.contracts.records import Record
from csv2json.core.config import StreamConfig


@dataclass(frozen=True)
class JSONFormat:
    """Encoding strategy for array elements.

    Attributes:
        encode: Serializes one record to a JSON object string.
        line_break: Emitted before each element and before the closing
            bracket ("" for compact output).
    """

    name: str
    encode: Callable[[Record], str]
    line_break: str

    @classmethod
    def compact(cls, *, sort_keys: bool = False) -> JSONFormat:
        """Single line, no whitespace beyond JSON punctuation."""

        def encode(record: Record) -> str:
            return json.dumps(record, ensure_ascii=False, sort_keys=sort_keys, separators=(",", ":"))

        return cls(name="compact", encode=encode, line_break="")

    @classmethod
    def pretty(cls, *, sort_keys: bool = False) -> JSONFormat:
        """Tab-indented objects, each nested one level inside the array."""

        def encode(record: Record) -> str:
            body = json.dumps(record, ensure_ascii=False, sort_keys=sort_keys, indent="\t")
            # Newlines inside values are escaped, so every raw "\n" is structural.
            return "\t" + body.replace("\n", "\n\t")

        return cls(name="pretty", encode=encode, line_break="\n")

    @classmethod
    def for_config(cls, config: StreamConfig) -> JSONFormat:
        if config.pretty:
            return cls.pretty(sort_keys=config.sort_keys)
        return cls.compact(sort_keys=config.sort_keys)
