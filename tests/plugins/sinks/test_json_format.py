"""Tests for compact and pretty JSON formats."""

import json

import pytest

from csv2json.core.config import StreamConfig
from csv2json.plugins.sinks.json_format import JSONFormat


class TestJSONFormat:
    """Tests for JSONFormat strategies."""

    def test_compact_has_no_whitespace(self) -> None:
        fmt = JSONFormat.compact()

        assert fmt.encode({"name": "Alice", "age": "30"}) == '{"name":"Alice","age":"30"}'
        assert fmt.line_break == ""

    def test_compact_keeps_insertion_order(self) -> None:
        fmt = JSONFormat.compact()

        assert fmt.encode({"b": "1", "a": "2"}) == '{"b":"1","a":"2"}'

    def test_sort_keys(self) -> None:
        fmt = JSONFormat.compact(sort_keys=True)

        assert fmt.encode({"name": "Alice", "age": "30"}) == '{"age":"30","name":"Alice"}'

    def test_pretty_is_tab_indented_inside_array(self) -> None:
        fmt = JSONFormat.pretty()

        assert fmt.encode({"name": "Alice", "age": "30"}) == '\t{\n\t\t"name": "Alice",\n\t\t"age": "30"\n\t}'
        assert fmt.line_break == "\n"

    def test_escapes_stay_on_one_line(self) -> None:
        """Embedded newlines are escaped, so pretty indentation never splits a value."""
        fmt = JSONFormat.pretty()

        encoded = fmt.encode({"text": 'two\nlines "quoted"'})

        assert encoded.count("\n") == 2
        assert json.loads(encoded) == {"text": 'two\nlines "quoted"'}

    def test_non_ascii_not_escaped(self) -> None:
        assert JSONFormat.compact().encode({"name": "Zoë"}) == '{"name":"Zoë"}'

    @pytest.mark.parametrize(("pretty", "name"), [(False, "compact"), (True, "pretty")])
    def test_for_config(self, pretty: bool, name: str) -> None:
        assert JSONFormat.for_config(StreamConfig(pretty=pretty)).name == name

    @pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x85"])
    def test_pretty_keeps_unicode_line_separators_inside_values(self, separator: str) -> None:
        """Only structural newlines are indented; values are never split."""
        fmt = JSONFormat.pretty()
        record = {"text": f"a{separator}b"}

        encoded = fmt.encode(record)

        assert encoded == f'\t{{\n\t\t"text": "a{separator}b"\n\t}}'
        assert json.loads(encoded) == record
