# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- Field values (arbitrary text, including delimiters, quotes, newlines)
- Headers (unique, non-empty column names)
- Tables (a header plus rows of matching width)

Usage:
    from tests.property.conftest import tables

    @given(table=tables())
    def test_pipeline_preserves_rows(table) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, SLOW_SETTINGS
#
# Tiers: DETERMINISM (200), STANDARD (100), SLOW (50), QUICK (20)
# =============================================================================

from __future__ import annotations

import csv
import io
from dataclasses import dataclass

from hypothesis import strategies as st

# =============================================================================
# Field and Header Strategies
# =============================================================================

# Printable text plus the characters that force CSV quoting.
# Surrogates are excluded (not encodable as UTF-8), as is \r: the csv module
# normalizes a bare \r inside a quoted field on read-back.
field_values = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\r\x00"),
    max_size=20,
)

# Column names: non-empty so a header row is never blank
column_names = st.text(
    alphabet=st.characters(whitelist_categories=("L", "N"), whitelist_characters="_- "),
    min_size=1,
    max_size=12,
)

headers = st.lists(column_names, min_size=1, max_size=6, unique=True)


@dataclass(frozen=True)
class Table:
    """A generated header with rows that all match its width."""

    header: list[str]
    rows: list[list[str]]

    @property
    def records(self) -> list[dict[str, str]]:
        return [dict(zip(self.header, row, strict=True)) for row in self.rows]

    def to_csv(self, delimiter: str = ",") -> str:
        """Render with csv.writer so every field round-trips."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=delimiter, lineterminator="\n", quoting=csv.QUOTE_ALL)
        writer.writerow(self.header)
        writer.writerows(self.rows)
        return buffer.getvalue()


@st.composite
def tables(draw: st.DrawFn, max_rows: int = 20) -> Table:
    """Header plus 0..max_rows rows of matching width."""
    header = draw(headers)
    rows = draw(st.lists(st.lists(field_values, min_size=len(header), max_size=len(header)), max_size=max_rows))
    return Table(header=header, rows=rows)
