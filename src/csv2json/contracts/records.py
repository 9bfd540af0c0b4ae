"""Record-shape contracts: Header, Record, RowDiagnostic, PipelineResult."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from csv2json.contracts.errors import HeaderError

# One parsed data row. Keys are built in header order, all values are text.
Record = dict[str, str]


@dataclass(frozen=True)
class Header:
    """Ordered column names read from the first row of the input.

    Defines arity and field order for every record of the stream.
    """

    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise HeaderError("Header row has no columns")
        seen: set[str] = set()
        duplicates: list[str] = []
        for name in self.names:
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise HeaderError(f"Duplicate column names in header: {', '.join(duplicates)}")

    @classmethod
    def from_row(cls, values: Sequence[str]) -> Header:
        return cls(tuple(values))

    def __len__(self) -> int:
        return len(self.names)

    def matches(self, values: Sequence[str]) -> bool:
        """True if a row has exactly one value per column."""
        return len(values) == len(self.names)

    def build_record(self, values: Sequence[str]) -> Record:
        """Pair a row's values with the column names.

        Raises:
            ValueError: If the row's field count differs from the header.
                Callers check matches() first; a mismatch here is a bug.
        """
        return dict(zip(self.names, values, strict=True))


@dataclass(frozen=True)
class RowDiagnostic:
    """A row that was skipped, and why.

    Attributes:
        line_number: Physical line in the input where the row ended.
        raw_line: Row content as read (fields re-joined with the delimiter).
        message: Human-readable reason.
    """

    line_number: int
    raw_line: str
    message: str

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.raw_line!r} - {self.message}"


@dataclass(frozen=True)
class PipelineResult:
    """Summary of a completed pipeline run."""

    destination: Path
    records_written: int
    rows_skipped: int
    content_hash: str  # SHA-256 of the destination file
    size_bytes: int
