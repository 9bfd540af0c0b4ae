# src/csv2json/plugins/sources/csv_source.py
"""CSV source for csv2json.

Parses a delimited file into records using csv.reader for proper quoted
field support (including embedded newlines).

Row-level problems never abort the stream: a row whose field count differs
from the header, or that csv.reader cannot parse, is reported to the
diagnostics sink and skipped. Only failures to read the file itself, or
a missing/invalid header, are fatal.
"""

from __future__ import annotations

import contextlib
import csv
from collections.abc import Generator, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from csv2json.contracts.errors import HeaderError, MissingHeaderError, SourceReadError
from csv2json.contracts.records import Header, Record, RowDiagnostic
from csv2json.core.config import StreamConfig
from csv2json.engine.channel import RecordChannel
from csv2json.plugins.diagnostics import DiagnosticsSink, LoggingDiagnostics

if TYPE_CHECKING:
    from _csv import _reader

logger = structlog.get_logger(__name__)


class _LineRecorder:
    """Iterate physical lines for csv.reader, keeping those read for the current row."""

    def __init__(self, lines: Iterator[str]) -> None:
        self._lines = lines
        self.consumed: list[str] = []

    def __iter__(self) -> _LineRecorder:
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self.consumed.append(line)
        return line

    def reset(self) -> None:
        self.consumed = []

    def text(self) -> str:
        return "".join(self.consumed).rstrip("\r\n")


class CSVSource:
    """Load records from a delimited text file.

    The first non-blank row is the header. Every later row becomes one
    record mapping header names to cell text. No type coercion is applied.

    Example:
        source = CSVSource(Path("people.csv"), StreamConfig())
        for record in source.load():
            ...
    """

    name = "csv"

    def __init__(
        self,
        path: Path | str,
        config: StreamConfig,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        self._path = Path(path)
        self._config = config
        self._delimiter = config.delimiter
        self._diagnostics: DiagnosticsSink = diagnostics if diagnostics is not None else LoggingDiagnostics()
        self._header: Header | None = None
        self._rows_read = 0
        self._rows_skipped = 0
        self._started = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def header(self) -> Header | None:
        """Header of the stream, available once load() has read it."""
        return self._header

    @property
    def rows_read(self) -> int:
        """Data rows read so far (blank rows excluded)."""
        return self._rows_read

    @property
    def rows_skipped(self) -> int:
        return self._rows_skipped

    def load(self) -> Generator[Record, None, None]:
        """Yield one record per well-formed data row, in file order.

        The file is consumed once; a second call raises RuntimeError.

        Yields:
            Record for each row whose field count matches the header.

        Raises:
            MissingHeaderError: If the file has no non-blank rows.
            HeaderError: If the header cannot be parsed or repeats a name.
            SourceReadError: If the file cannot be opened or read.
        """
        if self._started:
            raise RuntimeError(f"CSVSource for {self._path} has already been consumed")
        self._started = True

        # newline='' required for proper embedded newline handling
        try:
            f = open(self._path, encoding=self._config.encoding, newline="")  # noqa: SIM115
        except OSError as e:
            raise SourceReadError(self._path, e) from e

        with f:
            lines = _LineRecorder(f)
            reader = csv.reader(lines, delimiter=self._delimiter)
            header = self._read_header(reader)
            self._header = header
            logger.debug("header_read", path=str(self._path), columns=list(header.names))

            while True:
                first_line = reader.line_num + 1
                lines.reset()
                try:
                    values = self._next_row(reader)
                except csv.Error as e:
                    self._rows_read += 1
                    span = _line_span(first_line, reader.line_num)
                    self._skip(reader.line_num, lines.text(), f"CSV parse error on {span}: {e}")
                    continue

                if values is None:
                    break
                # csv.reader returns [] for blank lines
                if not values:
                    continue

                self._rows_read += 1
                if not header.matches(values):
                    self._skip(
                        reader.line_num,
                        self._delimiter.join(values),
                        f"expected {len(header)} fields, got {len(values)}",
                    )
                    continue

                yield header.build_record(values)

    def pump(self, channel: RecordChannel) -> None:
        """Send every record into the channel, then close it.

        The channel is closed exactly once, after the last record. On a
        fatal error the channel is left open and the error propagates; the
        caller is responsible for aborting the channel.
        """
        with contextlib.closing(self.load()) as records:
            for record in records:
                channel.send(record)
        channel.close()
        logger.info(
            "source_exhausted",
            path=str(self._path),
            rows_read=self._rows_read,
            rows_skipped=self._rows_skipped,
        )

    def _read_header(self, reader: _reader) -> Header:
        while True:
            try:
                values = self._next_row(reader)
            except csv.Error as e:
                raise HeaderError(f"CSV parse error in header of {self._path} at line {reader.line_num}: {e}") from e
            if values is None:
                raise MissingHeaderError(self._path)
            if values:
                return Header.from_row(values)

    def _next_row(self, reader: _reader) -> list[str] | None:
        """Next parsed row, or None at end of file.

        csv.Error propagates to the caller; read failures become SourceReadError.
        """
        try:
            return next(reader)
        except StopIteration:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(self._path, e) from e

    def _skip(self, line_number: int, raw_line: str, message: str) -> None:
        self._rows_skipped += 1
        self._diagnostics.report(RowDiagnostic(line_number=line_number, raw_line=raw_line, message=message))


def _line_span(first: int, last: int) -> str:
    if last <= first:
        return f"line {first}"
    return f"lines {first}-{last}"
