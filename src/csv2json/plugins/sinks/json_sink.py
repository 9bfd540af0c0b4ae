# src/csv2json/plugins/sinks/json_sink.py
"""Streaming JSON array sink for csv2json.

Writes records to a JSON array incrementally: the opening bracket as soon
as the file is opened, one element per record, the closing bracket when the
stream ends. Only the record currently being written is held in memory.

Output is byte-stable for a given input and configuration: keys follow
header order (or sorted order with sort_keys), non-ASCII text is written
as-is in the configured encoding.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import IO

import structlog

from csv2json.contracts.errors import DestinationError, SinkWriteError
from csv2json.contracts.records import Record
from csv2json.core.config import StreamConfig
from csv2json.engine.channel import RecordChannel
from csv2json.engine.completion import CompletionSignal
from csv2json.plugins.sinks.json_format import JSONFormat

logger = structlog.get_logger(__name__)


def destination_for(input_path: Path | str) -> Path:
    """Derive the output path: same directory, same base name, ``.json``.

    Raises:
        DestinationError: If the derived path is the input itself.
    """
    source = Path(input_path)
    if not source.name:
        raise DestinationError(f"Cannot derive a destination from {input_path!r}")
    destination = source.with_suffix(".json")
    if destination == source:
        raise DestinationError(f"Destination {destination} would overwrite the input file")
    return destination


class JSONSink:
    """Write records to a JSON array file as they arrive.

    Lifecycle: open() -> write() per record -> finish() -> close().
    consume() runs the whole lifecycle against a RecordChannel and is the
    writer thread's entry point.

    Example:
        sink = JSONSink(destination_for("people.csv"), StreamConfig(pretty=True))
        sink.open()
        sink.write({"name": "Alice", "age": "30"})
        sink.finish()
        sink.close()
    """

    name = "json"

    def __init__(self, path: Path | str, config: StreamConfig) -> None:
        self._path = Path(path)
        self._encoding = config.encoding
        self._format = JSONFormat.for_config(config)
        self._file: IO[str] | None = None
        self._records_written = 0
        self._finished = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def records_written(self) -> int:
        return self._records_written

    @property
    def json_format(self) -> JSONFormat:
        return self._format

    @property
    def finished(self) -> bool:
        """True once the closing bracket has been written and flushed."""
        return self._finished

    def open(self) -> None:
        """Create (truncate) the destination and emit the opening bracket.

        Raises:
            SinkWriteError: If the file cannot be created.
        """
        if self._file is not None:
            raise RuntimeError(f"JSONSink for {self._path} is already open")
        try:
            # newline="\n": identical bytes on every platform
            self._file = open(self._path, "w", encoding=self._encoding, newline="\n")  # noqa: SIM115
        except OSError as e:
            raise SinkWriteError(self._path, e) from e
        self._write("[")

    def write(self, record: Record) -> None:
        """Append one record as the next array element.

        Raises:
            SinkWriteError: On any write failure.
        """
        separator = "," if self._records_written else ""
        self._write(separator + self._format.line_break + self._format.encode(record))
        self._records_written += 1

    def finish(self) -> None:
        """Emit the closing bracket and flush to disk."""
        # An empty array stays "[]" in both modes
        closing = self._format.line_break + "]" if self._records_written else "]"
        self._write(closing)
        self.flush()
        self._finished = True

    def flush(self) -> None:
        """Flush buffered data to disk with fsync for durability."""
        if self._file is None:
            return
        try:
            self._file.flush()
            os.fsync(self._file.fileno())
        except OSError as e:
            raise SinkWriteError(self._path, e) from e

    def close(self) -> None:
        """Close the file handle. Idempotent."""
        if self._file is None:
            return
        file, self._file = self._file, None
        try:
            file.close()
        except OSError as e:
            raise SinkWriteError(self._path, e) from e

    def consume(self, channel: RecordChannel, completion: CompletionSignal) -> None:
        """Drain the channel into the destination, then raise completion.

        The completion signal is raised exactly once, after the file is
        closed, whether or not writing succeeded. A fatal error aborts the
        channel (unblocking the producer) and travels on the signal.
        """
        error: BaseException | None = None
        try:
            self.open()
            logger.info("writer_started", path=str(self._path), format=self._format.name)
            for record in channel:
                self.write(record)
            self.finish()
        except Exception as e:
            error = e
            channel.abort(e)
        finally:
            try:
                self.close()
            except SinkWriteError as e:
                if error is None:
                    error = e
            if error is None:
                logger.info("writer_completed", path=str(self._path), records_written=self._records_written)
            completion.signal(error)

    def content_hash(self) -> str:
        """SHA-256 of the destination file contents."""
        sha256 = hashlib.sha256()
        with open(self._path, "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                sha256.update(chunk)
        return sha256.hexdigest()

    def size_bytes(self) -> int:
        return self._path.stat().st_size

    def _write(self, data: str) -> None:
        if self._file is None:
            raise RuntimeError(f"JSONSink for {self._path} is not open")
        try:
            self._file.write(data)
        except (OSError, UnicodeEncodeError) as e:
            raise SinkWriteError(self._path, e) from e
