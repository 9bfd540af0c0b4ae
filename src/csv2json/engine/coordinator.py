# src/csv2json/engine/coordinator.py
"""Pipeline coordinator: runs the CSV source and JSON sink concurrently.

Thread Model:
    - Caller thread: builds the stages, starts them, waits on the
      completion signal, joins both threads, reports the outcome
    - Parser thread: CSVSource.pump() - sole producer on the channel
    - Writer thread: JSONSink.consume() - sole consumer, raises completion

State machine:
    IDLE -> STREAMING -> DRAINING -> DONE
    Any fatal error moves the run to ABORTED instead of DONE.

Fatal errors in either stage abort the channel so the other stage stops
too, then reach the caller as PipelineAbortedError. A destination that was
already opened is left as written (possibly a truncated JSON array).
"""

from __future__ import annotations

import threading
from pathlib import Path

import structlog

from csv2json.contracts.enums import PipelineState, Stage
from csv2json.contracts.errors import ChannelAbortedError, Csv2JsonError, PipelineAbortedError
from csv2json.contracts.records import PipelineResult
from csv2json.core.config import StreamConfig
from csv2json.engine.channel import RecordChannel
from csv2json.engine.completion import CompletionSignal
from csv2json.plugins.diagnostics import DiagnosticsSink
from csv2json.plugins.sinks.json_sink import JSONSink, destination_for
from csv2json.plugins.sources.csv_source import CSVSource

logger = structlog.get_logger(__name__)

# Allowed transitions; ABORTED is reachable from every non-terminal state
_TRANSITIONS: dict[PipelineState, frozenset[PipelineState]] = {
    PipelineState.IDLE: frozenset({PipelineState.STREAMING, PipelineState.ABORTED}),
    PipelineState.STREAMING: frozenset({PipelineState.DRAINING, PipelineState.ABORTED}),
    PipelineState.DRAINING: frozenset({PipelineState.DONE, PipelineState.ABORTED}),
    PipelineState.DONE: frozenset(),
    PipelineState.ABORTED: frozenset(),
}


class PipelineCoordinator:
    """Wire a CSVSource and a JSONSink over a fresh channel and run them.

    A coordinator runs once. Create a new one per input file.

    Example:
        coordinator = PipelineCoordinator(Path("people.csv"), StreamConfig(pretty=True))
        result = coordinator.run()
        print(result.records_written, result.destination)
    """

    def __init__(
        self,
        input_path: Path | str,
        config: StreamConfig,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        self._input_path = Path(input_path)
        self._config = config
        self._diagnostics = diagnostics
        self._state = PipelineState.IDLE
        self._parser_error: BaseException | None = None

    @property
    def state(self) -> PipelineState:
        return self._state

    def run(self) -> PipelineResult:
        """Stream the input file into its JSON destination.

        Blocks until the writer raises the completion signal.

        Returns:
            PipelineResult describing the written file.

        Raises:
            PipelineAbortedError: If either stage hit a fatal error.
            RuntimeError: If this coordinator has already run.
        """
        if self._state.is_terminal:
            raise RuntimeError(f"PipelineCoordinator.run() may only be called once (run is {self._state})")
        if self._state is not PipelineState.IDLE:
            raise RuntimeError(f"PipelineCoordinator is already running ({self._state})")

        try:
            destination = destination_for(self._input_path)
        except Csv2JsonError as e:
            self._transition(PipelineState.ABORTED)
            raise PipelineAbortedError(Stage.WRITER, e) from e

        channel = RecordChannel(capacity=self._config.channel_capacity)
        completion = CompletionSignal()
        source = CSVSource(self._input_path, self._config, self._diagnostics)
        sink = JSONSink(destination, self._config)

        parser_thread = threading.Thread(
            target=self._run_parser,
            args=(source, channel),
            name="csv2json-parser",
            daemon=True,
        )
        writer_thread = threading.Thread(
            target=sink.consume,
            args=(channel, completion),
            name="csv2json-writer",
            daemon=True,
        )

        self._transition(PipelineState.STREAMING)
        parser_thread.start()
        writer_thread.start()

        completion.wait()
        writer_thread.join()
        parser_thread.join()

        self._raise_if_failed(completion, destination)

        # The parser moves the run to DRAINING when it closes the channel
        self._transition(PipelineState.DONE)
        result = PipelineResult(
            destination=destination,
            records_written=sink.records_written,
            rows_skipped=source.rows_skipped,
            content_hash=sink.content_hash(),
            size_bytes=sink.size_bytes(),
        )
        logger.info(
            "pipeline_completed",
            destination=str(destination),
            records_written=result.records_written,
            rows_skipped=result.rows_skipped,
        )
        return result

    def _run_parser(self, source: CSVSource, channel: RecordChannel) -> None:
        """Parser thread body: pump records, abort the channel on failure."""
        try:
            source.pump(channel)
        except Exception as e:
            self._parser_error = e
            channel.abort(e)
            return
        self._transition(PipelineState.DRAINING)

    def _raise_if_failed(self, completion: CompletionSignal, destination: Path) -> None:
        # A ChannelAbortedError on one side is the echo of the other side's failure
        writer_error = completion.error
        parser_error = self._parser_error
        if writer_error is not None and not isinstance(writer_error, ChannelAbortedError):
            stage, cause = Stage.WRITER, writer_error
        elif parser_error is not None and not isinstance(parser_error, ChannelAbortedError):
            stage, cause = Stage.PARSER, parser_error
        elif writer_error is not None:
            stage, cause = Stage.WRITER, writer_error
        elif parser_error is not None:
            stage, cause = Stage.PARSER, parser_error
        else:
            return

        self._transition(PipelineState.ABORTED)
        logger.error(
            "pipeline_aborted",
            stage=str(stage),
            error=str(cause),
            error_type=type(cause).__name__,
        )
        if destination.exists():
            logger.warning("partial_output_left", path=str(destination))
        raise PipelineAbortedError(stage, cause) from cause

    def _transition(self, new_state: PipelineState) -> None:
        if new_state not in _TRANSITIONS[self._state]:
            raise RuntimeError(f"Invalid pipeline transition {self._state} -> {new_state}")
        logger.debug("pipeline_state", previous=str(self._state), state=str(new_state))
        self._state = new_state


def run_pipeline(
    input_path: Path | str,
    config: StreamConfig | None = None,
    diagnostics: DiagnosticsSink | None = None,
) -> PipelineResult:
    """Convert one delimited file to JSON next to it.

    Convenience wrapper around PipelineCoordinator.
    """
    coordinator = PipelineCoordinator(input_path, config if config is not None else StreamConfig(), diagnostics)
    return coordinator.run()
