"""Tests for the csv2json exception hierarchy."""

from pathlib import Path

from csv2json.contracts import (
    ChannelAbortedError,
    Csv2JsonError,
    MissingHeaderError,
    PipelineAbortedError,
    SinkWriteError,
    SourceReadError,
    Stage,
)


class TestErrors:
    """Tests for error messages and attributes."""

    def test_all_errors_share_base(self) -> None:
        assert issubclass(MissingHeaderError, Csv2JsonError)
        assert issubclass(PipelineAbortedError, Csv2JsonError)

    def test_missing_header_names_path(self) -> None:
        error = MissingHeaderError("data/empty.csv")

        assert error.path == Path("data/empty.csv")
        assert "data/empty.csv" in str(error)

    def test_read_and_write_errors_keep_cause(self) -> None:
        cause = OSError("disk on fire")

        read_error = SourceReadError("in.csv", cause)
        write_error = SinkWriteError("out.json", cause)

        assert read_error.cause is cause
        assert write_error.cause is cause
        assert "disk on fire" in str(write_error)

    def test_channel_aborted_without_reason(self) -> None:
        error = ChannelAbortedError()

        assert error.reason is None
        assert str(error) == "Record channel aborted"

    def test_pipeline_aborted_names_stage(self) -> None:
        cause = SinkWriteError("out.json", OSError("read-only"))

        error = PipelineAbortedError(Stage.WRITER, cause)

        assert error.stage is Stage.WRITER
        assert error.cause is cause
        assert str(error).startswith("Pipeline aborted in writer stage")
