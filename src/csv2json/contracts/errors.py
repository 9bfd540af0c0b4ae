"""Exception hierarchy for csv2json.

Errors fall into three tiers:

- Row-level problems (wrong field count, unparseable quoting) are NOT
  exceptions. The source reports them as RowDiagnostic and moves on.
- Stream-level failures are fatal. They stop both pipeline stages and reach
  the caller wrapped in PipelineAbortedError.
- Configuration failures (ConfigError) are raised before any stage starts.
"""

from __future__ import annotations

from pathlib import Path

from csv2json.contracts.enums import Stage


class Csv2JsonError(Exception):
    """Base class for all csv2json errors."""

    pass


class ConfigError(Csv2JsonError):
    """Raised when stream configuration or a settings file is invalid."""

    pass


# =============================================================================
# Source (parser) errors
# =============================================================================


class HeaderError(Csv2JsonError):
    """Raised when the header row cannot define a record shape."""

    pass


class MissingHeaderError(HeaderError):
    """Raised when the input has no header row at all."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"No header row found in {path}")
        self.path = Path(path)


class SourceReadError(Csv2JsonError):
    """Raised when reading the input fails for a reason other than EOF."""

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        super().__init__(f"Failed to read {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


# =============================================================================
# Sink (writer) errors
# =============================================================================


class DestinationError(Csv2JsonError):
    """Raised when no usable destination path can be derived."""

    pass


class SinkWriteError(Csv2JsonError):
    """Raised when the destination cannot be created, written or closed."""

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


# =============================================================================
# Channel errors
# =============================================================================


class ChannelClosedError(Csv2JsonError):
    """Raised on send after close, or on a second close."""

    pass


class ChannelAbortedError(Csv2JsonError):
    """Raised on either side of a channel after abort() was called.

    Attributes:
        reason: The fatal error that caused the abort, if known.
    """

    def __init__(self, reason: BaseException | None = None) -> None:
        message = "Record channel aborted"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.reason = reason


# =============================================================================
# Pipeline errors
# =============================================================================


class CompletionSignalError(Csv2JsonError):
    """Raised when a completion signal is raised more than once."""

    pass


class PipelineAbortedError(Csv2JsonError):
    """Raised by the coordinator when a fatal error stopped the pipeline.

    The original exception is chained as ``__cause__`` and kept on
    ``cause``. A destination that was already opened is left on disk as-is
    and may hold a truncated JSON array.

    Attributes:
        stage: Stage where the fatal error originated.
        cause: The original exception.
    """

    def __init__(self, stage: Stage, cause: BaseException) -> None:
        super().__init__(f"Pipeline aborted in {stage} stage: {cause}")
        self.stage = stage
        self.cause = cause
