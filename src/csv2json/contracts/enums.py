"""Enumerations shared across the parser, writer and coordinator."""

from enum import StrEnum


class Separator(StrEnum):
    """Field delimiter accepted by the CSV source.

    Values are the names used on the command line and in settings files,
    not the delimiter characters themselves (see ``delimiter``).
    """

    COMMA = "comma"
    SEMICOLON = "semicolon"
    TAB = "tab"
    PIPE = "pipe"

    @property
    def delimiter(self) -> str:
        """The single character csv.reader splits on."""
        return _DELIMITERS[self]


_DELIMITERS: dict[Separator, str] = {
    Separator.COMMA: ",",
    Separator.SEMICOLON: ";",
    Separator.TAB: "\t",
    Separator.PIPE: "|",
}


class PipelineState(StrEnum):
    """Lifecycle of a single pipeline run.

    IDLE -> STREAMING -> DRAINING -> DONE, or ABORTED from any
    non-terminal state on a fatal error.
    """

    IDLE = "idle"
    STREAMING = "streaming"
    DRAINING = "draining"
    DONE = "done"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.DONE, PipelineState.ABORTED)


class Stage(StrEnum):
    """Pipeline stage names, used in logs and PipelineAbortedError."""

    PARSER = "parser"
    WRITER = "writer"
