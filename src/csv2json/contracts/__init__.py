"""Shared contracts: enums, record shapes and the error hierarchy."""

from csv2json.contracts.enums import PipelineState, Separator, Stage
from csv2json.contracts.errors import (
    ChannelAbortedError,
    ChannelClosedError,
    CompletionSignalError,
    ConfigError,
    Csv2JsonError,
    DestinationError,
    HeaderError,
    MissingHeaderError,
    PipelineAbortedError,
    SinkWriteError,
    SourceReadError,
)
from csv2json.contracts.records import Header, PipelineResult, Record, RowDiagnostic

__all__ = [
    "ChannelAbortedError",
    "ChannelClosedError",
    "CompletionSignalError",
    "ConfigError",
    "Csv2JsonError",
    "DestinationError",
    "Header",
    "HeaderError",
    "MissingHeaderError",
    "PipelineAbortedError",
    "PipelineResult",
    "PipelineState",
    "Record",
    "RowDiagnostic",
    "SinkWriteError",
    "SourceReadError",
    "Separator",
    "Stage",
]
