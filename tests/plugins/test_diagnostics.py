"""Tests for diagnostics sinks."""

import json

import pytest

from csv2json.contracts.records import RowDiagnostic
from csv2json.plugins.diagnostics import CollectingDiagnostics, DiagnosticsSink, LoggingDiagnostics

DIAGNOSTIC = RowDiagnostic(line_number=7, raw_line="Bob", message="expected 2 fields, got 1")


class TestDiagnosticsSinks:
    """Tests for LoggingDiagnostics and CollectingDiagnostics."""

    def test_implementations_satisfy_protocol(self) -> None:
        assert isinstance(LoggingDiagnostics(), DiagnosticsSink)
        assert isinstance(CollectingDiagnostics(), DiagnosticsSink)

    def test_collecting_keeps_order(self) -> None:
        sink = CollectingDiagnostics()
        second = RowDiagnostic(line_number=9, raw_line="x", message="m")

        sink.report(DIAGNOSTIC)
        sink.report(second)

        assert sink.diagnostics == [DIAGNOSTIC, second]
        assert len(sink) == 2

    def test_collecting_forwards(self) -> None:
        downstream = CollectingDiagnostics()
        sink = CollectingDiagnostics(forward_to=downstream)

        sink.report(DIAGNOSTIC)

        assert downstream.diagnostics == [DIAGNOSTIC]

    def test_logging_emits_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
        from csv2json.core.logging import configure_logging

        configure_logging(json_output=True)

        LoggingDiagnostics().report(DIAGNOSTIC)

        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert data["event"] == "row_skipped"
        assert data["level"] == "warning"
        assert data["line_number"] == 7
        assert data["raw_line"] == "Bob"
        assert data["reason"] == "expected 2 fields, got 1"
