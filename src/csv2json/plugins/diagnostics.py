"""Sinks for row-level diagnostics reported by the CSV source."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from csv2json.contracts.records import RowDiagnostic

logger = structlog.get_logger(__name__)


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receives one RowDiagnostic per skipped row.

    Called from the parser thread only.
    """

    def report(self, diagnostic: RowDiagnostic) -> None: ...


class LoggingDiagnostics:
    """Report skipped rows as structured warnings (stderr by default)."""

    def report(self, diagnostic: RowDiagnostic) -> None:
        logger.warning(
            "row_skipped",
            line_number=diagnostic.line_number,
            raw_line=diagnostic.raw_line,
            reason=diagnostic.message,
        )


class CollectingDiagnostics:
    """Keep skipped rows in memory, optionally forwarding to another sink."""

    def __init__(self, forward_to: DiagnosticsSink | None = None) -> None:
        self.diagnostics: list[RowDiagnostic] = []
        self._forward_to = forward_to

    def report(self, diagnostic: RowDiagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self._forward_to is not None:
            self._forward_to.report(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)
