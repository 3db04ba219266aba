"""Diagnostic sinks used by the transforms to report degraded records."""
from __future__ import annotations

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    def record_failure(
        self,
        message: str,
        *,
        error: Optional[BaseException] = None,
        severity: str = "error",
    ) -> None:
        ...


class LoggingSink:
    """Forward diagnostics to a standard library logger.

    Errors carry the traceback of ``error`` when one is supplied; warnings are
    logged as a single line.
    """

    def __init__(self, target: Optional[logging.Logger] = None) -> None:
        self._logger = target or logger

    def record_failure(
        self,
        message: str,
        *,
        error: Optional[BaseException] = None,
        severity: str = "error",
    ) -> None:
        if severity == "warning":
            self._logger.warning(message)
            return
        self._logger.error(message, exc_info=error)


class NullSink:
    """Discard every diagnostic."""

    def record_failure(
        self,
        message: str,
        *,
        error: Optional[BaseException] = None,
        severity: str = "error",
    ) -> None:
        return None


def resolve_sink(sink: Optional[DiagnosticSink]) -> DiagnosticSink:
    return sink if sink is not None else LoggingSink()
