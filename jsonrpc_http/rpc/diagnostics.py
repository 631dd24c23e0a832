"""Diagnostic sinks for the dispatcher.

The dispatcher never logs directly; it calls ``emit(level, message)`` on an
injected sink. ``LoggingSink`` forwards to the standard logging module,
``NullSink`` drops everything and ``RecordingSink`` keeps messages in memory.

Emitting is fire-and-forget: a sink must never raise into the caller.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

INFO = logging.INFO


@runtime_checkable
class DiagnosticSink(Protocol):
    """Anything that accepts diagnostic messages."""

    def emit(self, level: int, message: str) -> None: ...


class LoggingSink:
    """Forward diagnostics to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("jsonrpc_http.rpc.dispatcher")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def emit(self, level: int, message: str) -> None:
        # Handler failures are routed to Handler.handleError by logging itself
        self._logger.log(level, "%s", message)


class NullSink:
    """Discard all diagnostics."""

    def emit(self, level: int, message: str) -> None:
        return None


class RecordingSink:
    """Keep diagnostics in memory as (level, message) pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[int, str]] = []

    def emit(self, level: int, message: str) -> None:
        self.records.append((level, message))

    def messages(self, level: int | None = None) -> list[str]:
        """Return recorded messages, optionally only those at one level."""
        return [m for lvl, m in self.records if level is None or lvl == level]

    def clear(self) -> None:
        self.records.clear()


def safe_emit(sink: DiagnosticSink, level: int, message: str) -> None:
    """Emit through any sink, containing its failures."""
    try:
        sink.emit(level, message)
    except Exception:
        # Don't let a broken sink fail the call being diagnosed
        logging.getLogger(__name__).debug("Diagnostic sink %r failed", sink, exc_info=True)
