"""Diagnostic sinks and logging configuration."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from rich.logging import RichHandler

from dbbuild.core.scripts import Diagnostic, Severity

LOGGER_NAME = "dbbuild"

_LEVELS = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class DiagnosticSink(Protocol):
    """Interface for recording severity-tagged messages."""

    def log(self, severity: Severity, message: str) -> None:
        """Record a message. Fire-and-forget."""
        ...


class LoggingDiagnosticSink:
    """DiagnosticSink that forwards to the standard library logging module."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(f"{LOGGER_NAME}.scripts")

    def log(self, severity: Severity, message: str) -> None:
        self.logger.log(_LEVELS[severity], message)


class CollectingDiagnosticSink:
    """
    DiagnosticSink that keeps every message in memory (thread-safe).

    Messages can additionally be forwarded to another sink, e.g. a
    LoggingDiagnosticSink so they also end up in the log.
    """

    def __init__(self, forward_to: DiagnosticSink | None = None) -> None:
        self._lock = threading.Lock()
        self.forward_to = forward_to
        self.diagnostics: list[Diagnostic] = []

    def log(self, severity: Severity, message: str) -> None:
        with self._lock:
            self.diagnostics.append(Diagnostic(severity=severity, message=message))
        if self.forward_to is not None:
            self.forward_to.log(severity, message)

    def messages(self, severity: Severity | None = None) -> list[str]:
        """Return recorded messages, optionally restricted to one severity."""
        with self._lock:
            return [
                d.message
                for d in self.diagnostics
                if severity is None or d.severity == severity
            ]


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure the `dbbuild` logger with a Rich console handler.

    Safe to call more than once; the handler is only installed the first time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
