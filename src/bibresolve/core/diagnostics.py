"""Diagnostics raised while resolving a bibliography.

The pipeline reports two kinds of diagnostics through a
:class:`DiagnosticEmitter`: warnings about recoverable input problems (a
key redefined by a later source) and structured events describing each
stage (``source_parsed``, ``style_resolved``, ``entry_replaced`` and
``bibliography_resolved``). Library callers get a :class:`LoggingEmitter`
by default; the CLI supplies its own emitter.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Receiver of pipeline warnings and events."""

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter writing to a standard library logger.

    Known events are summarised at INFO level, others logged at DEBUG.
    """

    def __init__(self, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.warning(message, exc_info=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message is None:
            self._logger.debug("diagnostic event %s: %s", name, dict(payload))
        else:
            self._logger.info(message)


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    """Return the given emitter, or a logging emitter when none is supplied."""
    return emitter if emitter is not None else LoggingEmitter()


def _source_parsed(data: Mapping[str, Any]) -> str:
    label = data.get("source") or "<inline>"
    fmt = data.get("format") or "unknown"
    return f"Parsed {data.get('entries', 0)} entries from {label} ({fmt})"


def _entry_replaced(data: Mapping[str, Any]) -> str:
    key = data.get("key") or "<unknown>"
    return f"Entry '{key}' redefined by {data.get('source') or '<inline>'}"


def _style_resolved(data: Mapping[str, Any]) -> str:
    details = []
    if data.get("sorted"):
        details.append("sorted")
    if not data.get("bibliography", True):
        details.append("no bibliography")
    suffix = f" ({', '.join(details)})" if details else ""
    return f"Using citation style {data.get('style') or '<inline>'}{suffix}"


def _bibliography_resolved(data: Mapping[str, Any]) -> str:
    mode = data.get("mode") or "cited"
    return f"Resolved {data.get('entries', 0)} bibliography entries ({mode})"


_EVENT_FORMATTERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "source_parsed": _source_parsed,
    "entry_replaced": _entry_replaced,
    "style_resolved": _style_resolved,
    "bibliography_resolved": _bibliography_resolved,
}


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a one-line summary of a known event, ``None`` otherwise."""
    formatter = _EVENT_FORMATTERS.get(name)
    return formatter(payload) if formatter is not None else None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "ensure_emitter",
    "format_event_message",
]
