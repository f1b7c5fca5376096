"""Resolver diagnostics rendered on the CLI consoles."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bibresolve.core.diagnostics import format_event_message

from .state import CLIState, emit_warning, get_cli_state, render_message


class CliEmitter:
    """Print merge warnings immediately and pipeline events with ``-v``.

    Events without a summary are only shown at ``-vv``.
    """

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message is not None:
            render_message("info", message)
        elif self._state.verbosity >= 2:
            render_message("info", f"{name}: {dict(payload)}")


__all__ = ["CliEmitter"]
