"""Exception hierarchy for the bibliography resolution pipeline."""

from __future__ import annotations


class BibliographyResolutionError(RuntimeError):
    """Base exception for bibliography resolution failures."""


class DecodingError(BibliographyResolutionError):
    """Raised when a boundary input is not UTF-8 or fails its micro-format."""


class SchemaError(BibliographyResolutionError):
    """Raised when a bibliography source cannot be parsed in any known format."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class StyleResolutionError(BibliographyResolutionError):
    """Raised when a citation style is malformed, unknown, or dependent."""

    def __init__(self, message: str, *, style: str | None = None) -> None:
        super().__init__(message)
        self.style = style


class MissingEntryError(BibliographyResolutionError):
    """Raised when a cited key is absent from the merged library."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Citation key '{key}' does not exist in the bibliography.")
        self.key = key


class EngineOutputError(BibliographyResolutionError):
    """Raised when the citation engine yields no bibliography section."""


class InvalidRequestError(BibliographyResolutionError):
    """Raised when a resolution request breaks its preconditions."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "BibliographyResolutionError",
    "DecodingError",
    "EngineOutputError",
    "InvalidRequestError",
    "MissingEntryError",
    "SchemaError",
    "StyleResolutionError",
    "exception_hint",
    "exception_messages",
]
