"""Bibliography source descriptors and format hints."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SourceFormat(str, Enum):
    """Declared format of a raw bibliography payload."""

    BIBTEX = "bibtex"
    STRUCTURED = "structured"
    UNKNOWN = "unknown"

    @property
    def permissive(self) -> bool:
        """Whether the payload should be auto-detected."""
        return self is SourceFormat.UNKNOWN


_HINT_ALIASES: dict[str, SourceFormat] = {
    "bib": SourceFormat.BIBTEX,
    "bibtex": SourceFormat.BIBTEX,
    "biblatex": SourceFormat.BIBTEX,
    "yml": SourceFormat.STRUCTURED,
    "yaml": SourceFormat.STRUCTURED,
    "structured": SourceFormat.STRUCTURED,
    "bytes": SourceFormat.UNKNOWN,
    "unknown": SourceFormat.UNKNOWN,
    "": SourceFormat.UNKNOWN,
}


def parse_format_hint(value: str | SourceFormat | None) -> SourceFormat:
    """Map a textual format hint (``bib``, ``yml``, ``bytes``...) onto a format."""
    if value is None:
        return SourceFormat.UNKNOWN
    if isinstance(value, SourceFormat):
        return value
    try:
        return _HINT_ALIASES[value.strip().lower()]
    except KeyError:
        raise ValueError(f"Unsupported bibliography format hint '{value}'.") from None


@dataclass(frozen=True, slots=True)
class RawSource:
    """A bibliography payload with an optional declared format."""

    text: str
    format: SourceFormat = SourceFormat.UNKNOWN
    label: str | None = None

    @property
    def display_name(self) -> str:
        return self.label or "<inline>"


__all__ = ["RawSource", "SourceFormat", "parse_format_hint"]
