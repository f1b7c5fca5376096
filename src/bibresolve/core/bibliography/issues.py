"""Non-fatal findings recorded while merging bibliography sources."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BibliographyIssue:
    """A warning attached to a reference key and the source that raised it."""

    message: str
    key: str | None = None
    source: str | None = None


__all__ = ["BibliographyIssue"]
