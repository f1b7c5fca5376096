"""Aggregation of parsed bibliography sources into a single library."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import html
import re
from typing import Any

from pybtex.database import BibliographyData, Entry, Person
from pybtex.exceptions import PybtexError

from bibresolve.core.diagnostics import DiagnosticEmitter, NullEmitter
from bibresolve.core.exceptions import SchemaError

from .formats import RawSource
from .issues import BibliographyIssue
from .parsing import parse_source


class Library:
    """Entries keyed by citation key, at most one entry per key.

    Keys are exact strings: ``Knuth84`` and ``knuth84`` are different
    entries. Redefining a key replaces the previous entry while keeping its
    position.
    """

    def __init__(self, *, emitter: DiagnosticEmitter | None = None) -> None:
        self._entries: dict[str, Entry] = {}
        self._issues: list[BibliographyIssue] = []
        self._emitter = emitter or NullEmitter()

    @classmethod
    def from_sources(
        cls,
        sources: Iterable[RawSource],
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> Library:
        """Parse every source and fold them left to right into a new library.

        The first source that fails to parse aborts the merge.
        """
        library = cls(emitter=emitter)
        for source in sources:
            data, detected = parse_source(source)
            library._emitter.event(
                "source_parsed",
                {
                    "source": source.display_name,
                    "format": detected.value,
                    "entries": len(data.entries),
                },
            )
            library.load_data(data, source=source.display_name)
        return library

    @property
    def issues(self) -> Sequence[BibliographyIssue]:
        """Return the issues discovered while merging references."""
        return tuple(self._issues)

    def load_data(self, data: BibliographyData, *, source: str | None = None) -> None:
        """Merge pre-parsed bibliography data into the library."""
        for key, entry in data.entries.items():
            self.push(key, entry, source=source)

    def push(self, key: str, entry: Entry, *, source: str | None = None) -> None:
        """Insert or replace one entry."""
        _sanitize_entry(entry)
        existing = self._entries.get(key)
        label = source or "<inline>"

        if existing is not None and _entry_signature(existing) != _entry_signature(entry):
            self._issues.append(
                BibliographyIssue(
                    message=(
                        "Duplicate entry conflicts with an existing reference; "
                        "the newer definition replaces it."
                    ),
                    key=key,
                    source=label,
                )
            )
            self._emitter.warning(
                f"Entry '{key}' from {label} replaces an earlier, different definition."
            )
            self._emitter.event("entry_replaced", {"key": key, "source": label})
        self._entries[key] = entry

    def get(self, key: str) -> Entry | None:
        return self._entries.get(key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def items(self) -> Iterator[tuple[str, Entry]]:
        yield from self._entries.items()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def to_bibliography_data(self) -> BibliographyData:
        """Return the entries as pybtex data.

        pybtex compares keys case-insensitively, so keys differing only by
        case cannot be exported together.
        """
        data = BibliographyData()
        try:
            data.add_entries(self._entries.items())
        except PybtexError as exc:
            raise SchemaError(f"Cannot export the bibliography: {exc}") from exc
        return data

    def to_bibtex(self) -> str:
        """Serialise the library as BibTeX."""
        if not self._entries:
            return ""
        return self.to_bibliography_data().to_string("bibtex")

    def to_structured(self) -> str:
        """Serialise the library with pybtex's YAML writer."""
        return self.to_bibliography_data().to_string("yaml")


def _entry_signature(entry: Entry) -> dict[str, Any]:
    fields = {str(name).lower(): str(value) for name, value in entry.fields.items()}
    persons = {
        str(role): [_person_signature(person) for person in people]
        for role, people in entry.persons.items()
    }
    return {"type": entry.type.lower(), "fields": fields, "persons": persons}


def _person_signature(person: Person) -> tuple[tuple[str, ...], ...]:
    return tuple(
        tuple(str(part) for part in getattr(person, attribute, ()))
        for attribute in (
            "first_names",
            "middle_names",
            "prelast_names",
            "last_names",
            "lineage_names",
        )
    )


_HTML_TAG_RE = re.compile(r"<[^>]+?>")


def _sanitize_entry(entry: Entry) -> None:
    for field_name, value in list(entry.fields.items()):
        if not isinstance(value, str):
            continue
        sanitized = _sanitize_field_text(value, field=field_name)
        if sanitized != value:
            entry.fields[field_name] = sanitized


def _sanitize_field_text(value: str, *, field: str | None = None) -> str:
    """Strip lightweight HTML markup and unescape entities from bibliography fields."""
    if "<" in value and ">" in value:
        value = _HTML_TAG_RE.sub("", value)
    value = html.unescape(value)
    if field and field.lower() in {"url", "doi"}:
        value = value.replace(r"\_", "_")
    return value


__all__ = ["Library"]
