"""Conversion of pybtex entries into CSL-JSON items for citeproc-py."""

from __future__ import annotations

import codecs
import re
from typing import Any

import latexcodec  # noqa: F401
from pybtex.database import Entry, Person
from pybtex.exceptions import PybtexError
from pybtex.richtext import Text


_TYPE_MAP: dict[str, str] = {
    "article": "article-journal",
    "book": "book",
    "booklet": "pamphlet",
    "conference": "paper-conference",
    "inbook": "chapter",
    "incollection": "chapter",
    "inproceedings": "paper-conference",
    "manual": "book",
    "mastersthesis": "thesis",
    "phdthesis": "thesis",
    "thesis": "thesis",
    "proceedings": "book",
    "techreport": "report",
    "report": "report",
    "unpublished": "manuscript",
    "online": "webpage",
    "electronic": "webpage",
    "www": "webpage",
    "patent": "patent",
}

_VERBATIM_FIELDS = frozenset({"url", "doi"})

_FIELD_MAP: dict[str, str] = {
    "title": "title",
    "journal": "container-title",
    "journaltitle": "container-title",
    "booktitle": "container-title",
    "series": "collection-title",
    "publisher": "publisher",
    "institution": "publisher",
    "school": "publisher",
    "organization": "publisher",
    "address": "publisher-place",
    "location": "publisher-place",
    "volume": "volume",
    "number": "issue",
    "edition": "edition",
    "pages": "page",
    "url": "URL",
    "doi": "DOI",
    "isbn": "ISBN",
    "issn": "ISSN",
    "note": "note",
}

_BRACES_RE = re.compile(r"[{}]")
_YEAR_RE = re.compile(r"\d{1,4}")


def entry_to_csl(key: str, entry: Entry) -> dict[str, Any]:
    """Return the CSL-JSON item describing ``entry``."""
    item: dict[str, Any] = {"id": key, "type": _TYPE_MAP.get(entry.type.lower(), "article")}

    for role in ("author", "editor"):
        persons = entry.persons.get(role)
        if persons:
            item[role] = [_person_to_csl(person) for person in persons]

    for field_name, csl_name in _FIELD_MAP.items():
        if csl_name in item:
            continue
        value = entry.fields.get(field_name)
        if value is None:
            continue
        raw = str(value)
        if field_name in _VERBATIM_FIELDS:
            text = " ".join(raw.split())
        elif csl_name == "page":
            text = clean_text(re.sub(r"-{1,3}", "-", raw))
        else:
            text = clean_text(raw)
        if text:
            item[csl_name] = text

    issued = _issued(entry)
    if issued is not None:
        item["issued"] = issued
    return item


def clean_text(value: str) -> str:
    """Decode LaTeX markup into plain Unicode text.

    Accents and escapes go through latexcodec, grouping braces are dropped.
    """
    try:
        text = Text.from_latex(value).render_as("text")
    except PybtexError:
        # Unbalanced braces.
        text = _BRACES_RE.sub("", codecs.decode(value, "ulatex"))
    return " ".join(text.split())


def _person_to_csl(person: Person) -> dict[str, str]:
    family = clean_text(" ".join(person.last_names))
    given = clean_text(" ".join([*person.first_names, *person.middle_names]))
    particle = clean_text(" ".join(person.prelast_names))
    suffix = clean_text(" ".join(person.lineage_names))

    if not family:
        return {"family": clean_text(str(person))}

    name: dict[str, str] = {"family": family}
    if given:
        name["given"] = given
    if particle:
        name["non-dropping-particle"] = particle
    if suffix:
        name["suffix"] = suffix
    return name


def _issued(entry: Entry) -> dict[str, Any] | None:
    raw_year = entry.fields.get("year")
    if raw_year is None:
        raw_date = entry.fields.get("date")
        raw_year = str(raw_date).split("-", 1)[0] if raw_date else None
    if raw_year is None:
        return None
    match = _YEAR_RE.search(str(raw_year))
    if match is None:
        return None

    parts = [int(match.group(0))]
    month = _month_number(entry.fields.get("month"))
    if month is not None:
        parts.append(month)
    return {"date-parts": [parts]}


_MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")


def _month_number(value: object) -> int | None:
    if value is None:
        return None
    candidate = clean_text(str(value)).strip("\"'").lower()
    if candidate.isdigit():
        month = int(candidate)
        return month if 1 <= month <= 12 else None
    prefix = candidate[:3]
    if prefix in _MONTHS:
        return _MONTHS.index(prefix) + 1
    return None


__all__ = ["clean_text", "entry_to_csl"]
