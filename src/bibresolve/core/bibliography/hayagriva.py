"""Conversion of hayagriva YAML bibliographies into pybtex entries.

Hayagriva documents map citation keys straight to entries, without the
``entries:`` wrapper pybtex's YAML format uses:

```yaml
doe2023:
  type: article
  title: A Minimal Example
  author: ["Doe, Jane", "Roe, John"]
  date: 2023-05
  parent:
    type: periodical
    title: Journal of Examples
    volume: 12
```

Only the fields the citation engine reads are translated; unknown scalar
fields are copied verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping
import datetime
from typing import Any

from pybtex.database import BibliographyData, Entry, Person


_TYPES: dict[str, str] = {
    "article": "article",
    "chapter": "incollection",
    "entry": "incollection",
    "book": "book",
    "anthology": "book",
    "reference": "book",
    "proceedings": "proceedings",
    "conference": "inproceedings",
    "report": "techreport",
    "thesis": "phdthesis",
    "web": "online",
    "blog": "online",
    "manuscript": "unpublished",
    "patent": "patent",
}

_FIELDS: dict[str, str] = {
    "page-range": "pages",
    "issue": "number",
    "location": "address",
    "organization": "organization",
    "volume": "volume",
    "edition": "edition",
    "note": "note",
    "language": "language",
}

_NAME_PARTS = {"name": "last", "given-name": "first", "prefix": "prelast", "suffix": "lineage"}

_PERSON_ROLES = ("author", "editor")

_PARENT_TITLE = {"article": "journal", "incollection": "booktitle", "inproceedings": "booktitle"}


def looks_like_hayagriva(document: object) -> bool:
    """Return whether ``document`` maps keys directly to typed entries."""
    if not isinstance(document, Mapping) or not document:
        return False
    return all(isinstance(value, Mapping) and "type" in value for value in document.values())


def hayagriva_to_data(document: Mapping[Any, Any]) -> BibliographyData:
    """Build pybtex data from a loaded hayagriva document."""
    data = BibliographyData()
    for key, raw_entry in document.items():
        if not isinstance(key, str) or not key.strip():
            raise ValueError(f"invalid entry key {key!r}")
        data.add_entry(key, _entry(key, raw_entry))
    return data


def _entry(key: str, raw: Mapping[str, Any]) -> Entry:
    raw_type = raw.get("type")
    if not isinstance(raw_type, str) or not raw_type.strip():
        raise ValueError(f"entry '{key}' is missing its 'type'")
    entry = Entry(_TYPES.get(raw_type.strip().lower(), "misc"))

    for role in _PERSON_ROLES:
        for person in _as_list(raw.get(role)):
            entry.add_person(_person(person), role)

    _copy_fields(entry, raw)

    parents = [parent for parent in _as_list(raw.get("parent")) if isinstance(parent, Mapping)]
    if parents:
        parent = parents[0]
        title = _text(parent.get("title"))
        if title:
            entry.fields.setdefault(_PARENT_TITLE.get(entry.type, "booktitle"), title)
        for role in _PERSON_ROLES:
            if role not in entry.persons:
                for person in _as_list(parent.get(role)):
                    entry.add_person(_person(person), role)
        _copy_fields(entry, parent, inherited=True)
    return entry


def _copy_fields(entry: Entry, raw: Mapping[str, Any], *, inherited: bool = False) -> None:
    for name, value in raw.items():
        name = str(name)
        if value is None or name in ("type", "parent", *_PERSON_ROLES):
            continue
        if inherited and name == "title":
            continue
        if name == "date":
            _set_date(entry, value)
        elif name == "publisher":
            _set_publisher(entry, value)
        elif name == "url":
            _set_field(entry, "url", _text(value))
        elif name == "serial-number":
            _set_serial_numbers(entry, value)
        elif name in _FIELDS:
            _set_field(entry, _FIELDS[name], _text(value))
        elif isinstance(value, Mapping):
            if "value" in value:
                _set_field(entry, name, _text(value))
        elif not isinstance(value, list):
            _set_field(entry, name, _text(value))


def _set_field(entry: Entry, name: str, value: str) -> None:
    if value and name not in entry.fields:
        entry.fields[name] = value


def _set_date(entry: Entry, value: object) -> None:
    if isinstance(value, (datetime.date, datetime.datetime)):
        year, month = value.year, value.month
        _set_field(entry, "year", str(year))
        _set_field(entry, "month", str(month))
        return
    parts = str(value).strip().split("-")
    # Negative years carry a leading dash.
    if parts and parts[0] == "" and len(parts) > 1:
        parts = ["-" + parts[1], *parts[2:]]
    _set_field(entry, "year", parts[0])
    if len(parts) > 1:
        _set_field(entry, "month", parts[1].lstrip("0") or parts[1])


def _set_publisher(entry: Entry, value: object) -> None:
    if isinstance(value, Mapping):
        _set_field(entry, "publisher", _text(value.get("name")))
        _set_field(entry, "address", _text(value.get("location")))
    else:
        _set_field(entry, "publisher", _text(value))


def _set_serial_numbers(entry: Entry, value: object) -> None:
    if not isinstance(value, Mapping):
        return
    for name in ("doi", "isbn", "issn"):
        _set_field(entry, name, _text(value.get(name)))


def _person(value: object) -> Person:
    if isinstance(value, str):
        return Person(string=value)
    if isinstance(value, Mapping):
        parts = {
            target: str(value[source]) for source, target in _NAME_PARTS.items() if source in value
        }
        if "last" not in parts:
            raise ValueError(f"person {dict(value)!r} has no 'name'")
        return Person(**parts)
    raise TypeError(f"unsupported person value {value!r}")


def _text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, Mapping):
        return _text(value.get("value"))
    return str(value).strip()


def _as_list(value: object) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


__all__ = ["hayagriva_to_data", "looks_like_hayagriva"]
