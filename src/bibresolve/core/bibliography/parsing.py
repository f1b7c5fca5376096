"""Parsing helpers for bibliography payloads.

Two grammars are understood. BibTeX payloads go through pybtex's BibTeX
parser. Structured payloads are YAML documents in one of two shapes. The
first is pybtex's own YAML format, read by pybtex:

```yaml
entries:
  doe2023:
    type: article
    title: A Minimal Example
    year: 2023
    author:
      - {first: Jane, last: Doe}
```

The second is hayagriva, which keys entries at the top level and writes
names as ``"Doe, Jane"`` strings (see :mod:`.hayagriva`).

Auto-detection tries the structured grammar first because any text is
accepted by the BibTeX tokenizer, which skips everything outside ``@``
blocks.
"""

from __future__ import annotations

from collections.abc import Mapping
import io
import logging

from pybtex.database import BibliographyData, parse_string
from pybtex.database.input import bibtex
from pybtex.exceptions import PybtexError
import yaml

from bibresolve.core.exceptions import SchemaError

from .formats import RawSource, SourceFormat
from .hayagriva import hayagriva_to_data, looks_like_hayagriva


logger = logging.getLogger(__name__)


def parse_source(source: RawSource) -> tuple[BibliographyData, SourceFormat]:
    """Parse one raw source, returning its data and the grammar that matched."""
    if not source.text.strip():
        return BibliographyData(), source.format

    if source.format is SourceFormat.BIBTEX:
        return parse_bibtex(source.text, label=source.label), SourceFormat.BIBTEX
    if source.format is SourceFormat.STRUCTURED:
        return parse_structured(source.text, label=source.label), SourceFormat.STRUCTURED

    try:
        return parse_structured(source.text, label=source.label), SourceFormat.STRUCTURED
    except SchemaError as structured_exc:
        logger.debug("%s is not structured: %s", source.display_name, structured_exc)
        try:
            return parse_bibtex(source.text, label=source.label), SourceFormat.BIBTEX
        except SchemaError as exc:
            raise SchemaError(
                f"Unrecognized bibliography schema in {source.display_name}: "
                "the payload is neither a structured (YAML) bibliography nor BibTeX.",
                source=source.label,
            ) from exc


def parse_bibtex(payload: str, *, label: str | None = None) -> BibliographyData:
    """Parse a BibTeX payload with pybtex."""
    name = label or "<inline>"
    parser = bibtex.Parser()
    try:
        parsed = parser.parse_stream(io.StringIO(payload))
    except (OSError, PybtexError) as exc:
        raise SchemaError(f"Failed to parse BibTeX payload {name}: {exc}", source=label) from exc

    if not parsed.entries and not _has_bibtex_marker(payload):
        raise SchemaError(f"No BibTeX entries found in {name}.", source=label)
    return parsed


def parse_structured(payload: str, *, label: str | None = None) -> BibliographyData:
    """Parse a structured YAML bibliography.

    Documents with an ``entries`` section go through pybtex's YAML parser;
    documents keyed directly by citation key are read as hayagriva.
    """
    name = label or "<inline>"
    try:
        document = yaml.safe_load(payload)
    except yaml.YAMLError as exc:
        raise SchemaError(
            f"Failed to parse structured bibliography {name}: {exc}", source=label
        ) from exc

    try:
        if isinstance(document, Mapping) and isinstance(document.get("entries"), Mapping):
            return parse_string(payload, "yaml", encoding="utf-8")
        if looks_like_hayagriva(document):
            return hayagriva_to_data(document)
    except (PybtexError, yaml.YAMLError, KeyError, TypeError, ValueError) as exc:
        raise SchemaError(
            f"Invalid structured bibliography {name}: {exc}", source=label
        ) from exc

    raise SchemaError(
        f"Structured bibliography {name} must map citation keys to entries, "
        "either at the top level or under an 'entries' section.",
        source=label,
    )


def _has_bibtex_marker(payload: str) -> bool:
    for line in payload.splitlines():
        stripped = line.strip()
        if stripped.startswith("%"):
            continue
        if "@" in stripped:
            return True
    # Comment-only payloads are empty BibTeX files.
    return not any(
        line.strip() and not line.strip().startswith("%") for line in payload.splitlines()
    )


__all__ = ["parse_bibtex", "parse_source", "parse_structured"]
