"""Bibliography sources merged into a single library.

Architecture
: `RawSource` describes one payload and its optional format hint. Hints come
  from the caller (`bib`, `yml`, `bytes`) and map onto `SourceFormat`.
: `parse_source` turns a payload into pybtex `BibliographyData`, honouring
  the hint or auto-detecting the structured grammar (pybtex YAML or
  hayagriva) before BibTeX.
: `Library` folds parsed sources left to right. Keys are unique exact
  strings; redefinitions replace the earlier entry and are reported as
  `BibliographyIssue` records.

Usage Example

```pycon
>>> from bibresolve.core.bibliography import Library, RawSource
>>> library = Library.from_sources([RawSource("@article{a, title={T1}}")])
>>> library.keys()
['a']
```
"""

from __future__ import annotations

from .csl_json import entry_to_csl
from .formats import RawSource, SourceFormat, parse_format_hint
from .issues import BibliographyIssue
from .library import Library
from .parsing import parse_bibtex, parse_source, parse_structured


__all__ = [
    "BibliographyIssue",
    "Library",
    "RawSource",
    "SourceFormat",
    "entry_to_csl",
    "parse_bibtex",
    "parse_format_hint",
    "parse_source",
    "parse_structured",
]
