"""Resolve the ordered bibliography keys of a document."""

from __future__ import annotations

from bibresolve.api import (
    ResolutionRequest,
    ResolvedBibliography,
    decode_request,
    resolve_bibliography,
    resolve_sorted_keys,
    sorted_bib_keys,
)
from bibresolve.core.bibliography import BibliographyIssue, Library, RawSource, SourceFormat
from bibresolve.core.config import ResolverConfig, load_config
from bibresolve.core.exceptions import (
    BibliographyResolutionError,
    DecodingError,
    EngineOutputError,
    InvalidRequestError,
    MissingEntryError,
    SchemaError,
    StyleResolutionError,
)
from bibresolve.core.styles import StyleArchive, StyleFormat, StyleHandle, resolve_style
from bibresolve.version import get_version


__version__ = get_version()

__all__ = [
    "BibliographyIssue",
    "BibliographyResolutionError",
    "DecodingError",
    "EngineOutputError",
    "InvalidRequestError",
    "Library",
    "MissingEntryError",
    "RawSource",
    "ResolutionRequest",
    "ResolvedBibliography",
    "ResolverConfig",
    "SchemaError",
    "SourceFormat",
    "StyleArchive",
    "StyleFormat",
    "StyleHandle",
    "StyleResolutionError",
    "__version__",
    "decode_request",
    "load_config",
    "resolve_bibliography",
    "resolve_sorted_keys",
    "resolve_style",
    "sorted_bib_keys",
]
