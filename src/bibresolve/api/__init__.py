"""Public entry points for embedding the resolver."""

from __future__ import annotations

from bibresolve.core.resolution import (
    ResolutionRequest,
    ResolvedBibliography,
    resolve_bibliography,
    resolve_sorted_keys,
)

from .boundary import decode_request, parse_bool, sorted_bib_keys


__all__ = [
    "ResolutionRequest",
    "ResolvedBibliography",
    "decode_request",
    "parse_bool",
    "resolve_bibliography",
    "resolve_sorted_keys",
    "sorted_bib_keys",
]
