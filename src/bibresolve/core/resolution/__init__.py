"""Inclusion policy, citation engine bridge and the resolution pipeline."""

from __future__ import annotations

from .engine import BibliographyDriver, BibliographyItem, ResolvedBibliography
from .pipeline import ResolutionRequest, resolve_bibliography, resolve_sorted_keys
from .policy import CitationRequest, InclusionMode, select_requests, split_cited_keys


__all__ = [
    "BibliographyDriver",
    "BibliographyItem",
    "CitationRequest",
    "InclusionMode",
    "ResolutionRequest",
    "ResolvedBibliography",
    "resolve_bibliography",
    "resolve_sorted_keys",
    "select_requests",
    "split_cited_keys",
]
