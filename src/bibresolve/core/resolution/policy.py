"""Selection and ordering of the entries submitted to the citation engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from pybtex.database import Entry

from bibresolve.core.bibliography import Library
from bibresolve.core.exceptions import InvalidRequestError, MissingEntryError


class InclusionMode(str, Enum):
    """Which sequence drives the registration order for one call."""

    CITED = "cited"
    CITED_FULL = "cited-full"
    LIBRARY = "library"

    @classmethod
    def select(cls, *, full: bool, style_sorted: bool) -> InclusionMode:
        """Apply the full-flag / style-sort decision table."""
        if not full:
            return cls.CITED
        if not style_sorted:
            return cls.CITED_FULL
        return cls.LIBRARY


@dataclass(frozen=True, slots=True)
class CitationRequest:
    """One entry to register with the citation engine.

    Hidden requests put an entry in the bibliography without counting as an
    in-text citation.
    """

    key: str
    entry: Entry
    hidden: bool = False


def select_requests(
    library: Library,
    cited: Sequence[str],
    *,
    full: bool,
    style_sorted: bool,
) -> tuple[InclusionMode, list[CitationRequest]]:
    """Return the inclusion mode and the ordered requests for a call.

    Every cited key must exist in ``library``. ``cited`` may only be empty
    when the whole library is submitted to a sorting style.
    """
    mode = InclusionMode.select(full=full, style_sorted=style_sorted)
    if not cited and mode is not InclusionMode.LIBRARY:
        raise InvalidRequestError(
            "No cited keys were supplied; an empty citation list is only valid in full "
            "mode with a style that sorts its bibliography."
        )

    requests = [_visible_request(library, key) for key in cited]
    if mode is InclusionMode.LIBRARY:
        seen = {request.key for request in requests}
        for key, entry in library.items():
            if key in seen:
                continue
            requests.append(CitationRequest(key=key, entry=entry, hidden=True))
    return mode, requests


def _visible_request(library: Library, key: str) -> CitationRequest:
    entry = library.get(key)
    if entry is None:
        raise MissingEntryError(key)
    return CitationRequest(key=key, entry=entry)


def split_cited_keys(text: str, separator: str = ",") -> list[str]:
    """Split a separated citation list, stripping each key.

    Blank text is an empty list; a blank item inside the list is an error.
    """
    if not text.strip():
        return []
    keys = [item.strip() for item in text.split(separator)]
    if not all(keys):
        raise ValueError(f"Citation list '{text}' contains an empty key.")
    return keys


__all__ = ["CitationRequest", "InclusionMode", "select_requests", "split_cited_keys"]
