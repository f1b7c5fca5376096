"""Bridge between citation requests and the citeproc-py engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging

from citeproc import Citation, CitationItem, CitationStylesBibliography
from citeproc.formatter import plain
from citeproc.source.json import CiteProcJSON

from bibresolve.core.bibliography import entry_to_csl
from bibresolve.core.exceptions import EngineOutputError
from bibresolve.core.styles import StyleHandle

from .policy import CitationRequest


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BibliographyItem:
    """One rendered bibliography entry."""

    key: str
    text: str


@dataclass(frozen=True, slots=True)
class ResolvedBibliography:
    """Bibliography entries in the order decided by the engine."""

    items: tuple[BibliographyItem, ...]
    citations: tuple[str, ...] = ()

    @property
    def keys(self) -> list[str]:
        return [item.key for item in self.items]

    def __len__(self) -> int:
        return len(self.items)


class BibliographyDriver:
    """Accumulate citation requests for one style and locale.

    Requests are registered with the engine in submission order. That order
    is the bibliography order unless the style sorts its bibliography.
    """

    def __init__(self, style: StyleHandle, locale: str, *, validate: bool = False) -> None:
        self._style = style
        self._locale = locale
        self._validate = validate
        self._requests: list[CitationRequest] = []

    def citation(self, request: CitationRequest) -> None:
        """Queue one request."""
        self._requests.append(request)

    def extend(self, requests: Iterable[CitationRequest]) -> None:
        for request in requests:
            self.citation(request)

    def finish(self) -> ResolvedBibliography:
        """Run the engine over every queued request.

        Every registered key is returned, including entries the style
        renders to nothing; their text is empty.
        """
        # citeproc-py folds identifiers to lower case, so keys get opaque ids.
        ids: dict[str, str] = {}
        csl_items = []
        for request in self._requests:
            if request.key in ids:
                continue
            ids[request.key] = f"ref-{len(ids) + 1}"
            csl_items.append(entry_to_csl(ids[request.key], request.entry))
        keys_by_id = {csl_id: key for key, csl_id in ids.items()}

        csl_style = self._style.load(self._locale, validate=self._validate)
        bibliography = CitationStylesBibliography(csl_style, CiteProcJSON(csl_items), plain)

        visible: list[Citation] = []
        for request in self._requests:
            citation = Citation([CitationItem(ids[request.key])])
            bibliography.register(citation, _unknown_reference)
            if not request.hidden:
                visible.append(citation)

        if not self._style.has_bibliography:
            raise EngineOutputError(
                f"Invalid bibliography: style '{self._style.name}' produces no bibliography output."
            )

        bibliography.sort()
        rendered_citations = tuple(
            str(bibliography.cite(citation, _unknown_reference)) for citation in visible
        )
        items = tuple(
            BibliographyItem(key=keys_by_id[item.key], text=_render_item(bibliography, item))
            for item in bibliography.items
        )
        logger.debug("engine produced %d entries for %s", len(items), self._style.name)
        return ResolvedBibliography(items=items, citations=rendered_citations)


def _render_item(bibliography: CitationStylesBibliography, item: CitationItem) -> str:
    rendered = bibliography.style.render_bibliography([item])
    return str(rendered[0]) if rendered else ""


def _unknown_reference(citation_item: CitationItem) -> None:
    logger.warning("Reference '%s' is unknown to the citation engine.", citation_item.key)


__all__ = ["BibliographyDriver", "BibliographyItem", "ResolvedBibliography"]
