"""End-to-end resolution of ordered bibliography keys."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from bibresolve.core.bibliography import Library, RawSource
from bibresolve.core.config import ResolverConfig
from bibresolve.core.diagnostics import DiagnosticEmitter, ensure_emitter
from bibresolve.core.styles import StyleArchive, StyleFormat, resolve_style

from .engine import BibliographyDriver, ResolvedBibliography
from .policy import select_requests


@dataclass(slots=True)
class ResolutionRequest:
    """Inputs of one resolution call.

    ``cited`` lists keys in document order. It may be empty only when
    ``full`` is set and the style sorts its bibliography.
    """

    sources: Sequence[RawSource]
    style: str
    style_format: StyleFormat | str = StyleFormat.ARCHIVE
    lang: str = ""
    cited: Sequence[str] = field(default_factory=tuple)
    full: bool = False


def resolve_bibliography(
    request: ResolutionRequest,
    *,
    config: ResolverConfig | None = None,
    archive: StyleArchive | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> ResolvedBibliography:
    """Merge sources, resolve the style and run the citation engine."""
    config = config or ResolverConfig()
    emitter = ensure_emitter(emitter)
    archive = archive or StyleArchive.default(config.style_dirs)

    library = Library.from_sources(request.sources, emitter=emitter)
    style = resolve_style(request.style, request.style_format, archive=archive, emitter=emitter)
    mode, requests = select_requests(
        library, request.cited, full=request.full, style_sorted=style.has_sort
    )

    locale = request.lang.strip() or config.default_locale
    driver = BibliographyDriver(style, locale, validate=config.validate_styles)
    driver.extend(requests)
    resolved = driver.finish()

    emitter.event("bibliography_resolved", {"entries": len(resolved), "mode": mode.value})
    return resolved


def resolve_sorted_keys(
    request: ResolutionRequest,
    *,
    config: ResolverConfig | None = None,
    archive: StyleArchive | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> list[str]:
    """Return the bibliography keys in their final order."""
    resolved = resolve_bibliography(request, config=config, archive=archive, emitter=emitter)
    return resolved.keys


__all__ = ["ResolutionRequest", "resolve_bibliography", "resolve_sorted_keys"]
