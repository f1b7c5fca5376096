"""Commands resolving the ordered bibliography of a document."""

from __future__ import annotations

import typer

from bibresolve.core.exceptions import BibliographyResolutionError
from bibresolve.core.resolution import resolve_bibliography

from .._options import (
    CitedOption,
    ConfigOption,
    CslOption,
    FormatsOption,
    FullOption,
    LangOption,
    SourcesArgument,
    StyleOption,
)
from ..diagnostics import CliEmitter
from ..presenter import print_resolved_bibliography
from ..state import emit_error
from ..utils import build_request, resolve_config


def keys(
    sources: SourcesArgument = None,
    formats: FormatsOption = None,
    cited: CitedOption = "",
    full: FullOption = False,
    style: StyleOption = None,
    csl: CslOption = None,
    lang: LangOption = "",
    config: ConfigOption = None,
) -> None:
    """Print the bibliography keys in their final order."""
    settings = resolve_config(config)
    request = build_request(
        sources=sources, formats=formats, style=style, csl=csl, lang=lang, cited=cited, full=full
    )
    try:
        resolved = resolve_bibliography(request, config=settings, emitter=CliEmitter())
    except BibliographyResolutionError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    typer.echo(settings.key_separator.join(resolved.keys))


def render(
    sources: SourcesArgument = None,
    formats: FormatsOption = None,
    cited: CitedOption = "",
    full: FullOption = False,
    style: StyleOption = None,
    csl: CslOption = None,
    lang: LangOption = "",
    config: ConfigOption = None,
) -> None:
    """Show the rendered bibliography produced by the citation engine."""
    settings = resolve_config(config)
    request = build_request(
        sources=sources, formats=formats, style=style, csl=csl, lang=lang, cited=cited, full=full
    )
    try:
        resolved = resolve_bibliography(request, config=settings, emitter=CliEmitter())
    except BibliographyResolutionError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    print_resolved_bibliography(resolved)


__all__ = ["keys", "render"]
