"""Commands inspecting bibliography sources and the style archive."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from bibresolve.core.bibliography import Library
from bibresolve.core.exceptions import BibliographyResolutionError
from bibresolve.core.styles import StyleArchive

from .._options import ConfigOption, FormatsOption, SourcesArgument
from ..diagnostics import CliEmitter
from ..presenter import print_issues, print_style_list
from ..state import emit_error
from ..utils import read_sources, resolve_config


class ExportFormat(str, Enum):
    BIBTEX = "bibtex"
    YAML = "yaml"


def export(
    sources: SourcesArgument = None,
    formats: FormatsOption = None,
    to: Annotated[
        ExportFormat,
        typer.Option("--to", "-t", help="Output format of the merged bibliography."),
    ] = ExportFormat.YAML,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this file instead of stdout."),
    ] = None,
) -> None:
    """Merge the sources and print the resulting bibliography."""
    raw_sources = read_sources(list(sources or []), formats)
    try:
        library = Library.from_sources(raw_sources, emitter=CliEmitter())
        payload = library.to_bibtex() if to is ExportFormat.BIBTEX else library.to_structured()
    except BibliographyResolutionError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    print_issues(library.issues)
    if output is None:
        typer.echo(payload, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload, encoding="utf-8")


def styles(config: ConfigOption = None) -> None:
    """List the styles available by name."""
    settings = resolve_config(config)
    print_style_list(StyleArchive.default(settings.style_dirs))


__all__ = ["ExportFormat", "export", "styles"]
