"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
STYLE_PANEL = "Style"
OUTPUT_PANEL = "Output"

SourcesArgument = Annotated[
    list[Path] | None,
    typer.Argument(
        metavar="SOURCE...",
        help="Bibliography files, BibTeX (.bib) or structured YAML (.yml, .yaml).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

FormatsOption = Annotated[
    str | None,
    typer.Option(
        "--format",
        "-f",
        help=(
            "Comma-separated format hints aligned with SOURCE (bib, yml or bytes). "
            "Defaults to guessing from each file suffix."
        ),
        rich_help_panel=INPUTS_PANEL,
    ),
]

CitedOption = Annotated[
    str,
    typer.Option(
        "--cited",
        "-c",
        help="Comma-separated citation keys in document order.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

FullOption = Annotated[
    bool,
    typer.Option(
        "--full",
        help="Include every entry of the bibliography, not only cited ones.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

StyleOption = Annotated[
    str | None,
    typer.Option(
        "--style",
        "-s",
        help="Name of a style in the bundled archive (see 'bibresolve styles').",
        rich_help_panel=STYLE_PANEL,
    ),
]

CslOption = Annotated[
    Path | None,
    typer.Option(
        "--csl",
        help="Path to a CSL style definition. Overrides --style.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=STYLE_PANEL,
    ),
]

LangOption = Annotated[
    str,
    typer.Option(
        "--lang",
        "-l",
        help="Locale handed to the citation engine (e.g. en-US, fr-FR).",
        rich_help_panel=STYLE_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        help="YAML file with resolver settings.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

__all__ = [
    "CitedOption",
    "ConfigOption",
    "CslOption",
    "FormatsOption",
    "FullOption",
    "LangOption",
    "SourcesArgument",
    "StyleOption",
]
