"""Helpers turning CLI arguments into resolver inputs."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import typer

from bibresolve.core.bibliography import RawSource, SourceFormat, parse_format_hint
from bibresolve.core.config import ResolverConfig, load_config
from bibresolve.core.resolution import ResolutionRequest, split_cited_keys
from bibresolve.core.styles import StyleFormat


_SUFFIX_FORMATS = {
    ".bib": SourceFormat.BIBTEX,
    ".bibtex": SourceFormat.BIBTEX,
    ".yml": SourceFormat.STRUCTURED,
    ".yaml": SourceFormat.STRUCTURED,
}


def guess_format(path: Path) -> SourceFormat:
    """Infer a format hint from a file suffix."""
    return _SUFFIX_FORMATS.get(path.suffix.lower(), SourceFormat.UNKNOWN)


def read_sources(paths: Sequence[Path], formats: str | None) -> list[RawSource]:
    """Load bibliography files with explicit or guessed format hints."""
    if formats:
        tags = [tag.strip() for tag in formats.split(",")]
        if len(tags) != len(paths):
            raise typer.BadParameter(
                f"Expected {len(paths)} format hints, received {len(tags)}.",
                param_hint="--format",
            )
        try:
            hints = [parse_format_hint(tag) for tag in tags]
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc
    else:
        hints = [guess_format(path) for path in paths]

    return [
        RawSource(text=_read_text(path), format=hint, label=str(path))
        for path, hint in zip(paths, hints)
    ]


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"Not valid UTF-8: {path} ({exc.reason})") from exc
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}") from exc


def split_keys(value: str) -> list[str]:
    """Split the --cited option with the same rule as the byte boundary."""
    try:
        return split_cited_keys(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--cited") from exc


def build_request(
    *,
    sources: Sequence[Path] | None,
    formats: str | None,
    style: str | None,
    csl: Path | None,
    lang: str,
    cited: str,
    full: bool,
) -> ResolutionRequest:
    """Assemble a resolution request from CLI options."""
    if csl is not None:
        style_text = _read_text(csl)
        style_format = StyleFormat.INLINE
    elif style:
        style_text = style
        style_format = StyleFormat.ARCHIVE
    else:
        raise typer.BadParameter("Provide a style with --style or --csl.", param_hint="--style")

    return ResolutionRequest(
        sources=read_sources(list(sources or []), formats),
        style=style_text,
        style_format=style_format,
        lang=lang,
        cited=split_keys(cited),
        full=full,
    )


def resolve_config(path: Path | None) -> ResolverConfig:
    if path is None:
        return ResolverConfig()
    try:
        return load_config(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


__all__ = ["build_request", "guess_format", "read_sources", "resolve_config", "split_keys"]
