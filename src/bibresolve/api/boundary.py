"""Byte-oriented entry point for host runtimes.

Every argument arrives as UTF-8 bytes and the result is the space-joined
list of keys, also UTF-8. Errors are raised as
:class:`~bibresolve.core.exceptions.BibliographyResolutionError` subclasses
whose message is meant to be shown verbatim.
"""

from __future__ import annotations

from collections.abc import Sequence

from bibresolve.core.bibliography import RawSource, SourceFormat, parse_format_hint
from bibresolve.core.config import ResolverConfig
from bibresolve.core.diagnostics import DiagnosticEmitter
from bibresolve.core.exceptions import DecodingError
from bibresolve.core.resolution import ResolutionRequest, resolve_sorted_keys, split_cited_keys
from bibresolve.core.styles import StyleArchive, StyleFormat


def sorted_bib_keys(
    bib: bytes,
    formats: bytes | None,
    full: bytes,
    style: bytes,
    style_format: bytes,
    lang: bytes,
    cited: bytes,
    *,
    config: ResolverConfig | None = None,
    archive: StyleArchive | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> bytes:
    """Resolve the ordered bibliography keys from raw byte arguments."""
    config = config or ResolverConfig()
    request = decode_request(
        bib=bib,
        formats=formats,
        full=full,
        style=style,
        style_format=style_format,
        lang=lang,
        cited=cited,
        config=config,
    )
    keys = resolve_sorted_keys(request, config=config, archive=archive, emitter=emitter)
    return config.key_separator.join(keys).encode("utf-8")


def decode_request(
    *,
    bib: bytes,
    formats: bytes | None,
    full: bytes,
    style: bytes,
    style_format: bytes,
    lang: bytes,
    cited: bytes,
    config: ResolverConfig | None = None,
) -> ResolutionRequest:
    """Decode the byte arguments into a :class:`ResolutionRequest`."""
    config = config or ResolverConfig()

    payloads = _decode(bib, "bib").split(config.source_separator)
    hints = _split_formats(formats, len(payloads), config)
    sources = [
        RawSource(text=text, format=hint, label=f"source #{index}")
        for index, (text, hint) in enumerate(zip(payloads, hints), start=1)
    ]

    raw_format = _decode(style_format, "style_format")
    try:
        kind = StyleFormat.parse(raw_format)
    except ValueError as exc:
        raise DecodingError(str(exc)) from exc

    return ResolutionRequest(
        sources=sources,
        style=_decode(style, "style"),
        style_format=kind,
        lang=_decode(lang, "lang"),
        cited=_split_keys(_decode(cited, "cited"), config),
        full=parse_bool(_decode(full, "full")),
    )


def parse_bool(value: str) -> bool:
    """Parse the exact literals ``true`` and ``false``."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise DecodingError(f"Invalid boolean '{value}' (expected 'true' or 'false').")


def _decode(value: bytes, name: str) -> str:
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodingError(f"Argument '{name}' is not valid UTF-8: {exc}") from exc


def _split_formats(
    formats: bytes | None, count: int, config: ResolverConfig
) -> Sequence[SourceFormat]:
    if formats is None:
        return [SourceFormat.UNKNOWN] * count
    text = _decode(formats, "formats")
    if not text.strip():
        return [SourceFormat.UNKNOWN] * count

    tags = text.split(config.list_separator)
    if len(tags) != count:
        raise DecodingError(
            f"Received {len(tags)} format hints for {count} bibliography sources."
        )
    try:
        return [parse_format_hint(tag) for tag in tags]
    except ValueError as exc:
        raise DecodingError(str(exc)) from exc


def _split_keys(text: str, config: ResolverConfig) -> list[str]:
    try:
        return split_cited_keys(text, config.list_separator)
    except ValueError as exc:
        raise DecodingError(str(exc)) from exc


__all__ = ["decode_request", "parse_bool", "sorted_bib_keys"]
