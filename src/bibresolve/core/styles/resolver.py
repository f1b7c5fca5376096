"""Resolution of inline or archived CSL styles into independent style handles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import io
import logging

from citeproc import CitationStylesStyle
from lxml import etree

from bibresolve.core.diagnostics import DiagnosticEmitter, NullEmitter
from bibresolve.core.exceptions import StyleResolutionError

from .archive import StyleArchive


logger = logging.getLogger(__name__)

CSL_NAMESPACE = "http://purl.org/net/xbiblio/csl"


def _tag(name: str) -> str:
    return f"{{{CSL_NAMESPACE}}}{name}"


class StyleFormat(str, Enum):
    """How the ``style`` argument should be interpreted."""

    INLINE = "csl"
    ARCHIVE = "text"

    @classmethod
    def parse(cls, value: str | StyleFormat) -> StyleFormat:
        if isinstance(value, StyleFormat):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unsupported style format '{value}' (expected 'csl' or 'text')."
            ) from None


@dataclass(frozen=True, slots=True)
class StyleHandle:
    """An independent CSL style ready for the citation engine."""

    name: str
    xml: bytes
    title: str | None
    has_sort: bool
    has_bibliography: bool

    def load(self, locale: str, *, validate: bool = False) -> CitationStylesStyle:
        """Instantiate the citeproc-py style bound to ``locale``."""
        try:
            return CitationStylesStyle(io.BytesIO(self.xml), locale=locale, validate=validate)
        except (etree.XMLSyntaxError, KeyError, ValueError) as exc:
            raise StyleResolutionError(
                f"Style '{self.name}' cannot be loaded for locale '{locale}': {exc}",
                style=self.name,
            ) from exc


def resolve_style(
    style: str,
    style_format: str | StyleFormat,
    *,
    archive: StyleArchive | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> StyleHandle:
    """Return the independent style described by ``style``.

    ``csl`` treats ``style`` as the XML of a style definition; ``text`` looks
    the name up in ``archive``. Dependent styles are rejected in both cases.
    """
    emitter = emitter or NullEmitter()
    try:
        kind = StyleFormat.parse(style_format)
    except ValueError as exc:
        raise StyleResolutionError(str(exc)) from exc

    if kind is StyleFormat.INLINE:
        handle = _handle_from_xml(style.encode("utf-8"), name=None)
    else:
        archive = archive or StyleArchive.default()
        name = style.strip()
        payload = archive.read(name)
        if payload is None:
            raise StyleResolutionError(
                f"Style not found: '{name}' is not in the style archive.", style=name
            )
        handle = _handle_from_xml(payload, name=name)

    logger.debug("resolved style %s (sort=%s)", handle.name, handle.has_sort)
    emitter.event(
        "style_resolved",
        {
            "style": handle.name,
            "sorted": handle.has_sort,
            "bibliography": handle.has_bibliography,
        },
    )
    return handle


def _handle_from_xml(payload: bytes, *, name: str | None) -> StyleHandle:
    label = name or "<inline>"
    parser = etree.XMLParser(remove_comments=True, no_network=True, resolve_entities=False)
    try:
        root = etree.fromstring(payload, parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise StyleResolutionError(
            f"Malformed style definition {label}: {exc}", style=name
        ) from exc

    if root.tag != _tag("style"):
        raise StyleResolutionError(
            f"Malformed style definition {label}: root element is not a CSL <style>.",
            style=name,
        )

    parent = root.find(f"{_tag('info')}/{_tag('link')}[@rel='independent-parent']")
    if parent is not None:
        href = parent.get("href") or "an unnamed parent"
        raise StyleResolutionError(
            f"Dependent style not supported: {label} delegates to {href}.", style=name
        )

    if root.find(_tag("citation")) is None:
        raise StyleResolutionError(
            f"Malformed style definition {label}: missing <citation> element.", style=name
        )

    bibliography = root.find(_tag("bibliography"))
    sort = bibliography.find(_tag("sort")) if bibliography is not None else None
    has_sort = sort is not None and sort.find(_tag("key")) is not None

    title = root.findtext(f"{_tag('info')}/{_tag('title')}")
    return StyleHandle(
        name=name or (title.strip() if title else "<inline>"),
        xml=payload,
        title=title.strip() if title else None,
        has_sort=has_sort,
        has_bibliography=bibliography is not None,
    )


__all__ = ["CSL_NAMESPACE", "StyleFormat", "StyleHandle", "resolve_style"]
