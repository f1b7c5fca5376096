"""Citation style resolution.

`resolve_style` accepts either the XML of a CSL style (`csl`) or the name of
a style shipped in the `StyleArchive` (`text`). Only independent styles are
returned; a style that delegates to an `independent-parent` is rejected
rather than followed.
"""

from __future__ import annotations

from .archive import BUNDLED_STYLES_DIR, CITEPROC_STYLES_DIR, StyleArchive
from .resolver import CSL_NAMESPACE, StyleFormat, StyleHandle, resolve_style


__all__ = [
    "BUNDLED_STYLES_DIR",
    "CITEPROC_STYLES_DIR",
    "CSL_NAMESPACE",
    "StyleArchive",
    "StyleFormat",
    "StyleHandle",
    "resolve_style",
]
