"""Lookup of named CSL styles in the bundled style directories."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
import re

import citeproc


BUNDLED_STYLES_DIR = Path(__file__).resolve().parent / "data"
CITEPROC_STYLES_DIR = Path(citeproc.__file__).resolve().parent / "data" / "styles"

_STYLE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class StyleArchive:
    """Read-only archive mapping style names to ``.csl`` files.

    Directories are searched in order and the first match wins, so bundled
    styles shadow citeproc-py's and configured directories come last.
    """

    def __init__(self, directories: Iterable[Path | str]) -> None:
        self._directories: tuple[Path, ...] = tuple(Path(path) for path in directories)

    @classmethod
    def default(cls, extra_dirs: Iterable[Path | str] = ()) -> StyleArchive:
        """Return the archive of bundled styles followed by ``extra_dirs``."""
        return cls([BUNDLED_STYLES_DIR, CITEPROC_STYLES_DIR, *extra_dirs])

    @property
    def directories(self) -> Sequence[Path]:
        return self._directories

    def locate(self, name: str) -> Path | None:
        """Return the file backing ``name``, or ``None`` when it is unknown."""
        candidate = name.strip()
        if candidate.lower().endswith(".csl"):
            candidate = candidate[:-4]
        if not _STYLE_NAME_RE.match(candidate):
            return None
        for directory in self._directories:
            path = directory / f"{candidate}.csl"
            if path.is_file():
                return path
        return None

    def read(self, name: str) -> bytes | None:
        path = self.locate(name)
        if path is None:
            return None
        return path.read_bytes()

    def names(self) -> list[str]:
        """Return every style name reachable through the archive."""
        seen: dict[str, Path] = {}
        for directory in self._directories:
            if not directory.is_dir():
                continue
            for path in sorted(directory.glob("*.csl")):
                seen.setdefault(path.stem, path)
        return sorted(seen)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.locate(name) is not None


__all__ = ["BUNDLED_STYLES_DIR", "CITEPROC_STYLES_DIR", "StyleArchive"]
