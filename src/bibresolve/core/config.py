"""Configuration model for the bibliography resolver.

ResolverConfig

`source_separator` (`str`)
: Marker splitting the concatenated bibliography payload into individual
  sources at the byte boundary.

`list_separator` (`str`)
: Separator used by the comma-separated `formats` and `cited` inputs.

`key_separator` (`str`)
: Separator joining the resolved keys in the boundary output.

`default_locale` (`str`)
: Locale handed to the citation engine when the caller supplies a blank
  language tag.

`style_dirs` (`list[Path]`)
: Extra directories searched for `<name>.csl` files after the bundled
  styles. Only independent styles are accepted from any directory.

`validate_styles` (`bool`)
: Forward CSL schema validation to citeproc-py. Schema failures surface as
  warnings from citeproc-py, never as resolution errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml


class ResolverConfig(BaseModel):
    """Settings shared by every resolution call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_separator: str = "%%%"
    list_separator: str = ","
    key_separator: str = " "
    default_locale: str = "en-US"
    style_dirs: list[Path] = Field(default_factory=list)
    validate_styles: bool = False

    @field_validator("source_separator", "list_separator", "key_separator")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("separators must not be empty")
        return value

    @field_validator("default_locale")
    @classmethod
    def _strip_locale(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("default_locale must not be blank")
        return value


def load_config(path: Path | str) -> ResolverConfig:
    """Read a YAML configuration file into a :class:`ResolverConfig`."""
    config_path = Path(path)
    try:
        payload: Any = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid configuration file '{config_path}': {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValueError(f"Configuration file '{config_path}' must contain a mapping.")

    # Relative style directories are resolved against the config file.
    dirs = payload.get("style_dirs")
    if isinstance(dirs, list):
        payload["style_dirs"] = [
            (config_path.parent / str(item)).resolve() for item in dirs if item is not None
        ]

    try:
        return ResolverConfig.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration file '{config_path}': {exc}") from exc


__all__ = ["ResolverConfig", "load_config"]
