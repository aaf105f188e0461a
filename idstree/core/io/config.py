from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


DEFAULT_IDS_FILES: list[str] = ["./ids/ids_lv0.txt"]
DEFAULT_VARIANTS: list[str] = []


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class IdsConfig:
    ids_files: list[str] = field(default_factory=lambda: list(DEFAULT_IDS_FILES))
    variants: list[str] = field(default_factory=lambda: list(DEFAULT_VARIANTS))


def _str_list(raw: dict[str, Any], key: str, *, allow_empty: bool) -> list[str] | None:
    if key not in raw:
        return None
    v = raw[key]
    if not isinstance(v, list) or (not v and not allow_empty):
        raise ConfigError(f"'{key}' must be a {'list' if allow_empty else 'non-empty list'}")
    out: list[str] = []
    for item in v:
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"'{key}' items must be non-empty strings")
        out.append(item.strip())
    return out


def load_config(path: str | Path) -> IdsConfig:
    """Load a YAML config file.

    Format:
      ids_files: ["ids/ids_lv0.txt", ...]   # relative to the config file
      variants: ["G", "T"]                  # default preference

    Missing keys fall back to the defaults.
    """
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}") from e
    if raw is None:
        return IdsConfig()
    if not isinstance(raw, dict):
        raise ConfigError("config file must be a mapping")

    unknown = sorted(set(raw) - {"ids_files", "variants"})
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(map(str, unknown))}")

    ids_files = _str_list(raw, "ids_files", allow_empty=False)
    variants = _str_list(raw, "variants", allow_empty=True)

    base = p.parent
    return IdsConfig(
        ids_files=[str(base / f) for f in ids_files] if ids_files is not None else list(DEFAULT_IDS_FILES),
        variants=variants if variants is not None else list(DEFAULT_VARIANTS),
    )


def resolve_config(
    config_file: str | None,
    ids_files: list[str] | None = None,
    variants: list[str] | None = None,
) -> IdsConfig:
    """Config file (or defaults) with command-line overrides applied on top."""
    base = load_config(config_file) if config_file else IdsConfig()
    return IdsConfig(
        ids_files=list(ids_files) if ids_files else base.ids_files,
        variants=list(variants) if variants else base.variants,
    )
