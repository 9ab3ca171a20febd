"""Settings for FileLens retrieval, alignment and storage.

Precedence, highest first:

1. Keyword overrides passed to :func:`load_settings`
2. Environment variables (``FILELENS_<FIELD>``, e.g. ``FILELENS_EXACT_K=3``)
3. A YAML file (explicit ``path`` argument or ``FILELENS_CONFIG``)
4. The defaults declared on :class:`Settings`
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from filelens.errors import ConfigError

__all__ = ["Settings", "load_settings", "resolve_store_root", "ENV_PREFIX"]

ENV_PREFIX = "FILELENS_"

_ALIGN_MODES = {"lcs", "pairwise", "auto"}
_LOG_FORMATS = {"console", "json"}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    num_hashes: int = 10
    approximate_k: int = 50
    exact_k: int = 5
    align_mode: str = "lcs"
    lcs_cell_limit: int = 4_000_000
    store_root: str = "neighbors_store"
    workers: int = 1
    log_level: str = "WARNING"
    log_format: str = "console"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_settings(path: str | Path | None = None, **overrides: Any) -> Settings:
    """Merge defaults, YAML, environment and ``overrides`` into :class:`Settings`."""

    values: Dict[str, Any] = {}

    config_path = path or os.environ.get(f"{ENV_PREFIX}CONFIG")
    if config_path:
        values.update(_read_yaml(Path(config_path)))

    values.update(_read_env(os.environ))
    values.update({key: value for key, value in overrides.items() if value is not None})

    settings = replace(Settings(), **_coerce(values))
    _check(settings)
    return settings


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError.parse_error(str(path), "file not found")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError.parse_error(str(path), str(exc)) from exc
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _read_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for field in fields(Settings):
        raw = environ.get(f"{ENV_PREFIX}{field.name.upper()}")
        if raw is not None and raw != "":
            values[field.name] = raw
    return values


def _coerce(values: Mapping[str, Any]) -> Dict[str, Any]:
    known = {field.name: field for field in fields(Settings)}
    result: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise ConfigError.invalid_value(key, value, "unknown setting")
        default = known[key].default
        if isinstance(default, int):
            try:
                result[key] = int(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError.invalid_value(key, value, "expected an integer") from exc
        else:
            result[key] = str(value)
    return result


def _check(settings: Settings) -> None:
    if settings.num_hashes < 1:
        raise ConfigError.invalid_value("num_hashes", settings.num_hashes, "must be at least 1")
    for name in ("approximate_k", "exact_k"):
        if getattr(settings, name) < 0:
            raise ConfigError.invalid_value(name, getattr(settings, name), "must not be negative")
    if settings.workers < 1:
        raise ConfigError.invalid_value("workers", settings.workers, "must be at least 1")
    if settings.lcs_cell_limit < 1:
        raise ConfigError.invalid_value("lcs_cell_limit", settings.lcs_cell_limit, "must be at least 1")
    if settings.align_mode not in _ALIGN_MODES:
        raise ConfigError.invalid_value(
            "align_mode", settings.align_mode, f"expected one of {sorted(_ALIGN_MODES)}"
        )
    if settings.log_format not in _LOG_FORMATS:
        raise ConfigError.invalid_value(
            "log_format", settings.log_format, f"expected one of {sorted(_LOG_FORMATS)}"
        )


def resolve_store_root(settings: Optional[Settings] = None) -> str:
    """Return the configured neighbor store directory."""

    return (settings or load_settings()).store_root
