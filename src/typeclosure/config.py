from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from typeclosure.analysis.namespace import DEFAULT_CORE_PREFIX, CoreNamespace
from typeclosure.invariants import never

DEFAULT_CONFIG_NAME = "typeclosure.toml"
DEFAULT_JOBS = 4

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def closure_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("closure", {})
    return section if isinstance(section, dict) else {}


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def core_namespace_from_config(section: TomlTable | None) -> CoreNamespace:
    if not isinstance(section, dict):
        return CoreNamespace(DEFAULT_CORE_PREFIX)
    prefix = section.get("core_prefix")
    if prefix is None:
        return CoreNamespace(DEFAULT_CORE_PREFIX)
    if not isinstance(prefix, str):
        never("invalid core_prefix", core_prefix=prefix)
    return CoreNamespace(prefix)


def closure_jobs(section: TomlTable | None) -> int:
    if not isinstance(section, dict):
        return DEFAULT_JOBS
    raw = section.get("jobs")
    if raw is None:
        return DEFAULT_JOBS
    if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
        never("invalid jobs", jobs=raw)
    return raw


def closure_dotted_names(section: TomlTable | None) -> bool:
    if not isinstance(section, dict):
        return False
    return _as_bool(section.get("dotted_names"))


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged
