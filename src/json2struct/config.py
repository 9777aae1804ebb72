from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from json2struct.exceptions import ConfigError
from json2struct.model import DedupPolicy, TransformConfig
from json2struct.naming import is_identifier

DEFAULT_CONFIG_NAME = "json2struct.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
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


def transform_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("transform", {})
    return section if isinstance(section, dict) else {}


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def _as_str(section: TomlTable, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string, got {value!r}")
    return value


def transform_config(section: TomlTable | None) -> TransformConfig:
    defaults = TransformConfig()
    if not section:
        return defaults
    dedup = _as_str(section, "dedup", defaults.dedup.value)
    try:
        policy = DedupPolicy(dedup.strip().lower())
    except ValueError:
        raise ConfigError(f"unknown dedup policy: {dedup!r}") from None
    root_name = _as_str(section, "root_name", defaults.root_name)
    item_suffix = _as_str(section, "item_suffix", defaults.item_suffix)
    field_sentinel = _as_str(section, "field_sentinel", defaults.field_sentinel)
    indent = _as_str(section, "indent", defaults.indent)
    if not item_suffix or not is_identifier(f"X{item_suffix}"):
        raise ConfigError(f"item_suffix must be identifier characters, got {item_suffix!r}")
    if not is_identifier(field_sentinel):
        raise ConfigError(f"field_sentinel must be an identifier, got {field_sentinel!r}")
    return TransformConfig(
        root_name=root_name,
        dedup=policy,
        item_suffix=item_suffix,
        indent=indent,
        field_sentinel=field_sentinel,
    )
