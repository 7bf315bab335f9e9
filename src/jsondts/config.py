from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from jsondts.inference.model import ConflictPolicy
from jsondts.inference.naming import DEFAULT_ALIAS_PREFIX, alias_prefix
from jsondts.inference.render import RenderOptions
from jsondts.invariants import never

DEFAULT_CONFIG_NAME = "jsondts.toml"
DEFAULT_COMMON_FILE = "_common"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


@dataclass(frozen=True)
class Settings:
    conflict_policy: ConflictPolicy = ConflictPolicy.UNION
    alias_prefix: str = DEFAULT_ALIAS_PREFIX
    common_file: str = DEFAULT_COMMON_FILE
    compute_helper: bool = True

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(
            alias_prefix=self.alias_prefix,
            common_file=self.common_file,
            compute_helper=self.compute_helper,
        )


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


def _as_bool(value: TomlValue, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def conflict_policy(section: TomlTable | None) -> ConflictPolicy:
    if not isinstance(section, dict):
        return ConflictPolicy.UNION
    raw = section.get("conflict_policy")
    if raw is None:
        return ConflictPolicy.UNION
    normalized = str(raw).strip().lower()
    for candidate in ConflictPolicy:
        if candidate.value == normalized:
            return candidate
    never(
        "unknown conflict policy",
        policy=raw,
        allowed=[candidate.value for candidate in ConflictPolicy],
    )


def common_file_name(section: TomlTable | None) -> str:
    if not isinstance(section, dict):
        return DEFAULT_COMMON_FILE
    raw = section.get("common_file")
    if not isinstance(raw, str) or not raw.strip():
        return DEFAULT_COMMON_FILE
    name = raw.strip()
    if name.endswith(".d.ts"):
        name = name[: -len(".d.ts")]
    return name or DEFAULT_COMMON_FILE


def load_settings(root: Path | None = None, config_path: Path | None = None) -> Settings:
    data = load_config(root=root, config_path=config_path)
    inference = data.get("inference", {})
    render = data.get("render", {})
    if not isinstance(render, dict):
        render = {}
    raw_prefix = render.get("alias_prefix")
    return Settings(
        conflict_policy=conflict_policy(inference if isinstance(inference, dict) else None),
        alias_prefix=alias_prefix(raw_prefix if isinstance(raw_prefix, str) else None),
        common_file=common_file_name(render),
        compute_helper=_as_bool(render.get("compute_helper"), True),
    )
