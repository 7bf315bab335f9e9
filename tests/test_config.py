from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from jsondts.config import Settings, load_config, load_settings
from jsondts.exceptions import NeverThrown
from jsondts.inference.model import ConflictPolicy


def _write(path: Path, body: str) -> Path:
    path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_missing_config_yields_defaults(tmp_path: Path) -> None:
    assert load_config(root=tmp_path) == {}
    assert load_settings(root=tmp_path) == Settings()


def test_load_settings_reads_sections(tmp_path: Path) -> None:
    config_path = _write(
        tmp_path / "jsondts.toml",
        """
        [inference]
        conflict_policy = "unknown"

        [render]
        alias_prefix = "Json"
        common_file = "shared.d.ts"
        compute_helper = false
        """,
    )
    settings = load_settings(config_path=config_path)
    assert settings.conflict_policy is ConflictPolicy.UNKNOWN
    assert settings.alias_prefix == "Json"
    assert settings.common_file == "shared"
    assert settings.compute_helper is False
    options = settings.render_options
    assert options.common_dts == "shared.d.ts"


def test_load_settings_uses_root_default_name(tmp_path: Path) -> None:
    _write(tmp_path / "jsondts.toml", '[render]\nalias_prefix = "9bad"\n')
    settings = load_settings(root=tmp_path)
    assert settings.alias_prefix == "T9bad"


def test_unreadable_toml_is_ignored(tmp_path: Path) -> None:
    config_path = _write(tmp_path / "jsondts.toml", "[inference\nconflict_policy = ")
    assert load_settings(config_path=config_path) == Settings()


def test_unknown_conflict_policy_is_rejected(tmp_path: Path) -> None:
    config_path = _write(
        tmp_path / "jsondts.toml",
        """
        [inference]
        conflict_policy = "first-wins"
        """,
    )
    with pytest.raises(NeverThrown):
        load_settings(config_path=config_path)
