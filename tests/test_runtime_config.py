from __future__ import annotations

from pathlib import Path

import pytest

from cfb_trends.runtime_config import (
    DEFAULT_CONFIG_PATH,
    current_runtime_config,
    load_runtime_config,
    set_current_runtime_config,
)


def _write_config(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_load_runtime_config_resolves_relative_paths(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "runtime.toml",
        [
            "[paths]",
            'data_dir = "cfbd"',
            'reports_dir = "reports/trends"',
            "",
            "[trends]",
            'preferred_provider = "Bovada"',
            'default_conference = "SEC"',
            "default_year = 2023",
        ],
    )

    config = load_runtime_config(config_path)

    assert config.data_dir == (tmp_path / "cfbd").resolve()
    assert config.reports_dir == (tmp_path / "reports" / "trends").resolve()
    assert config.preferred_provider == "Bovada"
    assert config.default_conference == "SEC"
    assert config.default_year == 2023


def test_load_runtime_config_defaults_for_missing_sections(tmp_path: Path) -> None:
    config = load_runtime_config(_write_config(tmp_path / "runtime.toml", ["[paths]"]))

    assert config.preferred_provider == "consensus"
    assert config.default_conference == "All"
    assert config.default_year == 2024
    assert config.data_dir == (tmp_path / "data" / "cfbd").resolve()


def test_load_runtime_config_rejects_bad_input(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError, match="not found"):
        load_runtime_config(tmp_path / "missing.toml")

    broken = _write_config(tmp_path / "broken.toml", ["[paths"])
    with pytest.raises(RuntimeError, match="invalid runtime config"):
        load_runtime_config(broken)

    bad_section = _write_config(tmp_path / "bad.toml", ['trends = "consensus"'])
    with pytest.raises(RuntimeError, match=r"\[trends\] must be a table"):
        load_runtime_config(bad_section)


def test_current_runtime_config_uses_explicit_config(tmp_path: Path) -> None:
    config = load_runtime_config(_write_config(tmp_path / "runtime.toml", ["[paths]"]))
    set_current_runtime_config(config)

    assert current_runtime_config() is config


def test_default_runtime_config_points_at_repo_data_dir() -> None:
    config = load_runtime_config(DEFAULT_CONFIG_PATH)
    assert config.data_dir == (DEFAULT_CONFIG_PATH.parent.parent / "data" / "cfbd").resolve()
    assert config.preferred_provider == "consensus"


def test_load_runtime_config_ignores_non_integer_year(tmp_path: Path) -> None:
    config = load_runtime_config(
        _write_config(tmp_path / "runtime.toml", ["[trends]", 'default_year = "next"'])
    )
    assert config.default_year == 2024
