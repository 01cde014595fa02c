"""Runtime configuration loaded from `config/runtime.toml`."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cfb_trends.line_index import DEFAULT_PREFERRED_PROVIDER

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.toml"

DEFAULT_YEAR = 2024
DEFAULT_CONFERENCE = "All"


@dataclass(frozen=True)
class RuntimeConfig:
    config_path: Path
    data_dir: Path
    reports_dir: Path
    preferred_provider: str
    default_conference: str
    default_year: int


_CURRENT_RUNTIME_CONFIG: RuntimeConfig | None = None


def set_current_runtime_config(config: RuntimeConfig | None) -> None:
    global _CURRENT_RUNTIME_CONFIG
    _CURRENT_RUNTIME_CONFIG = config


def current_runtime_config() -> RuntimeConfig:
    """Return the active config, loading the repo default on first use."""
    config = _CURRENT_RUNTIME_CONFIG
    if config is None:
        config = load_runtime_config()
        set_current_runtime_config(config)
    return config


def _section(payload: dict[str, Any], name: str) -> dict[str, Any]:
    table = payload.get(name) or {}
    if not isinstance(table, dict):
        raise RuntimeError(f"runtime config section [{name}] must be a table")
    return table


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _year(value: Any) -> int:
    # TOML ints arrive as int; anything else falls back
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return DEFAULT_YEAR


def _path(value: Any, default: str, base_dir: Path) -> Path:
    path = Path(_text(value, default)).expanduser()
    return path if path.is_absolute() else (base_dir / path).resolve()


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """Load `[paths]` and `[trends]`; relative paths resolve against the file's directory."""
    source = (config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()
    if not source.exists():
        raise RuntimeError(f"runtime config file not found: {source}")
    try:
        payload = tomllib.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"failed reading runtime config: {source}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RuntimeError(f"invalid runtime config TOML: {source}") from exc

    paths = _section(payload, "paths")
    trends = _section(payload, "trends")
    base_dir = source.parent
    return RuntimeConfig(
        config_path=source,
        data_dir=_path(paths.get("data_dir"), "data/cfbd", base_dir),
        reports_dir=_path(paths.get("reports_dir"), "reports/trends", base_dir),
        preferred_provider=_text(trends.get("preferred_provider"), DEFAULT_PREFERRED_PROVIDER),
        default_conference=_text(trends.get("default_conference"), DEFAULT_CONFERENCE),
        default_year=_year(trends.get("default_year")),
    )
