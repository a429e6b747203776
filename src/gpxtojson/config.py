"""
gpxtojson configuration loader

This module centralizes *all* configuration handling for gpxtojson.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by gpxtojson.cli)
2) Environment variables (GPXTOJSON_*)
3) User config: ~/.config/gpxtojson/config.toml
4) Explicit / repo config: <repo_root>/config/config.toml
5) Hard defaults

Example config.toml:

    [aggregate]
    time_order = "clamp"      # clamp | reject | passthrough

    [output]
    indent = 2

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` if installed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from gpxtojson.analyze.aggregate import TIME_ORDER_CLAMP, check_time_order
from gpxtojson.errors import ConfigError

# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise ConfigError
      with a clear, user-facing message.
    """
    if not path.is_file():
        return {}

    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8")) or {}
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "aggregate.time_order")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_indent(v: Any, where: str) -> Optional[int]:
    """
    Coerce a config value into a JSON indent (non-negative int) or None.

    Empty strings and "none" mean compact output.
    """
    if v is None:
        return None
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("", "none"):
            return None
        v = s
    if isinstance(v, bool):
        raise ConfigError(f"Invalid output.indent from {where}: {v!r}")
    try:
        n = int(v)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid output.indent from {where}: {v!r}") from e
    if n < 0:
        raise ConfigError(f"Invalid output.indent from {where}: {v!r}")
    return n


def _as_time_order(v: Any, where: str) -> str:
    try:
        return check_time_order(str(v).strip().lower())
    except ConfigError as e:
        raise ConfigError(f"{e} [from {where}]") from e


# ---------------------------------------------------------------------------
# Repo discovery
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for a directory holding `config/`.
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


def default_user_config_path() -> Path:
    return Path.home() / ".config" / "gpxtojson" / "config.toml"


# ---------------------------------------------------------------------------
# Typed config
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GpxToJsonConfig:
    """
    Fully merged gpxtojson configuration.

    Attributes:
    - time_order: policy for points timestamped before their predecessor
    - indent: JSON indent, None for compact output
    - source: provenance map showing where each value came from
    """

    time_order: str = TIME_ORDER_CLAMP
    indent: Optional[int] = None
    source: dict[str, str] = field(default_factory=dict)


ENV_MAP = {
    "GPXTOJSON_TIME_ORDER": "aggregate.time_order",
    "GPXTOJSON_INDENT": "output.indent",
}


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> GpxToJsonConfig:
    """
    Load and merge all gpxtojson configuration (everything below CLI flags).
    """

    if repo_config_path is None:
        repo_root = find_repo_root(Path.cwd())
        if repo_root is not None:
            repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = default_user_config_path()

    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    time_order = TIME_ORDER_CLAMP
    indent: Optional[int] = None
    src = {
        "aggregate.time_order": "default",
        "output.indent": "default",
    }

    # Repo, then user config (user overrides repo)
    for cfg, label, path in (
        (repo_cfg, "repo", repo_config_path),
        (user_cfg, "user", user_config_path),
    ):
        where = f"{label}:{path}"

        v = _deep_get(cfg, "aggregate.time_order")
        if v is not None:
            time_order = _as_time_order(v, where)
            src["aggregate.time_order"] = where

        v = _deep_get(cfg, "output.indent")
        if v is not None:
            indent = _as_indent(v, where)
            src["output.indent"] = where

    # Environment variable overrides (highest non-CLI precedence)
    for env, key in ENV_MAP.items():
        v = os.environ.get(env)
        if v is None:
            continue
        where = f"env:{env}"
        if key == "aggregate.time_order":
            time_order = _as_time_order(v, where)
        elif key == "output.indent":
            indent = _as_indent(v, where)
        src[key] = where

    return GpxToJsonConfig(time_order=time_order, indent=indent, source=src)
