"""Lazy loader for enumeration settings stored as JSON."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

_ENV_KEY = "POLYCUBES_CONFIG"
_DEFAULT_PATH = Path(__file__).resolve().parent.parent / "config" / "polycubes.json"
_CONFIG_DATA: Optional[Dict[str, Any]] = None


def config_path() -> Path:
    override = os.environ.get(_ENV_KEY, "").strip()
    return Path(override) if override else _DEFAULT_PATH


def _load(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        print(f"[config] ignoring unreadable {path}: {exc}")
        return {}
    if not isinstance(data, dict):
        print(f"[config] ignoring {path}: top level must be an object")
        return {}
    return data


def _ensure_loaded() -> Dict[str, Any]:
    global _CONFIG_DATA
    if _CONFIG_DATA is None:
        _CONFIG_DATA = _load(config_path())
    return _CONFIG_DATA


def reload() -> None:
    """Drop the cached settings so the next lookup re-reads the file."""
    global _CONFIG_DATA
    _CONFIG_DATA = None


def get(path: str, default: Any = None) -> Any:
    """Return a config value using dotted paths, or default when missing."""
    data = _ensure_loaded()
    if not path:
        return data

    current: Any = data
    for segment in path.split('.'):
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        else:
            return default
    return current


def get_bool(path: str, default: bool = False) -> bool:
    value = get(path, default)
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no")
    return bool(value)
