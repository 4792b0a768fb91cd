"""Per-tool JSON configuration for the intake suite.

Each tool keeps one file in data/config/ named after the tool
(e.g. "quote-intake.json"). Admins edit these to disable flows or add
custom branches; tools read them with fallback to built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

CONFIG_DIR = Path(__file__).resolve().parent.parent / "data" / "config"


def _path(tool_name: str) -> Path:
    return CONFIG_DIR / f"{tool_name}.json"


def load_config(tool_name: str) -> dict | None:
    """Return the tool's config dict, or None when missing or unreadable."""
    path = _path(tool_name)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return None
    return data if isinstance(data, dict) else None


def save_config(tool_name: str, config: dict) -> None:
    """Replace the tool's config file, writing through a temp file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    path = _path(tool_name)
    tmp = path.with_suffix(".json.tmp")
    tmp.write_text(json.dumps(config, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)


def get_config_value(tool_name: str, key: str, default: Any) -> Any:
    config = load_config(tool_name)
    if config is None:
        return default
    return config.get(key, default)


def set_config_value(tool_name: str, key: str, value: Any) -> None:
    """Set one key, keeping the rest of the tool's config."""
    config = load_config(tool_name) or {}
    config[key] = value
    save_config(tool_name, config)
