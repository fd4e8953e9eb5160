# Rev 0.2.0
# projectz/utils/config.py
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional
from .paths import DB_PATH, config_dir
from .logging_setup import get_logger

_log = get_logger("config")

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 800,
        "height": 600,
    },
    "database": {
        "path": None,   # None -> XDG default
    },
}


def settings_file() -> Path:
    return config_dir() / "settings.json"


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    merged = {k: dict(v) for k, v in _DEFAULTS.items()}
    if not path.exists():
        return merged
    try:
        stored = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        _log.warning("Ignoring unreadable settings %s: %s", path, exc)
        return merged
    for key, value in stored.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def resolve_db_path(explicit: Optional[str | Path] = None, settings: Optional[Dict[str, Any]] = None) -> Path:
    """--db argument, then PROJECTZ_DB, then settings.json, then the XDG default."""
    if explicit:
        return Path(explicit).expanduser()
    env = os.environ.get("PROJECTZ_DB")
    if env:
        return Path(env).expanduser()
    settings = settings if settings is not None else load_settings()
    configured = (settings.get("database") or {}).get("path")
    if configured:
        return Path(configured).expanduser()
    return DB_PATH
