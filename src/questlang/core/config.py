"""Configuration helpers for interpreter limits and logging."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class QuestLangConfig:
    """Tunable limits for path enumeration plus the preferred log level.

    ``None`` guards mean unbounded enumeration; non-positive or non-integer
    guards and unknown log levels are normalised on construction.
    """

    max_paths: int | None = None
    max_path_depth: int | None = None
    log_level: str = _DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_paths", _normalize_guard(self.max_paths))
        object.__setattr__(self, "max_path_depth", _normalize_guard(self.max_path_depth))
        object.__setattr__(self, "log_level", _normalize_log_level(self.log_level))


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "QuestLang"
        return Path.home() / "QuestLang"
    return Path.home() / ".config" / "questlang"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _normalize_guard(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def config_from_mapping(raw: Dict[str, object]) -> QuestLangConfig:
    """Build a config from a decoded JSON object, dropping invalid values."""
    return QuestLangConfig(
        max_paths=_normalize_guard(raw.get("max_paths")),
        max_path_depth=_normalize_guard(raw.get("max_path_depth")),
        log_level=_normalize_log_level(raw.get("log_level")),
    )


def load_config(path: Path | None = None) -> QuestLangConfig:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return QuestLangConfig()
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return QuestLangConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: expected a JSON object", config_path)
        return QuestLangConfig()
    return config_from_mapping(raw)


def save_config(config: QuestLangConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "max_paths": config.max_paths,
        "max_path_depth": config.max_path_depth,
        "log_level": _normalize_log_level(config.log_level),
    }
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
