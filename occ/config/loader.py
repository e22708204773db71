"""Configuration file loading and saving."""

import json
import os
import re
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from occ.config.schema import Config

# Preset names under this key are user-chosen and must not be re-cased
_PRESETS_KEY = "custom_presets"


def get_config_candidates() -> list[Path]:
    """Config file locations in lookup order."""
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    cwd = Path.cwd()
    return [
        cwd / ".occrc.json",
        cwd / "occ.config.json",
        xdg_home / "occ" / "config.json",
        Path.home() / ".occrc.json",
    ]


def get_config_path() -> Path:
    """First existing config file, or the XDG location if none exists."""
    candidates = get_config_candidates()
    for path in candidates:
        if path.exists():
            return path
    return candidates[2]


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def convert_keys(data: Any) -> Any:
    """Recursively convert dict keys from camelCase to snake_case."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Recursively convert dict keys from snake_case to camelCase."""
    if isinstance(data, dict):
        return {snake_to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def _from_file_format(raw: dict[str, Any]) -> dict[str, Any]:
    presets = raw.pop("customPresets", raw.pop(_PRESETS_KEY, None))
    data = convert_keys(raw)
    if isinstance(presets, dict):
        data[_PRESETS_KEY] = {name: convert_keys(p) for name, p in presets.items()}
    return data


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not read config {path}: {e}")
        return {}

    if not text.strip():
        return {}

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in config {path}: {e}")
        return {}

    if not isinstance(raw, dict):
        logger.warning(f"Config {path} is not a JSON object, ignoring")
        return {}
    return _from_file_format(raw)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration.

    Args:
        config_path: Explicit file. Defaults to get_config_path().

    Returns:
        Config from the file (if any) with environment overrides applied.
        A file with invalid JSON or invalid values is ignored with a warning.
    """
    path = config_path or get_config_path()
    data = _read_config_file(path) if path.exists() else {}

    try:
        return Config(**data)
    except ValidationError as e:
        logger.warning(f"Invalid values in config {path}, using defaults: {e}")
        return Config()


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """Write config as camelCase JSON. Returns the path written."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(exclude_none=True)
    presets = data.pop(_PRESETS_KEY, {})
    out = convert_to_camel(data)
    out["customPresets"] = {name: convert_to_camel(p) for name, p in presets.items()}

    path.write_text(json.dumps(out, indent=2) + "\n", encoding="utf-8")
    return path
