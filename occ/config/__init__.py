"""Configuration module for occ."""

from occ.config.loader import load_config, get_config_path
from occ.config.presets import BUILT_IN_PRESETS, resolve_preset, resolve_tool_removal_options
from occ.config.schema import Config, ToolRemovalPreset

__all__ = [
    "Config",
    "ToolRemovalPreset",
    "load_config",
    "get_config_path",
    "BUILT_IN_PRESETS",
    "resolve_preset",
    "resolve_tool_removal_options",
]
