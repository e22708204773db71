"""Built-in tool-removal presets and policy resolution."""

from dataclasses import dataclass, field

from occ.compaction.types import ToolRemovalPolicy
from occ.config.schema import ToolRemovalPreset
from occ.errors import UnknownPresetError

DEFAULT_PRESET = "default"

BUILT_IN_PRESETS: dict[str, ToolRemovalPreset] = {
    "default": ToolRemovalPreset(name="default", keep_turns_with_tools=20, truncate_percent=50),
    "aggressive": ToolRemovalPreset(name="aggressive", keep_turns_with_tools=10, truncate_percent=50),
    "extreme": ToolRemovalPreset(name="extreme", keep_turns_with_tools=0, truncate_percent=0),
}


@dataclass
class ToolRemovalOptions:
    """Unresolved options: a preset name plus optional explicit overrides."""
    preset: str | None = None
    keep_turns_with_tools: int | None = None
    truncate_percent: float | None = None
    custom_presets: dict[str, ToolRemovalPreset] = field(default_factory=dict)


def resolve_preset(
    name: str,
    custom_presets: dict[str, ToolRemovalPreset] | None = None,
) -> ToolRemovalPreset:
    """
    Look up a preset, custom definitions first.

    Raises:
        UnknownPresetError: if neither custom nor built-in presets define it.
    """
    if custom_presets and name in custom_presets:
        return custom_presets[name]
    if name in BUILT_IN_PRESETS:
        return BUILT_IN_PRESETS[name]
    raise UnknownPresetError(name)


def available_presets(custom_presets: dict[str, ToolRemovalPreset] | None = None) -> list[str]:
    """Built-in preset names followed by any custom ones."""
    names = list(BUILT_IN_PRESETS)
    names.extend(n for n in (custom_presets or {}) if n not in BUILT_IN_PRESETS)
    return names


def resolve_tool_removal_options(options: ToolRemovalOptions) -> ToolRemovalPolicy:
    """Resolve options to a concrete policy. Explicit values beat the preset."""
    preset = resolve_preset(options.preset or DEFAULT_PRESET, options.custom_presets)

    keep = options.keep_turns_with_tools
    percent = options.truncate_percent
    return ToolRemovalPolicy(
        keep_turns_with_tools=preset.keep_turns_with_tools if keep is None else keep,
        truncate_percent=preset.truncate_percent if percent is None else percent,
    )
