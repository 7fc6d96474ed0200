"""Brand preset catalog."""

from .catalog import (
    PRESETS,
    STYLED_PRESETS,
    Preset,
    PresetStyles,
    PresetLayout,
    ComponentOverride,
    get_preset,
    preset_keys,
    normalize_key,
)

__all__ = [
    "PRESETS",
    "STYLED_PRESETS",
    "Preset",
    "PresetStyles",
    "PresetLayout",
    "ComponentOverride",
    "get_preset",
    "preset_keys",
    "normalize_key",
]
