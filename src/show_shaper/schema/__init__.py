"""Design and command schemas."""

from .design import (
    MAX_COMPONENTS,
    Theme,
    Spacing,
    DesignStyle,
    CardStyle,
    ComponentType,
    Styles,
    StylePatch,
    Layout,
    Component,
    Design,
    validate_design,
    check_design,
    is_valid_design,
)
from .commands import (
    Position,
    SetStyle,
    Update,
    AddComponent,
    RemoveComponent,
    MoveComponent,
    ReplaceComponent,
    ApplyPreset,
    Command,
    CommandList,
    OPS,
    validate_commands,
    empty_command_list,
)

__all__ = [
    "MAX_COMPONENTS",
    "Theme",
    "Spacing",
    "DesignStyle",
    "CardStyle",
    "ComponentType",
    "Styles",
    "StylePatch",
    "Layout",
    "Component",
    "Design",
    "validate_design",
    "check_design",
    "is_valid_design",
    "Position",
    "SetStyle",
    "Update",
    "AddComponent",
    "RemoveComponent",
    "MoveComponent",
    "ReplaceComponent",
    "ApplyPreset",
    "Command",
    "CommandList",
    "OPS",
    "validate_commands",
    "empty_command_list",
]
