"""Command schema: the closed set of edit operations on a Design.

Only the structural tags are closed. Payload contents (`update.value`,
component `props`) stay open because the translator's prop vocabulary is
open-ended.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from .design import Component, StylePatch, schema_error


class Position(str, Enum):
    """Where move_component places the moved id relative to its target.

    The layout is a flat order, so INSIDE behaves like AFTER.
    """

    BEFORE = "before"
    AFTER = "after"
    INSIDE = "inside"


class CommandModel(BaseModel):
    """Base for commands; extra keys from the generator are dropped."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class SetStyle(CommandModel):
    op: Literal["set_style"]
    path: str
    value: StylePatch


class Update(CommandModel):
    op: Literal["update"]
    path: str
    value: dict[str, Any]


class AddComponent(CommandModel):
    op: Literal["add_component"]
    value: Component


class RemoveComponent(CommandModel):
    op: Literal["remove_component"]
    path: str


class MoveComponent(CommandModel):
    op: Literal["move_component"]
    from_: str = Field(alias="from")
    to: str
    position: Position = Position.AFTER


class ReplaceComponent(CommandModel):
    op: Literal["replace_component"]
    path: str
    value: Component


class ApplyPreset(CommandModel):
    """Unknown keys pass validation; the engine skips them."""

    op: Literal["apply_preset"]
    value: str = Field(min_length=1)


Command = Annotated[
    Union[
        SetStyle,
        Update,
        AddComponent,
        RemoveComponent,
        MoveComponent,
        ReplaceComponent,
        ApplyPreset,
    ],
    Field(discriminator="op"),
]

OPS: tuple[str, ...] = (
    "set_style",
    "update",
    "add_component",
    "remove_component",
    "move_component",
    "replace_component",
    "apply_preset",
)


class CommandList(CommandModel):
    """Wire envelope: {"commands": [...]}."""

    commands: list[Command] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.commands)

    def to_json_dict(self) -> dict[str, Any]:
        return {"commands": [command.to_json_dict() for command in self.commands]}


def validate_commands(raw: Any) -> CommandList:
    """
    Validate raw data into a CommandList.

    Args:
        raw: {"commands": [...]}, a bare list of commands, JSON text, or a CommandList

    Returns:
        Validated CommandList (move_component.position defaults to "after")

    Raises:
        SchemaValidationError: If any command has an unknown op or a bad shape
    """
    if isinstance(raw, CommandList):
        return raw
    try:
        if isinstance(raw, (str, bytes)):
            return CommandList.model_validate_json(raw)
        if isinstance(raw, list):
            raw = {"commands": raw}
        return CommandList.model_validate(raw)
    except pydantic.ValidationError as e:
        raise schema_error("command list", e) from e


def empty_command_list() -> CommandList:
    return CommandList(commands=[])
