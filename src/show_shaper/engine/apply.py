"""
Command engine.

Applies an ordered command list to a design. Every command runs against a
private copy of the working draft and is committed only if the result
re-validates as a Design, so one bad command never poisons the rest and the
caller's design is never touched.
"""

import copy
from typing import Any, Callable

from jmespath.exceptions import JMESPathError

from ..core.errors import (
    CommandSkipped,
    InvalidInputError,
    PerCommandFault,
    SchemaValidationError,
    UnknownPresetWarning,
    UnresolvedPathWarning,
)
from ..core.logging_config import get_logger
from ..presets.catalog import STYLED_PRESETS, Preset, get_preset
from ..schema.commands import (
    AddComponent,
    ApplyPreset,
    Command,
    MoveComponent,
    Position,
    RemoveComponent,
    ReplaceComponent,
    SetStyle,
    Update,
    validate_commands,
)
from ..schema.design import MAX_COMPONENTS, Design, validate_design
from .outcome import ApplyResult, CommandOutcome, OutcomeStatus
from .paths import find_component, parse_shorthand, query_first, resolve_component_id

logger = get_logger(__name__)

Draft = dict[str, Any]


# ============================================================================
# Order and preset helpers
# ============================================================================


def move_id(order: list[str], from_id: str, to_id: str, position: Position | str) -> list[str]:
    """
    Reposition ``from_id`` relative to ``to_id`` in a render order.

    Returns a new list. When ``to_id`` is not in the order (after removing
    ``from_id``) the original order is returned unchanged.
    """
    remaining = [item for item in order if item != from_id]
    if to_id not in remaining:
        return list(order)
    index = remaining.index(to_id)
    insert_at = index if Position(position) is Position.BEFORE else index + 1
    remaining.insert(insert_at, from_id)
    return remaining


def expand_preset(draft: Draft, preset: Preset) -> None:
    """Apply a preset bundle to a draft in place."""
    styles = draft["styles"]
    styles["theme"] = preset.styles.theme.value
    styles["fontScale"] = preset.styles.font_scale
    if preset.key in STYLED_PRESETS:
        styles["designStyle"] = preset.key
    else:
        styles.pop("designStyle", None)

    layout = draft["layout"]
    layout["columns"] = preset.layout.columns

    if preset.layout.suggested_order:
        existing = {component["id"] for component in draft["components"]}
        head = [item for item in preset.layout.suggested_order if item in existing]
        tail = [item for item in layout["order"] if item not in head]
        layout["order"] = head + tail

    for override in preset.component_overrides:
        component = find_component(draft, override.id)
        if component is None:
            continue
        if override.type is not None:
            component["type"] = override.type.value
        if override.props:
            component["props"] = {**component.get("props", {}), **dict(override.props)}

    # Runs after overrides so a retyped component gets its new type's class
    for component in draft["components"]:
        token = preset.styles.class_for(component["type"])
        if token:
            component["props"] = {**component.get("props", {}), "className": token}


# ============================================================================
# Per-op handlers
# ============================================================================


def _require_id(path: str, draft: Draft) -> str:
    component_id = resolve_component_id(path, draft)
    if component_id is None:
        raise UnresolvedPathWarning(f"Path did not resolve to a component: {path}")
    return component_id


def _set_style(draft: Draft, command: SetStyle) -> None:
    node = query_first(command.path, draft)
    if not isinstance(node, dict):
        raise UnresolvedPathWarning(f"Style path matched nothing: {command.path}")
    node.update(command.value.to_json_dict())


def _update(draft: Draft, command: Update) -> None:
    value = command.value

    shorthand = parse_shorthand(command.path)
    if shorthand is not None:
        component = find_component(draft, shorthand.component_id)
        if component is not None:
            if shorthand.props:
                component["props"] = {**component.get("props", {}), **value}
                return
            props = value.get("props")
            if isinstance(props, dict):
                component["props"] = {**component.get("props", {}), **props}
                return

    try:
        node = query_first(command.path, draft)
    except JMESPathError as e:
        logger.debug("update_query_failed", path=command.path, error=str(e))
        node = None

    if isinstance(node, dict):
        if isinstance(node.get("props"), dict):
            node["props"].update(value)
        else:
            node.update(value)
        return

    raise CommandSkipped(f"Update matched no path: {command.path}", reason="no_match")


def _add_component(draft: Draft, command: AddComponent) -> None:
    component = command.value.model_dump(mode="json", by_alias=True)
    if find_component(draft, component["id"]) is not None:
        raise CommandSkipped(f"Component already exists: {component['id']}", reason="duplicate_id")
    if len(draft["components"]) >= MAX_COMPONENTS:
        raise CommandSkipped(
            f"Design already has {MAX_COMPONENTS} components", reason="component_limit"
        )
    draft["components"].append(component)
    if component["id"] not in draft["layout"]["order"]:
        draft["layout"]["order"].append(component["id"])


def _remove_component(draft: Draft, command: RemoveComponent) -> None:
    component_id = _require_id(command.path, draft)
    draft["components"] = [c for c in draft["components"] if c["id"] != component_id]
    draft["layout"]["order"] = [item for item in draft["layout"]["order"] if item != component_id]


def _move_component(draft: Draft, command: MoveComponent) -> None:
    from_id = _require_id(command.from_, draft)
    to_id = _require_id(command.to, draft)
    order = draft["layout"]["order"]
    if from_id == to_id or to_id not in order:
        raise CommandSkipped(f"Move target not in layout order: {to_id}", reason="no_match")
    draft["layout"]["order"] = move_id(order, from_id, to_id, command.position)


def _replace_component(draft: Draft, command: ReplaceComponent) -> None:
    component_id = _require_id(command.path, draft)
    replacement = command.value.model_dump(mode="json", by_alias=True)
    draft["components"] = [
        copy.deepcopy(replacement) if c["id"] == component_id else c for c in draft["components"]
    ]


def _apply_preset(draft: Draft, command: ApplyPreset) -> None:
    preset = get_preset(command.value)
    if preset is None:
        raise UnknownPresetWarning(f"Unknown preset: {command.value}")
    expand_preset(draft, preset)


_HANDLERS: dict[str, Callable[[Draft, Any], None]] = {
    "set_style": _set_style,
    "update": _update,
    "add_component": _add_component,
    "remove_component": _remove_component,
    "move_component": _move_component,
    "replace_component": _replace_component,
    "apply_preset": _apply_preset,
}


# ============================================================================
# Entry points
# ============================================================================


def _apply_one(draft: Draft, command: Command) -> Design:
    """Run one command on ``draft`` in place and re-validate the result."""
    try:
        _HANDLERS[command.op](draft, command)
    except CommandSkipped:
        raise
    except Exception as e:
        raise PerCommandFault(f"{command.op} failed: {e}", original=e) from e

    try:
        return validate_design(draft)
    except SchemaValidationError as e:
        raise PerCommandFault(f"{command.op} produced an invalid design: {e}", original=e) from e


def apply_commands_with_report(design: Any, command_list: Any) -> ApplyResult:
    """
    Apply commands in order and report what happened to each.

    Args:
        design: Design, or raw data accepted by validate_design
        command_list: CommandList, or raw data accepted by validate_commands

    Returns:
        ApplyResult with the new design and one outcome per command

    Raises:
        InvalidInputError: If the design or command list fails validation
    """
    try:
        current = validate_design(design)
        commands = validate_commands(command_list).commands
    except SchemaValidationError as e:
        raise InvalidInputError(str(e), cause=e) from e

    draft = current.to_json_dict()
    outcomes: list[CommandOutcome] = []

    for index, command in enumerate(commands):
        candidate = copy.deepcopy(draft)
        try:
            applied = _apply_one(candidate, command)
        except CommandSkipped as skip:
            logger.info(
                "command_skipped", index=index, op=command.op, reason=skip.reason, detail=str(skip)
            )
            outcomes.append(CommandOutcome(index, command.op, OutcomeStatus.SKIPPED, skip.reason))
            continue
        except PerCommandFault as fault:
            logger.warning("command_failed", index=index, op=command.op, error=str(fault))
            outcomes.append(CommandOutcome(index, command.op, OutcomeStatus.FAILED, str(fault)))
            continue

        # Unknown keys are dropped by re-validation, so an edit can land on nothing
        if applied == current:
            logger.info("command_skipped", index=index, op=command.op, reason="no_change")
            outcomes.append(CommandOutcome(index, command.op, OutcomeStatus.SKIPPED, "no_change"))
            continue

        current = applied
        draft = current.to_json_dict()
        outcomes.append(CommandOutcome(index, command.op, OutcomeStatus.APPLIED))

    result = ApplyResult(design=current, outcomes=tuple(outcomes))
    logger.debug(
        "commands_applied",
        total=len(outcomes),
        applied=result.applied,
        skipped=result.skipped,
        failed=result.failed,
    )
    return result


def apply_commands(design: Any, command_list: Any) -> Design:
    """Apply commands in order and return the new design."""
    return apply_commands_with_report(design, command_list).design
