"""Command application engine."""

from .apply import apply_commands, apply_commands_with_report, expand_preset, move_id
from .outcome import ApplyResult, CommandOutcome, OutcomeStatus
from .paths import (
    ShorthandPath,
    parse_shorthand,
    query_first,
    resolve_component_id,
    find_component,
)

__all__ = [
    "apply_commands",
    "apply_commands_with_report",
    "expand_preset",
    "move_id",
    "ApplyResult",
    "CommandOutcome",
    "OutcomeStatus",
    "ShorthandPath",
    "parse_shorthand",
    "query_first",
    "resolve_component_id",
    "find_component",
]
