"""Natural-language editing of data dashboard designs."""

from .engine import ApplyResult, CommandOutcome, OutcomeStatus, apply_commands, apply_commands_with_report
from .schema import CommandList, Design, validate_commands, validate_design

__version__ = "0.1.0"

__all__ = [
    "ApplyResult",
    "CommandOutcome",
    "OutcomeStatus",
    "apply_commands",
    "apply_commands_with_report",
    "CommandList",
    "Design",
    "validate_commands",
    "validate_design",
]
