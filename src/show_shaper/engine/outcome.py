"""Per-command outcome report returned alongside the new design."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..schema.design import Design


class OutcomeStatus(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class CommandOutcome:
    """What happened to one command."""

    index: int
    op: str
    status: OutcomeStatus
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"index": self.index, "op": self.op, "status": self.status.value}
        if self.reason is not None:
            data["reason"] = self.reason
        return data


@dataclass(frozen=True)
class ApplyResult:
    """New design plus one outcome per input command, in input order."""

    design: Design
    outcomes: tuple[CommandOutcome, ...] = field(default_factory=tuple)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def applied(self) -> int:
        return self.count(OutcomeStatus.APPLIED)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(OutcomeStatus.FAILED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema": self.design.to_json_dict(),
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }
