"""
Bounded undo/redo log of design snapshots.

The cursor is -1 while at the latest design, otherwise the index of the
snapshot being viewed.
"""

from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.errors import HistoryError
from ..schema.design import Design

T = TypeVar("T")

DEFAULT_CAP = 10
LATEST = -1


def append_snapshot(history: Sequence[T], snapshot: T, cap: int = DEFAULT_CAP) -> list[T]:
    """Return a new history with ``snapshot`` appended, keeping the newest ``cap``."""
    if cap <= 0:
        raise ValueError("cap must be positive")
    return [*history, snapshot][-cap:]


def can_undo(cursor: int, length: int) -> bool:
    return cursor > 0 or (cursor == LATEST and length > 1)


def can_redo(cursor: int, length: int) -> bool:
    return 0 <= cursor < length - 1


def undo(cursor: int, length: int) -> int:
    """
    Move the cursor one snapshot back.

    Raises:
        HistoryError: If there is nothing to undo
    """
    if not can_undo(cursor, length):
        raise HistoryError(f"Nothing to undo (cursor={cursor}, length={length})")
    if cursor == LATEST:
        return length - 2
    return cursor - 1


def redo(cursor: int, length: int) -> int:
    """
    Move the cursor one snapshot forward; reaching the newest snapshot
    returns to LATEST.

    Raises:
        HistoryError: If there is nothing to redo
    """
    if not can_redo(cursor, length):
        raise HistoryError(f"Nothing to redo (cursor={cursor}, length={length})")
    cursor += 1
    return LATEST if cursor == length - 1 else cursor


def current_snapshot(history: Sequence[T], cursor: int, current: T) -> T:
    if cursor == LATEST:
        return current
    return history[cursor]


class HistoryState(BaseModel):
    """
    Persisted per-user record: latest design, snapshots and cursor.

    Wire shape is ``{"schema": ..., "history": [...], "historyIndex": -1}``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    design: Design = Field(alias="schema")
    history: list[Design] = Field(default_factory=list)
    history_index: int = Field(default=LATEST, ge=LATEST, alias="historyIndex")

    @model_validator(mode="after")
    def validate_cursor(self) -> "HistoryState":
        if self.history_index >= len(self.history):
            raise ValueError(
                f"historyIndex {self.history_index} out of range for {len(self.history)} snapshots"
            )
        return self

    @property
    def current(self) -> Design:
        """Design the user is looking at."""
        return current_snapshot(self.history, self.history_index, self.design)

    @property
    def can_undo(self) -> bool:
        return can_undo(self.history_index, len(self.history))

    @property
    def can_redo(self) -> bool:
        return can_redo(self.history_index, len(self.history))

    def commit(self, design: Design, cap: int = DEFAULT_CAP) -> "HistoryState":
        """
        Record ``design`` as the new latest and return to the latest cursor.

        An empty history is seeded with the design being replaced so the
        first change can be undone.
        """
        base = self.history or [self.design]
        return HistoryState(
            design=design,
            history=append_snapshot(base, design, cap),
            history_index=LATEST,
        )

    def undo(self) -> "HistoryState":
        return self.model_copy(update={"history_index": undo(self.history_index, len(self.history))})

    def redo(self) -> "HistoryState":
        return self.model_copy(update={"history_index": redo(self.history_index, len(self.history))})

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "schema": self.design.to_json_dict(),
            "history": [snapshot.to_json_dict() for snapshot in self.history],
            "historyIndex": self.history_index,
        }
