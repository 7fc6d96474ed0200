"""Undo/redo history."""

from .buffer import (
    DEFAULT_CAP,
    LATEST,
    HistoryState,
    append_snapshot,
    can_undo,
    can_redo,
    undo,
    redo,
    current_snapshot,
)

__all__ = [
    "DEFAULT_CAP",
    "LATEST",
    "HistoryState",
    "append_snapshot",
    "can_undo",
    "can_redo",
    "undo",
    "redo",
    "current_snapshot",
]
