"""Design Handler."""

from typing import Any

import pydantic

from ..agents.translator import CommandTranslator
from ..core import (
    HistoryError,
    InvalidInputError,
    PromptRequest,
    SchemaValidationError,
    fingerprint,
    get_logger,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
)
from ..core.validate import MAX_PROMPT_LENGTH
from ..engine import ApplyResult, apply_commands_with_report
from ..history import DEFAULT_CAP
from ..monitoring import metrics_collector, trace_operation
from ..schema.commands import CommandList
from ..schema.design import Design, schema_error, validate_design
from ..services.store import DesignRecord, DesignStore, default_record

logger = get_logger(__name__)


class DesignService:
    """Loads, edits and persists per-user designs."""

    def __init__(
        self,
        store: DesignStore,
        translator: CommandTranslator,
        history_cap: int = DEFAULT_CAP,
        max_prompt_length: int = MAX_PROMPT_LENGTH,
    ) -> None:
        self.store = store
        self.translator = translator
        self.history_cap = history_cap
        self.max_prompt_length = max_prompt_length

    def load(self, user_id: str) -> DesignRecord:
        """Load a user's record, creating the starter dashboard on first visit."""
        record = self.store.load(user_id)
        if record is None:
            record = default_record()
            self.store.save(user_id, record)
            logger.info("record_created", user_id=user_id)
        return record

    def save(
        self,
        user_id: str,
        schema: Any,
        history: list[Any] | None = None,
        history_index: int | None = None,
    ) -> DesignRecord:
        """
        Validate and upsert a design. History fields that are not given keep
        their stored values.

        Raises:
            SchemaValidationError: If the design or history is invalid
        """
        validate_json_depth(schema)
        validate_json_size(safe_json_dumps(schema), name="design")
        design = validate_design(schema)
        existing = self.store.load(user_id)
        if history is None:
            history = existing.history if existing else []
        if history_index is None:
            history_index = existing.history_index if existing else -1

        try:
            record = DesignRecord(design=design, history=history, history_index=history_index)
        except pydantic.ValidationError as e:
            raise schema_error("design record", e) from e

        self.store.save(user_id, record)
        logger.info("record_saved", user_id=user_id, history=len(record.history))
        return record

    def translate(self, prompt: str, design: Design | dict[str, Any]) -> CommandList:
        """
        Translate a request against an explicit design (no persistence).

        Raises:
            SchemaValidationError: If the prompt is empty or too long
        """
        try:
            validated = PromptRequest(prompt=prompt)
        except pydantic.ValidationError as e:
            raise schema_error("prompt", e) from e
        if len(validated.prompt) > self.max_prompt_length:
            raise SchemaValidationError(
                f"Prompt length {len(validated.prompt)} exceeds maximum {self.max_prompt_length}"
            )
        logger.info("translate_request", prompt=validated.prompt[:50])
        return self.translator.translate(validated.prompt, design)

    def apply(self, user_id: str, commands: Any) -> ApplyResult:
        """
        Apply commands to the design the user is viewing and persist the result.

        Raises:
            InvalidInputError: If the command list fails validation
        """
        if not isinstance(commands, CommandList):
            try:
                validate_json_depth(commands)
            except SchemaValidationError as e:
                raise InvalidInputError(str(e), cause=e) from e

        record = self.load(user_id)

        with trace_operation("apply_commands", user_id=user_id), metrics_collector.measure_duration(
            metrics_collector.record_apply
        ):
            try:
                result = apply_commands_with_report(record.current, commands)
            except InvalidInputError as e:
                metrics_collector.record_error("invalid_input", "engine")
                logger.warning("apply_rejected", user_id=user_id, error=str(e))
                raise

        for outcome in result.outcomes:
            metrics_collector.record_command(outcome.op, outcome.status.value)

        if result.design != record.current:
            record = record.commit(result.design, self.history_cap)
            self.store.save(user_id, record)
            logger.info(
                "design_committed",
                user_id=user_id,
                applied=result.applied,
                skipped=result.skipped,
                failed=result.failed,
                history=len(record.history),
                fingerprint=fingerprint(result.design.to_json_dict()),
            )
        else:
            logger.info("design_unchanged", user_id=user_id, commands=len(result.outcomes))

        return result

    def prompt(self, user_id: str, text: str) -> ApplyResult:
        """Translate a request against the user's design, then apply it."""
        record = self.load(user_id)
        commands = self.translate(text, record.current)
        return self.apply(user_id, commands)

    def undo(self, user_id: str) -> DesignRecord:
        """
        Step back one snapshot.

        Raises:
            HistoryError: If there is nothing to undo
        """
        return self._move(user_id, "undo")

    def redo(self, user_id: str) -> DesignRecord:
        """
        Step forward one snapshot.

        Raises:
            HistoryError: If there is nothing to redo
        """
        return self._move(user_id, "redo")

    def _move(self, user_id: str, direction: str) -> DesignRecord:
        record = self.load(user_id)
        try:
            moved = record.undo() if direction == "undo" else record.redo()
        except HistoryError as e:
            metrics_collector.record_history_move(direction, "rejected")
            logger.info("history_move_rejected", user_id=user_id, direction=direction, error=str(e))
            raise

        self.store.save(user_id, moved)
        metrics_collector.record_history_move(direction, "ok")
        logger.info("history_moved", user_id=user_id, direction=direction, index=moved.history_index)
        return moved


__all__ = ["DesignService"]
