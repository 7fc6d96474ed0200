"""
Natural-language to command translation.
Degrades to an empty command list on any failure.
"""

from abc import ABC, abstractmethod
from typing import Any

from returns.pipeline import is_successful

from ..core import (
    JSONParseError,
    LRUCache,
    SchemaValidationError,
    TranslatorError,
    extract_json,
    get_logger,
    translation_key,
    traced,
)
from ..monitoring import metrics_collector
from ..schema.commands import CommandList, empty_command_list, validate_commands
from ..schema.design import Design, check_design
from .prompt import SYSTEM_PROMPT, build_user_message

logger = get_logger(__name__)

CACHE_TYPE = "commands"


class TextGenerator(ABC):
    """Turns (system prompt, user text) into model text."""

    @abstractmethod
    def generate(self, system_prompt: str, user_text: str) -> str:
        """
        Raises:
            TranslatorError: If no usable text could be produced
        """
        pass


class CommandTranslator:
    """Translates edit requests into validated command lists."""

    def __init__(
        self,
        generator: TextGenerator | None,
        enable_cache: bool = True,
        cache_size: int = 100,
        cache_ttl: int | None = 3600,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self.generator = generator
        self.system_prompt = system_prompt
        self.cache: LRUCache[CommandList] | None = (
            LRUCache(max_size=cache_size, ttl_seconds=cache_ttl) if enable_cache else None
        )

        logger.info("initialized", cache=enable_cache, generator=type(generator).__name__)

    @traced("translate")
    def translate(self, prompt: str, design: Design | dict[str, Any]) -> CommandList:
        """
        Translate ``prompt`` against the current design.

        Returns:
            Validated CommandList; empty when generation, parsing or
            validation fails
        """
        if self.generator is None:
            logger.warning("translate_unavailable")
            return empty_command_list()

        checked = check_design(design)
        if not is_successful(checked):
            logger.warning("translate_invalid_design", error=checked.failure().message)
            return empty_command_list()
        schema = checked.unwrap().to_json_dict()

        key = translation_key(prompt, schema)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                metrics_collector.record_cache_hit(CACHE_TYPE)
                logger.info("cache_hit", commands=len(cached))
                return cached
            metrics_collector.record_cache_miss(CACHE_TYPE)

        commands = self._translate_uncached(prompt, schema)

        # Empty results are not cached so a transient outage is retried
        if self.cache is not None and len(commands):
            self.cache.set(key, commands)
        return commands

    def _translate_uncached(self, prompt: str, schema: dict[str, Any]) -> CommandList:
        try:
            text = self.generator.generate(self.system_prompt, build_user_message(prompt, schema))
        except TranslatorError as e:
            logger.warning("generate_failed", error=str(e))
            return empty_command_list()
        except Exception as e:
            logger.error("generate_error", error=str(e), error_type=type(e).__name__)
            metrics_collector.record_error(type(e).__name__, "translator")
            return empty_command_list()

        return self.parse(text)

    @staticmethod
    def parse(text: str) -> CommandList:
        """Parse raw model text into a CommandList; empty on any problem."""
        try:
            data = extract_json(text)
        except JSONParseError as e:
            logger.warning("parse_failed", error=str(e), preview=text[:200])
            return empty_command_list()

        try:
            commands = validate_commands(data)
        except SchemaValidationError as e:
            logger.warning("validation_failed", error=str(e), errors=e.errors[:5])
            return empty_command_list()

        logger.info("translated", commands=len(commands))
        return commands
