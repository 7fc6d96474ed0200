"""Natural-language translation agents."""

from .prompt import SYSTEM_PROMPT, build_user_message, get_system_prompt
from .translator import CommandTranslator, TextGenerator

__all__ = [
    "SYSTEM_PROMPT",
    "build_user_message",
    "get_system_prompt",
    "CommandTranslator",
    "TextGenerator",
]
