"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    ShowShaperError,
    SchemaValidationError,
    InvalidInputError,
    CommandSkipped,
    UnresolvedPathWarning,
    UnknownPresetWarning,
    PerCommandFault,
    HistoryError,
    TranslatorError,
    StoreError,
    DataSourceError,
)
from .validate import (
    PromptRequest,
    UserIdentity,
    ValidationResult,
    validate_json_size,
    validate_json_depth,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import extract_json, strip_code_fences, safe_json_dumps, JSONParseError
from .hash import digest, fingerprint, translation_key
from .cache import LRUCache, Stats
from .tracing import trace_operation, traced


def create_container(settings: Settings | None = None, store=None, generator=None, shows_client=None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings, store, generator, shows_client)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "ShowShaperError",
    "SchemaValidationError",
    "InvalidInputError",
    "CommandSkipped",
    "UnresolvedPathWarning",
    "UnknownPresetWarning",
    "PerCommandFault",
    "HistoryError",
    "TranslatorError",
    "StoreError",
    "DataSourceError",
    # Validation
    "PromptRequest",
    "UserIdentity",
    "ValidationResult",
    "validate_json_size",
    "validate_json_depth",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "strip_code_fences",
    "safe_json_dumps",
    "JSONParseError",
    # Hashing
    "digest",
    "fingerprint",
    "translation_key",
    # Caching
    "LRUCache",
    "Stats",
    # Tracing
    "trace_operation",
    "traced",
    # DI
    "create_container",
]
