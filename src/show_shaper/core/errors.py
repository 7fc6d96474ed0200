"""Error taxonomy for design validation and command application."""

from typing import Any


class ShowShaperError(Exception):
    """Base error for the service."""

    pass


class SchemaValidationError(ShowShaperError, ValueError):
    """Raw data does not match a schema."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class InvalidInputError(ShowShaperError):
    """Design or command list rejected before any command ran."""

    def __init__(self, message: str, cause: SchemaValidationError | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    @property
    def errors(self) -> list[dict[str, Any]]:
        return self.cause.errors if self.cause else []


class CommandSkipped(ShowShaperError):
    """A command was valid but had nothing to act on; the draft is unchanged."""

    reason = "skipped"

    def __init__(self, message: str, reason: str | None = None) -> None:
        super().__init__(message)
        if reason is not None:
            self.reason = reason


class UnresolvedPathWarning(CommandSkipped):
    """A command's path or component id did not resolve."""

    reason = "unresolved_path"


class UnknownPresetWarning(CommandSkipped):
    """An apply_preset command named a key missing from the catalog."""

    reason = "unknown_preset"


class PerCommandFault(ShowShaperError):
    """Unexpected failure while applying a single command."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class HistoryError(ShowShaperError, ValueError):
    """Undo or redo requested where the cursor cannot move."""

    pass


class TranslatorError(ShowShaperError):
    """Text-generation call failed or returned nothing usable."""

    pass


class StoreError(ShowShaperError):
    """Design record could not be read or written."""

    pass


class DataSourceError(ShowShaperError):
    """Show data could not be fetched from the upstream catalog."""

    pass
