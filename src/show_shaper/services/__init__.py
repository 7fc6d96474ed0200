"""Persistence services."""

from .store import (
    DesignRecord,
    DesignStore,
    InMemoryDesignStore,
    JsonFileDesignStore,
    default_design,
    default_record,
    parse_record,
)

__all__ = [
    "DesignRecord",
    "DesignStore",
    "InMemoryDesignStore",
    "JsonFileDesignStore",
    "default_design",
    "default_record",
    "parse_record",
]
