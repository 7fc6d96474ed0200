"""
Design Record Store
Per-user persistence of the latest design and its history.
Read-then-upsert, last write wins.
"""

import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import pydantic

from ..core import JSONParseError, StoreError, get_logger, safe_json_dumps
from ..core.json import loads
from ..history import HistoryState
from ..schema.design import Design, validate_design

logger = get_logger(__name__)

# The persisted record is the history state: {schema, history, historyIndex}
DesignRecord = HistoryState


def default_design() -> Design:
    """Starter dashboard for a user with no saved record."""
    return validate_design(
        {
            "styles": {"theme": "light", "fontScale": 1},
            "layout": {"columns": 1, "order": ["table1", "chart1", "kpi1"]},
            "components": [
                {"id": "table1", "type": "table", "props": {"sortBy": "rating", "limit": 50}},
                {"id": "chart1", "type": "chart", "props": {"kind": "bar", "groupBy": "genres"}},
                {"id": "kpi1", "type": "kpi", "props": {"label": "Total Shows"}},
            ],
        }
    )


def default_record() -> DesignRecord:
    return DesignRecord(design=default_design())


def parse_record(raw: Any) -> DesignRecord:
    """
    Validate a stored record.

    Raises:
        StoreError: If the record does not match the record shape
    """
    try:
        return DesignRecord.model_validate(raw)
    except pydantic.ValidationError as e:
        raise StoreError(f"Invalid design record: {e.error_count()} errors") from e


class DesignStore(ABC):
    """Key-value store of design records keyed by user id."""

    @abstractmethod
    def load(self, user_id: str) -> DesignRecord | None:
        """Return the stored record, or None for an unknown user"""
        pass

    @abstractmethod
    def save(self, user_id: str, record: DesignRecord) -> None:
        """Upsert the record (last write wins)"""
        pass


class InMemoryDesignStore(DesignStore):
    """Thread-safe dict-backed store (process lifetime only)."""

    def __init__(self) -> None:
        self._records: dict[str, DesignRecord] = {}
        self._lock = threading.Lock()

    def load(self, user_id: str) -> DesignRecord | None:
        with self._lock:
            return self._records.get(user_id)

    def save(self, user_id: str, record: DesignRecord) -> None:
        with self._lock:
            self._records[user_id] = record

    def __len__(self) -> int:
        return len(self._records)


class JsonFileDesignStore(DesignStore):
    """
    Single JSON document mapping user id to record.

    Writes go to a temporary file in the same directory and are renamed into
    place, so readers never see a partial document.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        logger.info("store_init", path=str(self.path))

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = loads(self.path.read_bytes())
        except (OSError, JSONParseError) as e:
            raise StoreError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(safe_json_dumps(data, indent=2))
            os.replace(tmp_path, self.path)
        except OSError as e:
            Path(tmp_path).unlink(missing_ok=True)
            raise StoreError(f"Cannot write {self.path}: {e}") from e

    def load(self, user_id: str) -> DesignRecord | None:
        with self._lock:
            raw = self._read_all().get(user_id)
        if raw is None:
            return None
        return parse_record(raw)

    def save(self, user_id: str, record: DesignRecord) -> None:
        with self._lock:
            data = self._read_all()
            data[user_id] = record.to_json_dict()
            self._write_all(data)
        logger.debug("record_saved", user_id=user_id, history=len(record.history))
