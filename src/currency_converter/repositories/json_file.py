"""Conversion log stored as a JSON array in a single file."""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from currency_converter.domain.conversions import ConversionRecord
from currency_converter.logging_config import get_logger
from currency_converter.repositories.interfaces import ConversionLogRepository

logger = get_logger(__name__)


class JsonConversionLogRepository(ConversionLogRepository):
    """Keeps only the newest ``max_entries`` conversions.

    A missing or corrupt file reads as an empty log and is rewritten on the
    next ``add``.
    """

    def __init__(self, path: Path | str, max_entries: int = 100) -> None:
        self.path = Path(path)
        self.max_entries = max_entries

    def _load(self) -> list[dict[str, Any]]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.warning("conversion_log_unreadable", path=str(self.path), error=str(e))
            return []
        if not isinstance(data, list):
            return []
        return data

    def _store(self, entries: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(entries, indent=2), encoding="utf-8")

    def add(self, record: ConversionRecord) -> None:
        entries = self._load()
        entries.append(record.to_dict())
        self._store(entries[-self.max_entries :])

    def list_recent(self, limit: int | None = None) -> Iterable[ConversionRecord]:
        entries = self._load()
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        records: list[ConversionRecord] = []
        for entry in entries:
            try:
                records.append(ConversionRecord.from_dict(entry))
            except (KeyError, TypeError, ValueError):
                logger.debug("conversion_log_entry_skipped", entry=entry)
        return records

    def clear(self) -> None:
        self._store([])
