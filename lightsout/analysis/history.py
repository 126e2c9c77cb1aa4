"""
Game history: an owned record collection and its JSON file store.
"""

import json
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

import config
from ..core.session import SessionRecord
from ..core.utils import setup_logger


class HistoryFormatError(ValueError):
    """Raised when a history file cannot be parsed"""


class HistoryStore:
    """Ordered, append-only collection of completed games (oldest first)"""

    def __init__(self, records: Optional[Iterable[SessionRecord]] = None):
        self._records: List[SessionRecord] = list(records or [])

    def append(self, record: SessionRecord):
        self._records.append(record)

    def clear(self):
        """Drop every record"""
        self._records.clear()

    def for_size(self, grid_size: int) -> List[SessionRecord]:
        return [r for r in self._records if r.grid_size == grid_size]

    def recent(self, grid_size: Optional[int] = None,
               limit: int = config.HISTORY_PAGE_SIZE, offset: int = 0) -> List[SessionRecord]:
        """Newest-first page of records, optionally for one board size"""
        records = self._records if grid_size is None else self.for_size(grid_size)
        newest_first = records[::-1]
        return newest_first[offset:offset + limit]

    def find(self, record_id: str) -> Optional[SessionRecord]:
        """Record with the given id, or None"""
        return next((r for r in self._records if r.id == record_id), None)

    def sizes(self) -> List[int]:
        """Board sizes that have at least one record"""
        return sorted({r.grid_size for r in self._records})

    def __len__(self):
        return len(self._records)

    def __iter__(self) -> Iterator[SessionRecord]:
        return iter(list(self._records))

    def __repr__(self):
        return f"HistoryStore({len(self._records)} records)"


class HistoryFileStore:
    """Persist a HistoryStore as a JSON document"""

    def __init__(self, path: Union[str, Path] = config.HISTORY_FILE, log_level: str = config.LOG_LEVEL):
        self.path = Path(path)
        self.logger = setup_logger(self.__class__.__name__, level=log_level)

    def load(self) -> HistoryStore:
        """
        Load history from disk. A missing file is an empty history.

        Raises:
            HistoryFormatError: If the file is not a valid history document
        """
        if not self.path.exists():
            self.logger.debug(f"No history file at {self.path}, starting empty")
            return HistoryStore()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise HistoryFormatError(f"History file {self.path} is not valid UTF-8 JSON: {e}") from e

        if isinstance(data, list):
            raw_records = data
        elif isinstance(data, dict) and isinstance(data.get('records'), list):
            raw_records = data['records']
        else:
            raise HistoryFormatError(f"History file {self.path} has no 'records' list")

        records = []
        for i, raw in enumerate(raw_records):
            try:
                records.append(SessionRecord.from_dict(raw))
            except ValueError as e:
                raise HistoryFormatError(f"Record {i} in {self.path}: {e}") from e

        self.logger.debug(f"Loaded {len(records)} records from {self.path}")
        return HistoryStore(records)

    def save(self, store: HistoryStore):
        """Write the whole history, replacing the file"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump({'records': [r.to_dict() for r in store]}, f, indent=2)
        tmp_path.replace(self.path)
        self.logger.debug(f"Saved {len(store)} records to {self.path}")

    def append(self, record: SessionRecord) -> HistoryStore:
        """Load, append one record and save"""
        store = self.load()
        store.append(record)
        self.save(store)
        return store

    def clear(self):
        self.save(HistoryStore())
        self.logger.info(f"Cleared history in {self.path}")
