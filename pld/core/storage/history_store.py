"""
Upload history backed by history.json.
"""
from pathlib import Path
from typing import List, Union

from ..constants import HISTORY_LIMIT, HISTORY_DISPLAY_LIMIT
from ..logging import get_logger
from .json_store import JsonFileStore
from .models import HistoryEntry

logger = get_logger(__name__)


class HistoryStore:
    """
    Bounded log of past uploads, newest first.

    Only the latest HISTORY_LIMIT entries are kept.
    """

    def __init__(self, path: Union[str, Path], limit: int = HISTORY_LIMIT):
        self._file = JsonFileStore(path, default_factory=list)
        self._limit = limit

    @property
    def path(self) -> Path:
        return self._file.path

    @property
    def limit(self) -> int:
        return self._limit

    def load(self) -> List[HistoryEntry]:
        raw = self._file.read()
        if not isinstance(raw, list):
            logger.warning(f"Ignoring malformed history in {self.path}")
            return []
        return [HistoryEntry.from_dict(item) for item in raw if isinstance(item, dict)]

    def recent(self, limit: int = HISTORY_DISPLAY_LIMIT) -> List[HistoryEntry]:
        return self.load()[:limit]

    def add(self, entry: HistoryEntry) -> None:
        """Prepend an entry and drop anything past the limit."""
        entries = [entry] + self.load()
        del entries[self._limit:]
        self._file.write([item.to_dict() for item in entries])
        logger.debug(f"History now holds {len(entries)} entries")

    def clear(self) -> bool:
        """Delete all history. Returns True if there was any."""
        return self._file.delete()

    def __len__(self) -> int:
        return len(self.load())
