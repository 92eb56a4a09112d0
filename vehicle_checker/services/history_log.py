import json
import logging

from typing import List, Optional

from vehicle_checker import settings
from vehicle_checker.constants.storage_keys import HISTORY_KEY
from vehicle_checker.models.history_entry import HistoryEntry
from vehicle_checker.storage.key_value_store import KeyValueStore

LOG = logging.getLogger(__name__)


class HistoryLog:
    """Newest-first log of completed remote lookups, capped in length."""

    def __init__(self, store: KeyValueStore, limit: int = settings.HISTORY_LIMIT):
        self.limit = limit
        self.store = store

    def append(self, entry: HistoryEntry) -> None:
        entries: List[HistoryEntry] = [entry] + self.entries()

        self._save(entries[:self.limit])

    def clear(self) -> None:
        self.store.remove(HISTORY_KEY)

    def entries(self) -> List[HistoryEntry]:
        raw_history: Optional[str] = self.store.get(HISTORY_KEY)

        if not raw_history:
            return []

        try:
            return [HistoryEntry.from_dict(item) for item in json.loads(raw_history)]
        except (KeyError, TypeError, ValueError) as exc:
            LOG.warning(f'discarding unreadable history: {exc}')
            return []

    def _save(self, entries: List[HistoryEntry]) -> None:
        self.store.set(HISTORY_KEY,
                       json.dumps([entry.to_dict() for entry in entries]))
