"""In-memory store for development and tests (when Redis is unavailable)."""
import threading
import time
from typing import Callable, Dict, Optional

from pastebin.stores.base import PasteStore
from pastebin.stores.fields import UPDATED_AT, VIEW_COUNT


class MemoryPasteStore(PasteStore):
    """Dict-backed store with millisecond expiry deadlines.  Data is lost on exit.

    ``time_func`` returns epoch seconds and defaults to ``time.time``.
    """

    def __init__(self, time_func: Callable[[], float] = time.time):
        self._time = time_func
        self._lock = threading.Lock()
        self.store: Dict[str, Dict[str, str]] = {}
        self.deadlines_ms: Dict[str, float] = {}

    def _now_ms(self) -> float:
        return self._time() * 1000

    def _live(self, paste_id: str) -> Optional[Dict[str, str]]:
        """Return the record, dropping it first if its deadline passed.  Caller holds the lock."""
        if paste_id not in self.store:
            return None

        deadline = self.deadlines_ms.get(paste_id)
        if deadline is not None and self._now_ms() >= deadline:
            del self.store[paste_id]
            del self.deadlines_ms[paste_id]
            return None

        return self.store[paste_id]

    def put(self, paste_id: str, fields: Dict[str, str], ttl_seconds: Optional[int] = None) -> None:
        with self._lock:
            self.store[paste_id] = dict(fields)
            if ttl_seconds is not None:
                self.deadlines_ms[paste_id] = self._now_ms() + ttl_seconds * 1000
            else:
                self.deadlines_ms.pop(paste_id, None)

    def get(self, paste_id: str) -> Optional[Dict[str, str]]:
        with self._lock:
            record = self._live(paste_id)
            return dict(record) if record is not None else None

    def delete(self, paste_id: str) -> None:
        with self._lock:
            self.store.pop(paste_id, None)
            self.deadlines_ms.pop(paste_id, None)

    def increment_view(self, paste_id: str, updated_at: str) -> Optional[int]:
        with self._lock:
            record = self._live(paste_id)
            if record is None:
                return None
            count = int(record.get(VIEW_COUNT, 0)) + 1
            record[VIEW_COUNT] = str(count)
            record[UPDATED_AT] = updated_at
            return count

    def ping(self) -> bool:
        return True
