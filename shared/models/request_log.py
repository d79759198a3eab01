"""
Request Log Models

In-memory storage of simulated call outcomes, keyed by trace id, so a
UI-visible error can be matched to the call that produced it.
"""

from datetime import datetime, timezone
from typing import Dict, Literal, Optional, List
from pydantic import BaseModel, Field
import threading

from shared.utils.constants import MAX_REQUEST_LOG_ENTRIES

Outcome = Literal["success", "upstream_failure", "auth_failure", "not_found"]


class RequestLogEntry(BaseModel):
    """Single simulated call outcome."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str
    lesson_id: str
    outcome: Outcome
    status: int
    latency_ms: int
    message: Optional[str] = None


class RequestLogStore:
    """In-memory, bounded storage for request outcomes, thread-safe."""

    def __init__(self, max_entries: int = MAX_REQUEST_LOG_ENTRIES):
        self._entries: List[RequestLogEntry] = []
        self._by_request_id: Dict[str, RequestLogEntry] = {}
        self._lock = threading.Lock()
        self._max_entries = max_entries

    def add(self, entry: RequestLogEntry) -> None:
        with self._lock:
            self._entries.append(entry)
            self._by_request_id[entry.request_id] = entry
            if len(self._entries) > self._max_entries:
                dropped = self._entries[:-self._max_entries]
                self._entries = self._entries[-self._max_entries:]
                for old in dropped:
                    self._by_request_id.pop(old.request_id, None)

    def get(self, request_id: str) -> Optional[RequestLogEntry]:
        with self._lock:
            return self._by_request_id.get(request_id)

    def get_entries(
        self,
        lesson_id: Optional[str] = None,
        outcome: Optional[Outcome] = None,
    ) -> List[RequestLogEntry]:
        with self._lock:
            entries = list(self._entries)
        if lesson_id is not None:
            entries = [e for e in entries if e.lesson_id == lesson_id]
        if outcome is not None:
            entries = [e for e in entries if e.outcome == outcome]
        return entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_request_log_store: Optional[RequestLogStore] = None


def get_request_log_store() -> RequestLogStore:
    global _request_log_store
    if _request_log_store is None:
        _request_log_store = RequestLogStore()
    return _request_log_store


def reset_request_log_store():
    """Reset the global request log store (useful for testing)."""
    global _request_log_store
    _request_log_store = None
