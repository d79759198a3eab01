"""
Lesson View State Models

Headless state for the lesson screen: what the UI would render
(loading spinner, error card, lesson) plus the debug panel values.
"""

from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, Field

from shared.models.domain import Lesson

ViewStatus = Literal["idle", "loading", "success", "error"]


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class DebugInfo(BaseModel):
    """Observability data shown in the debug panel (latency, trace id)."""

    request_id: str = Field(description="Trace id of the call that produced this state")
    latency_ms: int = Field(description="Latency reported by the API, or measured by the view on failure")
    status_code: int = Field(description="Envelope status")
    error_message: Optional[str] = Field(default=None, description="Failure message, if any")
    suggestion: Optional[str] = Field(default=None, description="Troubleshooting hint, if any")
    timestamp: str = Field(default_factory=_utc_timestamp, description="When the call resolved (ISO 8601)")


class LessonViewState(BaseModel):
    """Complete state of one lesson view."""

    lesson_id: str = Field(description="Lesson the view targets")
    status: ViewStatus = Field(default="idle")
    lesson: Optional[Lesson] = Field(default=None, description="Loaded lesson on success")
    debug: Optional[DebugInfo] = Field(default=None)
    attempts: int = Field(default=0, description="Calls issued for the current lesson_id")

    @property
    def is_loading(self) -> bool:
        return self.status == "loading"

    @property
    def can_retry(self) -> bool:
        return self.status == "error"
