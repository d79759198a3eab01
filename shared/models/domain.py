"""Domain models for business logic."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Any, Optional


class Lesson(BaseModel):
    """Identified, ordered content unit. Immutable once loaded."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    order: int
    title: str
    level: Optional[str] = None  # CEFR level, e.g. "A1"
    description: str = ""
    content: Dict[str, Any] = Field(default_factory=dict)  # opaque to the API layer


class RequestContext(BaseModel):
    """Per-call trace id and start timestamp. Never shared across calls."""
    model_config = ConfigDict(frozen=True)

    request_id: str
    started_at: float  # monotonic clock seconds

    def elapsed_ms(self, now: float) -> int:
        return max(0, round((now - self.started_at) * 1000))
