"""Pydantic API response/error envelopes.

Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``), matching the JSON the UI consumes.
"""
from typing import Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

_ENVELOPE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class ResponseMeta(BaseModel):
    """Call metadata attached to every successful response."""
    model_config = _ENVELOPE_CONFIG

    request_id: str = Field(..., min_length=1)
    latency_ms: int = Field(..., ge=0)
    status: int = 200


class ResponseEnvelope(BaseModel, Generic[T]):
    """Payload plus observability metadata. Produced only on success."""
    model_config = _ENVELOPE_CONFIG

    data: T
    meta: ResponseMeta


class ApiErrorBody(BaseModel):
    """Structured error envelope. Produced only on failure."""
    model_config = _ENVELOPE_CONFIG

    message: str
    status: int
    request_id: str = Field(..., min_length=1)
    suggestion: str  # actionable advice for the troubleshooter
