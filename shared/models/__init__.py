"""Shared models package."""
from shared.models.schemas import ResponseMeta, ResponseEnvelope, ApiErrorBody
from shared.models.domain import Lesson, RequestContext
