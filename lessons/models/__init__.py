"""Lesson view models."""
from lessons.models.view_state import DebugInfo, LessonViewState, ViewStatus
