"""Lesson fixture loading.

The catalog is static: it is read once from a JSON array file and wrapped in a
LessonRepository for the lifetime of the process.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from config import get_settings
from shared.models.domain import Lesson
from shared.repositories.lesson_repository import LessonRepository
from shared.utils.exceptions import LessonFixtureError

logger = logging.getLogger(__name__)

DEFAULT_FIXTURES_PATH = Path(__file__).resolve().parent.parent / "fixtures" / "lessons.json"


def load_lessons(path: Optional[Union[str, Path]] = None) -> List[Lesson]:
    """
    Load lessons from a JSON fixture file.

    Args:
        path: File containing a JSON array of lesson objects. If None, uses
            the bundled A1 catalog.

    Returns:
        Lessons in file order

    Raises:
        LessonFixtureError: if the file is missing, not JSON, not an array,
            or a record fails validation
    """
    fixture_path = Path(path) if path is not None else DEFAULT_FIXTURES_PATH

    try:
        with open(fixture_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise LessonFixtureError(str(fixture_path), "file not found")
    except json.JSONDecodeError as e:
        raise LessonFixtureError(str(fixture_path), f"invalid JSON ({e.msg} at line {e.lineno})")

    if not isinstance(raw, list):
        raise LessonFixtureError(str(fixture_path), "expected a JSON array of lessons")

    lessons: List[Lesson] = []
    for idx, item in enumerate(raw):
        try:
            lessons.append(Lesson.model_validate(item))
        except ValidationError as e:
            raise LessonFixtureError(
                str(fixture_path),
                f"record {idx} is invalid: {e.error_count()} validation error(s)"
            ) from e

    logger.info(f"Loaded {len(lessons)} lessons from {fixture_path.name}")
    return lessons


# Global repository instance
_repository: Optional[LessonRepository] = None


def get_lesson_repository() -> LessonRepository:
    """Get or build the process-wide lesson repository from settings."""
    global _repository
    if _repository is None:
        _repository = LessonRepository(load_lessons(get_settings().lesson_fixtures_path))
    return _repository


def reset_lesson_repository():
    """Reset the global repository instance (useful for testing)."""
    global _repository
    _repository = None
