"""
Repository abstraction for the lesson catalog.
Holds the fixture lessons in memory and answers lookup and ordering queries,
isolating callers from where the catalog came from.
"""
from typing import Dict, Iterable, List, Optional

from shared.models.domain import Lesson
from shared.utils.exceptions import DuplicateLessonError


class LessonRepository:
    """
    Read-only, in-memory lesson store.

    Lessons are kept in insertion order; reads return them sorted by
    ``order``, with insertion order breaking ties.
    """

    def __init__(self, lessons: Iterable[Lesson]):
        self._by_id: Dict[str, Lesson] = {}
        for lesson in lessons:
            if lesson.id in self._by_id:
                raise DuplicateLessonError(lesson.id)
            self._by_id[lesson.id] = lesson

        # sorted() is stable, so equal orders keep insertion order
        self._ordered: List[Lesson] = sorted(self._by_id.values(), key=lambda l: l.order)
        self._position: Dict[str, int] = {
            lesson.id: idx for idx, lesson in enumerate(self._ordered)
        }

    def list_all(self) -> List[Lesson]:
        """
        Get every lesson sorted ascending by order.

        Returns:
            A new list on each call; the store itself is never mutated.
        """
        return list(self._ordered)

    def get_by_id(self, lesson_id: str) -> Optional[Lesson]:
        """
        Fetch a lesson by id.

        Args:
            lesson_id: Lesson identifier (e.g., "a1-lesson-001-hallo")

        Returns:
            Lesson or None if not found
        """
        return self._by_id.get(lesson_id)

    def get_next_id(self, current_id: str) -> Optional[str]:
        """
        Get the id of the lesson that follows ``current_id`` in order.

        Returns:
            Next lesson id, or None if ``current_id`` is unknown or last
        """
        idx = self._position.get(current_id)
        if idx is None or idx == len(self._ordered) - 1:
            return None
        return self._ordered[idx + 1].id

    def ids(self) -> List[str]:
        return [lesson.id for lesson in self._ordered]

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, lesson_id: object) -> bool:
        return lesson_id in self._by_id
