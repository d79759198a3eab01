"""Lesson catalog repositories."""
from shared.repositories.lesson_repository import LessonRepository
from shared.repositories.lesson_fixtures import load_lessons, get_lesson_repository, reset_lesson_repository
