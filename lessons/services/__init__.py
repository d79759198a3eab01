"""Lesson view services."""
from lessons.services.lesson_view import LessonViewController
