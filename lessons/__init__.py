"""Lesson view feature."""
