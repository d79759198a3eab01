"""Shared models, repositories, services and utilities."""
