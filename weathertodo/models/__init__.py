"""Data models for weathertodo."""

from weathertodo.models.task import Task

__all__ = [
    "Task",
]
