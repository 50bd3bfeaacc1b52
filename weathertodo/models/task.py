"""Task data model for weathertodo."""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class Task(BaseModel):
    """Canonical Task model."""

    id: Optional[int] = Field(None, description="Store-assigned identifier (null until persisted)")
    title: str = Field(..., description="Task title")
    description: str = Field("", description="Task description")
    due_date: date = Field(..., description="Due date (date-only)")
    is_completed: bool = Field(False, description="Whether the task is completed")
    city: Optional[str] = Field(None, description="City used as the weather lookup key")
    weather_info: Optional[str] = Field(
        None,
        description="Weather snapshot captured at creation (may be a fallback message)",
    )
