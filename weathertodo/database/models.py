"""SQLAlchemy database models for weathertodo."""

from sqlalchemy import Column, Integer, String, Boolean, Date

from weathertodo.database.database import Base
from weathertodo.models.task import Task


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "todo_tasks"
    # AUTOINCREMENT keeps ids from being reused after a delete.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Basic fields
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    due_date = Column(Date, nullable=False, index=True)
    is_completed = Column(Boolean, nullable=False, default=False, index=True)

    # Weather snapshot
    weather_info = Column(String, nullable=True)
    city = Column(String, nullable=True)

    def to_pydantic(self) -> Task:
        """Convert database model to Pydantic model."""
        return Task(
            id=self.id,
            title=self.title,
            description=self.description or "",
            due_date=self.due_date,
            is_completed=bool(self.is_completed),
            city=self.city,
            weather_info=self.weather_info,
        )

    @classmethod
    def from_pydantic(cls, task: Task) -> "TaskDB":
        """Create database model from Pydantic model.

        The id is left to the database unless the task already carries one.
        """
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            is_completed=task.is_completed,
            city=task.city,
            weather_info=task.weather_info,
        )
