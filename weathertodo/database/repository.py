"""Repository layer for database operations."""

import logging
from datetime import date
from typing import List, Optional
from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from weathertodo.errors import TaskNotFoundError, TaskStoreError
from weathertodo.models.constants import MAX_TASK_ID
from weathertodo.models.task import Task
from weathertodo.database.models import TaskDB

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations.

    Every write commits immediately; a failed write is rolled back and
    re-raised as TaskStoreError with the SQLAlchemy error as its cause.
    """

    def __init__(self, db: Session):
        self.db = db

    def _ordered_query(self):
        return self.db.query(TaskDB).order_by(asc(TaskDB.due_date), asc(TaskDB.id))

    def _get_row(self, task_id: int) -> Optional[TaskDB]:
        # Ids past the INTEGER range cannot exist and would overflow the driver.
        if not 0 < task_id <= MAX_TASK_ID:
            return None
        return self.db.query(TaskDB).filter(TaskDB.id == task_id).first()

    def create(self, task: Task) -> Task:
        """Create a new task and return it with its assigned id."""
        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task_db.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create task: {type(e).__name__}: {str(e)}")
            raise TaskStoreError(f"Failed to save task '{task.title}'") from e

    def get(self, task_id: int) -> Optional[Task]:
        """Get task by ID, or None if it does not exist."""
        task_db = self._get_row(task_id)
        return task_db.to_pydantic() if task_db else None

    def get_all(self) -> List[Task]:
        """Get all tasks sorted by due date (earliest first)."""
        return [task_db.to_pydantic() for task_db in self._ordered_query().all()]

    def get_by_completion(self, is_completed: bool) -> List[Task]:
        """Get tasks with the given completion flag, sorted by due date."""
        tasks_db = self._ordered_query().filter(TaskDB.is_completed == is_completed).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def get_in_date_range(self, start: date, end: date) -> List[Task]:
        """Get tasks due between start and end (both inclusive), sorted by due date."""
        tasks_db = self._ordered_query().filter(
            TaskDB.due_date >= start,
            TaskDB.due_date <= end,
        ).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def count(self) -> int:
        return self.db.query(TaskDB).count()

    def update(self, task: Task) -> Task:
        """Update an existing task."""
        task_db = self._get_row(task.id) if task.id is not None else None
        if not task_db:
            raise TaskNotFoundError(task.id)

        task_db.title = task.title
        task_db.description = task.description
        task_db.due_date = task.due_date
        task_db.is_completed = task.is_completed
        task_db.city = task.city
        task_db.weather_info = task.weather_info

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise TaskStoreError(f"Failed to update task {task.id}") from e

    def delete(self, task_id: int) -> None:
        """Permanently delete a task by ID."""
        task_db = self._get_row(task_id)
        if not task_db:
            raise TaskNotFoundError(task_id)

        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise TaskStoreError(f"Failed to delete task {task_id}") from e
