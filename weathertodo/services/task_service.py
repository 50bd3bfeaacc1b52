"""Task use cases for weathertodo.

Each public method is one menu operation: it prompts for input, validates it,
calls the repository and weather client, and renders the outcome. Failures
raised by collaborators are caught here, shown to the user, written to the
error log, and turned into a failed OperationResult so the menu keeps going.
"""

import logging
from typing import List, Optional, Protocol, Tuple
from pydantic import BaseModel, Field

from weathertodo.cli.console import Console
from weathertodo.database.repository import TaskRepository
from weathertodo.errors import TaskStoreError, WeatherLookupError
from weathertodo.models.constants import (
    DATE_FORMAT_HINT,
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
)
from weathertodo.models.task import Task
from weathertodo.services.error_logger import ErrorLogger
from weathertodo.services.validation import (
    check_max_length,
    is_valid_date,
    parse_completion_status,
    parse_task_id,
)

logger = logging.getLogger(__name__)

INVALID_DATE_MESSAGE = f"Invalid date. Please enter a valid date in {DATE_FORMAT_HINT} format."
INVALID_STATUS_MESSAGE = "Invalid status. Please enter 'yes' or 'no'."
INVALID_ID_MESSAGE = "Invalid task id. Please enter a positive whole number."
WEATHER_FAILURE_MESSAGE = "Failed to fetch weather information"


class WeatherProvider(Protocol):
    def get_weather(self, city: str) -> str:
        ...


class OperationResult(BaseModel):
    """Outcome of one use case."""

    ok: bool = Field(..., description="Whether the use case completed")
    message: str = Field("", description="Message shown to the user")
    tasks: List[Task] = Field(default_factory=list, description="Tasks rendered or affected")


class TaskService:
    """Application-level task operations."""

    def __init__(
        self,
        repository: TaskRepository,
        weather_client: WeatherProvider,
        error_logger: ErrorLogger,
        console: Console,
    ):
        self.repository = repository
        self.weather_client = weather_client
        self.error_logger = error_logger
        self.console = console

    # ---- use cases ----

    def add_task(self) -> OperationResult:
        """Prompt for a new task, attach weather, and save it."""
        try:
            task, error = self._collect_new_task()
            if task is None:
                return self._rejected(error)

            try:
                task.weather_info = self.weather_client.get_weather(task.city)
            except WeatherLookupError as e:
                return self._handle_exception(WEATHER_FAILURE_MESSAGE, e)

            created = self.repository.create(task)
            return self._done("Task added successfully.", [created])
        except Exception as e:
            return self._handle_exception("Error adding task", e)

    def view_tasks(self) -> OperationResult:
        """Show all tasks ordered by due date."""
        try:
            tasks = self.repository.get_all()
            self.console.render_tasks(tasks)
            return OperationResult(ok=True, tasks=tasks)
        except Exception as e:
            return self._handle_exception("Error viewing tasks", e)

    def mark_task_completed(self) -> OperationResult:
        try:
            task, error = self._find_task_from_input()
            if task is None:
                return self._rejected(error)

            task.is_completed = True
            updated = self.repository.update(task)
            return self._done("Task marked as completed.", [updated])
        except Exception as e:
            return self._handle_exception("Error marking task as completed", e)

    def remove_task(self) -> OperationResult:
        try:
            task, error = self._find_task_from_input()
            if task is None:
                return self._rejected(error)

            self.repository.delete(task.id)
            return self._done("Task removed.", [task])
        except Exception as e:
            return self._handle_exception("Error removing task", e)

    def edit_task(self) -> OperationResult:
        """Overwrite title, description and due date where a new value is typed.

        Blank answers keep the current value. All answers are validated before
        any of them is applied, so a rejected edit leaves the task untouched.
        """
        try:
            task, error = self._find_task_from_input()
            if task is None:
                return self._rejected(error)

            changes, error = self._collect_task_changes()
            if changes is None:
                return self._rejected(error)
            if not changes:
                return self._done("No changes made.", [task])

            updated = self.repository.update(task.model_copy(update=changes))
            return self._done("Task updated.", [updated])
        except Exception as e:
            return self._handle_exception("Error editing task", e)

    def filter_by_completion_status(self) -> OperationResult:
        try:
            status = parse_completion_status(self.console.ask("Enter completion status (yes/no): "))
            if status is None:
                return self._rejected(INVALID_STATUS_MESSAGE)

            tasks = self.repository.get_by_completion(status)
            self.console.render_tasks(tasks)
            return OperationResult(ok=True, tasks=tasks)
        except Exception as e:
            return self._handle_exception("Error filtering tasks by completion status", e)

    def filter_by_date_range(self) -> OperationResult:
        try:
            valid, start = is_valid_date(self.console.ask(f"Enter start date ({DATE_FORMAT_HINT}): "))
            if not valid:
                return self._rejected(INVALID_DATE_MESSAGE)
            valid, end = is_valid_date(self.console.ask(f"Enter end date ({DATE_FORMAT_HINT}): "))
            if not valid:
                return self._rejected(INVALID_DATE_MESSAGE)

            tasks = self.repository.get_in_date_range(start, end)
            self.console.render_tasks(tasks)
            return OperationResult(ok=True, tasks=tasks)
        except Exception as e:
            return self._handle_exception("Error filtering tasks by date range", e)

    # ---- input collection ----

    def _collect_new_task(self) -> Tuple[Optional[Task], Optional[str]]:
        title = self.console.ask(f"Enter title (Maximum {MAX_TITLE_LENGTH} characters): ")
        error = check_max_length(title, MAX_TITLE_LENGTH, "Title")
        if error:
            return None, error

        description = self.console.ask(f"Enter description (Maximum {MAX_DESCRIPTION_LENGTH} characters): ")
        error = check_max_length(description, MAX_DESCRIPTION_LENGTH, "Description")
        if error:
            return None, error

        valid, due_date = is_valid_date(
            self.console.ask(f"Enter due date ({DATE_FORMAT_HINT}, e.g., 2024-12-30): ")
        )
        if not valid:
            return None, INVALID_DATE_MESSAGE

        city = self.console.ask(
            "Enter city name for weather information "
            "(if your city name is not listed, weather information may not show correctly): "
        )
        return Task(
            title=title,
            description=description,
            due_date=due_date,
            is_completed=False,
            city=city.strip(),
        ), None

    def _collect_task_changes(self) -> Tuple[Optional[dict], Optional[str]]:
        """Prompt for new values; returns (changes, None) or (None, error)."""
        changes: dict = {}

        title = self.console.ask(
            f"Enter new title (leave blank to keep current, Maximum {MAX_TITLE_LENGTH} characters): "
        )
        if title.strip():
            error = check_max_length(title, MAX_TITLE_LENGTH, "Title")
            if error:
                return None, error
            changes["title"] = title

        description = self.console.ask(
            f"Enter new description (leave blank to keep current, Maximum {MAX_DESCRIPTION_LENGTH} characters): "
        )
        if description.strip():
            error = check_max_length(description, MAX_DESCRIPTION_LENGTH, "Description")
            if error:
                return None, error
            changes["description"] = description

        due_date_input = self.console.ask(
            f"Enter new due date (leave blank to keep current, {DATE_FORMAT_HINT}, e.g., 2024-12-30): "
        )
        if due_date_input.strip():
            valid, due_date = is_valid_date(due_date_input)
            if not valid:
                return None, INVALID_DATE_MESSAGE
            changes["due_date"] = due_date

        return changes, None

    def _find_task_from_input(self) -> Tuple[Optional[Task], Optional[str]]:
        task_id = parse_task_id(self.console.ask("Enter task Id: "))
        if task_id is None:
            return None, INVALID_ID_MESSAGE
        task = self.repository.get(task_id)
        if task is None:
            return None, f"Task {task_id} not found."
        return task, None

    # ---- reporting ----

    def _done(self, message: str, tasks: Optional[List[Task]] = None) -> OperationResult:
        self.console.say(message)
        return OperationResult(ok=True, message=message, tasks=tasks or [])

    def _rejected(self, message: str) -> OperationResult:
        """Report a validation failure. Not written to the error log."""
        self.console.say(message)
        return OperationResult(ok=False, message=message)

    def _handle_exception(self, message: str, error: Exception) -> OperationResult:
        """Show, log, and convert a collaborator failure."""
        # Closed input ends the session; the menu loop handles it.
        if isinstance(error, EOFError):
            raise error
        if isinstance(error, (TaskStoreError, WeatherLookupError)):
            logger.debug(f"{message}: {type(error).__name__}")
        else:
            logger.exception(f"Unexpected failure: {message}")

        self.console.say(f"{message}: {error}")
        cause = error.__cause__
        if cause is not None:
            self.console.say(f"Inner exception: {cause}")
        self.error_logger.log_error(message, error)
        return OperationResult(ok=False, message=message)
