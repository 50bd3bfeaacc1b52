"""Exception types for weathertodo.

Each collaborator raises its own failure kind so the task service can decide
how to report and log it.
"""


class WeatherTodoError(Exception):
    """Base class for all weathertodo errors."""


class ConfigError(WeatherTodoError):
    """Required configuration is missing or malformed."""


class WeatherLookupError(WeatherTodoError):
    """The weather provider could not be reached."""


class TaskStoreError(WeatherTodoError):
    """A task storage operation failed."""


class TaskNotFoundError(TaskStoreError):
    """The task row to update or delete does not exist."""

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
