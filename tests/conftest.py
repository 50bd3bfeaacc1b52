"""Pytest fixtures and configuration for weathertodo tests."""

import pytest
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from weathertodo.cli.console import Console
from weathertodo.database.database import build_engine, create_session_factory, init_db
from weathertodo.database.repository import TaskRepository
from weathertodo.errors import WeatherLookupError
from weathertodo.models.task import Task
from weathertodo.services.error_logger import ErrorLogger
from weathertodo.services.task_service import TaskService


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


class ScriptedConsole(Console):
    """Console that answers prompts from a list and records everything shown."""

    def __init__(self, answers: Optional[List[str]] = None):
        self.answers = list(answers or [])
        self.prompts: List[str] = []
        self.lines: List[str] = []
        self.rendered: List[List[Task]] = []
        super().__init__(input_func=self._next_answer, output_func=self.lines.append)

    def _next_answer(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError("no more scripted answers")
        return self.answers.pop(0)

    def feed(self, *answers: str) -> "ScriptedConsole":
        self.answers.extend(answers)
        return self

    def render_tasks(self, tasks):
        tasks = list(tasks)
        self.rendered.append(tasks)
        super().render_tasks(tasks)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


class FakeWeatherClient:
    """Weather client returning a fixed description, or raising on demand."""

    def __init__(self, description: str = "Description: clear sky, Wind Speed: 3.1 m/s, City: Oslo"):
        self.description = description
        self.error: Optional[Exception] = None
        self.calls: List[str] = []

    def get_weather(self, city: str) -> str:
        self.calls.append(city)
        if self.error is not None:
            raise self.error
        return self.description


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = build_engine(TEST_DATABASE_URL)
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "title": "Buy groceries",
        "description": "Milk, eggs and bread",
        "due_date": date(2024, 6, 15),
        "is_completed": False,
        "city": "Oslo",
        "weather_info": "Description: clear sky, Wind Speed: 3.1 m/s, City: Oslo",
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def console():
    return ScriptedConsole()


@pytest.fixture
def weather_client():
    return FakeWeatherClient()


@pytest.fixture
def failing_weather_client(weather_client):
    """Weather client whose provider is unreachable."""
    cause = ConnectionError("Name or service not known")
    try:
        raise WeatherLookupError("Failed to reach weather provider for Oslo") from cause
    except WeatherLookupError as e:
        weather_client.error = e
    return weather_client


@pytest.fixture
def error_log_path(tmp_path):
    return tmp_path / "error_log.txt"


@pytest.fixture
def error_logger(error_log_path, console):
    return ErrorLogger(error_log_path, upload_delay_sec=0, output=console.say)


@pytest.fixture
def task_service(task_repository, weather_client, error_logger, console):
    """TaskService wired to the in-memory repository and scripted console."""
    return TaskService(task_repository, weather_client, error_logger, console)
