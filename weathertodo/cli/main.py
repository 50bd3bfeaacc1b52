"""Entry point for the weathertodo console application."""

import logging
import sys
from typing import Callable, Dict
from sqlalchemy.exc import SQLAlchemyError

from weathertodo.cli.console import Console
from weathertodo.config import AppConfig, load_config
from weathertodo.database.database import (
    build_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from weathertodo.database.repository import TaskRepository
from weathertodo.errors import ConfigError
from weathertodo.integrations.openweather import OpenWeatherClient
from weathertodo.services.error_logger import ErrorLogger
from weathertodo.services.task_service import TaskService

logger = logging.getLogger(__name__)

EXIT_CHOICE = "8"


def setup_logging(level: str = "WARNING") -> None:
    """Send diagnostics to stderr so they stay out of the menu output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_actions(service: TaskService) -> Dict[str, Callable[[], object]]:
    return {
        "1": service.add_task,
        "2": service.view_tasks,
        "3": service.mark_task_completed,
        "4": service.remove_task,
        "5": service.edit_task,
        "6": service.filter_by_completion_status,
        "7": service.filter_by_date_range,
    }


def _exit(error_logger: ErrorLogger, console: Console) -> None:
    console.say("Exiting the application.")
    error_logger.upload_logs()


def run_menu(service: TaskService, error_logger: ErrorLogger, console: Console) -> None:
    """Run the menu loop until the user exits or input ends."""
    actions = build_actions(service)
    while True:
        console.show_menu()
        try:
            choice = console.ask("Enter your choice: ").strip()
        except (EOFError, KeyboardInterrupt):
            choice = EXIT_CHOICE

        if choice == EXIT_CHOICE:
            _exit(error_logger, console)
            return

        action = actions.get(choice)
        if action is None:
            console.say("Invalid choice. Please try again.")
            continue
        try:
            action()
        except EOFError:
            # Input closed partway through a prompt.
            _exit(error_logger, console)
            return
        except KeyboardInterrupt:
            console.say("\nCancelled.")


def run(config: AppConfig, console: Console) -> None:
    """Wire collaborators from config and run the application."""
    error_logger = ErrorLogger(
        config.error_log_path,
        upload_delay_sec=config.log_upload_delay_sec,
        output=console.say,
    )
    weather_client = OpenWeatherClient(
        api_key=config.openweather_api_key,
        base_url=config.openweather_base_url,
        units=config.openweather_units,
        timeout=config.weather_timeout_sec,
    )

    engine = build_engine(config.database_url, echo=config.debug)
    try:
        init_db(engine)
        with session_scope(create_session_factory(engine)) as db:
            service = TaskService(TaskRepository(db), weather_client, error_logger, console)
            error_logger.upload_logs()
            run_menu(service, error_logger, console)
    finally:
        engine.dispose()


def main() -> int:
    try:
        config = load_config()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level)
    logger.debug(f"Using database {config.database_url}")
    try:
        run(config, Console())
    except SQLAlchemyError as e:
        print(f"Database error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
