"""Console input/output for weathertodo."""

from typing import Callable, Iterable, List, Sequence

from weathertodo.models.task import Task

MENU_TITLE = "ToDo List Application"
MENU_OPTIONS = [
    "Add new task",
    "View all tasks",
    "Mark task as completed",
    "Remove task",
    "Edit task",
    "Filter tasks by completion status",
    "Filter tasks by date range",
    "Exit",
]
TASK_TABLE_COLUMNS = ["Id", "Title", "Description", "Due Date", "Completed", "WeatherInfo"]


def task_row(task: Task) -> List[str]:
    return [
        str(task.id),
        task.title,
        task.description,
        task.due_date.isoformat(),
        "Yes" if task.is_completed else "No",
        task.weather_info or "",
    ]


def format_table(columns: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render rows as a boxed, left-aligned text table with a row count footer."""
    rows = [list(row) for row in rows]
    widths = [len(col) for col in columns]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        return "| " + " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)) + " |"

    divider = " " + "-" * (sum(widths) + 3 * len(widths) + 1)
    out = [divider, " " + line(columns), divider]
    out.extend(" " + line(row) for row in rows)
    if rows:
        out.append(divider)
    out.append("")
    out.append(f" Count: {len(rows)}")
    return "\n".join(out)


class Console:
    """Line-based console.

    Input and output functions are injectable so the menu and use cases can be
    driven by scripted answers.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        self._input = input_func
        self._output = output_func

    def ask(self, prompt: str) -> str:
        return self._input(prompt)

    def say(self, message: str) -> None:
        self._output(message)

    def show_menu(self) -> None:
        self.say(f"\n{MENU_TITLE}")
        for number, label in enumerate(MENU_OPTIONS, start=1):
            self.say(f"{number}. {label}")

    def render_tasks(self, tasks: Iterable[Task]) -> None:
        self.say(format_table(TASK_TABLE_COLUMNS, [task_row(task) for task in tasks]))
