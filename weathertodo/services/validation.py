"""Input validation for weathertodo.

Pure functions: no I/O, no side effects. Each returns either the parsed value
or a signal the caller turns into a user-facing message.
"""

import re
from datetime import date, datetime
from typing import Optional, Tuple

from weathertodo.models.constants import (
    DATE_FORMAT,
    MAX_YEAR,
    MIN_YEAR,
    STATUS_NO,
    STATUS_YES,
)

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_ID_PATTERN = re.compile(r"\d+", re.ASCII)


def is_valid_date(value: Optional[str]) -> Tuple[bool, Optional[date]]:
    """Validate a date string in strict YYYY-MM-DD format.

    Args:
        value: Raw user input

    Returns:
        (True, parsed date) for a real calendar date, otherwise (False, None)
    """
    if not value or not _DATE_PATTERN.fullmatch(value):
        return False, None
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return False, None
    if parsed.year < MIN_YEAR or parsed.year > MAX_YEAR:
        return False, None
    return True, parsed


def check_max_length(value: str, max_length: int, field_name: str) -> Optional[str]:
    """Return an error message if value is longer than max_length, else None."""
    if len(value) > max_length:
        return f"{field_name} cannot be more than {max_length} characters."
    return None


def parse_completion_status(value: Optional[str]) -> Optional[bool]:
    """Map 'yes'/'no' (any case) to True/False; anything else gives None."""
    answer = (value or "").strip().lower()
    if answer == STATUS_YES:
        return True
    if answer == STATUS_NO:
        return False
    return None


def parse_task_id(value: Optional[str]) -> Optional[int]:
    text = (value or "").strip()
    if not _ID_PATTERN.fullmatch(text):
        return None
    task_id = int(text)
    return task_id if task_id > 0 else None
