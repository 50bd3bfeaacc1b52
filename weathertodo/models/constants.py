"""Constants for weathertodo.

This module centralizes the input limits and formats used throughout the application.
"""

# Input limits (checked when the user types a value, not by the store)
MAX_TITLE_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 45

# Largest id an SQLite INTEGER column can hold
MAX_TASK_ID = 2 ** 63 - 1

# Dates
DATE_FORMAT = "%Y-%m-%d"
DATE_FORMAT_HINT = "yyyy-MM-dd"
MIN_YEAR = 1
MAX_YEAR = 9999

# Completion status answers
STATUS_YES = "yes"
STATUS_NO = "no"
