"""
Rule-based parsing of utterances into task fields.
"""
from .abbreviations import expand_abbreviations
from .category import detect_category
from .natural_date import parse_date, parse_time
from .task_parser import is_task_command, parse_task_from_message

__all__ = [
    "expand_abbreviations",
    "detect_category",
    "parse_date",
    "parse_time",
    "is_task_command",
    "parse_task_from_message",
]
