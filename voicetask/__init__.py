"""
voicetask - turn spoken utterances into structured tasks.
"""
__version__ = "0.1.0"

from .models import Conversation, Message, ParsedTaskInfo, Suggestion, Task
from .parser import (
    detect_category,
    expand_abbreviations,
    is_task_command,
    parse_date,
    parse_task_from_message,
    parse_time,
)
from .services import check_for_similar_tasks, generate_topic

__all__ = [
    "Conversation",
    "Message",
    "ParsedTaskInfo",
    "Suggestion",
    "Task",
    "detect_category",
    "expand_abbreviations",
    "is_task_command",
    "parse_date",
    "parse_task_from_message",
    "parse_time",
    "check_for_similar_tasks",
    "generate_topic",
]
