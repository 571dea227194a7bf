"""
Similar-task detection and time consolidation suggestions.

A task is similar to a new one when both share a category and due date and
both have a due time. Similar tasks within two hours of each other can be
combined at the midpoint of their times.
"""
import logging
from typing import Iterable, Optional

from ..models import Suggestion, Task
from ..parser.natural_date import format_time, format_time_for_display

logger = logging.getLogger(__name__)

CLOSE_TIME_MINUTES = 120


def time_to_minutes(time_string: str) -> int:
    """Convert HH:MM to minutes since midnight."""
    hours, minutes = time_string.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to HH:MM."""
    return format_time(minutes // 60, minutes % 60)


def are_times_close(first: str, second: str) -> bool:
    """Check if two times are within two hours of each other, ignoring day wraparound."""
    return abs(time_to_minutes(first) - time_to_minutes(second)) <= CLOSE_TIME_MINUTES


def calculate_midpoint_time(first: str, second: str) -> str:
    """Midpoint of two times, rounded down to the minute."""
    return minutes_to_time((time_to_minutes(first) + time_to_minutes(second)) // 2)


def find_similar_tasks(new_task: Task, existing_tasks: Iterable[Task]) -> list[Task]:
    """Find tasks sharing the new task's category and due date, both with times set."""
    if not new_task.due_date or not new_task.category:
        return []

    similar = []
    for task in existing_tasks:
        if task.id == new_task.id:
            continue
        if task.category != new_task.category:
            continue
        if task.due_date != new_task.due_date:
            continue
        if not task.due_time or not new_task.due_time:
            continue
        similar.append(task)
    return similar


def suggest_time_consolidation(new_task: Task, similar_tasks: list[Task]) -> Optional[Suggestion]:
    """Propose combining the new task with the first similar task close in time."""
    if not similar_tasks or not new_task.due_time:
        return None

    close_tasks = [
        task for task in similar_tasks
        if task.due_time and are_times_close(new_task.due_time, task.due_time)
    ]
    if not close_tasks:
        return None

    close_task = close_tasks[0]
    midpoint = calculate_midpoint_time(new_task.due_time, close_task.due_time)

    return Suggestion(
        message=(
            f'💡 You have "{close_task.title}" at {format_time_for_display(close_task.due_time)}. '
            f"Want to combine {new_task.category} tasks at {format_time_for_display(midpoint)}?"
        ),
        proposed_time=midpoint,
        affected_tasks=[new_task.id, close_task.id],
    )


def check_for_similar_tasks(new_task: Task, existing_tasks: Iterable[Task]) -> Optional[str]:
    """
    Check a newly created task against existing ones.

    Returns:
        A suggestion message, or None if nothing is similar.
    """
    similar_tasks = find_similar_tasks(new_task, existing_tasks)
    if not similar_tasks:
        return None

    suggestion = suggest_time_consolidation(new_task, similar_tasks)
    if suggestion:
        logger.debug(f"Suggesting {suggestion.proposed_time} for tasks {suggestion.affected_tasks}")
        return suggestion.message

    if len(similar_tasks) >= 2:
        return (
            f"💡 You have {len(similar_tasks)} other {new_task.category} tasks today. "
            "Consider batching them together!"
        )
    return f'💡 You have another {new_task.category} task today: "{similar_tasks[0].title}"'
