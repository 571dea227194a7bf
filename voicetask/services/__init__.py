"""
Services that work over conversations and task lists.
"""
from .similar_tasks import check_for_similar_tasks, find_similar_tasks, suggest_time_consolidation
from .topic_service import generate_topic, format_relative_time

__all__ = [
    "check_for_similar_tasks",
    "find_similar_tasks",
    "suggest_time_consolidation",
    "generate_topic",
    "format_relative_time",
]
