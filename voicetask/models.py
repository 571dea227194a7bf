"""
Data models for voicetask entities.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional


DEFAULT_CATEGORY = "Tasks"


@dataclass
class Task:
    id: str = ""
    title: str = ""
    due_date: Optional[str] = None  # YYYY-MM-DD
    due_time: Optional[str] = None  # HH:MM, 24-hour
    category: Optional[str] = DEFAULT_CATEGORY
    is_done: bool = False
    created_at: Optional[datetime] = None

    def copy(self, **changes) -> "Task":
        """Return a new Task with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "due_date": self.due_date,
            "due_time": self.due_time,
            "category": self.category,
            "is_done": self.is_done,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class ParsedTaskInfo:
    """Result of classifying one utterance as a task."""
    is_task: bool
    title: str
    raw_date: Optional[str] = None
    raw_time: Optional[str] = None
    suggested_category: Optional[str] = None


@dataclass
class Suggestion:
    """A consolidation proposal shown once and then discarded."""
    message: str
    proposed_time: str
    affected_tasks: list[str] = field(default_factory=list)
    type: str = "combine"


@dataclass
class Message:
    role: str  # user | bot
    content: str
    id: Optional[str] = None
    timestamp: Optional[datetime] = None


@dataclass
class Conversation:
    id: str
    topic: str = "New Conversation"
    messages: list[Message] = field(default_factory=list)
    last_message_time: Optional[datetime] = None
    status: str = "active"  # active | saved
