"""
Conversation topics and relative timestamps for conversation cards.
"""
import re
from datetime import datetime
from typing import Optional, Sequence

from ..models import Message

DEFAULT_TOPIC = "New Conversation"
MAX_TOPIC_LENGTH = 50
TRUNCATE_AT = 47

GREETINGS = frozenset({
    "hi", "hello", "hey", "hola", "greetings", "good morning", "good afternoon",
    "good evening", "good night", "morning", "afternoon", "evening", "night",
    "howdy", "sup", "whats up", "wassup", "yo", "hiya", "heya",
})

NON_ALPHA = re.compile(r'[^a-z\s]')


def is_greeting(text: str) -> bool:
    """True if the whole text is a greeting, or it is short and contains one."""
    normalized = NON_ALPHA.sub('', text.lower().strip())
    words = normalized.split()

    if normalized in GREETINGS:
        return True

    return len(words) <= 3 and any(word in GREETINGS for word in words)


def _capitalize(text: str) -> str:
    if not text:
        return ""
    return text[0].upper() + text[1:]


def _truncate(text: str) -> str:
    """Cut text to fit a topic, breaking at a word boundary."""
    if len(text) <= MAX_TOPIC_LENGTH:
        return _capitalize(text)
    truncated = text[:TRUNCATE_AT]
    last_space = truncated.rfind(' ')
    if last_space > 0:
        truncated = truncated[:last_space]
    return _capitalize(truncated) + "..."


def generate_topic(messages: Sequence[Message]) -> str:
    """
    Derive a short label for a conversation.

    Greetings are skipped in favour of the first user message with more than
    two words; if none exists the first user message is used as is.
    """
    user_messages = [m for m in messages if m.role == "user"]
    if not user_messages:
        return DEFAULT_TOPIC

    for message in user_messages:
        content = message.content.strip()
        if len(content.split()) > 2 and not is_greeting(content):
            return _truncate(content)

    return _truncate(user_messages[0].content.strip())


def format_relative_time(when: datetime, now: Optional[datetime] = None) -> str:
    """Format a timestamp relative to now: "Just now", "5m ago", "Yesterday"..."""
    now = now or datetime.now()
    seconds = (now - when).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days}d ago"
    return f"{when:%b} {when.day}"
