"""
Conversational replies for utterances that did not become tasks.
"""
from ..parser.task_parser import is_task_command

MEAL_WORDS = ("meal", "recipe", "food", "cook", "eat", "dinner", "lunch", "breakfast")
SHOPPING_WORDS = ("buy", "grocery", "shopping", "store")
QUESTION_STARTS = ("what", "when", "where", "why", "how")


def _is_question(text_lower: str) -> bool:
    return text_lower.startswith(QUESTION_STARTS) or "?" in text_lower


def _is_greeting(text_lower: str) -> bool:
    return "hello" in text_lower or "hi " in text_lower or text_lower.startswith("hi") or "hey" in text_lower


def generate_bot_response(message: str, task_created: bool = False) -> str:
    """Pick a short reply for a user message."""
    text_lower = message.lower()

    if task_created:
        return "✓ Task created!"

    if is_task_command(message):
        return "Got it! I'll add that to your tasks."

    if any(word in text_lower for word in MEAL_WORDS):
        return "Saving that meal idea for you!"

    if any(word in text_lower for word in SHOPPING_WORDS):
        return "I'll add that to your shopping list."

    if _is_question(text_lower):
        return "Let me help you with that."

    if _is_greeting(text_lower):
        return "Hi! I'm here to help. What's on your mind?"

    if "thank" in text_lower:
        return "You're welcome! Anything else?"

    return "Got it, I've noted that down."
