"""
Keyword-based category detection.

Categories are checked in order and the first one with a matching keyword
wins. Keywords are plain substrings, so "pay" also matches "payday".
"""
import logging
from typing import NamedTuple

from ..models import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)


class CategoryRule(NamedTuple):
    category: str
    keywords: tuple[str, ...]


# Order is precedence: Finance before Health so "bank appointment" is Finance,
# Personal before Work so "call mom" is Personal.
CATEGORY_RULES = (
    CategoryRule("Finance", (
        "pay", "bill", "bank", "money", "transfer", "payment", "invoice",
        "budget", "taxes", "tax", "insurance", "atm", "account",
    )),
    CategoryRule("Shopping", (
        "buy", "purchase", "shop", "store", "grocery", "groceries", "milk", "bread",
        "get from", "pick up", "eggs", "meat", "vegetables", "fruits", "food",
    )),
    CategoryRule("Meals", (
        "cook", "meal", "recipe", "dinner", "lunch", "breakfast", "eat", "food",
        "prepare", "make dinner", "bake", "grill", "restaurant",
    )),
    CategoryRule("Personal", (
        "birthday", "anniversary", "gift", "family", "friend", "mom", "dad",
        "call mom", "call dad", "visit", "party",
    )),
    CategoryRule("Work", (
        "meeting", "call", "email", "send", "report", "project", "deadline",
        "presentation", "review", "submit", "office", "work", "client", "boss",
    )),
    CategoryRule("Health", (
        "doctor", "appointment", "gym", "workout", "exercise", "run", "yoga",
        "medicine", "health", "checkup", "dentist", "hospital", "therapy", "physical",
    )),
    CategoryRule("Home", (
        "clean", "laundry", "dishes", "vacuum", "organize", "fix", "repair",
        "maintenance", "chore", "trash", "garbage", "tidy",
    )),
)

CATEGORIES = tuple(rule.category for rule in CATEGORY_RULES) + (DEFAULT_CATEGORY,)


def match_category(text: str, rule: CategoryRule) -> bool:
    """Check whether any keyword of a single rule occurs in text."""
    text_lower = text.lower()
    return any(keyword in text_lower for keyword in rule.keywords)


def detect_category(text: str) -> str:
    """Return the first category whose keywords occur in text, else the default."""
    for rule in CATEGORY_RULES:
        if match_category(text, rule):
            logger.debug(f"Category {rule.category} matched for {text!r}")
            return rule.category
    return DEFAULT_CATEGORY
