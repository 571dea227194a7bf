"""
Task classification and title extraction.

Decides whether an utterance describes a task and, if so, strips command
and date/time phrasing to leave a clean title. Classification is lenient
on purpose: anything with a task keyword, a task noun, an action verb or a
date/time cue counts as a task. All keyword checks are substring checks.
"""
import logging
import re
from typing import Optional

from ..models import ParsedTaskInfo
from .abbreviations import expand_abbreviations
from .category import detect_category

logger = logging.getLogger(__name__)

# Explicit task commands
TASK_KEYWORDS = (
    "remind", "reminder", "todo", "to do", "task",
    "need to", "have to", "must", "should",
    "don't forget", "remember to", "make sure",
)

# Nouns that imply a task on their own
TASK_NOUNS = (
    # Meals
    "breakfast", "brunch", "lunch", "snack", "dinner", "supper", "dessert",
    # Shopping
    "groceries", "shopping", "errands", "supplies",
    # Health
    "doctor", "dentist", "checkup", "physical", "exam", "appointment", "therapy", "counseling",
    "chiropractor", "massage", "vaccination",
    # Work
    "meeting", "presentation", "conference", "standup", "demo", "review", "deadline", "report",
    "memo", "project",
    # Home
    "laundry", "dishes", "trash", "yard work", "lawn",
    # Finance
    "bills", "payment", "taxes", "insurance",
    # Social
    "date", "party", "celebration", "gathering", "meetup", "playdate", "hangout",
    # Exercise and sports
    "practice", "game", "match", "training", "class", "session", "event",
)

# Matched anywhere in the text, not only as the leading word
ACTION_VERBS = (
    # Shopping and errands
    "buy", "purchase", "get", "pick up", "grab", "fetch", "order", "shop", "return", "exchange",
    "drop off",
    # Communication
    "call", "text", "message", "email", "contact", "reach out", "phone", "notify", "inform", "tell",
    "ask", "reply", "respond", "follow up",
    # Food and cooking
    "cook", "make", "prepare", "bake", "grill", "fry", "roast", "eat", "meal prep", "defrost",
    "marinate",
    # Cleaning and home
    "clean", "wash", "vacuum", "mop", "sweep", "scrub", "organize", "tidy", "declutter", "dust",
    "wipe", "fix", "repair", "maintain", "replace", "install", "do",
    # Planning
    "schedule", "book", "reserve", "arrange", "plan", "set up", "coordinate",
    # Completion
    "finish", "complete", "submit", "send", "deliver", "ship", "mail",
    # Creation
    "write", "draft", "create", "design", "develop", "build",
    # Review
    "review", "check", "verify", "confirm", "validate", "approve", "proofread",
    # Update
    "update", "revise", "edit", "modify", "change", "amend",
    # Preparation
    "compile", "gather", "collect", "assemble",
    # Participation
    "attend", "join", "participate", "go to", "show up",
    # Meetings and events
    "meet", "discuss", "talk", "present", "pitch", "conference call", "interview",
    # Health and fitness
    "workout", "exercise", "run", "jog", "walk", "swim", "bike", "yoga", "gym", "train",
    "practice", "stretch", "visit", "see",
    # Learning
    "study", "learn", "read", "research", "memorize", "watch", "listen",
    # Social
    "meet up", "hang out", "catch up", "celebrate", "party", "invite", "host", "rsvp",
    # Finance
    "pay", "transfer", "deposit", "withdraw", "budget", "save", "invest", "file",
    # Time management
    "reschedule", "postpone", "move", "shift", "cancel",
    # Miscellaneous
    "pack", "unpack", "upload", "download", "backup", "charge", "refill", "renew", "register",
    "sign up", "enroll", "take", "bring",
)

DATE_TIME_INDICATOR = re.compile(
    r'\b(today|tomorrow|tonight|morning|afternoon|evening|night'
    r'|monday|tuesday|wednesday|thursday|friday|saturday|sunday'
    r'|next week|weekend|at \d|:\d|am|pm|a\.m|p\.m)\b',
    re.IGNORECASE | re.ASCII,
)

# Leading command phrases, each removed as a literal phrase
COMMAND_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE | re.ASCII) for pattern in (
        r"remind me to ",
        r"reminder to ",
        r"todo: ",
        r"task: ",
        r"need to ",
        r"have to ",
        r"must ",
        r"should ",
        r"don't forget to ",
        r"remember to ",
        r"make sure to ",
        r"make sure ",
        r"i'll ",
        r"i will ",
    )
)

_WEEKDAY_NAMES = "monday|tuesday|wednesday|thursday|friday|saturday|sunday"

# Date/time phrasing removed from titles, in order
DATE_TIME_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE | re.ASCII) for pattern in (
        r'\b(at|@|by)\s*\d{1,2}:?\d{0,2}\s*([ap]\.?m\.?)?',
        r'\b[ap]\.?m\.?\b',
        r'\bin the\s+(morning|afternoon|evening|night)\b',
        r'\b(morning|afternoon|evening|night)\b',
        r'\b(for|on|by|in)\s+(tomorrow|today|tonight|this|next)\b',
        rf'\b(for|on|by|in)\s+({_WEEKDAY_NAMES}|weekend|week|month)\b',
        r'\bby\s+next\s+(week|month|year)\b',
        rf'\bnext\s+(week|month|year|{_WEEKDAY_NAMES})\b',
        r'\btomorrow\b',
        r'\btoday\b',
        r'\btonigh?t\b',
        r'\bthis\s+(morning|afternoon|evening|night|weekend|week|month|year)\b',
        # Only "monday" and "sunday" are word-anchored here
        rf'\b{_WEEKDAY_NAMES}\b',
        r'\bweekend\b',
        r'\bweek\b',
        r'\bmonth\b',
    )
)

WHITESPACE = re.compile(r'\s+')
TRAILING_PREPOSITION = re.compile(r'\b(for|at|on|by|in)\s*$', re.IGNORECASE)


def has_task_keyword(text: str) -> bool:
    text_lower = text.lower()
    return any(keyword in text_lower for keyword in TASK_KEYWORDS)


def has_task_noun(text: str) -> bool:
    text_lower = text.lower()
    return any(noun in text_lower for noun in TASK_NOUNS)


def has_action_verb(text: str) -> bool:
    text_lower = text.lower()
    return any(verb in text_lower for verb in ACTION_VERBS)


def has_date_time_indicator(text: str) -> bool:
    return bool(DATE_TIME_INDICATOR.search(text.lower()))


# Checked in order; any hit makes the text a task
TASK_SIGNALS = (
    ("task keyword", has_task_keyword),
    ("task noun", has_task_noun),
    ("action verb", has_action_verb),
    ("date/time indicator", has_date_time_indicator),
)


def is_task_command(text: str) -> bool:
    """Check if text reads as a task. Abbreviations are expanded first."""
    expanded = expand_abbreviations(text)
    for name, signal in TASK_SIGNALS:
        if signal(expanded):
            logger.debug(f"Task signal {name!r} found in {expanded!r}")
            return True
    return False


def strip_command_phrases(text: str) -> str:
    """Remove command phrasing such as "remind me to" or "need to"."""
    result = text
    for pattern in COMMAND_PATTERNS:
        result = pattern.sub('', result)
    return result


def strip_date_time_phrases(text: str) -> str:
    """Remove date and time phrasing, then tidy whitespace and dangling prepositions."""
    result = text
    for pattern in DATE_TIME_PATTERNS:
        result = pattern.sub('', result)
    result = WHITESPACE.sub(' ', result)
    result = TRAILING_PREPOSITION.sub('', result)
    return result.strip()


def extract_title(text: str) -> str:
    """Build a clean, capitalized title from expanded text. May be empty."""
    title = strip_date_time_phrases(strip_command_phrases(text))
    if title:
        title = title[0].upper() + title[1:]
    return title


def parse_task_from_message(message: str) -> Optional[ParsedTaskInfo]:
    """
    Parse task information from an utterance.

    Returns:
        ParsedTaskInfo, or None if the utterance is not a task.
        raw_date and raw_time hold the whole expanded utterance so the
        date and time resolvers can scan it in full.
    """
    expanded = expand_abbreviations(message)

    if not is_task_command(expanded):
        return None

    return ParsedTaskInfo(
        is_task=True,
        title=extract_title(expanded),
        raw_date=expanded,
        raw_time=expanded,
        suggested_category=detect_category(expanded),
    )
