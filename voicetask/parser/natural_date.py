"""
Natural language date and time resolution.

Both resolvers always produce a value: a date falls back to the reference
day and a time falls back to 8 PM. Dates are ISO "YYYY-MM-DD" strings and
times are 24-hour "HH:MM" strings.
"""
import logging
import re
from datetime import date, datetime, timedelta
from typing import NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_TIME = "20:00"

ReferenceInstant = Optional[Union[datetime, date]]

# Scanned in this order; the first name found in the text wins.
WEEKDAYS = (
    ("sunday", 6),
    ("monday", 0),
    ("tuesday", 1),
    ("wednesday", 2),
    ("thursday", 3),
    ("friday", 4),
    ("saturday", 5),
)

SATURDAY = 5


class TimePattern(NamedTuple):
    regex: re.Pattern
    has_colon: bool
    has_meridiem: bool
    description: str


# Ordered from most to least specific. ASCII digits only.
TIME_PATTERNS = (
    TimePattern(re.compile(r'at\s*(\d{1,2}):(\d{2})\s*([ap]\.?m\.?)', re.IGNORECASE | re.ASCII),
                True, True, "at 5:30pm"),
    TimePattern(re.compile(r'(\d{1,2}):(\d{2})\s*([ap]\.?m\.?)', re.IGNORECASE | re.ASCII),
                True, True, "5:30pm"),
    TimePattern(re.compile(r'(\d{1,2}):(\d{2})(?!\s*[ap]\.?m)', re.IGNORECASE | re.ASCII),
                True, False, "17:00"),
    TimePattern(re.compile(r'at\s*(\d{1,2})\s*([ap]\.?m\.?)', re.IGNORECASE | re.ASCII),
                False, True, "at 5pm"),
    TimePattern(re.compile(r'(\d{1,2})\s*([ap]\.?m\.?)', re.IGNORECASE | re.ASCII),
                False, True, "5pm"),
)


class SmartTimeRule(NamedTuple):
    keywords: tuple[str, ...]
    time: str
    requires: tuple[str, ...] = ()


# Keyword-inferred times, first match wins. Words that contain other words
# ("afternoon" contains "noon", "midnight" contains "night") come first.
SMART_TIME_RULES = (
    # Meals
    SmartTimeRule(("breakfast",), "08:00"),
    SmartTimeRule(("brunch",), "11:00"),
    SmartTimeRule(("lunch",), "12:00"),
    SmartTimeRule(("snack",), "15:00"),
    SmartTimeRule(("dinner",), "18:30"),
    SmartTimeRule(("supper",), "19:00"),
    SmartTimeRule(("dessert",), "20:00"),
    # Time of day
    SmartTimeRule(("morning",), "07:00", requires=("gym", "workout", "exercise")),
    SmartTimeRule(("morning",), "08:00"),
    SmartTimeRule(("afternoon",), "14:00"),
    SmartTimeRule(("noon",), "12:00"),
    SmartTimeRule(("evening",), "18:00"),
    SmartTimeRule(("midnight",), "00:00"),
    SmartTimeRule(("night", "tonight"), "20:00"),
    # Health appointments keep business hours
    SmartTimeRule(("doctor", "dentist", "checkup", "physical", "therapy"), "10:00"),
)


def _reference_date(now: ReferenceInstant = None) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime("%Y-%m-%d")


def format_time(hours: int, minutes: int) -> str:
    """Format a 24-hour clock time as HH:MM."""
    return f"{hours:02d}:{minutes:02d}"


def get_today_date(now: ReferenceInstant = None) -> str:
    """Today's date (or the reference instant's date) as YYYY-MM-DD."""
    return format_date(_reference_date(now))


def _next_weekday(weekday: int, from_date: date) -> date:
    """Get the next occurrence of a weekday (0=Monday), never from_date itself."""
    days_ahead = weekday - from_date.weekday()
    if days_ahead <= 0:
        days_ahead += 7
    return from_date + timedelta(days=days_ahead)


def _upcoming_saturday(from_date: date) -> date:
    """Saturday of this weekend. On a Saturday that is today, on a Sunday six days out."""
    return from_date + timedelta(days=(SATURDAY - from_date.weekday()) % 7)


def parse_date(text: str, now: ReferenceInstant = None) -> str:
    """
    Resolve the date a piece of text refers to.

    Args:
        text: Expanded utterance
        now: Reference instant; defaults to the current day

    Returns:
        ISO date string. Text without a date cue resolves to the reference day.
    """
    text_lower = text.lower()
    today = _reference_date(now)

    if "today" in text_lower:
        return format_date(today)

    if "tomorrow" in text_lower:
        return format_date(today + timedelta(days=1))

    for day_name, weekday in WEEKDAYS:
        if day_name in text_lower:
            return format_date(_next_weekday(weekday, today))

    if "next week" in text_lower:
        return format_date(today + timedelta(days=7))

    if "weekend" in text_lower or "saturday" in text_lower or "sunday" in text_lower:
        return format_date(_upcoming_saturday(today))

    return format_date(today)


def _to_24_hour(hours: int, meridiem: Optional[str]) -> int:
    if not meridiem:
        return hours
    meridiem = meridiem.lower().replace(".", "")
    if meridiem == "pm" and hours < 12:
        return hours + 12
    if meridiem == "am" and hours == 12:
        return 0
    return hours


def match_explicit_time(text: str) -> Optional[str]:
    """
    Find an explicit clock time in text.

    Patterns are tried in order; a match outside 00:00-23:59 is rejected
    and the next pattern is tried.
    """
    text_lower = text.lower()

    for pattern in TIME_PATTERNS:
        match = pattern.regex.search(text_lower)
        if not match:
            continue

        hours = int(match.group(1))
        minutes = int(match.group(2)) if pattern.has_colon else 0
        meridiem = match.group(match.re.groups) if pattern.has_meridiem else None

        hours = _to_24_hour(hours, meridiem)
        if 0 <= hours <= 23 and 0 <= minutes <= 59:
            logger.debug(f"Time pattern {pattern.description!r} matched {match.group(0)!r}")
            return format_time(hours, minutes)

        logger.debug(f"Rejected out-of-range time {match.group(0)!r}")

    return None


def get_smart_default_time(text: str) -> Optional[str]:
    """Infer a time from meal, time-of-day or appointment keywords."""
    text_lower = text.lower()

    for rule in SMART_TIME_RULES:
        if not any(keyword in text_lower for keyword in rule.keywords):
            continue
        if rule.requires and not any(word in text_lower for word in rule.requires):
            continue
        return rule.time

    return None


def parse_time(text: str) -> str:
    """
    Resolve the time a piece of text refers to.

    Returns:
        24-hour HH:MM string: an explicit time if one is stated, else a
        keyword-inferred default, else 20:00.
    """
    explicit = match_explicit_time(text)
    if explicit:
        return explicit

    smart_default = get_smart_default_time(text)
    if smart_default:
        logger.debug(f"Using smart default time {smart_default}")
        return smart_default

    logger.debug(f"No time found, defaulting to {DEFAULT_TIME}")
    return DEFAULT_TIME


def format_time_for_display(time_string: str) -> str:
    """Format HH:MM for display, e.g. "13:05" -> "1:05 PM"."""
    hours, minutes = (int(part) for part in time_string.split(":"))
    period = "PM" if hours >= 12 else "AM"
    if hours > 12:
        display_hours = hours - 12
    elif hours == 0:
        display_hours = 12
    else:
        display_hours = hours
    return f"{display_hours}:{minutes:02d} {period}"


def format_date_for_display(date_string: str, now: ReferenceInstant = None) -> str:
    """Format YYYY-MM-DD for display: "Today, Nov 21", "Tomorrow, Nov 22" or "Mon, Nov 25"."""
    value = date.fromisoformat(date_string)
    today = _reference_date(now)
    short = f"{value:%b} {value.day}"

    if value == today:
        return f"Today, {short}"
    if value == today + timedelta(days=1):
        return f"Tomorrow, {short}"
    return f"{value:%a}, {short}"
