import datetime
import re

MONTHS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def month_name(index: int) -> str:
    """
    Returns the short name of a zero-based month index.
    Example: 0 -> 'Jan', 11 -> 'Dec'.
    """
    return MONTHS[index]


def now_iso() -> str:
    """Current local time as an ISO-8601 string (seconds precision)."""
    return datetime.datetime.now().isoformat(timespec="seconds")


def blank_to_dash(value) -> str:
    """Placeholder used wherever an optional text field is empty."""
    if value is None:
        return "-"
    text = str(value).strip()
    return text if text else "-"


def slugify_whitespace(text: str) -> str:
    """Replaces every run of whitespace with a single underscore."""
    return re.sub(r"\s+", "_", text)
