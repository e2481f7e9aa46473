import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from archiver import config

ARCHIVE = "archive"
KEEP = "keep-future-or-today"
KEEP_UNPARSEABLE = "keep-unparseable"


@dataclass
class ArchiveDecision:
    outcome: str
    reason: str
    show_date: Optional[date] = None
    days_ago: int = 0

    @property
    def should_archive(self):
        return self.outcome == ARCHIVE


def parse_show_date(date_str):
    """
    Parse a show date like "Dec 4, 2025".
    Returns (date, None) on success or (None, reason) when the string is not
    safe to act on.
    """
    if not isinstance(date_str, str) or not re.match(config.SHOW_DATE_PATTERN, date_str.strip()):
        return None, f'Invalid format: "{date_str}" (expected: "MMM D, YYYY")'

    month, day, year = date_str.replace(",", " ").split()
    try:
        parsed = datetime.strptime(f"{month} {day} {year}", config.SHOW_DATE_FORMAT).date()
    except ValueError:
        return None, f'Could not parse: "{date_str}"'

    if parsed.year < config.MIN_YEAR or parsed.year > config.MAX_YEAR:
        return None, f'Unreasonable year: {parsed.year} in "{date_str}"'

    return parsed, None


def decide_archive(date_str, today):
    """
    Decide whether a show belongs in the past list.
    Only shows strictly before today are archived; anything that cannot be
    parsed stays where it is. Never raises.
    """
    if isinstance(today, datetime):
        today = today.date()

    show_date, error = parse_show_date(date_str)
    if show_date is None:
        return ArchiveDecision(KEEP_UNPARSEABLE, f"Could not parse date safely: {error}")

    days_ago = (today - show_date).days

    if show_date < today:
        return ArchiveDecision(ARCHIVE, f"Show was {days_ago} day(s) ago", show_date, days_ago)
    if show_date == today:
        return ArchiveDecision(KEEP, "Show is today (keeping in upcoming)", show_date, 0)
    return ArchiveDecision(KEEP, f"Show is {abs(days_ago)} day(s) in the future", show_date, days_ago)
