"""
Human-readable date labels used in headers, documents and email subjects.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

LONG_FORMAT = "%A, %B %d, %Y %I:%M %p"   # Tuesday, September 23, 2025 05:00 PM
DAY_FORMAT = "%B %d, %Y"                 # September 23, 2025
SHORT_FORMAT = "%b %d, %Y"               # Sep 23, 2025


def _localize(moment: datetime, tz_name: str) -> datetime:
    return moment.astimezone(ZoneInfo(tz_name))


def long_label(moment: datetime, tz_name: str = "UTC") -> str:
    return _localize(moment, tz_name).strftime(LONG_FORMAT)


def day_label(moment: datetime, tz_name: str = "UTC") -> str:
    return _localize(moment, tz_name).strftime(DAY_FORMAT)


def short_label(moment: datetime, tz_name: str = "UTC") -> str:
    return _localize(moment, tz_name).strftime(SHORT_FORMAT)
