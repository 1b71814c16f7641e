"""
Parsing (schedule strings -> WeeklySchedule).

Turns the compact notation used by class schedules into a structured
weekly meeting pattern:

    days  "MWF", "TR", "M W F"        -> {"MO", "WE", "FR"}
    times "9:00am - 9:50am"           -> 09:00, 09:50
    cell  "MWF: 9:00am - 9:50am"      -> ("MWF", "9:00am - 9:50am")

Rules:
- empty or "TBA" days/times -> unscheduled (None)
- unknown day letters are dropped; no known letters left -> unscheduled
- a malformed time token falls back to 09:00 and is reported as a warning,
  the course itself is kept
"""

from __future__ import annotations

import re
from datetime import datetime, time
from typing import FrozenSet, List, Optional, Tuple

from coursecal.errors import TimeFormatError
from coursecal.log import get_logger
from coursecal.model import DAY_LETTERS, WeeklySchedule

logger = get_logger(__name__)

FALLBACK_TIME = time(9, 0)

_RANGE_SEP = re.compile(r"\s*-\s*")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_missing(value: Optional[str]) -> bool:
    text = (value or "").strip()
    return not text or text.upper() == "TBA"


def decode_weekdays(days_raw: str) -> FrozenSet[str]:
    """
    Map a letter run like "MWF" to weekday codes, ignoring anything else.
    """
    return frozenset(DAY_LETTERS[ch] for ch in days_raw if ch in DAY_LETTERS)


def split_time_range(times_raw: str) -> Tuple[str, str]:
    """
    Split "<start> - <end>" on the first dash.

    Whitespace around the dash is optional. A single segment is returned
    as the start token with an empty end token.
    """
    parts = _RANGE_SEP.split(times_raw.strip(), maxsplit=1)
    start = parts[0].strip()
    end = parts[1].strip() if len(parts) > 1 else ""
    return start, end


def to_24h(token: str) -> time:
    """
    Convert a 12-hour clock token ("9:00am", "12:30 PM") to a time of day.

    12am is midnight, 12pm is noon. Raises TimeFormatError otherwise.
    """
    compact = "".join(token.split()).upper()
    try:
        return datetime.strptime(compact, "%I:%M%p").time()
    except ValueError:
        raise TimeFormatError(f"Invalid time token: {token!r}") from None


def resolve_time(token: str, warnings: Optional[List[str]] = None) -> time:
    """
    to_24h() with the 09:00 fallback for malformed tokens.

    The fallback is logged and, if given, recorded in warnings.
    """
    try:
        return to_24h(token)
    except TimeFormatError as exc:
        message = f"{exc}; using {FALLBACK_TIME:%H:%M}"
        logger.warning("time_token_fallback", token=token, fallback=f"{FALLBACK_TIME:%H:%M}")
        if warnings is not None:
            warnings.append(message)
        return FALLBACK_TIME


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_schedule(
    days_raw: Optional[str],
    times_raw: Optional[str],
    warnings: Optional[List[str]] = None,
) -> Optional[WeeklySchedule]:
    """
    Parse a days string and a time range into a WeeklySchedule.

    Returns None when the course cannot recur (missing, TBA, or no known
    day letters). Time problems never make a course unscheduled; they are
    resolved with FALLBACK_TIME and appended to warnings.
    """
    if _is_missing(days_raw) or _is_missing(times_raw):
        return None

    weekdays = decode_weekdays(days_raw.strip())
    if not weekdays:
        return None

    start_token, end_token = split_time_range(times_raw)
    start = resolve_time(start_token, warnings)
    end = resolve_time(end_token, warnings)

    return WeeklySchedule(weekdays=weekdays, start=start, end=end)


def split_days_and_times(cell: Optional[str]) -> Tuple[str, str]:
    """
    Split a combined schedule cell "MWF: 9:00am - 9:50am" into days and times.

    Any cell mentioning TBA is unscheduled and yields ("", "").
    Without a colon the whole cell is taken as days.
    """
    text = (cell or "").strip()
    if "TBA" in text:
        return "", ""

    days, sep, rest = text.partition(":")
    if not sep:
        return text, ""

    start, end = split_time_range(rest)
    times = f"{start} - {end}" if end else start
    return days.strip(), times


def parse_days_and_times(
    cell: Optional[str],
    warnings: Optional[List[str]] = None,
) -> Optional[WeeklySchedule]:
    days, times = split_days_and_times(cell)
    return parse_schedule(days, times, warnings)
