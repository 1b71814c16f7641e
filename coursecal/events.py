"""
Event building (CourseEntry + WeeklySchedule -> RecurringEvent).

Every scheduled course becomes exactly one weekly recurring event that
spans the shared term window. Unscheduled courses produce no event.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Iterable, List, Optional

from coursecal.errors import ConfigError
from coursecal.log import get_logger
from coursecal.model import CourseEntry, RecurringEvent, TermCalendar, WeeklySchedule
from coursecal.parse import parse_schedule

logger = get_logger(__name__)


def build_event(
    entry: CourseEntry,
    schedule: Optional[WeeklySchedule],
    term_start: date,
    term_end: date,
) -> Optional[RecurringEvent]:
    """
    Build the recurring event for one course, or None if it is unscheduled.

    Text fields are copied verbatim; escaping happens at serialization.
    The UID is random so repeated runs differ only in UID.
    """
    if schedule is None:
        return None

    return RecurringEvent(
        summary=entry.course_name,
        description=entry.course_link,
        location=entry.location,
        uid=str(uuid.uuid4()),
        term_start=term_start,
        term_end=term_end,
        daily_start=schedule.start,
        daily_end=schedule.end,
        byday=schedule.byday(),
    )


def build_calendar(
    entries: Iterable[CourseEntry],
    term_start: date,
    term_end: date,
    warnings: Optional[List[str]] = None,
) -> TermCalendar:
    """
    Parse and build every entry in input order, skipping unscheduled ones.

    Parser warnings are prefixed with the course name so that callers can
    tell which row they belong to.
    """
    if term_end < term_start:
        raise ConfigError(f"Term ends ({term_end}) before it starts ({term_start})")

    calendar = TermCalendar(term_start=term_start, term_end=term_end)
    skipped = 0

    for entry in entries:
        row_warnings: List[str] = []
        schedule = parse_schedule(entry.days, entry.times, row_warnings)
        if warnings is not None:
            warnings.extend(f"{entry.course_name}: {w}" for w in row_warnings)

        event = build_event(entry, schedule, term_start, term_end)
        if event is None:
            skipped += 1
            logger.debug("course_unscheduled", course=entry.course_name, days=entry.days, times=entry.times)
            continue
        calendar.add(event)

    logger.info("calendar_built", events=len(calendar), skipped=skipped)
    return calendar
