"""
Central data model definitions used across the project.

The flow is one-directional:

    CourseEntry -> WeeklySchedule -> RecurringEvent -> TermCalendar

An unscheduled course (TBA / missing days or times) has no WeeklySchedule;
the parser returns None for it and the builder skips it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import FrozenSet, List, Tuple


# Canonical Monday-to-Friday order of the RFC 5545 weekday codes
WEEKDAY_CODES: Tuple[str, ...] = ("MO", "TU", "WE", "TH", "FR")

# One letter per day; Thursday is "R" so it does not collide with Tuesday
DAY_LETTERS = {
    "M": "MO",
    "T": "TU",
    "W": "WE",
    "R": "TH",
    "F": "FR",
}


def canonical_days(codes) -> Tuple[str, ...]:
    """
    Return the given weekday codes in Monday-to-Friday order.
    """
    wanted = set(codes)
    return tuple(code for code in WEEKDAY_CODES if code in wanted)


@dataclass(frozen=True)
class CourseEntry:
    """
    One row of the class schedule as delivered by an importer.
    """

    course_name: str
    course_link: str
    instructor: str
    section_type: str
    days: str
    times: str
    location: str


@dataclass(frozen=True)
class WeeklySchedule:
    """
    A successfully parsed meeting pattern.

    end may equal or precede start; it is passed through unchanged.
    """

    weekdays: FrozenSet[str]
    start: time
    end: time

    def __post_init__(self) -> None:
        if not self.weekdays:
            raise ValueError("WeeklySchedule needs at least one weekday")
        unknown = set(self.weekdays) - set(WEEKDAY_CODES)
        if unknown:
            raise ValueError(f"Unknown weekday codes: {sorted(unknown)!r}")

    def byday(self) -> Tuple[str, ...]:
        return canonical_days(self.weekdays)


@dataclass(frozen=True)
class RecurringEvent:
    """
    One weekly recurring class event spanning the whole term.
    """

    summary: str
    description: str
    location: str
    uid: str
    term_start: date
    term_end: date
    daily_start: time
    daily_end: time
    byday: Tuple[str, ...]


@dataclass
class TermCalendar:
    """
    Ordered events sharing one term window (both dates inclusive).
    """

    term_start: date
    term_end: date
    events: List[RecurringEvent] = field(default_factory=list)

    def add(self, event: RecurringEvent) -> None:
        self.events.append(event)

    def __len__(self) -> int:
        return len(self.events)
