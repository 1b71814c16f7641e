"""
Unit tests for building recurring events from schedule entries.

UIDs are random and only checked for shape and uniqueness.
"""

import io
import unittest
import uuid
from contextlib import redirect_stdout
from datetime import date, time

from coursecal.errors import ConfigError
from coursecal.events import build_calendar, build_event
from coursecal.model import CourseEntry, WeeklySchedule

TERM_START = date(2025, 1, 21)
TERM_END = date(2025, 5, 9)


def make_entry(name: str, days: str = "MWF", times: str = "9:00am - 9:50am") -> CourseEntry:
    return CourseEntry(
        course_name=name,
        course_link=f"http://x/{name}",
        instructor="N/A",
        section_type="LEC",
        days=days,
        times=times,
        location="Rm 5",
    )


class TestBuildEvent(unittest.TestCase):
    def test_unscheduled_returns_none(self) -> None:
        self.assertIsNone(build_event(make_entry("A"), None, TERM_START, TERM_END))

    def test_fields_are_copied(self) -> None:
        schedule = WeeklySchedule(weekdays=frozenset({"FR", "WE", "MO"}), start=time(9, 0), end=time(9, 50))
        event = build_event(make_entry("CALC, 101"), schedule, TERM_START, TERM_END)

        assert event is not None
        self.assertEqual(event.summary, "CALC, 101")
        self.assertEqual(event.description, "http://x/CALC, 101")
        self.assertEqual(event.location, "Rm 5")
        self.assertEqual(event.term_start, TERM_START)
        self.assertEqual(event.term_end, TERM_END)
        self.assertEqual(event.daily_start, time(9, 0))
        self.assertEqual(event.daily_end, time(9, 50))
        self.assertEqual(event.byday, ("MO", "WE", "FR"))

    def test_uid_is_fresh(self) -> None:
        schedule = WeeklySchedule(weekdays=frozenset({"TU"}), start=time(10, 0), end=time(11, 0))
        a = build_event(make_entry("A"), schedule, TERM_START, TERM_END)
        b = build_event(make_entry("A"), schedule, TERM_START, TERM_END)

        assert a is not None and b is not None
        self.assertNotEqual(a.uid, b.uid)
        uuid.UUID(a.uid)

    def test_weekly_schedule_rejects_empty_days(self) -> None:
        with self.assertRaises(ValueError):
            WeeklySchedule(weekdays=frozenset(), start=time(9, 0), end=time(10, 0))


class TestBuildCalendar(unittest.TestCase):
    def test_order_is_kept_and_unscheduled_skipped(self) -> None:
        entries = [
            make_entry("A", "MWF"),
            make_entry("B", "TBA", "TBA"),
            make_entry("C", "TR", "1:30pm - 2:45pm"),
        ]
        calendar = build_calendar(entries, TERM_START, TERM_END)

        self.assertEqual([e.summary for e in calendar.events], ["A", "C"])
        self.assertEqual(len(calendar), 2)
        self.assertEqual(calendar.term_start, TERM_START)
        self.assertEqual(calendar.term_end, TERM_END)

    def test_warnings_name_the_course(self) -> None:
        warnings: list = []
        calendar = build_calendar([make_entry("LAB 7", "R", "noon - 3:00pm")], TERM_START, TERM_END, warnings)

        self.assertEqual(len(calendar), 1)
        self.assertEqual(calendar.events[0].daily_start, time(9, 0))
        self.assertEqual(len(warnings), 1)
        self.assertTrue(warnings[0].startswith("LAB 7: "))

    def test_empty_input(self) -> None:
        calendar = build_calendar([], TERM_START, TERM_END)
        self.assertEqual(calendar.events, [])

    def test_reversed_term_raises(self) -> None:
        with self.assertRaises(ConfigError):
            build_calendar([make_entry("A")], TERM_END, TERM_START)


class TestLibraryLogging(unittest.TestCase):
    def test_build_calendar_keeps_stdout_clean(self) -> None:
        out = io.StringIO()
        entries = [make_entry("A", "TBA", "TBA"), make_entry("B", "R", "noon - 3:00pm")]
        with redirect_stdout(out):
            calendar = build_calendar(entries, TERM_START, TERM_END)

        self.assertEqual(len(calendar), 1)
        self.assertEqual(out.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
