"""
iCalendar (.ics) export.

Renders a TermCalendar as RFC 5545 text that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar

serialize_calendar() is pure; write_calendar() is the only function that
touches the file system.
"""

from __future__ import annotations

from datetime import date, time
from pathlib import Path
from typing import List

from coursecal.model import RecurringEvent, TermCalendar

DEFAULT_PRODID = "-//Trinity College//EN"
DEFAULT_TZID = "America/New_York"
DEFAULT_UID_DOMAIN = "trincoll.edu"

REMINDER_TRIGGER = "-PT15M"
REMINDER_TEXT = "Reminder"

# Content lines longer than this many octets are folded
MAX_LINE_OCTETS = 75

CRLF = "\r\n"


def ics_escape(text: str) -> str:
    """
    Escape TEXT values: backslash, semicolon, comma and line breaks.
    """
    return (
        text.replace("\\", "\\\\")
        .replace("\r\n", "\\n")
        .replace("\r", "\\n")
        .replace("\n", "\\n")
        .replace(";", "\\;")
        .replace(",", "\\,")
    )


def fold_line(line: str) -> str:
    """
    Fold a content line at 75 octets; continuation lines start with a space.
    """
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line

    chunks: List[str] = []
    current = ""
    limit = MAX_LINE_OCTETS
    for ch in line:
        if len((current + ch).encode("utf-8")) > limit:
            chunks.append(current)
            current = ""
            # the leading space of a continuation line counts towards the limit
            limit = MAX_LINE_OCTETS - 1
        current += ch
    chunks.append(current)
    return (CRLF + " ").join(chunks)


def _dt_local(day: date, clock: time) -> str:
    """
    Format date + time of day as ICS local datetime 'YYYYMMDDTHHMM00'.
    """
    return f"{day:%Y%m%d}T{clock:%H%M}00"


def _event_lines(event: RecurringEvent, tzid: str, uid_domain: str) -> List[str]:
    until = f"{event.term_end:%Y%m%d}T235959Z"
    return [
        "BEGIN:VEVENT",
        f"SUMMARY:{ics_escape(event.summary)}",
        f"DESCRIPTION:{ics_escape(event.description)}",
        f"LOCATION:{ics_escape(event.location)}",
        f"UID:{event.uid}@{uid_domain}",
        f"DTSTART;TZID={tzid}:{_dt_local(event.term_start, event.daily_start)}",
        f"DTEND;TZID={tzid}:{_dt_local(event.term_start, event.daily_end)}",
        f"RRULE:FREQ=WEEKLY;UNTIL={until};BYDAY={','.join(event.byday)}",
        "SEQUENCE:0",
        "STATUS:CONFIRMED",
        "TRANSP:OPAQUE",
        "BEGIN:VALARM",
        f"TRIGGER:{REMINDER_TRIGGER}",
        f"DESCRIPTION:{REMINDER_TEXT}",
        "ACTION:DISPLAY",
        "END:VALARM",
        "END:VEVENT",
    ]


def serialize_calendar(
    calendar: TermCalendar,
    prodid: str = DEFAULT_PRODID,
    tzid: str = DEFAULT_TZID,
    uid_domain: str = DEFAULT_UID_DOMAIN,
) -> str:
    """
    Render the calendar as iCalendar text, events in their given order.
    """
    lines: List[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("CALSCALE:GREGORIAN")
    lines.append("METHOD:PUBLISH")
    lines.append(f"PRODID:{prodid}")

    for event in calendar.events:
        lines.extend(_event_lines(event, tzid, uid_domain))

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF; nothing follows END:VCALENDAR
    return CRLF.join(fold_line(line) for line in lines)


def write_calendar(text: str, out_path: str | Path) -> Path:
    """
    Write calendar text to out_path, creating parent folders. Returns the path.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the CRLF line endings as they are
    with out.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    return out
