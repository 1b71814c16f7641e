"""
Parsing of a saved class-schedule page (HTML -> CourseEntry list).

The page is a table where each course takes two rows:

    <tr class="TITLE_row">      <a href="...">CALC 101</a> ...
    <tr>                        td | type | td.TITLE_times | location ...
                                (instructor as a mailto: link somewhere in the row)

Alternate courses use class "TITLE_row_alt". Nothing is fetched here; the
page must already be on disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from coursecal.log import get_logger
from coursecal.model import CourseEntry
from coursecal.parse import split_days_and_times
from coursecal.storage import save_entries

logger = get_logger(__name__)

NOT_AVAILABLE = "N/A"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _text(el: Optional[Tag]) -> str:
    return el.get_text(" ", strip=True) if el is not None else ""


def _parse_course_rows(title_row: Tag) -> Optional[CourseEntry]:
    """
    Build one entry from a title row and the detail row that follows it.
    """
    link = title_row.select_one("a[href]")
    if link is None:
        return None

    detail_row = title_row.find_next_sibling("tr")
    if detail_row is None:
        return None

    cells = detail_row.find_all("td")
    if len(cells) <= 1:
        return None

    section_type = _text(cells[1])
    location = _text(cells[3]) if len(cells) > 3 else NOT_AVAILABLE

    mailto = detail_row.select_one("a[href^='mailto:']")
    instructor = _text(mailto) if mailto is not None else NOT_AVAILABLE
    if mailto is None:
        logger.debug("instructor_missing", course=_text(link))

    days, times = split_days_and_times(_text(detail_row.select_one("td.TITLE_times")))

    return CourseEntry(
        course_name=_text(link),
        course_link=str(link.get("href", "")),
        instructor=instructor,
        section_type=section_type,
        days=days,
        times=times,
        location=location,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def entries_from_html(html: str | bytes) -> List[CourseEntry]:
    """
    Extract all course entries from a saved schedule page, in page order.

    Bytes are decoded by BeautifulSoup (declared charset or detection).
    """
    soup = BeautifulSoup(html, "html.parser")

    entries: List[CourseEntry] = []
    for row in soup.select("tr.TITLE_row, tr.TITLE_row_alt"):
        entry = _parse_course_rows(row)
        if entry is not None:
            entries.append(entry)

    logger.info("html_entries_parsed", entries=len(entries))
    return entries


def import_html(html_path: str | Path, out_path: str | Path) -> int:
    """
    Convert a saved schedule page into an entries JSON file. Returns the count.
    """
    # raw bytes: saved pages are not always UTF-8
    entries = entries_from_html(Path(html_path).read_bytes())
    save_entries(entries, out_path)
    return len(entries)

