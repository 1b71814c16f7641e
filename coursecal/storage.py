"""
Persistent storage for schedule entries.

Entries are stored as a JSON list of objects whose keys are the CourseEntry
field names:

    [{"course_name": "CALC 101", "course_link": "http://x/1", "instructor": "N/A",
      "section_type": "LEC", "days": "MWF", "times": "9:00am - 9:50am",
      "location": "Rm 5"}]

Missing keys become empty strings. A file that cannot be read or does not
have this shape raises EntryFileError.
"""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Iterable, List

from coursecal.errors import EntryFileError
from coursecal.model import CourseEntry

_FIELD_NAMES = [f.name for f in fields(CourseEntry)]


def entry_from_dict(data: dict) -> CourseEntry:
    """
    Build a CourseEntry from a dict; None and missing values become "".
    """
    values = {}
    for name in _FIELD_NAMES:
        value = data.get(name)
        values[name] = "" if value is None else str(value)
    return CourseEntry(**values)


def load_entries(path: str | Path) -> List[CourseEntry]:
    """
    Load schedule entries from a JSON file.
    """
    entries_path = Path(path)
    try:
        data = json.loads(entries_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise EntryFileError(f"Entries file not found: {entries_path}") from None
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise EntryFileError(f"Cannot read entries file {entries_path}: {exc}") from None

    if not isinstance(data, list):
        raise EntryFileError(f"{entries_path} must contain a JSON list")

    entries: List[CourseEntry] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise EntryFileError(f"{entries_path}: item {i} is not an object")
        entries.append(entry_from_dict(item))
    return entries


def save_entries(entries: Iterable[CourseEntry], path: str | Path) -> None:
    """
    Save schedule entries as JSON. Creates parent directories if needed.
    """
    entries_path = Path(path)
    entries_path.parent.mkdir(parents=True, exist_ok=True)

    payload = [asdict(e) for e in entries]
    entries_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
