"""
Term configuration.

Everything that used to be baked into the exporter lives here instead:
term boundaries, output destination and the fixed calendar identifiers.

Config file format (JSON, all keys optional except the term dates):

    {
      "term_start": "2025-01-21",
      "term_end": "2025-05-09",
      "output_path": "courses.ics",
      "tzid": "America/New_York",
      "uid_domain": "trincoll.edu",
      "prodid": "-//Trinity College//EN"
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Optional

from coursecal.errors import ConfigError
from coursecal.export_ics import DEFAULT_PRODID, DEFAULT_TZID, DEFAULT_UID_DOMAIN


def _parse_date(value: Any, key: str) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Missing {key} (expected YYYY-MM-DD)")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ConfigError(f"Invalid {key}: {value!r} (expected YYYY-MM-DD)") from None


@dataclass(frozen=True)
class CalendarConfig:
    term_start: date
    term_end: date
    output_path: Optional[Path] = None
    tzid: str = DEFAULT_TZID
    uid_domain: str = DEFAULT_UID_DOMAIN
    prodid: str = DEFAULT_PRODID

    def __post_init__(self) -> None:
        if self.term_end < self.term_start:
            raise ConfigError(f"term_end {self.term_end} is before term_start {self.term_start}")

    @classmethod
    def from_values(
        cls,
        term_start: Any,
        term_end: Any,
        output_path: Any = None,
        tzid: Optional[str] = None,
        uid_domain: Optional[str] = None,
        prodid: Optional[str] = None,
    ) -> "CalendarConfig":
        """
        Build a config from loosely typed values (JSON or CLI strings).
        """
        return cls(
            term_start=_parse_date(term_start, "term_start"),
            term_end=_parse_date(term_end, "term_end"),
            output_path=Path(output_path) if output_path else None,
            tzid=tzid or DEFAULT_TZID,
            uid_domain=uid_domain or DEFAULT_UID_DOMAIN,
            prodid=prodid or DEFAULT_PRODID,
        )


def read_config_file(path: str | Path) -> dict[str, Any]:
    """
    Read the raw key/value pairs of a JSON config file.
    """
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {config_path}") from None
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from None

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    return data


def load_config(path: str | Path | None = None, **overrides: Any) -> CalendarConfig:
    """
    Load config from an optional JSON file; non-empty overrides win.
    """
    values: dict[str, Any] = read_config_file(path) if path is not None else {}
    for key, value in overrides.items():
        if value is not None and value != "":
            values[key] = value

    return CalendarConfig.from_values(
        term_start=values.get("term_start"),
        term_end=values.get("term_end"),
        output_path=values.get("output_path"),
        tzid=values.get("tzid"),
        uid_domain=values.get("uid_domain"),
        prodid=values.get("prodid"),
    )
