"""
Error hierarchy for coursecal.

Library functions raise these and let them propagate; only the CLI turns
them into an error message and a non-zero exit code.
"""


class CourseCalError(Exception):
    """Base exception for all coursecal errors."""

    pass


class ConfigError(CourseCalError):
    """Term configuration is missing, malformed or inconsistent.

    Examples: unparseable date, term end before term start.
    """

    pass


class EntryFileError(CourseCalError):
    """A schedule entries file cannot be read or has the wrong shape."""

    pass


class TimeFormatError(CourseCalError, ValueError):
    """A clock time token is not of the form H:MMam / H:MMpm.

    The schedule parser recovers from this with its fallback time.
    """

    pass
