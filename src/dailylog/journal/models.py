"""Pure data models for daily logs.

No I/O here. Services import from this module.
"""

from __future__ import annotations

from datetime import date
from enum import IntEnum, StrEnum

from pydantic import BaseModel, Field


class Weekday(IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class EditOutcome(StrEnum):
    """What an in-place edit did to the log file."""

    WRITTEN = "written"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


class ParsedEntry(BaseModel):
    """Editor text split commit-message style into title and body."""

    title: str | None = None
    body: str = ""


class DaySummary(BaseModel):
    """One logged day in a summary, with the lines to display for it.

    ``titled`` is False when the day had no headers and ``lines`` holds the
    first non-blank line of the log instead.
    """

    date: date
    lines: list[str] = Field(default_factory=list)
    titled: bool = True


class SummaryResult(BaseModel):
    """Result of scanning a window of daily logs."""

    days: int
    total_entries: int = 0
    eligible_days: int = 0
    entries: list[DaySummary] = Field(default_factory=list)

    @property
    def has_entries(self) -> bool:
        return bool(self.entries)

    @property
    def consistency_percent(self) -> float:
        """Share of eligible days that have a non-empty log, in percent."""
        if self.eligible_days == 0:
            return 0.0
        return self.total_entries / self.eligible_days * 100
