"""Daily log files: entry parsing, formatting, appending and summaries.

Entries are written commit-message style in an editor, rendered as
``## HH:MM - title`` markdown fragments and appended to one file per day.
"""

from dailylog.journal.models import (
    DaySummary,
    EditOutcome,
    ParsedEntry,
    SummaryResult,
    Weekday,
)
from dailylog.journal.services import (
    append_to_log,
    edit_log,
    extract_entry_titles,
    format_entry,
    log_path_for_date,
    parse_entry,
    parse_weekday,
    previous_day_log_path,
    read_log,
    summarize_logs,
    today_log_path,
)

__all__ = [
    "DaySummary",
    "EditOutcome",
    "ParsedEntry",
    "SummaryResult",
    "Weekday",
    "append_to_log",
    "edit_log",
    "extract_entry_titles",
    "format_entry",
    "log_path_for_date",
    "parse_entry",
    "parse_weekday",
    "previous_day_log_path",
    "read_log",
    "summarize_logs",
    "today_log_path",
]
