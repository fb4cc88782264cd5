"""Business logic and I/O services for daily logs.

Path resolution, commit-style entry parsing, markdown formatting, appending
to per-day files, and summary aggregation over a window of days. Imports
models from ``dailylog.journal.models``.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from dailylog.errors import LogFileError
from dailylog.journal.models import (
    DaySummary,
    EditOutcome,
    ParsedEntry,
    SummaryResult,
    Weekday,
)

if TYPE_CHECKING:
    from dailylog.config import DailylogConfig
    from dailylog.editor import TextSource

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

LOG_SUFFIX = ".md"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
TITLE_SEPARATOR = " - "

# "monday" and "mon" style keys for every day
_WEEKDAY_NAMES: dict[str, Weekday] = {
    name: day for day in Weekday for name in (day.name.lower(), day.name.lower()[:3])
}


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def log_path_for_date(log_dir: str | Path, day: date) -> Path:
    """Return ``{log_dir}/YYYY-MM-DD.md`` for the given date."""
    return Path(log_dir) / f"{day.strftime(DATE_FORMAT)}{LOG_SUFFIX}"


def today_log_path(log_dir: str | Path, today: date | None = None) -> Path:
    """Return the log file path for today (local date)."""
    return log_path_for_date(log_dir, today or date.today())


def previous_day_log_path(log_dir: str | Path, today: date | None = None) -> Path:
    """Return the log file path for the day before ``today``."""
    return log_path_for_date(log_dir, (today or date.today()) - timedelta(days=1))


# ---------------------------------------------------------------------------
# Entry parsing and formatting (pure)
# ---------------------------------------------------------------------------


def _split_lines(content: str) -> list[str]:
    """Split on ``\\n`` only, dropping a ``\\r`` before each newline.

    Unlike ``str.splitlines`` this leaves form feeds and Unicode line
    separators inside their line. A trailing newline does not produce an
    empty last line.
    """
    lines = content.split("\n")
    tail = lines.pop()
    lines = [line.removesuffix("\r") for line in lines]
    if tail:
        lines.append(tail)
    return lines


def parse_entry(content: str) -> ParsedEntry:
    """Split editor text into title and body, git commit message style.

    The first line is the title and the body starts after the first blank
    line. Without a blank line, everything after the first line is body.
    If the first line is blank there is no title and the text is kept
    verbatim as the body.

    Example::

        >>> parse_entry("Fixed auth bug\\n\\nHandled the edge cases.")
        ParsedEntry(title='Fixed auth bug', body='Handled the edge cases.')
    """
    lines = _split_lines(content)
    if not lines:
        return ParsedEntry(title=None, body="")

    title = lines[0].strip()
    if not title:
        return ParsedEntry(title=None, body=content)

    body_start = 1
    for i, line in enumerate(lines[1:], start=1):
        if not line.strip():
            body_start = i + 1
            break

    body = "\n".join(lines[body_start:]).strip() if body_start < len(lines) else ""
    return ParsedEntry(title=title, body=body)


def format_entry(title: str | None, body: str, now: datetime | None = None) -> str:
    """Render an entry as a markdown fragment.

    Titled entries get a ``## HH:MM - title`` header; untitled entries are
    written as a bare paragraph. An entry with neither renders as ``""``.

    Args:
        title: Entry title, or None.
        body: Entry body, possibly empty.
        now: Clock used for the timestamp. Defaults to the current local time.
    """
    if title:
        timestamp = (now or datetime.now()).strftime(TIME_FORMAT)
        if not body:
            return f"## {timestamp}{TITLE_SEPARATOR}{title}\n"
        return f"## {timestamp}{TITLE_SEPARATOR}{title}\n\n{body}\n"
    if not body:
        return ""
    return f"{body}\n"


# ---------------------------------------------------------------------------
# Log file I/O
# ---------------------------------------------------------------------------


def append_to_log(path: Path, content: str, now: datetime | None = None) -> bool:
    """Parse, format and append an entry to a daily log file.

    The file is created if needed but never truncated. Nothing is touched
    when the formatted entry is blank.

    Returns:
        True if a fragment was written.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    entry = parse_entry(content)
    fragment = format_entry(entry.title, entry.body, now=now)
    if not fragment.strip():
        logger.debug("Nothing to append to %s", path)
        return False

    with path.open("a", encoding="utf-8", newline="") as f:
        f.write(fragment + "\n")
    logger.debug("Appended %d chars to %s", len(fragment) + 1, path)
    return True


def read_log(path: Path) -> str | None:
    """Return a log file's content, or None if it does not exist.

    Line endings are returned as stored on disk.

    Raises:
        LogFileError: If the file is not valid UTF-8.
        OSError: If the file cannot be read.
    """
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise LogFileError(f"Cannot read {path}: not valid UTF-8 ({exc.reason})") from exc


def edit_log(path: Path, source: TextSource) -> EditOutcome:
    """Edit a log file in place with content obtained from ``source``.

    The source is seeded with the current content (empty if the file is
    absent). Changed, non-blank content replaces the file verbatim; blank
    content removes an existing file.
    """
    existing = read_log(path) or ""
    new_content = source.read(existing)

    if new_content != existing and new_content.strip():
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(new_content)
        logger.debug("Rewrote %s", path)
        return EditOutcome.WRITTEN
    if not new_content.strip() and path.exists():
        path.unlink()
        logger.debug("Removed %s (content was empty)", path)
        return EditOutcome.REMOVED
    return EditOutcome.UNCHANGED


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def extract_entry_titles(content: str) -> list[str]:
    """Extract entry titles from daily log markdown.

    Picks up ``## HH:MM - title`` entry headers (everything after the first
    separator) and plain ``#`` / ``###`` headers. Other lines are ignored.
    """
    titles: list[str] = []
    for line in _split_lines(content):
        stripped = line.strip()
        if stripped.startswith("## ") and TITLE_SEPARATOR in stripped:
            titles.append(stripped.split(TITLE_SEPARATOR, 1)[1])
        elif stripped.startswith("# ") or stripped.startswith("### "):
            titles.append(stripped.lstrip("#").strip())
    return titles


def parse_weekday(name: str) -> Weekday | None:
    """Resolve a full or three-letter English day name, case-insensitively."""
    return _WEEKDAY_NAMES.get(name.strip().lower())


def _summarize_day(day: date, content: str) -> DaySummary:
    titles = extract_entry_titles(content)
    if titles:
        return DaySummary(date=day, lines=titles)
    # No headers: fall back to the first non-blank line
    for line in _split_lines(content):
        if line.strip():
            return DaySummary(date=day, lines=[line.strip()], titled=False)
    return DaySummary(date=day, lines=[], titled=False)


def summarize_logs(
    log_dir: str | Path,
    days: int,
    config: DailylogConfig,
    today: date | None = None,
) -> SummaryResult:
    """Scan the past ``days`` days of logs, newest first.

    Only days whose weekday appears in ``config.summary_days`` count towards
    the statistics; unrecognised day names are ignored.

    Args:
        log_dir: Directory holding the daily log files.
        days: Window size, counting today as the first day.
        config: Configuration providing ``summary_days``.
        today: Anchor date. Defaults to the local date.

    Returns:
        SummaryResult with per-day display lines and consistency stats.

    Raises:
        OSError: If an existing log file cannot be read.
    """
    anchor = today or date.today()
    allowed = {d for d in (parse_weekday(name) for name in config.summary_days) if d is not None}

    result = SummaryResult(days=days)
    for i in range(days):
        day = anchor - timedelta(days=i)
        if Weekday(day.weekday()) not in allowed:
            continue

        result.eligible_days += 1
        content = read_log(log_path_for_date(log_dir, day))
        if content is None or not content.strip():
            continue

        result.total_entries += 1
        result.entries.append(_summarize_day(day, content))

    logger.debug(
        "Summary over %d days: %d/%d eligible days logged",
        days,
        result.total_entries,
        result.eligible_days,
    )
    return result
