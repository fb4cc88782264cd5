"""Terminal rendering of daily logs and summaries with rich."""

from __future__ import annotations

from datetime import date

from rich.console import Console
from rich.text import Text

from dailylog.journal.models import SummaryResult

BULLET = "• "


def _style_inline(line: str) -> Text:
    """Render ``**bold**`` spans; an unmatched ``**`` is left as-is."""
    text = Text()
    rest = line
    while True:
        start = rest.find("**")
        if start == -1:
            break
        end = rest.find("**", start + 2)
        if end == -1:
            break
        text.append(rest[:start])
        text.append(rest[start + 2 : end], style="bold")
        rest = rest[end + 2 :]
    text.append(rest)
    return text


def _style_line(line: str) -> Text:
    if line.startswith("# "):
        return Text(line, style="bold blue")
    if line.startswith("## "):
        return Text(line, style="bold cyan")
    if line.startswith("### "):
        return Text(line, style="bold green")
    if line.startswith("- ") or line.startswith("* "):
        text = Text(BULLET, style="yellow")
        text.append(line[2:])
        return text
    if line.startswith("```"):
        return Text(line, style="white on black")
    if not line.strip():
        return Text()
    return _style_inline(line)


def style_markdown(content: str) -> Text:
    """Apply terminal styling to markdown, line by line.

    Headers are colored by level, list bullets replaced with a yellow dot,
    code fences highlighted and ``**bold**`` spans emboldened.
    """
    return Text("\n").join(_style_line(line) for line in content.splitlines())


def print_log(console: Console, day: date, content: str, footer: str = "End of log entry") -> None:
    """Print a day's log between magenta banners."""
    console.print(Text(f"=== Log entry for {day.isoformat()} ===", style="bold magenta"))
    console.print(style_markdown(content))
    console.print(Text(f"=== {footer} ===", style="bold magenta"))


def print_summary(console: Console, result: SummaryResult) -> None:
    """Print summary statistics and the per-day entry titles."""
    console.print(Text(f"=== Log Summary for Past {result.days} Days ===", style="bold cyan"))

    if not result.has_entries:
        console.print(
            f"No log entries found for the past {result.days} days on configured days."
        )
        return

    console.print(Text("\nSummary Statistics:", style="bold green"))
    console.print(f"- Total days with entries: {result.total_entries}")
    console.print(
        f"- Logging consistency: {result.consistency_percent:.1f}% "
        f"({result.total_entries}/{result.eligible_days} days)"
    )

    console.print(Text("\nDaily Entries:", style="bold yellow"))
    for day in result.entries:
        console.print(
            Text(f"\n--- {day.date.strftime('%Y-%m-%d (%A)')} ---", style="bold magenta")
        )
        for line in day.lines:
            if day.titled:
                console.print(Text(f"  - {line}", style="blue"))
            else:
                console.print(Text(f"  {line}", style="white"))

    console.print(Text("\n=== End of Summary ===", style="bold cyan"))
