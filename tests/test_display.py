"""Tests for terminal rendering."""

from datetime import date

from rich.console import Console

from dailylog.display import print_log, print_summary, style_markdown
from dailylog.journal import DaySummary, SummaryResult


def _console() -> Console:
    return Console(record=True, width=120, force_terminal=False, color_system=None)


def _styles_for(text, fragment: str) -> list[str]:
    """Styles of spans covering exactly ``fragment``."""
    return [
        str(span.style)
        for span in text.spans
        if text.plain[span.start : span.end] == fragment
    ]


class TestStyleMarkdown:
    def test_plain_text_preserved(self):
        content = "## 09:00 - Stand-up\n\nNotes here"
        assert style_markdown(content).plain == content

    def test_header_levels(self):
        text = style_markdown("# One\n## Two\n### Three")
        assert "bold blue" in _styles_for(text, "# One")
        assert "bold cyan" in _styles_for(text, "## Two")
        assert "bold green" in _styles_for(text, "### Three")

    def test_list_bullets(self):
        text = style_markdown("- first\n* second")
        assert text.plain == "• first\n• second"
        assert "yellow" in _styles_for(text, "• ")

    def test_bold_spans(self):
        text = style_markdown("a **big** deal")
        assert text.plain == "a big deal"
        assert "bold" in _styles_for(text, "big")

    def test_unmatched_bold_marker_kept(self):
        assert style_markdown("a **dangling").plain == "a **dangling"

    def test_code_fence(self):
        text = style_markdown("```python")
        assert "white on black" in _styles_for(text, "```python")


class TestPrintLog:
    def test_banner_and_content(self):
        console = _console()
        print_log(console, date(2026, 2, 4), "## 09:00 - Stand-up\n")
        output = console.export_text()

        assert "=== Log entry for 2026-02-04 ===" in output
        assert "## 09:00 - Stand-up" in output
        assert "=== End of log entry ===" in output

    def test_custom_footer(self):
        console = _console()
        print_log(console, date(2026, 2, 4), "text", footer="End of existing entry")
        assert "=== End of existing entry ===" in console.export_text()


class TestPrintSummary:
    def test_no_entries(self):
        console = _console()
        print_summary(console, SummaryResult(days=7, eligible_days=5))
        output = console.export_text()

        assert "=== Log Summary for Past 7 Days ===" in output
        assert "No log entries found for the past 7 days on configured days." in output
        assert "End of Summary" not in output

    def test_statistics_and_days(self):
        result = SummaryResult(
            days=7,
            total_entries=2,
            eligible_days=5,
            entries=[
                DaySummary(date=date(2026, 10, 16), lines=["Friday work", "Review"]),
                DaySummary(date=date(2026, 10, 14), lines=["loose note"], titled=False),
            ],
        )
        console = _console()
        print_summary(console, result)
        output = console.export_text()

        assert "- Total days with entries: 2" in output
        assert "- Logging consistency: 40.0% (2/5 days)" in output
        assert "--- 2026-10-16 (Friday) ---" in output
        assert "  - Friday work" in output
        assert "  - Review" in output
        assert "--- 2026-10-14 (Wednesday) ---" in output
        assert "  loose note" in output
        assert "  - loose note" not in output
        assert "=== End of Summary ===" in output
        assert output.index("2026-10-16") < output.index("2026-10-14")
