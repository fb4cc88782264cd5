"""dailylog - a minimal journaling tool with git sync."""

__version__ = "0.1.0"
