"""Exception types raised by dailylog."""


class DailylogError(Exception):
    """Base error for dailylog failures surfaced to the user."""


class ConfigError(DailylogError):
    """Raised when configuration cannot be resolved (e.g. no home directory)."""


class EditorError(DailylogError):
    """Raised when the external editor cannot be launched or fails."""


class GitError(DailylogError):
    """Raised when a git operation fails."""


class LogFileError(DailylogError):
    """Raised when a daily log file exists but cannot be decoded."""
