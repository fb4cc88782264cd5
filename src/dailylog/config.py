"""Configuration loaded from ~/.dailylog.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dailylog.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".dailylog.toml"
DEFAULT_LOG_DIR = "~/.dailylog"
DEFAULT_SUMMARY_DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


class DailylogConfig(BaseModel):
    """Settings for a single dailylog invocation.

    Example ``~/.dailylog.toml``::

        log_dir = "~/notes/daily"
        git_repo = "git@github.com:me/dailylogs.git"
        git_auto_sync = true
        git_branch_name = "main"
        summary_days = ["mon", "tue", "wed", "thu", "fri"]
    """

    model_config = ConfigDict(frozen=True)

    log_dir: str = DEFAULT_LOG_DIR
    git_repo: str | None = None
    git_auto_sync: bool = False
    git_branch_name: str = "master"
    summary_days: list[str] = Field(default_factory=lambda: list(DEFAULT_SUMMARY_DAYS))

    @property
    def log_path(self) -> Path:
        """The log directory with ``~`` expanded.

        Raises:
            ConfigError: If ``log_dir`` starts with ``~`` and the home
                directory cannot be determined.
        """
        try:
            return Path(self.log_dir).expanduser()
        except RuntimeError as exc:
            raise ConfigError(f"Cannot expand log_dir {self.log_dir!r}: {exc}") from exc

    @property
    def auto_sync_enabled(self) -> bool:
        return self.git_auto_sync and bool(self.git_repo)


def default_config_path() -> Path:
    """Return ``~/.dailylog.toml``.

    Raises:
        ConfigError: If the home directory cannot be determined.
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError(f"Cannot determine home directory: {exc}") from exc
    return home / CONFIG_FILENAME


def load_config(path: str | Path | None = None) -> DailylogConfig:
    """Load configuration from a TOML file.

    A missing or unparseable file yields the defaults; it is never an error.
    Environment variables are applied on top.

    Args:
        path: Explicit path to a TOML file. Defaults to ``~/.dailylog.toml``.

    Returns:
        Merged DailylogConfig.

    Raises:
        ConfigError: If no path is given and the home directory is unknown.
    """
    toml_path = Path(path) if path is not None else default_config_path()

    data: dict[str, object] = {}
    if toml_path.exists():
        data = _load_toml(toml_path)
        logger.info("Loaded config from %s", toml_path)
    elif path is not None:
        logger.warning("Config file not found: %s", toml_path)

    config = _validate(data, source=toml_path)
    return _apply_env_vars(config)


def merge_cli_overrides(config: DailylogConfig, **cli_kwargs: object) -> DailylogConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only values that are not None are applied.
    """
    data = config.model_dump()

    mapping: dict[str, str] = {
        "log_dir": "log_dir",
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            data[mapping[key]] = str(value)

    return DailylogConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _validate(data: dict[str, object], source: Path) -> DailylogConfig:
    if not data:
        return DailylogConfig()
    try:
        return DailylogConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid config in %s, using defaults: %s", source, exc)
        return DailylogConfig()


def _apply_env_vars(config: DailylogConfig) -> DailylogConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, str] = {
        "DAILYLOG_LOG_DIR": "log_dir",
        "DAILYLOG_GIT_REPO": "git_repo",
        "DAILYLOG_GIT_BRANCH": "git_branch_name",
    }

    for env_var, field in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[field] = value

    auto_sync_raw = os.environ.get("DAILYLOG_GIT_AUTO_SYNC")
    if auto_sync_raw is not None:
        data["git_auto_sync"] = auto_sync_raw.lower() in ("true", "1", "yes")

    return DailylogConfig.model_validate(data)
