"""Git synchronization of the log directory.

All repository access goes through the ``VersionControl`` protocol.
``GitRepository`` implements it by shelling out to the ``git`` binary.
"""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Protocol

from dailylog.config import CONFIG_FILENAME, DailylogConfig
from dailylog.errors import GitError

logger = logging.getLogger(__name__)

NOT_A_REPO_MESSAGE = "Not a git repository. Use 'dailylog sync' to set up git sync first."


class VersionControl(Protocol):
    """Repository operations needed to sync the log directory."""

    def is_repo(self) -> bool: ...

    def ensure_repo(self, url: str, branch: str) -> bool: ...

    def pull(self, branch: str) -> None: ...

    def push(self, branch: str) -> bool: ...


class GitRepository:
    """``VersionControl`` backed by the git command line."""

    def __init__(self, log_dir: str | Path, git_binary: str = "git") -> None:
        self.log_dir = Path(log_dir)
        self._git = git_binary

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run a git command in the log directory.

        Raises:
            GitError: If git is missing or the command exits non-zero.
        """
        cmd = [self._git, *args]
        logger.debug("Running %s in %s", cmd, self.log_dir)
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.log_dir),
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise GitError(f"Could not run git; is '{self._git}' on the PATH? ({exc})") from exc

        if result.returncode != 0:
            raise GitError(f"Git command failed ({' '.join(args)}): {result.stderr.strip()}")
        return result

    def is_repo(self) -> bool:
        return (self.log_dir / ".git").exists()

    def ensure_repo(self, url: str, branch: str) -> bool:
        """Initialize the log directory as a clone-like repo of ``url``.

        A failed first pull is expected for an empty remote; the branch is
        then created locally instead.

        Returns:
            True if a repository was initialized, False if one already existed.
        """
        if self.is_repo():
            logger.debug("Git repository already exists in %s", self.log_dir)
            return False

        logger.info("Initializing git repository in %s", self.log_dir)
        self._run("init")
        self._run("remote", "add", "origin", url)
        try:
            self._run("pull", "origin", branch)
        except GitError as exc:
            logger.info("Could not pull from remote (normal for new repos): %s", exc)
            self._run("checkout", "-b", branch)
        return True

    def pull(self, branch: str) -> None:
        if not self.is_repo():
            raise GitError(NOT_A_REPO_MESSAGE)
        self._run("pull", "origin", branch)

    def push(self, branch: str, now: datetime | None = None) -> bool:
        """Commit all log files and push them.

        Returns:
            False if there was nothing to commit, True after a push.
        """
        if not self.is_repo():
            raise GitError(NOT_A_REPO_MESSAGE)

        self._run("add", "*.md")
        status = self._run("status", "--porcelain")
        if not status.stdout.strip():
            return False

        stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M")
        self._run("commit", "-m", f"Update logs - {stamp}")
        self._run("push", "origin", branch)
        return True


def git_sync(config: DailylogConfig, vcs: VersionControl) -> bool:
    """Set up the repository if needed, then pull and push.

    Returns:
        True if local changes were pushed.

    Raises:
        GitError: If no remote is configured or any git step fails.
    """
    if not config.git_repo:
        raise GitError(
            "No git repository configured. Please add "
            f"'git_repo = \"your-repo-url\"' to ~/{CONFIG_FILENAME}"
        )

    if not vcs.is_repo():
        vcs.ensure_repo(config.git_repo, config.git_branch_name)

    vcs.pull(config.git_branch_name)
    return vcs.push(config.git_branch_name)


def auto_sync_if_enabled(config: DailylogConfig, vcs: VersionControl) -> bool:
    """Sync after a write when ``git_auto_sync`` is on.

    Failures are logged and swallowed so they never block journaling.

    Returns:
        True if a sync ran and succeeded.
    """
    if not config.auto_sync_enabled:
        return False
    try:
        git_sync(config, vcs)
    except GitError as exc:
        logger.warning("Auto-sync failed: %s", exc)
        return False
    return True
