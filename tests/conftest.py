"""Shared fixtures and test doubles."""

from pathlib import Path

import pytest

from dailylog.errors import GitError


class FakeTextSource:
    """TextSource that returns canned text and records the seeds it was given."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.seeds: list[str] = []

    def read(self, seed: str = "") -> str:
        self.seeds.append(seed)
        return self.text


class FakeVersionControl:
    """In-memory VersionControl that records the operations performed."""

    def __init__(self, *, repo: bool = True, fail: bool = False, changes: bool = True) -> None:
        self.repo = repo
        self.fail = fail
        self.changes = changes
        self.calls: list[tuple[str, ...]] = []

    def is_repo(self) -> bool:
        return self.repo

    def ensure_repo(self, url: str, branch: str) -> bool:
        self.calls.append(("ensure_repo", url, branch))
        if self.repo:
            return False
        self.repo = True
        return True

    def pull(self, branch: str) -> None:
        self.calls.append(("pull", branch))
        if self.fail:
            raise GitError("Git command failed (pull origin main): remote hung up")

    def push(self, branch: str) -> bool:
        self.calls.append(("push", branch))
        return self.changes


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    path = tmp_path / "logs"
    path.mkdir()
    return path


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory and clear dailylog env overrides."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    for key in (
        "DAILYLOG_LOG_DIR",
        "DAILYLOG_GIT_REPO",
        "DAILYLOG_GIT_BRANCH",
        "DAILYLOG_GIT_AUTO_SYNC",
        "EDITOR",
    ):
        monkeypatch.delenv(key, raising=False)
    return home_dir


@pytest.fixture
def make_source():
    """Factory for FakeTextSource."""
    return FakeTextSource


@pytest.fixture
def make_vcs():
    """Factory for FakeVersionControl."""
    return FakeVersionControl
