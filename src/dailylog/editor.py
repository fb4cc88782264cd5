"""Acquiring entry text from the user's ``$EDITOR``.

The journal services depend only on the ``TextSource`` protocol, so tests
can substitute canned text for a real editor process.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

from dailylog.errors import EditorError

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vim"


class TextSource(Protocol):
    """Anything that can hand back free-form text from the user."""

    def read(self, seed: str = "") -> str:
        """Return user-written text, starting from ``seed``."""
        ...


class EditorTextSource:
    """Opens a temporary markdown file in an external editor and reads it back."""

    def __init__(self, editor: str | None = None) -> None:
        self._editor = editor or os.environ.get("EDITOR") or DEFAULT_EDITOR

    @property
    def command(self) -> list[str]:
        return shlex.split(self._editor)

    def read(self, seed: str = "") -> str:
        """Launch the editor on a temp file pre-filled with ``seed``.

        Blocks until the editor exits.

        Raises:
            EditorError: If the editor cannot be launched, exits non-zero,
                or leaves text that is not valid UTF-8.
        """
        fd, name = tempfile.mkstemp(prefix="dailylog-", suffix=".md")
        temp_path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(seed)

            cmd = [*self.command, str(temp_path)]
            logger.debug("Launching editor: %s", cmd)
            try:
                result = subprocess.run(cmd)
            except OSError as exc:
                raise EditorError(f"Failed to launch editor '{self._editor}': {exc}") from exc

            if result.returncode != 0:
                raise EditorError(
                    f"Editor '{self._editor}' exited with status {result.returncode}"
                )

            try:
                with temp_path.open(encoding="utf-8", newline="") as f:
                    return f.read()
            except UnicodeDecodeError as exc:
                raise EditorError(f"Editor output is not valid UTF-8: {exc.reason}") from exc
        finally:
            temp_path.unlink(missing_ok=True)
