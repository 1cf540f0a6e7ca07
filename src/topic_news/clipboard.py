"""Clipboard sinks for exporting rendered news text."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from topic_news.errors import ClipboardError

logger = logging.getLogger(__name__)

# Tried in order; the first command found on PATH wins.
_PLATFORM_COMMANDS: dict[str, list[list[str]]] = {
    "darwin": [["pbcopy"]],
    "win32": [["clip"]],
    "linux": [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ],
}

# `clip` reads UTF-16 with a BOM; everything else expects UTF-8.
_COMMAND_ENCODINGS: dict[str, str] = {"clip": "utf-16"}


class ClipboardSink(ABC):
    """Base class for clipboard destinations."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Put ``text`` on the clipboard. Raises :class:`ClipboardError` on failure."""


class SystemClipboard(ClipboardSink):
    """Pipe text into the platform's clipboard command."""

    def __init__(self, command: list[str] | None = None, *, timeout: float = 5.0) -> None:
        self._command = command
        self._timeout = timeout

    def resolve_command(self) -> list[str]:
        """Return the clipboard command to use on this platform."""
        if self._command is not None:
            return self._command
        platform = "linux" if sys.platform.startswith("linux") else sys.platform
        for candidate in _PLATFORM_COMMANDS.get(platform, []):
            if shutil.which(candidate[0]):
                return candidate
        raise ClipboardError(f"No clipboard command available on {sys.platform}")

    def write(self, text: str) -> None:
        args = self.resolve_command()
        # Encode explicitly so the locale encoding never decides what reaches the clipboard.
        encoding = _COMMAND_ENCODINGS.get(Path(args[0]).stem.lower(), "utf-8")
        try:
            data = text.encode(encoding)
        except UnicodeError as exc:
            raise ClipboardError(f"Text cannot be encoded as {encoding} for {args[0]}: {exc}") from exc
        try:
            result = subprocess.run(  # noqa: S603
                args, input=data, capture_output=True, check=False, timeout=self._timeout
            )
        except subprocess.TimeoutExpired as exc:
            raise ClipboardError(f"{args[0]} timed out after {self._timeout}s") from exc
        except OSError as exc:
            raise ClipboardError(f"{args[0]} could not be started: {exc}") from exc
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise ClipboardError(f"{args[0]} failed (rc={result.returncode}): {stderr}")


class BrowserClipboard(ClipboardSink):
    """Hand the text over to the web page, which performs the actual copy.

    The page tries ``navigator.clipboard.writeText`` first and falls back to
    a hidden textarea with ``document.execCommand("copy")``, which still
    works inside sandboxed iframes.
    """

    def __init__(self) -> None:
        self.pending: str | None = None

    def write(self, text: str) -> None:
        self.pending = text


def build_clipboard(backend: str) -> ClipboardSink:
    """Return the clipboard sink named by ``backend``."""
    if backend == "browser":
        return BrowserClipboard()
    if backend != "system":
        logger.warning("Unknown clipboard backend %r; using system", backend)
    return SystemClipboard()
