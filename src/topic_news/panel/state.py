"""Tagged request state for the news panel.

Each variant carries the list currently on screen, so a failed fetch keeps
showing the previous items. ``Loading`` has no error slot, which rules out
"still loading with a stale error" by construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from topic_news.news.models import NewsItem


@dataclass(frozen=True)
class Idle:
    items: tuple[NewsItem, ...] = ()
    kind: Literal["idle"] = "idle"


@dataclass(frozen=True)
class Loading:
    items: tuple[NewsItem, ...] = ()
    kind: Literal["loading"] = "loading"


@dataclass(frozen=True)
class Loaded:
    items: tuple[NewsItem, ...] = ()
    kind: Literal["loaded"] = "loaded"


@dataclass(frozen=True)
class Failed:
    message: str
    items: tuple[NewsItem, ...] = ()
    kind: Literal["failed"] = "failed"


PanelState = Idle | Loading | Loaded | Failed


def is_loading(state: PanelState) -> bool:
    return isinstance(state, Loading)


def error_message(state: PanelState) -> str | None:
    """Return the banner text for ``state``, or None when there is no error."""
    return state.message if isinstance(state, Failed) else None
