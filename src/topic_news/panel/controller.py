"""NewsPanel: owned state plus the fetch and copy actions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from topic_news.config import DEFAULT_TOPIC
from topic_news.errors import ClipboardError, NewsPanelError, TransportError
from topic_news.panel.state import Failed, Idle, Loaded, Loading, PanelState, is_loading

if TYPE_CHECKING:
    from collections.abc import Iterable

    from topic_news.clipboard import ClipboardSink
    from topic_news.news.models import NewsItem
    from topic_news.news.provider import NewsGenerator

logger = logging.getLogger(__name__)

EMPTY_TOPIC_MESSAGE = "Please enter a topic."
NOTHING_TO_COPY_MESSAGE = "Nothing to copy."
COPY_OK_MESSAGE = "News copied to clipboard!"
COPY_FAILED_MESSAGE = "Copy failed, please copy manually."

_RECORD_SEPARATOR = "\n---\n\n"


def format_clipboard_text(items: Iterable[NewsItem]) -> str:
    """Render items as ``Title:``/``Summary:`` blocks separated by ``---`` lines."""
    return _RECORD_SEPARATOR.join(f"Title: {item.title}\nSummary: {item.summary}\n" for item in items)


@dataclass(frozen=True)
class CopyResult:
    """User-visible acknowledgment of a copy action."""

    ok: bool
    message: str
    text: str = ""


class NewsPanel:
    """The topic news panel.

    Owns the topic and a single :data:`PanelState`. The generator call is
    blocking, so :meth:`fetch_news` runs it in a worker thread and the event
    loop stays responsive.

    Starting a fetch supersedes any fetch still in flight: each request takes
    a new generation number and only the latest generation may commit its
    result. The last fetch started wins, regardless of completion order.
    """

    def __init__(
        self,
        generator: NewsGenerator,
        clipboard: ClipboardSink,
        *,
        topic: str = DEFAULT_TOPIC,
    ) -> None:
        self._generator = generator
        self._clipboard = clipboard
        self._topic = topic
        self._state: PanelState = Idle()
        self._generation = 0
        self._mounted = False

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def state(self) -> PanelState:
        return self._state

    @property
    def items(self) -> tuple[NewsItem, ...]:
        return self._state.items

    @property
    def mounted(self) -> bool:
        return self._mounted

    def set_topic(self, text: str) -> None:
        """Replace the topic verbatim; trimming happens only at fetch time."""
        self._topic = text

    async def mount(self) -> PanelState:
        """Run the initial fetch with the current topic, once."""
        if self._mounted:
            return self._state
        self._mounted = True
        return await self.fetch_news()

    async def fetch_news(self, topic: str | None = None) -> PanelState:
        """Fetch news for ``topic`` (default: the current topic) and return the new state."""
        if topic is not None:
            self._topic = topic
        self._generation += 1
        generation = self._generation
        query = self._topic.strip()
        if not query:
            self._state = Failed(EMPTY_TOPIC_MESSAGE, self._state.items)
            return self._state

        self._state = Loading(self._state.items)
        try:
            items = await asyncio.to_thread(self._generator.generate, query)
        except NewsPanelError as exc:
            if isinstance(exc, TransportError):
                logger.error("News fetch failed for topic %r: %s", query, exc)
            else:
                logger.warning("News fetch failed for topic %r: %s", query, exc)
            next_state: PanelState = Failed(str(exc), self._state.items)
        except Exception as exc:
            logger.exception("Unexpected error while fetching news for topic %r", query)
            next_state = Failed(f"Error while fetching news: {exc}", self._state.items)
        else:
            next_state = Loaded(tuple(items))

        if generation != self._generation:
            logger.debug("Dropping superseded fetch #%d for topic %r", generation, query)
            return self._state
        self._state = next_state
        return self._state

    def copy_to_clipboard(self) -> CopyResult:
        """Copy the displayed items to the clipboard."""
        items = self._state.items
        if not items:
            # A fetch in flight owns the state until it commits.
            if not is_loading(self._state):
                self._state = Failed(NOTHING_TO_COPY_MESSAGE, items)
            return CopyResult(ok=False, message=NOTHING_TO_COPY_MESSAGE)

        text = format_clipboard_text(items)
        try:
            self._clipboard.write(text)
        except ClipboardError:
            logger.exception("Unable to copy news to clipboard")
            return CopyResult(ok=False, message=COPY_FAILED_MESSAGE, text=text)
        return CopyResult(ok=True, message=COPY_OK_MESSAGE, text=text)
