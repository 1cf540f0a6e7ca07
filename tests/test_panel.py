"""Tests for the NewsPanel controller and its tagged state."""

import asyncio
import sys
import threading
from pathlib import Path
from unittest.mock import patch

from topic_news.clipboard import SystemClipboard
from topic_news.errors import ClipboardError, PayloadDecodeError, ResponseShapeError, TransportError
from topic_news.news.models import NewsItem
from topic_news.panel.controller import (
    COPY_FAILED_MESSAGE,
    COPY_OK_MESSAGE,
    EMPTY_TOPIC_MESSAGE,
    NOTHING_TO_COPY_MESSAGE,
    NewsPanel,
    format_clipboard_text,
)
from topic_news.panel.state import Failed, Idle, Loaded, Loading, error_message, is_loading

from fakes import FakeGenerator, RecordingClipboard

A_B = NewsItem(title="A", summary="B")
C_D = NewsItem(title="C", summary="D")


def _panel(generator: FakeGenerator, clipboard: RecordingClipboard | None = None, topic: str = "Technology") -> NewsPanel:
    return NewsPanel(generator, clipboard if clipboard is not None else RecordingClipboard(), topic=topic)


# ---------------------------------------------------------------------------
# State helpers
# ---------------------------------------------------------------------------


def test_state_helpers() -> None:
    assert not is_loading(Idle())
    assert is_loading(Loading())
    assert error_message(Loaded((A_B,))) is None
    assert error_message(Failed("boom", (A_B,))) == "boom"
    assert Failed("boom", (A_B,)).items == (A_B,)


def test_initial_state_is_idle(generator: FakeGenerator) -> None:
    panel = _panel(generator)
    assert panel.state == Idle()
    assert panel.items == ()
    assert panel.topic == "Technology"


# ---------------------------------------------------------------------------
# Topic input
# ---------------------------------------------------------------------------


def test_set_topic_is_verbatim(generator: FakeGenerator) -> None:
    panel = _panel(generator)
    panel.set_topic("  space  ")
    assert panel.topic == "  space  "


def test_fetch_trims_topic_for_request(generator: FakeGenerator) -> None:
    panel = _panel(generator, topic="  space  ")
    asyncio.run(panel.fetch_news())
    assert generator.calls == ["space"]
    assert panel.topic == "  space  "


# ---------------------------------------------------------------------------
# Fetch controller
# ---------------------------------------------------------------------------


def test_empty_topic_does_not_call_network(generator: FakeGenerator) -> None:
    for topic in ("", "   ", "\t\n"):
        panel = _panel(generator, topic=topic)
        state = asyncio.run(panel.fetch_news())
        assert state == Failed(EMPTY_TOPIC_MESSAGE, ())
        assert not is_loading(state)
    assert generator.calls == []


def test_empty_topic_keeps_displayed_items() -> None:
    generator = FakeGenerator([[A_B]])
    panel = _panel(generator)
    asyncio.run(panel.fetch_news())
    state = asyncio.run(panel.fetch_news(" "))
    assert state == Failed(EMPTY_TOPIC_MESSAGE, (A_B,))
    assert len(generator.calls) == 1


def test_successful_fetch_replaces_list_in_order() -> None:
    items = [NewsItem(title=f"T{i}", summary=f"S{i}") for i in range(5)]
    generator = FakeGenerator([items])
    panel = _panel(generator)
    state = asyncio.run(panel.fetch_news())
    assert state == Loaded(tuple(items))
    assert list(panel.items) == items
    assert not is_loading(panel.state)


def test_successful_fetch_swaps_whole_list() -> None:
    generator = FakeGenerator([[A_B, C_D], [C_D]])
    panel = _panel(generator)
    asyncio.run(panel.fetch_news())
    asyncio.run(panel.fetch_news())
    assert panel.items == (C_D,)


def test_fetch_with_topic_argument_updates_topic(generator: FakeGenerator) -> None:
    panel = _panel(generator)
    asyncio.run(panel.fetch_news("Sports"))
    assert panel.topic == "Sports"
    assert generator.calls == ["Sports"]


def test_shape_error_keeps_list_and_sets_error() -> None:
    generator = FakeGenerator([[A_B], ResponseShapeError("Unable to fetch news. Please try again later.")])
    panel = _panel(generator)
    asyncio.run(panel.fetch_news())
    state = asyncio.run(panel.fetch_news())
    assert isinstance(state, Failed)
    assert state.message == "Unable to fetch news. Please try again later."
    assert state.items == (A_B,)
    assert not is_loading(state)


def test_transport_error_message_includes_reason() -> None:
    generator = FakeGenerator([TransportError("Error while fetching news: HTTP 500 Internal Server Error")])
    panel = _panel(generator)
    state = asyncio.run(panel.fetch_news())
    assert isinstance(state, Failed)
    assert "HTTP 500" in state.message
    assert state.items == ()


def test_decode_error_is_reported() -> None:
    generator = FakeGenerator([PayloadDecodeError("Error while fetching news: Expecting value")])
    panel = _panel(generator)
    state = asyncio.run(panel.fetch_news())
    assert isinstance(state, Failed)
    assert "Expecting value" in state.message


def test_unexpected_exception_still_ends_loading() -> None:
    generator = FakeGenerator([RuntimeError("kaboom")])
    panel = _panel(generator)
    state = asyncio.run(panel.fetch_news())
    assert isinstance(state, Failed)
    assert "kaboom" in state.message


def test_new_fetch_clears_previous_error() -> None:
    generator = FakeGenerator([TransportError("down"), [A_B]])
    panel = _panel(generator)
    asyncio.run(panel.fetch_news())
    assert isinstance(panel.state, Failed)

    seen: list[object] = []
    generator.on_call = lambda topic: seen.append(panel.state)
    asyncio.run(panel.fetch_news())
    assert seen == [Loading(())]
    assert panel.state == Loaded((A_B,))


# ---------------------------------------------------------------------------
# Mount and repeated fetches
# ---------------------------------------------------------------------------


def test_mount_fetches_default_topic_once(generator: FakeGenerator) -> None:
    panel = _panel(generator, topic="Technology")
    asyncio.run(panel.mount())
    asyncio.run(panel.mount())
    assert panel.mounted
    assert generator.calls == ["Technology"]


def test_each_fetch_issues_one_request_and_is_loading_in_between(generator: FakeGenerator) -> None:
    panel = _panel(generator)
    loading_during_call: list[bool] = []
    generator.on_call = lambda topic: loading_during_call.append(is_loading(panel.state))

    asyncio.run(panel.mount())
    panel.set_topic("Health")
    asyncio.run(panel.fetch_news())
    panel.set_topic("Finance")
    asyncio.run(panel.fetch_news())

    assert generator.calls == ["Technology", "Health", "Finance"]
    assert loading_during_call == [True, True, True]
    assert not is_loading(panel.state)


def test_newer_fetch_supersedes_in_flight_fetch(gate: threading.Event) -> None:
    started = threading.Event()
    generator = FakeGenerator([[A_B], [C_D]])

    def block_first(topic: str) -> None:
        if topic == "slow":
            started.set()
            gate.wait(timeout=5)

    generator.on_call = block_first
    panel = _panel(generator)

    async def scenario() -> None:
        slow = asyncio.create_task(panel.fetch_news("slow"))
        await asyncio.to_thread(started.wait, 5)
        await panel.fetch_news("fast")
        assert panel.state == Loaded((C_D,))
        gate.set()
        await slow

    asyncio.run(scenario())
    assert generator.calls == ["slow", "fast"]
    assert panel.state == Loaded((C_D,))
    assert panel.topic == "fast"


def test_empty_topic_supersedes_in_flight_fetch(gate: threading.Event) -> None:
    started = threading.Event()
    generator = FakeGenerator([[A_B]])

    def block(topic: str) -> None:
        started.set()
        gate.wait(timeout=5)

    generator.on_call = block
    panel = _panel(generator)

    async def scenario() -> None:
        slow = asyncio.create_task(panel.fetch_news("slow"))
        await asyncio.to_thread(started.wait, 5)
        await panel.fetch_news("")
        gate.set()
        await slow

    asyncio.run(scenario())
    assert panel.state == Failed(EMPTY_TOPIC_MESSAGE, ())


# ---------------------------------------------------------------------------
# Clipboard export
# ---------------------------------------------------------------------------


def test_format_clipboard_text_exact() -> None:
    assert format_clipboard_text([A_B, C_D]) == "Title: A\nSummary: B\n\n---\n\nTitle: C\nSummary: D\n"


def test_format_clipboard_text_single_item() -> None:
    assert format_clipboard_text([A_B]) == "Title: A\nSummary: B\n"


def test_copy_with_empty_list_does_not_touch_clipboard(generator: FakeGenerator, clipboard: RecordingClipboard) -> None:
    panel = _panel(generator, clipboard)
    result = panel.copy_to_clipboard()
    assert not result.ok
    assert result.message == NOTHING_TO_COPY_MESSAGE
    assert clipboard.writes == []
    assert panel.state == Failed(NOTHING_TO_COPY_MESSAGE, ())


def test_copy_writes_serialized_items(clipboard: RecordingClipboard) -> None:
    panel = _panel(FakeGenerator([[A_B, C_D]]), clipboard)
    asyncio.run(panel.fetch_news())
    result = panel.copy_to_clipboard()
    assert result.ok
    assert result.message == COPY_OK_MESSAGE
    assert clipboard.writes == ["Title: A\nSummary: B\n\n---\n\nTitle: C\nSummary: D\n"]
    assert panel.state == Loaded((A_B, C_D))


def test_copy_failure_is_acknowledged_not_raised() -> None:
    clipboard = RecordingClipboard(error=ClipboardError("xclip failed"))
    panel = _panel(FakeGenerator([[A_B]]), clipboard)
    asyncio.run(panel.fetch_news())
    result = panel.copy_to_clipboard()
    assert not result.ok
    assert result.message == COPY_FAILED_MESSAGE
    assert result.text == "Title: A\nSummary: B\n"
    assert panel.state == Loaded((A_B,))


def test_copy_with_empty_list_during_fetch_keeps_loading(gate: threading.Event, clipboard: RecordingClipboard) -> None:
    started = threading.Event()
    generator = FakeGenerator([[A_B]])

    def block(topic: str) -> None:
        started.set()
        gate.wait(timeout=5)

    generator.on_call = block
    panel = _panel(generator, clipboard)

    async def scenario() -> None:
        pending = asyncio.create_task(panel.fetch_news())
        await asyncio.to_thread(started.wait, 5)
        result = panel.copy_to_clipboard()
        assert result.message == NOTHING_TO_COPY_MESSAGE
        assert is_loading(panel.state)
        gate.set()
        await pending

    asyncio.run(scenario())
    assert clipboard.writes == []
    assert panel.state == Loaded((A_B,))


def test_copy_non_ascii_items_through_system_clipboard(tmp_path: Path) -> None:
    out = tmp_path / "clipboard.bin"
    script = "import sys; open(sys.argv[1], 'wb').write(sys.stdin.buffer.read())"
    item = NewsItem(title="科技新聞", summary="摘要")
    panel = NewsPanel(FakeGenerator([[item]]), SystemClipboard([sys.executable, "-c", script, str(out)]))
    asyncio.run(panel.fetch_news())
    result = panel.copy_to_clipboard()
    assert result.ok
    assert out.read_bytes().decode("utf-8") == "Title: 科技新聞\nSummary: 摘要\n"


def test_transport_failure_logged_once() -> None:
    panel = _panel(FakeGenerator([TransportError("Error while fetching news: timed out")]))
    with patch("topic_news.panel.controller.logger") as mock_logger:
        asyncio.run(panel.fetch_news())
    mock_logger.error.assert_called_once()
    mock_logger.exception.assert_not_called()
