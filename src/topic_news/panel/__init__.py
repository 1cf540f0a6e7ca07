"""The single-screen news panel: state, actions, and rendering."""

from topic_news.panel.controller import CopyResult, NewsPanel, format_clipboard_text
from topic_news.panel.state import Failed, Idle, Loaded, Loading, PanelState
from topic_news.panel.view import PanelView, render_panel, render_text

__all__ = [
    "CopyResult",
    "Failed",
    "Idle",
    "Loaded",
    "Loading",
    "NewsPanel",
    "PanelState",
    "PanelView",
    "format_clipboard_text",
    "render_panel",
    "render_text",
]
