"""Pure rendering of panel state into a view model."""

from __future__ import annotations

from pydantic import BaseModel

from topic_news.news.models import NewsItem
from topic_news.panel.state import PanelState, error_message, is_loading

TITLE = "Topic News Digest"
TOPIC_LABEL = "Enter a topic you are interested in:"
TOPIC_PLACEHOLDER = "e.g. AI, environment, sports"
FETCH_LABEL = "Get topic news"
FETCH_LOADING_LABEL = "Loading..."
COPY_LABEL = "Copy news"
PLACEHOLDER = 'No news to show yet. Enter a topic and press "Get topic news".'
DISCLAIMER = (
    "*Note: the news in this app is generated with the help of an AI model. "
    "Copyright in AI-generated content is a complex legal question. When publishing, "
    "mark the content as AI-assisted and make sure it does not infringe third-party rights."
)


class ButtonView(BaseModel):
    label: str
    disabled: bool


class PanelView(BaseModel):
    """Everything a surface needs to draw the panel."""

    title: str = TITLE
    topic: str
    topic_label: str = TOPIC_LABEL
    topic_placeholder: str = TOPIC_PLACEHOLDER
    fetch_button: ButtonView
    copy_button: ButtonView
    error: str | None = None
    items: list[NewsItem]
    placeholder: str | None = None
    disclaimer: str = DISCLAIMER
    loading: bool = False


def render_panel(topic: str, state: PanelState) -> PanelView:
    """Build the view for ``topic`` and ``state``."""
    loading = is_loading(state)
    error = error_message(state)
    items = list(state.items)
    show_placeholder = not items and not loading and error is None
    return PanelView(
        topic=topic,
        fetch_button=ButtonView(label=FETCH_LOADING_LABEL if loading else FETCH_LABEL, disabled=loading),
        copy_button=ButtonView(label=COPY_LABEL, disabled=not items),
        error=error,
        items=items,
        placeholder=PLACEHOLDER if show_placeholder else None,
        loading=loading,
    )


def render_text(view: PanelView) -> str:
    """Render ``view`` as plain text for the terminal."""
    lines = [view.title, "=" * len(view.title), f"Topic: {view.topic}", ""]
    if view.loading:
        lines.append(view.fetch_button.label)
    if view.error:
        lines.append(f"[error] {view.error}")
    for index, item in enumerate(view.items, start=1):
        lines.extend([f"{index}. {item.title}", f"   {item.summary}", ""])
    if view.placeholder:
        lines.append(view.placeholder)
    lines.extend(["", view.disclaimer])
    return "\n".join(lines)
