"""NewsGenerator protocol defining the generation interface."""

from typing import Protocol

from topic_news.news.models import NewsItem


class NewsGenerator(Protocol):
    """Structural protocol for topic news generators."""

    def generate(self, topic: str) -> list[NewsItem]: ...
