"""News generation package."""

from topic_news.news.models import NewsItem
from topic_news.news.provider import NewsGenerator

__all__ = ["NewsGenerator", "NewsItem"]
