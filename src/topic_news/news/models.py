"""Data models for generated news items."""

from pydantic import BaseModel, ConfigDict


class NewsItem(BaseModel):
    """A single generated headline and its summary."""

    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
