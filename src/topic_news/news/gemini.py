"""Gemini ``generateContent`` client with structured JSON output.

The request asks the model for a JSON array of ``{title, summary}`` objects
via ``responseSchema``. The reply envelope carries that array as a
JSON-encoded string at ``candidates[0].content.parts[0].text``, so the
payload is decoded twice: once for the envelope, once for the items.
"""

from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from topic_news.config import GeminiConfig
from topic_news.errors import PayloadDecodeError, ResponseShapeError, TransportError
from topic_news.news.models import NewsItem

logger = logging.getLogger(__name__)

NEWS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING"},
            "summary": {"type": "STRING"},
        },
        "propertyOrdering": ["title", "summary"],
    },
}


def build_prompt(topic: str, *, item_count: int = 5) -> str:
    """Return the natural-language instruction for ``topic``."""
    return (
        f'Generate {item_count} news headlines with brief summaries about today\'s news on the topic "{topic}". '
        "Each item must contain a title and a short summary. "
        "Return a JSON array where every object has 'title' and 'summary' properties."
    )


def build_payload(topic: str, *, item_count: int = 5) -> dict[str, Any]:
    """Build the ``generateContent`` request body for ``topic``."""
    return {
        "contents": [{"role": "user", "parts": [{"text": build_prompt(topic, item_count=item_count)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": NEWS_RESPONSE_SCHEMA,
        },
    }


def extract_text(envelope: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` from a response envelope.

    Raises :class:`ResponseShapeError` when any step of the path is missing.
    """
    try:
        candidates = envelope["candidates"]
        parts = candidates[0]["content"]["parts"]
        text = parts[0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ResponseShapeError("Unable to fetch news. Please try again later.") from exc
    if not isinstance(text, str):
        raise ResponseShapeError("Unable to fetch news. Please try again later.")
    return text


def parse_news_items(text: str) -> list[NewsItem]:
    """Decode the inner JSON payload into news items, preserving order."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadDecodeError(f"Error while fetching news: {exc}") from exc
    if not isinstance(data, list):
        raise PayloadDecodeError(f"Error while fetching news: expected a JSON array, got {type(data).__name__}")
    try:
        return [NewsItem.model_validate(entry) for entry in data]
    except ValidationError as exc:
        raise PayloadDecodeError(f"Error while fetching news: {exc.error_count()} invalid item field(s)") from exc


class GeminiClient:
    """Blocking client for the Gemini ``generateContent`` endpoint.

    All HTTP goes through :meth:`_post`, a single chokepoint that is easy
    to mock in tests.
    """

    def __init__(self, config: GeminiConfig | None = None, *, api_key: str | None = None) -> None:
        self._config = config if config is not None else GeminiConfig()
        self._api_key = api_key if api_key is not None else os.environ.get(self._config.api_key_env, "")
        if not self._api_key:
            logger.info("%s not set; sending requests without an API key", self._config.api_key_env)

    @property
    def endpoint(self) -> str:
        base = self._config.base_url.rstrip("/")
        return f"{base}/models/{self._config.model}:generateContent?key={quote(self._api_key, safe='')}"

    def generate(self, topic: str) -> list[NewsItem]:
        """Request ``item_count`` generated news items about ``topic``."""
        payload = build_payload(topic, item_count=self._config.item_count)
        raw = self._post(payload)
        try:
            envelope = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Gemini returned malformed JSON for topic %r", topic, extra={"extra_data": {"body": raw}})
            raise ResponseShapeError(f"Error while fetching news: malformed response ({exc})") from exc
        try:
            text = extract_text(envelope)
        except ResponseShapeError:
            logger.error(
                "Unexpected Gemini response structure for topic %r",
                topic,
                extra={"extra_data": {"envelope": envelope}},
            )
            raise
        items = parse_news_items(text)
        logger.debug("Gemini returned %d items for topic %r", len(items), topic)
        return items

    def _post(self, payload: dict[str, Any]) -> str:
        """POST ``payload`` as JSON and return the response body.

        Raises :class:`TransportError` on network failures and non-2xx
        responses.
        """
        req = urllib.request.Request(
            self.endpoint,
            data=json.dumps(payload).encode(),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self._config.timeout) as resp:  # noqa: S310
                return resp.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            raise TransportError(f"Error while fetching news: HTTP {exc.code} {exc.reason}") from exc
        except (urllib.error.URLError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            raise TransportError(f"Error while fetching news: {reason}") from exc
