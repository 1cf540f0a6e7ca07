"""FastAPI web surface for the news panel."""

from typing import Any

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse
from jinja2 import Environment, PackageLoader, select_autoescape
from pydantic import BaseModel

from topic_news import __version__
from topic_news.clipboard import BrowserClipboard
from topic_news.panel.controller import NewsPanel
from topic_news.panel.view import render_panel

_templates = Environment(
    loader=PackageLoader("topic_news.dashboard", "templates"),
    autoescape=select_autoescape(["html"]),
)


class TopicRequest(BaseModel):
    topic: str


class FetchRequest(BaseModel):
    topic: str | None = None


def create_app(panel: NewsPanel, *, browser_clipboard: BrowserClipboard | None = None) -> FastAPI:
    """Create and return the FastAPI application.

    Args:
        panel: The panel whose state the page displays and mutates.
        browser_clipboard: When the panel copies through the browser, the
            sink it writes to; pending text is returned to the page, which
            performs the copy itself.

    Returns:
        A FastAPI application instance.
    """
    app = FastAPI(title="Topic News", version=__version__)

    def _view_payload() -> dict[str, Any]:
        return render_panel(panel.topic, panel.state).model_dump()

    @app.get("/api/health")
    def api_health() -> JSONResponse:
        return JSONResponse({"status": "ok", "version": __version__})

    @app.get("/api/state")
    def api_state() -> JSONResponse:
        return JSONResponse(_view_payload())

    @app.post("/api/topic")
    def api_topic(body: TopicRequest) -> JSONResponse:
        panel.set_topic(body.topic)
        return JSONResponse(_view_payload())

    @app.post("/api/fetch")
    async def api_fetch(body: FetchRequest | None = None) -> JSONResponse:
        await panel.fetch_news(body.topic if body is not None else None)
        return JSONResponse(_view_payload())

    @app.post("/api/copy")
    def api_copy() -> JSONResponse:
        if browser_clipboard is not None:
            browser_clipboard.pending = None
        result = panel.copy_to_clipboard()
        payload: dict[str, Any] = {"ok": result.ok, "message": result.message, "browser_text": None}
        if browser_clipboard is not None and browser_clipboard.pending is not None:
            payload["browser_text"] = browser_clipboard.pending
        payload["view"] = _view_payload()
        return JSONResponse(payload)

    @app.get("/", response_class=HTMLResponse)
    async def panel_page() -> HTMLResponse:
        await panel.mount()
        view = render_panel(panel.topic, panel.state)
        return HTMLResponse(_templates.get_template("panel.html").render(view=view))

    return app
