"""CLI entry point for topic-news."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from topic_news import __version__
from topic_news.clipboard import BrowserClipboard, ClipboardSink, build_clipboard
from topic_news.config import AppConfig, load_config
from topic_news.news.gemini import GeminiClient
from topic_news.panel.controller import NewsPanel
from topic_news.panel.state import Failed
from topic_news.panel.view import render_panel, render_text

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"topic-news {__version__}")
        raise typer.Exit()


app = typer.Typer(name="topic-news", help="Topic News — AI-generated headlines for a topic")


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Show version and exit", callback=_version_callback, is_eager=True)
    ] = False,
) -> None:
    """Topic News — AI-generated headlines for a topic."""


DEFAULT_CONFIG = Path("config.yaml")

ConfigOption = Annotated[Path, typer.Option("--config", "-c", help="Path to config.yaml")]


def _load_config(config_path: Path) -> AppConfig:
    """Load config from file, warning if the file does not exist."""
    if config_path.exists():
        return load_config(config_path)
    logger.warning("Config file %s not found, using defaults", config_path)
    return AppConfig()


def _setup_logging(cfg: AppConfig) -> None:
    from topic_news.monitoring.logging import setup_logging  # noqa: PLC0415

    log_file = Path(cfg.monitoring.log_file) if cfg.monitoring.log_file else None
    setup_logging(structured=cfg.monitoring.structured_logging, log_file=log_file)


def _build_panel(cfg: AppConfig, clipboard: ClipboardSink | None = None) -> NewsPanel:
    """Create a NewsPanel wired to Gemini and the configured clipboard."""
    return NewsPanel(
        GeminiClient(cfg.gemini),
        clipboard if clipboard is not None else build_clipboard(cfg.clipboard.backend),
        topic=cfg.panel.default_topic,
    )


def _show(panel: NewsPanel) -> None:
    typer.echo(render_text(render_panel(panel.topic, panel.state)))


@app.command()
def fetch(
    topic: Annotated[str | None, typer.Argument(help="Topic to generate news for (default: config)")] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    copy: Annotated[bool, typer.Option("--copy", help="Copy the news to the clipboard")] = False,
) -> None:
    """Generate news for a topic once and print it."""
    cfg = _load_config(config)
    _setup_logging(cfg)
    if cfg.clipboard.backend == "browser" and copy:
        typer.echo("The browser clipboard backend only works with `topic-news serve`")
        raise typer.Exit(code=1)

    panel = _build_panel(cfg)
    state = asyncio.run(panel.fetch_news(topic))
    _show(panel)
    if isinstance(state, Failed):
        raise typer.Exit(code=1)

    if copy:
        result = panel.copy_to_clipboard()
        typer.echo(result.message)
        if not result.ok:
            raise typer.Exit(code=1)


@app.command()
def interactive(config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Run the panel in the terminal: edit the topic, fetch, and copy."""
    cfg = _load_config(config)
    _setup_logging(cfg)
    panel = _build_panel(cfg, build_clipboard("system"))

    asyncio.run(panel.mount())
    _show(panel)
    while True:
        choice = typer.prompt("[t]opic  [f]etch  [c]opy  [q]uit", default="f").strip().lower()
        if choice in ("q", "quit"):
            break
        if choice in ("t", "topic"):
            panel.set_topic(typer.prompt("Topic", default=panel.topic))
            continue
        if choice in ("f", "fetch"):
            asyncio.run(panel.fetch_news())
            _show(panel)
        elif choice in ("c", "copy"):
            typer.echo(panel.copy_to_clipboard().message)
        else:
            typer.echo(f"Unknown choice: {choice}")


@app.command()
def serve(
    config: ConfigOption = DEFAULT_CONFIG,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Port")] = None,
) -> None:
    """Serve the news panel as a local web page."""
    cfg = _load_config(config)
    _setup_logging(cfg)

    resolved_host = host if host is not None else cfg.monitoring.dashboard_host
    resolved_port = port if port is not None else cfg.monitoring.dashboard_port

    import uvicorn  # noqa: PLC0415

    from topic_news.dashboard.api import create_app  # noqa: PLC0415

    # The copy has to land on the visitor's clipboard, not the server's.
    browser_clipboard = BrowserClipboard()
    panel = _build_panel(cfg, browser_clipboard)
    fastapi_app = create_app(panel, browser_clipboard=browser_clipboard)
    typer.echo(f"Topic News running on http://{resolved_host}:{resolved_port}")
    uvicorn.run(fastapi_app, host=resolved_host, port=resolved_port, log_level="info")
