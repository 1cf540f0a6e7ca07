"""Configuration loading and validation."""

from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_TOPIC = "Technology"


class GeminiConfig(BaseModel):
    """Generative-content endpoint configuration."""

    model: str = "gemini-2.0-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    api_key_env: str = "GEMINI_API_KEY"
    timeout: float = 30.0
    item_count: int = Field(default=5, ge=1)


class PanelConfig(BaseModel):
    """News panel configuration."""

    default_topic: str = DEFAULT_TOPIC


class ClipboardConfig(BaseModel):
    """Clipboard used by the terminal commands; `serve` always copies in the browser."""

    backend: Literal["system", "browser"] = "system"


class MonitoringConfig(BaseModel):
    """Logging and dashboard configuration."""

    structured_logging: bool = False
    log_file: str | None = None
    dashboard_host: str = "127.0.0.1"
    dashboard_port: int = 8080


class AppConfig(BaseModel):
    """Top-level application configuration."""

    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    panel: PanelConfig = Field(default_factory=PanelConfig)
    clipboard: ClipboardConfig = Field(default_factory=ClipboardConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)


def load_config(path: Path) -> AppConfig:
    """Load config from a YAML file."""
    load_dotenv(path.parent / ".env", override=False)
    return AppConfig(**(yaml.safe_load(path.read_text()) or {}))
