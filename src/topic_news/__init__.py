"""Topic news panel: generated headline summaries for a topic."""

__version__ = "0.1.0"
