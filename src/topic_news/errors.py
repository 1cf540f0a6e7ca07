"""Exception taxonomy for the news panel.

Every failure the panel can surface is a :class:`NewsPanelError`; the panel
turns them into a single user-visible message and never lets one escape to
the UI surface.
"""


class NewsPanelError(Exception):
    """Base class for all panel errors."""


class TopicValidationError(NewsPanelError):
    """Raised when the topic is empty or whitespace-only."""


class TransportError(NewsPanelError):
    """Raised when the generative-content endpoint cannot be reached or returns non-2xx."""


class ResponseShapeError(NewsPanelError):
    """Raised when the response envelope lacks ``candidates[0].content.parts[0].text``."""


class PayloadDecodeError(NewsPanelError):
    """Raised when the inner text payload is not a JSON array of news items."""


class ClipboardError(NewsPanelError):
    """Raised when the clipboard write mechanism fails."""
