"""Carddrawer - draw playing cards from the Deck of Cards web service."""

__version__ = "0.1.0"

from .models import (
    DeckSession,
    DrawnCard,
    ErrorKind,
    SessionStatus,
    SessionView,
)
from .client import DeckServiceClient
from .session_controller import DeckSessionController

__all__ = [
    "__version__",
    "DeckSession",
    "DrawnCard",
    "ErrorKind",
    "SessionStatus",
    "SessionView",
    "DeckServiceClient",
    "DeckSessionController",
]
