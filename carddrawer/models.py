"""
Pydantic models for deck sessions and the remote deck service payloads.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DRAW_FAILED_MESSAGE,
    FULL_DECK_SIZE,
    INIT_ERROR_MESSAGE,
    NO_CARDS_ERROR_MESSAGE,
    SHUFFLE_FAILED_MESSAGE,
)


class SessionStatus(str, Enum):
    """
    Lifecycle state of a deck session.
    """

    Initializing = "initializing"
    Ready = "ready"
    Drawing = "drawing"
    Shuffling = "shuffling"
    Failed = "failed"


class ErrorKind(str, Enum):
    """
    User-facing error categories produced by session operations.
    """

    InitError = "init_error"
    EmptyDeck = "empty_deck"
    DrawFailed = "draw_failed"
    ShuffleFailed = "shuffle_failed"

    @property
    def message(self) -> str:
        """The message shown to the user for this error kind."""
        return _ERROR_MESSAGES[self]

    @property
    def is_recoverable(self) -> bool:
        """Only an initialization failure leaves the session unusable."""
        return self is not ErrorKind.InitError


_ERROR_MESSAGES = {
    ErrorKind.InitError: INIT_ERROR_MESSAGE,
    ErrorKind.EmptyDeck: NO_CARDS_ERROR_MESSAGE,
    ErrorKind.DrawFailed: DRAW_FAILED_MESSAGE,
    ErrorKind.ShuffleFailed: SHUFFLE_FAILED_MESSAGE,
}


# ---------------------------------------------------------------------------
# Remote deck service payloads
# ---------------------------------------------------------------------------


class ApiCard(BaseModel):
    """A card as returned by the draw endpoint."""

    model_config = ConfigDict(extra="ignore")

    code: str
    value: str
    suit: str
    image: str


class NewDeckResponse(BaseModel):
    """Body of ``new/shuffle/?deck_count=N``."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    deck_id: str = Field(..., min_length=1)
    remaining: int = Field(default=FULL_DECK_SIZE, ge=0)


class DrawResponse(BaseModel):
    """Body of ``{deck_id}/draw/?count=N``."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    remaining: int = Field(..., ge=0)
    cards: List[ApiCard] = Field(default_factory=list)
    error: Optional[str] = None


class ShuffleResponse(BaseModel):
    """Body of ``{deck_id}/shuffle/``."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    remaining: int = Field(..., ge=0)


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


class DrawnCard(BaseModel):
    """
    A card drawn during the session. Immutable once created.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: str = Field(
        ..., min_length=1, description="Short card code, e.g. 'AS'."
    )
    image_ref: str = Field(..., description="URL of the card's image.")
    label: str = Field(
        ..., description="Human-readable '<value> of <suit>' label."
    )

    @classmethod
    def from_api(cls, card: ApiCard) -> "DrawnCard":
        """Build a DrawnCard from a card in a draw response."""
        return cls(
            code=card.code,
            image_ref=card.image,
            label=f"{card.value} of {card.suit}",
        )


class DeckSession(BaseModel):
    """
    Client-side state of the single active deck.

    Owned by DeckSessionController; `remaining` always holds the value last
    reported by the service and is never decremented locally.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    deck_id: Optional[str] = Field(
        default=None,
        description="Opaque deck handle issued by the service (None until init).",
    )
    remaining: int = Field(
        default=FULL_DECK_SIZE,
        ge=0,
        description="Cards left in the deck, as reported by the service.",
    )
    drawn_cards: List[DrawnCard] = Field(
        default_factory=list,
        description="Cards drawn since the last shuffle, in draw order.",
    )


class SessionView(BaseModel):
    """
    Read-only snapshot of a session handed to the presentation layer.
    """

    model_config = ConfigDict(frozen=True)

    status: SessionStatus
    deck_id: Optional[str] = None
    remaining: int = FULL_DECK_SIZE
    drawn_cards: Tuple[DrawnCard, ...] = ()
    error_kind: Optional[ErrorKind] = None

    @property
    def error_message(self) -> Optional[str]:
        return self.error_kind.message if self.error_kind else None

    @property
    def is_loading(self) -> bool:
        return self.status is SessionStatus.Initializing

    @property
    def is_deck_ready(self) -> bool:
        """True once a deck handle exists and initialization has finished."""
        return self.deck_id is not None and self.status not in (
            SessionStatus.Initializing,
            SessionStatus.Failed,
        )

    @property
    def can_draw(self) -> bool:
        return self.is_deck_ready and self.status is SessionStatus.Ready

    @property
    def can_shuffle(self) -> bool:
        return self.is_deck_ready and self.status is SessionStatus.Ready
