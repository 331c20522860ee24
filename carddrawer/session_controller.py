"""
This module defines the DeckSessionController class, which owns the client-side
state of a single deck: its handle, the remaining count reported by the
service and the cards drawn so far. It mediates the initialize, draw and
shuffle operations and converts every remote-service failure into an
ErrorKind that the presentation layer can show.
"""

import asyncio
import logging
from typing import Optional

from .client import DeckServiceClient
from .exceptions import DeckResponseError, DeckServiceError
from .models import (
    DeckSession,
    DrawnCard,
    ErrorKind,
    SessionStatus,
    SessionView,
)

# Initialize logger
logger = logging.getLogger(__name__)


class DeckSessionController:
    """
    Manages one deck session against the remote deck service.

    This class is responsible for:
    - Creating the deck once and tracking its handle.
    - Drawing one card at a time and shuffling the deck.
    - Dropping actions issued while another request is in flight.
    - Discarding responses that arrive after the session was closed.

    The status field doubles as the mutual-exclusion token: an operation only
    starts from `Ready`, so at most one request is ever in flight.
    """

    def __init__(self, client: DeckServiceClient):
        """
        Create a controller bound to `client`. No request is made until
        `initialize()` is awaited.

        Parameters:
            client (DeckServiceClient): Client used for every call to the deck service.
        """
        self.client = client
        self.session = DeckSession()
        self.status = SessionStatus.Initializing
        self.error_kind: Optional[ErrorKind] = None
        self._generation = 0
        self._closed = False
        self._init_in_flight = False

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def deck_id(self) -> Optional[str]:
        return self.session.deck_id

    @property
    def remaining(self) -> int:
        return self.session.remaining

    @property
    def error_message(self) -> Optional[str]:
        return self.error_kind.message if self.error_kind else None

    @property
    def closed(self) -> bool:
        return self._closed

    def view(self) -> SessionView:
        """Return an immutable snapshot of the current session state."""
        return SessionView(
            status=self.status,
            deck_id=self.session.deck_id,
            remaining=self.session.remaining,
            drawn_cards=tuple(self.session.drawn_cards),
            error_kind=self.error_kind,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def initialize(self) -> SessionView:
        """
        Create a new shuffled deck and reset the session around it.

        On success the deck handle and remaining count come from the response,
        drawn cards are cleared and the status becomes Ready. Any failure moves
        the session to Failed with ErrorKind.InitError; nothing is retried.
        Awaiting this again after a failure starts over with a new deck.

        Returns:
            SessionView: The state after the request completed (or was discarded).
        """
        if self._closed:
            logger.debug("initialize() ignored: session is closed")
            return self.view()
        if self._init_in_flight or self.status in (
            SessionStatus.Drawing,
            SessionStatus.Shuffling,
        ):
            logger.debug(f"initialize() ignored while {self.status.value}")
            return self.view()

        generation = self._generation
        self.status = SessionStatus.Initializing
        self._init_in_flight = True
        logger.info("Requesting a new shuffled deck")
        try:
            data = await asyncio.to_thread(self.client.new_deck)
        except DeckServiceError as e:
            self._init_in_flight = False
            if self._is_stale(generation):
                return self.view()
            logger.error(f"Failed to create deck: {e}")
            self.status = SessionStatus.Failed
            self.error_kind = ErrorKind.InitError
            return self.view()

        self._init_in_flight = False
        if self._is_stale(generation):
            return self.view()

        self.session = DeckSession(
            deck_id=data.deck_id, remaining=data.remaining, drawn_cards=[]
        )
        self.error_kind = None
        self.status = SessionStatus.Ready
        logger.info(
            f"Deck {data.deck_id} ready with {data.remaining} cards"
        )
        return self.view()

    async def draw_card(self) -> SessionView:
        """
        Draw one card from the current deck.

        Does nothing unless a deck exists and the session is Ready. A response
        with no cards, ``success: false`` or a non-success HTTP status is
        reported as ErrorKind.EmptyDeck; a transport failure as
        ErrorKind.DrawFailed. Drawn cards and the remaining count are left
        untouched by either error.
        """
        if not self._can_start():
            logger.debug(
                f"draw_card() ignored (deck_id={self.deck_id}, status={self.status.value})"
            )
            return self.view()

        deck_id = self.session.deck_id
        generation = self._generation
        self.error_kind = None
        self.status = SessionStatus.Drawing
        try:
            data = await asyncio.to_thread(self.client.draw, deck_id, 1)
        except DeckResponseError as e:
            return self._finish(generation, ErrorKind.EmptyDeck, e)
        except DeckServiceError as e:
            return self._finish(generation, ErrorKind.DrawFailed, e)

        if self._is_stale(generation):
            return self.view()
        if not data.cards:
            return self._finish(generation, ErrorKind.EmptyDeck)

        card = DrawnCard.from_api(data.cards[0])
        self.session.drawn_cards = [*self.session.drawn_cards, card]
        self.session.remaining = data.remaining
        self.status = SessionStatus.Ready
        logger.info(f"Drew {card.code}; {data.remaining} cards remaining")
        return self.view()

    async def shuffle_deck(self) -> SessionView:
        """
        Return every drawn card to the deck and reshuffle it.

        Does nothing unless a deck exists and the session is Ready. On success
        the drawn cards are cleared and the remaining count is taken from the
        response; any failure is reported as ErrorKind.ShuffleFailed.
        """
        if not self._can_start():
            logger.debug(
                f"shuffle_deck() ignored (deck_id={self.deck_id}, status={self.status.value})"
            )
            return self.view()

        deck_id = self.session.deck_id
        generation = self._generation
        self.error_kind = None
        self.status = SessionStatus.Shuffling
        try:
            data = await asyncio.to_thread(self.client.shuffle, deck_id)
        except DeckServiceError as e:
            return self._finish(generation, ErrorKind.ShuffleFailed, e)

        if self._is_stale(generation):
            return self.view()

        self.session.drawn_cards = []
        self.session.remaining = data.remaining
        self.status = SessionStatus.Ready
        logger.info(f"Deck {deck_id} shuffled; {data.remaining} cards remaining")
        return self.view()

    async def draw_many(self, count: int) -> SessionView:
        """
        Draw up to `count` cards, one request at a time, stopping at the first error.
        """
        for _ in range(count):
            view = await self.draw_card()
            if view.error_kind is not None or view.status is not SessionStatus.Ready:
                return view
        return self.view()

    def close(self) -> None:
        """
        Tear the session down. Responses still in flight are discarded when
        they arrive, and further operations are ignored.
        """
        self._generation += 1
        self._closed = True
        logger.debug("Deck session closed")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _can_start(self) -> bool:
        return (
            not self._closed
            and self.session.deck_id is not None
            and self.status is SessionStatus.Ready
        )

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug("Discarding response for a closed session")
            return True
        return False

    def _finish(
        self,
        generation: int,
        kind: ErrorKind,
        exc: Optional[Exception] = None,
    ) -> SessionView:
        """Record a recoverable error and return to Ready."""
        if self._is_stale(generation):
            return self.view()
        if exc is not None:
            logger.warning(f"{kind.value}: {exc}")
        else:
            logger.warning(f"{kind.value}: service returned no cards")
        self.error_kind = kind
        self.status = SessionStatus.Ready
        return self.view()
