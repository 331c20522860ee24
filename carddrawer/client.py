"""
HTTP client for the remote deck service.

Wraps the three GET endpoints the application consumes and turns every
failure into a DeckServiceError subclass, so callers only need to handle one
exception hierarchy.
"""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from . import __version__
from .constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    DRAW_PATH,
    NEW_DECK_PATH,
    SHUFFLE_PATH,
)
from .exceptions import DeckRequestError, DeckResponseError
from .models import DrawResponse, NewDeckResponse, ShuffleResponse

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class DeckServiceClient:
    """
    Synchronous client for the Deck of Cards API.

    One `requests.Session` is kept for the lifetime of the client. Use it as a
    context manager, or call `close()` when done.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Create a client for the deck service at `base_url`.

        Parameters:
            base_url (str): Root of the deck API; endpoint paths are appended to it.
            timeout (float): Seconds to wait for each response before giving up.
            session (Optional[requests.Session]): Session to reuse. A new one is created when omitted.
        """
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {"User-Agent": f"carddrawer/{__version__}"}
        )

    def __enter__(self) -> "DeckServiceClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def new_deck(self) -> NewDeckResponse:
        """Request a freshly shuffled single deck."""
        return self._get(
            NEW_DECK_PATH, NewDeckResponse, params={"deck_count": 1}
        )

    def draw(self, deck_id: str, count: int = 1) -> DrawResponse:
        """
        Draw `count` cards from the deck identified by `deck_id`.

        A body with ``success: false`` (the service's answer to drawing from an
        exhausted deck) raises DeckResponseError. A successful body may still
        carry fewer cards than requested, including none.
        """
        return self._get(
            DRAW_PATH.format(deck_id=deck_id),
            DrawResponse,
            params={"count": count},
        )

    def shuffle(self, deck_id: str) -> ShuffleResponse:
        """Return all cards to the deck identified by `deck_id` and reshuffle it."""
        return self._get(SHUFFLE_PATH.format(deck_id=deck_id), ShuffleResponse)

    def _get(
        self,
        path: str,
        model: Type[ResponseModel],
        params: Optional[Dict[str, Any]] = None,
    ) -> ResponseModel:
        """
        Issue one GET request and validate its JSON body into `model`.

        Raises:
            DeckRequestError: The request failed in transport or the body could not be decoded.
            DeckResponseError: The service returned a non-2xx status or ``success: false``.
        """
        url = self.base_url + path
        logger.debug(f"GET {url} params={params}")
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise DeckRequestError(
                f"Request to {url} failed: {e}", original_exception=e
            ) from e

        if not resp.ok:
            logger.warning(f"{url} returned HTTP {resp.status_code}")
            raise DeckResponseError(
                f"Deck service returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            body = model.model_validate_json(resp.content)
        except ValidationError as e:
            logger.warning(f"Unexpected response body from {url}: {e}")
            raise DeckRequestError(
                f"Unexpected response body from {url}", original_exception=e
            ) from e

        if getattr(body, "success", True) is False:
            detail = getattr(body, "error", None) or "success flag was false"
            logger.info(f"{url} reported failure: {detail}")
            raise DeckResponseError(
                f"Deck service reported failure: {detail}",
                status_code=resp.status_code,
            )

        logger.debug(f"{url} -> {body}")
        return body
