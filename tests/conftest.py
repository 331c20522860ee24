import asyncio
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest

from carddrawer.client import DeckServiceClient
from carddrawer.models import (
    ApiCard,
    DrawResponse,
    NewDeckResponse,
    ShuffleResponse,
)
from carddrawer.session_controller import DeckSessionController

API_BASE_URL = "https://deck.test/api/deck"
DECK_ID = "3p40paa87x90"


# each test runs on cwd to its temp dir
@pytest.fixture(autouse=True)
def go_to_tmpdir(request, monkeypatch):
    """
    Run each test from its own tmpdir with no CARDDRAWER_* variables set, so a
    developer's environment or .env file cannot leak into settings.
    """
    for name in ("CARDDRAWER_API_BASE_URL", "CARDDRAWER_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    tmpdir = request.getfixturevalue("tmpdir")
    with tmpdir.as_cwd():
        yield


def _api_card(
    code: str = "AS", value: str = "ACE", suit: str = "SPADES"
) -> Dict[str, Any]:
    return {
        "code": code,
        "value": value,
        "suit": suit,
        "image": f"https://deckofcardsapi.com/static/img/{code}.png",
    }


def _draw_response(
    cards: List[Dict[str, Any]], remaining: int, success: bool = True
) -> DrawResponse:
    return DrawResponse(
        success=success,
        remaining=remaining,
        cards=[ApiCard(**card) for card in cards],
    )


@pytest.fixture
def make_api_card():
    """Factory for card dicts shaped like the draw endpoint's `cards` entries."""
    return _api_card


@pytest.fixture
def make_draw_response():
    """Factory for DrawResponse models built from card dicts."""
    return _draw_response


@pytest.fixture
def mock_client() -> MagicMock:
    """
    Provide a mock DeckServiceClient whose new_deck() hands out a full deck.
    """
    client = MagicMock(spec=DeckServiceClient)
    client.new_deck.return_value = NewDeckResponse(
        success=True, deck_id=DECK_ID, remaining=52
    )
    client.shuffle.return_value = ShuffleResponse(success=True, remaining=52)
    return client


@pytest.fixture
def controller(mock_client: MagicMock) -> DeckSessionController:
    """A controller that has not been initialized yet."""
    return DeckSessionController(client=mock_client)


@pytest.fixture
def ready_controller(
    controller: DeckSessionController,
) -> DeckSessionController:
    """A controller whose deck was created successfully."""
    asyncio.run(controller.initialize())
    return controller


@pytest.fixture
def deck_id() -> str:
    return DECK_ID


@pytest.fixture
def api_base_url() -> str:
    return API_BASE_URL
