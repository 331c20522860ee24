import asyncio
import logging

from carddrawer.cli.deck_ui import render_view, start_play_flow
from carddrawer.client import DeckServiceClient
from carddrawer.models import SessionView
from carddrawer.session_controller import DeckSessionController

logger = logging.getLogger(__name__)


def play_logic(api_base_url: str, timeout: float) -> SessionView:
    """
    Set up a deck session against the service at `api_base_url` and start
    the interactive play flow.

    Parameters:
        api_base_url (str): Base URL of the deck service.
        timeout (float): Per-request timeout in seconds.

    Returns:
        SessionView: The final state of the session when the user quit.
    """
    with DeckServiceClient(base_url=api_base_url, timeout=timeout) as client:
        controller = DeckSessionController(client=client)
        return start_play_flow(controller)


async def _draw_session(
    controller: DeckSessionController, count: int
) -> SessionView:
    try:
        view = await controller.initialize()
        if view.error_kind is None:
            view = await controller.draw_many(count)
        return view
    finally:
        controller.close()


def draw_logic(api_base_url: str, timeout: float, count: int) -> SessionView:
    """
    Create a deck, draw `count` cards from it and print the result.

    Drawing stops at the first error (for instance an exhausted deck); the
    error is part of the rendered view.

    Returns:
        SessionView: The state after the last draw.
    """
    logger.debug(f"Drawing {count} cards from {api_base_url}")
    with DeckServiceClient(base_url=api_base_url, timeout=timeout) as client:
        controller = DeckSessionController(client=client)
        view = asyncio.run(_draw_session(controller, count))
    render_view(view)
    return view
