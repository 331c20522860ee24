"""
Command-line interface for drawing cards from a deck session.
"""

import asyncio
import logging
from typing import Optional

from rich.console import Console
from rich.table import Table

from carddrawer.models import SessionStatus, SessionView
from carddrawer.session_controller import DeckSessionController

logger = logging.getLogger(__name__)
console = Console()

TITLE = "Card Drawer"
SUBTITLE = "Draw to reveal cards from a freshly shuffled deck."

_ACTION_LABELS = {
    "d": "Draw Card",
    "s": "Shuffle Deck",
    "r": "Retry",
    "q": "Quit",
}


def _build_card_table(view: SessionView) -> Table:
    table = Table(title="Drawn Cards")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Code", style="cyan")
    table.add_column("Card", style="magenta", no_wrap=True)
    table.add_column("Image", style="blue", overflow="fold")
    for index, card in enumerate(view.drawn_cards, start=1):
        table.add_row(str(index), card.code, card.label, card.image_ref)
    return table


def render_view(view: SessionView, cons: Optional[Console] = None) -> None:
    """
    Print the current state of a deck session.

    Parameters:
        view (SessionView): Snapshot to render.
        cons (Optional[Console]): Console to print to; defaults to the module console.
    """
    cons = cons or console
    cons.print(f"Cards remaining: [bold]{view.remaining}[/bold]")
    if view.error_message:
        cons.print(f"[bold red]{view.error_message}[/bold red]")

    if view.is_loading:
        cons.print("[italic]Loading deck...[/italic]")
    elif view.drawn_cards:
        cons.print(_build_card_table(view))
    elif view.status is not SessionStatus.Failed:
        cons.print("[dim]No cards drawn yet.[/dim]")


def available_actions(view: SessionView) -> str:
    """Return the keys of the actions the user may take in this state."""
    actions = ""
    if view.can_draw:
        actions += "d"
    if view.can_shuffle:
        actions += "s"
    if view.error_kind is not None and not view.error_kind.is_recoverable:
        actions += "r"
    return actions + "q"


def _prompt_action(view: SessionView) -> str:
    """
    Prompt until the user picks one of the currently available actions.

    Returns:
        str: A single action key ('d', 's', 'r' or 'q').
    """
    actions = available_actions(view)
    choices = ", ".join(f"{key}:{_ACTION_LABELS[key]}" for key in actions)
    while True:
        choice = console.input(f"[bold]Action ({choices}): [/bold]")
        choice = choice.strip().lower()[:1]
        if choice and choice in actions:
            return choice
        if choice in _ACTION_LABELS:
            console.print(
                f"[yellow]{_ACTION_LABELS[choice]} is not available right now.[/yellow]"
            )
        else:
            console.print(
                f"[bold red]Invalid choice. Please enter one of: {', '.join(actions)}.[/bold red]"
            )


async def run_play_flow(controller: DeckSessionController) -> SessionView:
    """
    Drive an interactive session: initialize the deck, then draw or shuffle
    on request until the user quits.

    Args:
        controller: The DeckSessionController to operate on.

    Returns:
        The last view shown before quitting.
    """
    console.rule(f"[bold cyan]{TITLE}[/bold cyan]")
    console.print(f"[italic]{SUBTITLE}[/italic]")
    view = controller.view()
    render_view(view)

    try:
        view = await controller.initialize()
        while True:
            render_view(view)
            choice = _prompt_action(view)
            if choice == "q":
                break
            if choice == "d":
                console.print("[dim]Drawing...[/dim]")
                view = await controller.draw_card()
            elif choice == "s":
                console.print("[dim]Shuffling...[/dim]")
                view = await controller.shuffle_deck()
            elif choice == "r":
                console.print("[italic]Loading deck...[/italic]")
                view = await controller.initialize()
            console.print("")
    finally:
        controller.close()
        logger.debug(
            f"Play session ended with {len(view.drawn_cards)} cards drawn"
        )

    console.print("[bold cyan]Goodbye![/bold cyan]")
    return view


def start_play_flow(controller: DeckSessionController) -> SessionView:
    """Run the interactive session on a fresh event loop."""
    return asyncio.run(run_play_flow(controller))
