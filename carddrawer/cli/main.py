"""
CLI entry point for carddrawer.
"""

# Standard library imports
import logging
from typing import Optional

# Third-party imports
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

# Local application imports
from carddrawer.cli._play_logic import draw_logic, play_logic
from carddrawer.config import Settings, get_settings
from carddrawer.models import ErrorKind


console = Console()

app = typer.Typer(
    name="carddrawer",
    help="Carddrawer: draw playing cards from the Deck of Cards API.",
    add_completion=False,
    rich_markup_mode="markdown",
)


# ---------------------------------------------------------------------------
# Helpers for resolving settings (CLI flags override CARDDRAWER_* env vars)
# ---------------------------------------------------------------------------


def _load_settings(
    api_url: Optional[str], timeout: Optional[float]
) -> Settings:
    """
    Load settings from the environment, then apply any CLI overrides.

    Exits with code 1 when the environment holds invalid values.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if api_url is not None:
        settings.api_base_url = api_url
    if timeout is not None:
        if timeout <= 0:
            console.print(
                "[bold red]Error: --timeout must be greater than 0.[/bold red]"
            )
            raise typer.Exit(code=1)
        settings.request_timeout = timeout
    return settings


# Common typer options reused across commands
_api_url_option = typer.Option(  # noqa: B008
    None,
    "--api-url",
    help="Base URL of the deck service. "
    "Falls back to CARDDRAWER_API_BASE_URL.",
)

_timeout_option = typer.Option(  # noqa: B008
    None,
    "--timeout",
    help="Seconds to wait for each response. "
    "Falls back to CARDDRAWER_REQUEST_TIMEOUT.",
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Play command
# ---------------------------------------------------------------------------


@app.command()
def play(
    api_url: Optional[str] = _api_url_option,
    timeout: Optional[float] = _timeout_option,
):
    """Start an interactive session: draw cards one at a time or reshuffle."""
    settings = _load_settings(api_url, timeout)
    try:
        play_logic(
            api_base_url=settings.api_base_url,
            timeout=settings.request_timeout,
        )
    except Exception as e:
        console.print(f"[bold]An unexpected error occurred:[/bold] {e}")
        raise typer.Exit(code=1) from e


# ---------------------------------------------------------------------------
# Draw command
# ---------------------------------------------------------------------------


@app.command()
def draw(
    count: int = typer.Option(
        1,
        "--count",
        "-n",
        min=1,
        help="Number of cards to draw, one request per card.",
    ),
    api_url: Optional[str] = _api_url_option,
    timeout: Optional[float] = _timeout_option,
):
    """
    Draw cards from a freshly shuffled deck and print them.

    Exits with code 1 when the deck could not be created.
    """
    settings = _load_settings(api_url, timeout)
    try:
        view = draw_logic(
            api_base_url=settings.api_base_url,
            timeout=settings.request_timeout,
            count=count,
        )
    except Exception as e:
        console.print(f"[bold]An unexpected error occurred:[/bold] {e}")
        raise typer.Exit(code=1) from e

    if view.error_kind is ErrorKind.InitError:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """
    Run the CLI application.

    If an unexpected exception occurs, print a bold red error message to the console and exit the process with status code 1.
    """
    try:
        app()
    except Exception as e:
        console.print(f"[bold red]UNEXPECTED ERROR: {e}[/bold red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
