"""
Remote deck service constants.

Static values only: endpoint defaults, deck geometry and the user-facing
error messages shown by the presentation layer.
"""

# Public Deck of Cards API. Endpoints below are relative to this base.
DEFAULT_API_BASE_URL: str = "https://deckofcardsapi.com/api/deck"

# Seconds before a single request is abandoned and reported as a failure.
DEFAULT_REQUEST_TIMEOUT: float = 10.0

# Cards in one standard deck; shown as the remaining count until the
# service reports its own value.
FULL_DECK_SIZE: int = 52

NEW_DECK_PATH: str = "new/shuffle/"
DRAW_PATH: str = "{deck_id}/draw/"
SHUFFLE_PATH: str = "{deck_id}/shuffle/"

INIT_ERROR_MESSAGE: str = "Could not load a new deck. Please refresh."
NO_CARDS_ERROR_MESSAGE: str = "Error: no cards remaining!"
DRAW_FAILED_MESSAGE: str = "Could not draw a card. Try again."
SHUFFLE_FAILED_MESSAGE: str = "Shuffling failed. Please try again."
