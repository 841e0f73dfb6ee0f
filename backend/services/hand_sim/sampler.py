"""Random hand drawing."""

import random
from collections.abc import Sequence

from backend.services.hand_sim.errors import InsufficientDeckSize


def draw_hand(
    deck: Sequence[str],
    hand_size: int,
    rng: random.Random | None = None,
) -> list[str]:
    """Draw a hand without replacement from a deck.

    Shuffles a copy of the deck (Fisher-Yates) and takes the top cards, so
    every copy of a card is its own position in the deck and hands follow
    the hypergeometric distribution.

    Args:
        deck: Card identifiers, one entry per physical copy. Not modified.
        hand_size: Number of cards to draw.
        rng: Random source; the module-level generator when omitted.

    Returns:
        List of exactly ``hand_size`` card identifiers.

    Raises:
        InsufficientDeckSize: If the deck has fewer cards than ``hand_size``.
    """
    if hand_size < 0:
        raise ValueError(f"Hand size must not be negative, got {hand_size}")
    if len(deck) < hand_size:
        raise InsufficientDeckSize(len(deck), hand_size)

    shuffled = list(deck)
    (rng or random).shuffle(shuffled)
    return shuffled[:hand_size]
