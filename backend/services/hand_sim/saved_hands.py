"""Test hands: drawing a single hand and the saved-hands text format.

Saved hands are stored one per line with card identifiers separated by
commas, e.g.::

    89631139,89631139,14558127
    23434538,14558127,12345678
"""

import random
from collections.abc import Iterable, Sequence

from backend.services.hand_sim.sampler import draw_hand


def draw_test_hand(deck: Sequence[str], hand_size: int, seed: int | None = None) -> list[str]:
    """Draw one hand for display. Raises InsufficientDeckSize like draw_hand."""
    rng = random.Random(seed) if seed is not None else None
    return draw_hand(deck, hand_size, rng)


def format_saved_hands(hands: Iterable[Sequence[str]]) -> str:
    return "\n".join(",".join(hand) for hand in hands)


def parse_saved_hands(text: str) -> list[list[str]]:
    """Parse saved hands text, dropping blank entries and blank lines."""
    hands = []
    for line in text.splitlines():
        hand = [card_id.strip() for card_id in line.split(",") if card_id.strip()]
        if hand:
            hands.append(hand)
    return hands
