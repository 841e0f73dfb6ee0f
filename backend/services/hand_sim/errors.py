"""Error kinds raised by the hand simulation engine.

Every error here is detected before sampling starts (or, for cancellation,
between chunks) and aborts the whole run. Missing card metadata is not an
error: it is reported as a warning on the result.
"""


class SimulationError(Exception):
    """Base exception for simulation precondition failures."""

    code = "SimulationError"

    def to_detail(self) -> dict[str, str]:
        """Serialize for an HTTP error body."""
        return {"error": self.code, "message": str(self)}


class InsufficientDeckSize(SimulationError):
    """Raised when the hand size exceeds the number of cards in the deck."""

    code = "InsufficientDeckSize"

    def __init__(self, deck_size: int, hand_size: int) -> None:
        self.deck_size = deck_size
        self.hand_size = hand_size
        super().__init__(
            f"Deck has {deck_size} cards, not enough for a hand of {hand_size}"
        )


class EmptyTargetHand(SimulationError):
    """Raised when a target hand has no conditions (or none are given)."""

    code = "EmptyTargetHand"


class InvalidTrialCount(SimulationError):
    """Raised when the trial count is out of range."""

    code = "InvalidTrialCount"


class SimulationCancelled(SimulationError):
    """Raised when the caller cancels a run. No partial result is kept."""

    code = "SimulationCancelled"
