"""Hand simulation engine for the Deck Assistant.

This package contains the pieces the simulation driver
(backend.services.simulator) composes:

- sampler: random hand drawing without replacement
- matcher: target hand evaluation with per-condition card consumption
- metadata: card metadata lookup for filter cards
- saved_hands: single test hands and the saved-hands text format
- errors: precondition error kinds
"""

from backend.services.hand_sim.errors import (
    EmptyTargetHand,
    InsufficientDeckSize,
    InvalidTrialCount,
    SimulationCancelled,
    SimulationError,
)
from backend.services.hand_sim.matcher import (
    condition_holds,
    first_matching_target,
    group_count,
    hand_matches,
    matching_targets,
)
from backend.services.hand_sim.metadata import CardMetadataLookup, metadata_matches_filter
from backend.services.hand_sim.sampler import draw_hand
from backend.services.hand_sim.saved_hands import (
    draw_test_hand,
    format_saved_hands,
    parse_saved_hands,
)

__all__ = [
    # Errors
    "EmptyTargetHand",
    "InsufficientDeckSize",
    "InvalidTrialCount",
    "SimulationCancelled",
    "SimulationError",
    # Matching
    "condition_holds",
    "first_matching_target",
    "group_count",
    "hand_matches",
    "matching_targets",
    # Metadata
    "CardMetadataLookup",
    "metadata_matches_filter",
    # Sampling
    "draw_hand",
    "draw_test_hand",
    "format_saved_hands",
    "parse_saved_hands",
]
