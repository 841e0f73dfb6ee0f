"""Target hand matching.

A target hand is a list of conditions that must all hold. Conditions are
checked in order and consume the hand cards they count, so one physical
card never counts toward two conditions of the same target hand. The
consumption state is a Counter built fresh for every evaluation.
"""

from collections import Counter
from collections.abc import Sequence

from backend.models.simulation_models import (
    CardRef,
    Condition,
    ConditionOp,
    FilterCard,
    GroupMember,
    TargetHand,
)
from backend.services.hand_sim.metadata import CardMetadataLookup


def condition_holds(op: ConditionOp, group_count: int, target: int) -> bool:
    """Apply a comparison operator. ``!=`` ignores the target and requires zero."""
    if op == "=":
        return group_count == target
    if op == "<=":
        return group_count <= target
    if op == ">=":
        return group_count >= target
    if op == "!=":
        return group_count == 0
    raise ValueError(f"Unknown operator: {op!r}")


def group_count(
    hand: Sequence[str],
    group: Sequence[GroupMember],
    remaining: Counter,
    lookup: CardMetadataLookup | None = None,
) -> int:
    """Count and consume the hand cards matched by a group.

    A literal member takes every remaining copy of its card. A filter member
    scans the hand and takes each remaining card whose metadata satisfies
    the filter. ``remaining`` is decremented in place.
    """
    total = 0
    for member in group:
        if isinstance(member, CardRef):
            copies = remaining[member.id]
            if copies > 0:
                remaining[member.id] = 0
                total += copies
        elif isinstance(member, FilterCard):
            if lookup is None:
                continue
            for card_id in hand:
                if remaining[card_id] > 0 and lookup.matches(card_id, member):
                    remaining[card_id] -= 1
                    total += 1
    return total


def hand_matches(
    hand: Sequence[str],
    target_hand: TargetHand | Sequence[Condition],
    lookup: CardMetadataLookup | None = None,
) -> bool:
    """Check whether a hand satisfies every condition of a target hand.

    Args:
        hand: Drawn card identifiers. Not modified.
        target_hand: TargetHand or a plain list of conditions.
        lookup: Metadata for filter cards; without it filters match nothing.

    Returns:
        True if all conditions hold. Stops at the first failing condition.
    """
    conditions = target_hand.conditions if isinstance(target_hand, TargetHand) else target_hand
    remaining = Counter(hand)
    for condition in conditions:
        count = group_count(hand, condition.group, remaining, lookup)
        if not condition_holds(condition.op, count, condition.count):
            return False
    return True


def matching_targets(
    hand: Sequence[str],
    target_hands: Sequence[TargetHand],
    lookup: CardMetadataLookup | None = None,
) -> list[int]:
    """Indices of every target hand the hand satisfies."""
    return [
        index
        for index, target_hand in enumerate(target_hands)
        if hand_matches(hand, target_hand, lookup)
    ]


def first_matching_target(
    hand: Sequence[str],
    target_hands: Sequence[TargetHand],
    lookup: CardMetadataLookup | None = None,
) -> int | None:
    """Index of the first target hand (in listed order) the hand satisfies."""
    for index, target_hand in enumerate(target_hands):
        if hand_matches(hand, target_hand, lookup):
            return index
    return None
