"""Monte Carlo hand simulation driver.

Draws ``trials`` random hands from a deck and counts how many of them
satisfy each target hand. Trials are run in fixed-size chunks, each with
its own random generator seeded from a master seed, so a given seed gives
the same hit counts whether the chunks run in this process or are spread
over a process pool.

Usage:
    request = SimulationRequest(deck=deck, hand_size=5, trials=10_000,
                                target_hands=[target])
    result = run_simulation(request, lookup)
    result.results[0].percentage
"""

import random
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Protocol

from backend.core.logging_config import get_logger
from backend.models.simulation_models import (
    FilterCard,
    SimulationRequest,
    SimulationResult,
    TargetHand,
    TargetHandResult,
)
from backend.services.hand_sim.errors import (
    EmptyTargetHand,
    InsufficientDeckSize,
    InvalidTrialCount,
    SimulationCancelled,
)
from backend.services.hand_sim.matcher import first_matching_target, hand_matches
from backend.services.hand_sim.metadata import CardMetadataLookup
from backend.services.hand_sim.sampler import draw_hand

logger = get_logger(__name__)

PERCENT_DECIMALS = 2


class CancelFlag(Protocol):
    """Anything with ``is_set()``, e.g. threading.Event."""

    def is_set(self) -> bool: ...


ProgressCallback = Callable[[int, int], None]


def validate_request(request: SimulationRequest) -> None:
    """Check run preconditions before any hand is drawn.

    Raises:
        InsufficientDeckSize: Deck smaller than the hand size.
        EmptyTargetHand: No target hands, or one without conditions.
        InvalidTrialCount: Fewer than one trial.
    """
    if len(request.deck) < request.hand_size:
        raise InsufficientDeckSize(len(request.deck), request.hand_size)
    if not request.target_hands:
        raise EmptyTargetHand("At least one target hand is required")
    for index, target_hand in enumerate(request.target_hands):
        if not target_hand.conditions:
            label = target_hand.name or f"#{index + 1}"
            raise EmptyTargetHand(f"Target hand {label} has no conditions")
    if request.trials < 1:
        raise InvalidTrialCount(f"Trial count must be at least 1, got {request.trials}")


def _chunk_sizes(trials: int, chunk_size: int) -> list[int]:
    chunk_size = max(1, chunk_size)
    full, rest = divmod(trials, chunk_size)
    return [chunk_size] * full + ([rest] if rest else [])


def _collect_filters(target_hands: Sequence[TargetHand]) -> list[FilterCard]:
    filters: list[FilterCard] = []
    for target_hand in target_hands:
        filters.extend(target_hand.filter_cards())
    return filters


def _count_chunk(
    deck: Sequence[str],
    hand_size: int,
    target_hands: Sequence[TargetHand],
    lookup: CardMetadataLookup,
    exclusive: bool,
    n_trials: int,
    seed: int,
) -> list[int]:
    """Run one chunk of trials and return its hit counts."""
    rng = random.Random(seed)
    hits = [0] * len(target_hands)
    for _ in range(n_trials):
        hand = draw_hand(deck, hand_size, rng)
        if exclusive:
            index = first_matching_target(hand, target_hands, lookup)
            if index is not None:
                hits[index] += 1
        else:
            for index, target_hand in enumerate(target_hands):
                if hand_matches(hand, target_hand, lookup):
                    hits[index] += 1
    return hits


def _check_cancelled(cancel_event: CancelFlag | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise SimulationCancelled("Simulation cancelled")


def _run_sequential(
    request: SimulationRequest,
    lookup: CardMetadataLookup,
    chunks: list[tuple[int, int]],
    cancel_event: CancelFlag | None,
    progress: ProgressCallback | None,
) -> list[int]:
    totals = [0] * len(request.target_hands)
    completed = 0
    for n_trials, seed in chunks:
        _check_cancelled(cancel_event)
        chunk_hits = _count_chunk(
            request.deck,
            request.hand_size,
            request.target_hands,
            lookup,
            request.exclusive,
            n_trials,
            seed,
        )
        totals = [total + hits for total, hits in zip(totals, chunk_hits)]
        completed += n_trials
        if progress is not None:
            progress(completed, request.trials)
    return totals


def _run_pool(
    request: SimulationRequest,
    lookup: CardMetadataLookup,
    chunks: list[tuple[int, int]],
    workers: int,
    cancel_event: CancelFlag | None,
    progress: ProgressCallback | None,
) -> list[int]:
    totals = [0] * len(request.target_hands)
    completed = 0
    with ProcessPoolExecutor(max_workers=workers) as pool:
        futures = {
            pool.submit(
                _count_chunk,
                request.deck,
                request.hand_size,
                request.target_hands,
                lookup,
                request.exclusive,
                n_trials,
                seed,
            ): n_trials
            for n_trials, seed in chunks
        }
        for future in as_completed(futures):
            if cancel_event is not None and cancel_event.is_set():
                pool.shutdown(wait=False, cancel_futures=True)
                _check_cancelled(cancel_event)
            totals = [total + hits for total, hits in zip(totals, future.result())]
            completed += futures[future]
            if progress is not None:
                progress(completed, request.trials)
    return totals


def run_simulation(
    request: SimulationRequest,
    lookup: CardMetadataLookup | None = None,
    *,
    workers: int = 1,
    chunk_size: int = 1000,
    cancel_event: CancelFlag | None = None,
    progress: ProgressCallback | None = None,
) -> SimulationResult:
    """Run a hand simulation.

    Args:
        request: Deck, hand size, trial count, target hands and mode.
        lookup: Card metadata for filter cards. Loaded once by the caller and
            reused for every trial.
        workers: Worker processes; 1 runs everything in this process.
        chunk_size: Trials per chunk (unit of seeding, progress and
            cancellation checks).
        cancel_event: Checked between chunks; when set the run raises
            SimulationCancelled and returns nothing.
        progress: Called with (completed_trials, total_trials) after each chunk.

    Returns:
        SimulationResult with integer hits and percentages per target hand.

    Raises:
        SimulationError: A precondition failed or the run was cancelled.
    """
    validate_request(request)
    lookup = lookup if lookup is not None else CardMetadataLookup()

    warnings: list[str] = []
    filters = _collect_filters(request.target_hands)
    if filters:
        unique_ids = list(dict.fromkeys(request.deck))
        lookup.prime(filters, unique_ids)
        for card_id in lookup.missing(unique_ids):
            message = f"No metadata for card {card_id}; filter cards will not match it"
            logger.warning(message, extra={"extra_data": {"card_id": card_id}})
            warnings.append(message)

    seed = request.seed if request.seed is not None else random.SystemRandom().getrandbits(32)
    master = random.Random(seed)
    chunks = [
        (n_trials, master.getrandbits(64))
        for n_trials in _chunk_sizes(request.trials, chunk_size)
    ]

    logger.info(
        f"Simulation started: {request.trials} trials, {len(request.target_hands)} target hands",
        extra={
            "extra_data": {
                "deck_size": len(request.deck),
                "hand_size": request.hand_size,
                "trials": request.trials,
                "target_hands": len(request.target_hands),
                "exclusive": request.exclusive,
                "seed": seed,
                "workers": workers,
            }
        },
    )

    start_time = time.perf_counter()
    if workers > 1 and len(chunks) > 1:
        hits = _run_pool(request, lookup, chunks, workers, cancel_event, progress)
    else:
        hits = _run_sequential(request, lookup, chunks, cancel_event, progress)
    elapsed_ms = (time.perf_counter() - start_time) * 1000

    results = [
        TargetHandResult(
            index=index,
            name=target_hand.name,
            hits=hits[index],
            percentage=round(hits[index] / request.trials * 100, PERCENT_DECIMALS),
        )
        for index, target_hand in enumerate(request.target_hands)
    ]

    logger.info(
        f"Simulation completed in {elapsed_ms:.1f}ms",
        extra={"extra_data": {"hits": hits, "duration_ms": round(elapsed_ms, 2)}},
    )

    return SimulationResult(
        trials=request.trials,
        hand_size=request.hand_size,
        deck_size=len(request.deck),
        exclusive=request.exclusive,
        seed=seed,
        results=results,
        warnings=warnings,
        elapsed_ms=round(elapsed_ms, 2),
    )
