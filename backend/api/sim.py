"""Simulation API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, model_validator

from backend.core.logging_config import get_logger
from backend.models.simulation_models import (
    CardMetadata,
    SimulationRequest,
    SimulationResult,
    TargetHand,
)
from backend.services.chroma_client import ChromaClient
from backend.services.hand_sim import (
    CardMetadataLookup,
    InvalidTrialCount,
    SimulationError,
    draw_test_hand,
    format_saved_hands,
    parse_saved_hands,
)
from backend.services.sim_config import get_sim_config
from backend.services.simulator import run_simulation

router = APIRouter()
logger = get_logger(__name__)


def get_chroma_client() -> ChromaClient:
    """Dependency to get ChromaDB client."""
    return ChromaClient()


class DeckSource(BaseModel):
    """A deck given inline or by stored deck ID (main deck is sampled)."""

    deck: Optional[list[str]] = Field(default=None, description="Main deck card IDs")
    deck_id: Optional[str] = Field(default=None, description="Stored deck ID")
    hand_size: Optional[int] = Field(default=None, ge=0, description="Cards per hand")
    seed: Optional[int] = Field(default=None, description="Random seed")

    @model_validator(mode="after")
    def _require_deck(self) -> "DeckSource":
        if self.deck is None and self.deck_id is None:
            raise ValueError("Either 'deck' or 'deck_id' is required")
        return self


class SimulationRunRequest(DeckSource):
    """Request model for a simulation run."""

    trials: Optional[int] = Field(default=None, description="Number of hands to draw")
    target_hands: list[TargetHand] = Field(default_factory=list)
    exclusive: bool = Field(
        default=False,
        description=(
            "Count each hand toward at most one target hand. Target hands are "
            "checked in listed order, so earlier target hands take priority."
        ),
    )
    card_metadata: Optional[dict[str, CardMetadata]] = Field(
        default=None,
        description="Card metadata for filter cards (overrides the card store)",
    )


class SavedHandsExport(BaseModel):
    """Hands to export as text."""

    hands: list[list[str]]


class SavedHandsImport(BaseModel):
    """Saved hands text to parse."""

    text: str


def _resolve_deck(source: DeckSource, client: ChromaClient) -> list[str]:
    if source.deck is not None:
        return source.deck
    deck = client.get_deck(source.deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck["main"]


def _load_metadata(
    request: SimulationRunRequest, deck: list[str], client: ChromaClient
) -> CardMetadataLookup:
    if request.card_metadata is not None:
        return CardMetadataLookup(request.card_metadata)
    if not any(target.filter_cards() for target in request.target_hands):
        return CardMetadataLookup()
    try:
        return CardMetadataLookup.from_records(client.get_cards(deck))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load card metadata: {str(e)}")


@router.post("/run", response_model=SimulationResult)
async def run_simulation_endpoint(
    request: SimulationRunRequest,
    client: ChromaClient = Depends(get_chroma_client),
):
    """Run a hand simulation against one or more target hands."""
    config = get_sim_config()
    trials = request.trials if request.trials is not None else config.default_trials
    if trials > config.max_trials:
        error = InvalidTrialCount(f"Trial count must be at most {config.max_trials}, got {trials}")
        raise HTTPException(status_code=400, detail=error.to_detail())

    deck = _resolve_deck(request, client)
    sim_request = SimulationRequest(
        deck=deck,
        hand_size=request.hand_size if request.hand_size is not None else config.default_hand_size,
        trials=trials,
        target_hands=request.target_hands,
        exclusive=request.exclusive,
        seed=request.seed,
    )
    lookup = _load_metadata(request, deck, client)

    try:
        return await run_in_threadpool(
            run_simulation,
            sim_request,
            lookup,
            workers=config.workers,
            chunk_size=config.chunk_size,
        )
    except SimulationError as e:
        logger.warning(f"Simulation rejected: {e}", extra={"extra_data": e.to_detail()})
        raise HTTPException(status_code=400, detail=e.to_detail())


@router.post("/draw")
async def draw_hand_endpoint(
    request: DeckSource,
    client: ChromaClient = Depends(get_chroma_client),
):
    """Draw a single test hand."""
    deck = _resolve_deck(request, client)
    hand_size = request.hand_size if request.hand_size is not None else get_sim_config().default_hand_size
    try:
        hand = draw_test_hand(deck, hand_size, seed=request.seed)
    except SimulationError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    return {"hand": hand, "deck_size": len(deck)}


@router.post("/hands/export", response_class=PlainTextResponse)
async def export_hands(request: SavedHandsExport):
    """Export saved hands as text, one comma-separated hand per line."""
    return PlainTextResponse(
        format_saved_hands(request.hands),
        headers={"Content-Disposition": 'attachment; filename="saved_hands.txt"'},
    )


@router.post("/hands/import")
async def import_hands(request: SavedHandsImport):
    """Parse saved hands text."""
    return {"hands": parse_saved_hands(request.text)}
