"""Pydantic models for the Deck Assistant backend."""

from backend.models.deck_models import (
    DeckCreate,
    DeckImportYDK,
    DeckSections,
    DeckUpdate,
    DeckValidationResult,
    ValidationIssue,
)
from backend.models.simulation_models import (
    Attribute,
    CardMetadata,
    CardRef,
    Condition,
    FilterCard,
    RangeFilter,
    SimulationRequest,
    SimulationResult,
    TargetHand,
    TargetHandResult,
)

__all__ = [
    # Deck models
    "DeckCreate",
    "DeckImportYDK",
    "DeckSections",
    "DeckUpdate",
    "DeckValidationResult",
    "ValidationIssue",
    # Simulation models
    "Attribute",
    "CardMetadata",
    "CardRef",
    "Condition",
    "FilterCard",
    "RangeFilter",
    "SimulationRequest",
    "SimulationResult",
    "TargetHand",
    "TargetHandResult",
]
