"""Pydantic models for the hand simulation engine.

This module defines the wire schemas for target hands (groups of literal
cards and filter cards joined by comparison operators), the simulation
request and the aggregated result. Field aliases follow the JSON shape the
frontend sends, e.g. ``{"filterByAttribute": "DARK"}`` for a filter card.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Attribute(str, Enum):
    """Monster attributes."""

    DARK = "DARK"
    LIGHT = "LIGHT"
    EARTH = "EARTH"
    WATER = "WATER"
    FIRE = "FIRE"
    WIND = "WIND"
    DIVINE = "DIVINE"


ConditionOp = Literal["=", "<=", ">=", "!="]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _upper_attribute(value: Any) -> Any:
    value = _blank_to_none(value)
    if isinstance(value, str):
        return value.strip().upper()
    return value


class CardMetadata(BaseModel):
    """Card properties used by filter cards.

    Extra keys (images, descriptions, ...) from stored card records are
    ignored so a full card record can be validated directly.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str | None = Field(default=None, description="Card display name")
    type: str | None = Field(default=None, description="Card type, e.g. 'Effect Monster'")
    attribute: Attribute | None = Field(default=None, description="Monster attribute")
    level: int | None = Field(default=None, description="Level or rank")
    atk: int | None = Field(default=None, description="Attack value")
    archetype: str | None = Field(default=None, description="Archetype name")

    @field_validator("attribute", mode="before")
    @classmethod
    def _normalize_attribute(cls, value: Any) -> Any:
        return _upper_attribute(value)


class RangeFilter(BaseModel):
    """Inclusive numeric range; either bound may be omitted."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min: int | None = None
    max: int | None = None

    @property
    def is_active(self) -> bool:
        return self.min is not None or self.max is not None

    def contains(self, value: int | None) -> bool:
        if value is None:
            return False
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class CardRef(BaseModel):
    """A literal card in a group, identified by its passcode."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(description="Card identifier")
    name: str | None = Field(default=None, description="Display name (informational)")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class FilterCard(BaseModel):
    """A group member that matches any card satisfying its predicates.

    Unset predicates are ignored. A filter with no predicates matches every
    card that has metadata.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    attribute: Attribute | None = Field(default=None, alias="filterByAttribute")
    type: str | None = Field(default=None, alias="filterByType")
    level: RangeFilter | None = Field(default=None, alias="filterByLevel")
    atk: RangeFilter | None = Field(default=None, alias="filterByATK")
    archetype: str | None = Field(default=None, alias="filterByArchetype")

    @field_validator("attribute", mode="before")
    @classmethod
    def _normalize_attribute(cls, value: Any) -> Any:
        return _upper_attribute(value)

    @field_validator("type", "archetype", mode="before")
    @classmethod
    def _normalize_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def describe(self) -> str:
        """Short human-readable summary, e.g. ``DARK, Level 4-4``."""
        parts = []
        if self.attribute is not None:
            parts.append(self.attribute.value)
        if self.type is not None:
            parts.append(self.type)
        if self.archetype is not None:
            parts.append(f'"{self.archetype}"')
        for label, bounds in (("Level", self.level), ("ATK", self.atk)):
            if bounds is not None and bounds.is_active:
                low = "" if bounds.min is None else bounds.min
                high = "" if bounds.max is None else bounds.max
                parts.append(f"{label} {low}-{high}")
        return ", ".join(parts) or "any card"


GroupMember = CardRef | FilterCard


class Condition(BaseModel):
    """One comparison rule over the number of hand cards matched by a group."""

    group: list[GroupMember] = Field(
        default_factory=list,
        description="OR-joined members; their matches are summed",
    )
    op: ConditionOp = Field(default="=", description="Comparison operator ('!=' means exclude)")
    count: int = Field(default=1, ge=0, description="Target count (ignored for '!=')")
    single: bool = Field(
        default=False,
        description="Single-card slot: at most one member, which must be a literal card",
    )

    @model_validator(mode="after")
    def _check_single_slot(self) -> Condition:
        if self.single:
            if len(self.group) > 1:
                raise ValueError("A single-card slot can hold at most one card")
            if any(isinstance(member, FilterCard) for member in self.group):
                raise ValueError("A single-card slot must reference a literal card")
        return self


class TargetHand(BaseModel):
    """Conditions that must all hold for a hand to count as a hit.

    A bare list of conditions is accepted in place of the object form.
    """

    name: str | None = Field(default=None, description="Optional label")
    conditions: list[Condition] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_condition_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"conditions": data}
        return data

    def filter_cards(self) -> list[FilterCard]:
        """All filter cards referenced by this target hand."""
        return [
            member
            for condition in self.conditions
            for member in condition.group
            if isinstance(member, FilterCard)
        ]


class SimulationRequest(BaseModel):
    """Everything one simulation run needs, built fresh per run."""

    deck: list[str] = Field(description="Main deck card identifiers, one entry per copy")
    hand_size: int = Field(default=5, ge=0, description="Cards drawn per trial")
    trials: int = Field(default=1000, description="Number of hands to draw")
    target_hands: list[TargetHand] = Field(default_factory=list)
    exclusive: bool = Field(
        default=False,
        description=(
            "Count each hand toward at most one target hand: the first one, "
            "in listed order, that it matches"
        ),
    )
    seed: int | None = Field(default=None, description="Random seed for reproducibility")

    @field_validator("deck", mode="before")
    @classmethod
    def _stringify_deck(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [str(card) if isinstance(card, int) else card for card in value]
        return value


class TargetHandResult(BaseModel):
    """Hits for a single target hand."""

    index: int = Field(ge=0, description="Position of the target hand in the request")
    name: str | None = Field(default=None, description="Target hand label")
    hits: int = Field(ge=0, description="Number of trials that matched")
    percentage: float = Field(ge=0.0, le=100.0, description="hits / trials * 100, 2 decimals")


class SimulationResult(BaseModel):
    """Aggregated results of a simulation run."""

    trials: int = Field(description="Number of trials run")
    hand_size: int = Field(description="Cards drawn per trial")
    deck_size: int = Field(description="Cards in the sampled deck")
    exclusive: bool = Field(description="Whether exclusive counting was used")
    seed: int = Field(description="Seed that reproduces this run")
    results: list[TargetHandResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    elapsed_ms: float | None = Field(default=None, description="Wall-clock run time")

    @property
    def hit_counts(self) -> list[int]:
        return [result.hits for result in self.results]
