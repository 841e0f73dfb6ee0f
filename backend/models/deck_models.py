"""Pydantic models for decks and deck validation.

A deck has three sections: the main deck (the pool opening hands are drawn
from), the extra deck and the side deck. Each section is a list of card
identifiers with one entry per copy.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


def _stringify_ids(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [str(card) if isinstance(card, int) else card for card in value]
    return value


class DeckSections(BaseModel):
    """Card lists of a deck."""

    main: list[str] = Field(default_factory=list, description="Main deck card IDs")
    extra: list[str] = Field(default_factory=list, description="Extra deck card IDs")
    side: list[str] = Field(default_factory=list, description="Side deck card IDs")

    @field_validator("main", "extra", "side", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return _stringify_ids(value)


class DeckCreate(DeckSections):
    """Request model for deck creation."""

    name: str = Field(min_length=1, max_length=100)
    notes: str | None = Field(default="", max_length=500)


class DeckUpdate(BaseModel):
    """Request model for deck updates. Unset fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    main: list[str] | None = None
    extra: list[str] | None = None
    side: list[str] | None = None
    notes: str | None = Field(default=None, max_length=500)

    @field_validator("main", "extra", "side", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return _stringify_ids(value)


class DeckImportYDK(BaseModel):
    """Request model for importing a .ydk deck file."""

    name: str = Field(min_length=1, max_length=100)
    content: str = Field(description="Raw .ydk file contents")
    notes: str | None = Field(default="", max_length=500)


class ValidationIssue(BaseModel):
    """A single deck validation error or warning."""

    code: str = Field(description="Issue code (e.g. 'COPY_LIMIT', 'MAIN_DECK_SIZE')")
    message: str = Field(description="Human-readable description")
    card_id: str | None = Field(default=None, description="Card involved, if any")
    severity: Literal["error", "warning"] = Field(default="error")


class DeckValidationResult(BaseModel):
    """Result of validating a deck."""

    valid: bool = Field(description="True if there are no errors")
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)
    main_count: int = Field(ge=0)
    extra_count: int = Field(ge=0)
    side_count: int = Field(ge=0)
