"""Validators for the Deck Assistant.

Pure Python validation of deck construction rules.
"""

from backend.services.validators.deck_validator import DeckValidator

__all__ = ["DeckValidator"]
