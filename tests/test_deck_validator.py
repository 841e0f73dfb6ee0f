"""Tests for DeckValidator.

Tests pure Python validation of deck construction rules.
"""

import pytest

from backend.models.deck_models import DeckSections
from backend.services.validators.deck_validator import (
    EXTRA_DECK_MAX,
    MAIN_DECK_MAX,
    MAIN_DECK_MIN,
    DeckValidator,
)

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def validator() -> DeckValidator:
    """Create a validator with the standard copy limit."""
    return DeckValidator(max_copies=3)


def distinct_cards(count: int, prefix: str = "card") -> list[str]:
    return [f"{prefix}{i:03d}" for i in range(count)]


# =============================================================================
# Section Sizes
# =============================================================================


class TestSectionSizes:
    """Tests for main, extra and side deck sizes."""

    def test_legal_deck(self, validator, sample_deck):
        result = validator.validate(DeckSections(main=sample_deck))
        assert result.valid
        assert result.errors == []
        assert result.warnings == []
        assert result.main_count == 40

    def test_main_deck_too_large(self, validator):
        result = validator.validate(DeckSections(main=distinct_cards(MAIN_DECK_MAX + 1)))
        assert not result.valid
        assert [error.code for error in result.errors] == ["MAIN_DECK_SIZE"]

    def test_main_deck_maximum_is_allowed(self, validator):
        assert validator.validate(DeckSections(main=distinct_cards(MAIN_DECK_MAX))).valid

    def test_small_main_deck_is_a_warning(self, validator):
        """Decks under 40 cards stay valid so they can be built up and simulated."""
        result = validator.validate(DeckSections(main=distinct_cards(MAIN_DECK_MIN - 1)))
        assert result.valid
        assert result.warnings[0].code == "MAIN_DECK_SIZE"
        assert result.warnings[0].severity == "warning"

    def test_extra_deck_too_large(self, validator):
        deck = DeckSections(
            main=distinct_cards(40), extra=distinct_cards(EXTRA_DECK_MAX + 1, "extra")
        )
        result = validator.validate(deck)
        assert not result.valid
        assert result.errors[0].code == "EXTRA_DECK_SIZE"
        assert result.extra_count == EXTRA_DECK_MAX + 1

    def test_side_deck_too_large(self, validator):
        deck = DeckSections(main=distinct_cards(40), side=distinct_cards(16, "side"))
        result = validator.validate(deck)
        assert result.errors[0].code == "SIDE_DECK_SIZE"
        assert "16" in result.errors[0].message


# =============================================================================
# Copy Limits
# =============================================================================


class TestCopyLimits:
    """Tests for per-card copy limits."""

    def test_three_copies_allowed(self, validator):
        deck = DeckSections(main=["a"] * 3 + distinct_cards(37))
        assert validator.validate(deck).valid

    def test_four_copies_rejected(self, validator):
        deck = DeckSections(main=["a"] * 4 + distinct_cards(36))
        result = validator.validate(deck)
        assert not result.valid
        assert result.errors[0].code == "COPY_LIMIT"
        assert result.errors[0].card_id == "a"

    def test_copies_counted_across_sections(self, validator):
        deck = DeckSections(main=["a"] * 2 + distinct_cards(38), side=["a"] * 2)
        result = validator.validate(deck)
        assert [error.card_id for error in result.errors] == ["a"]

    def test_card_name_in_message(self, validator):
        deck = DeckSections(main=["89631139"] * 4 + distinct_cards(36))
        result = validator.validate(deck, card_names={"89631139": "Blue-Eyes White Dragon"})
        assert result.errors[0].message == "'Blue-Eyes White Dragon' has 4 copies (max 3)"

    def test_custom_copy_limit(self):
        deck = DeckSections(main=["a"] * 2 + distinct_cards(38))
        result = DeckValidator(max_copies=1).validate(deck)
        assert not result.valid

    def test_default_copy_limit_from_config(self, monkeypatch):
        from backend.services import sim_config

        monkeypatch.setenv("DECK_MAX_COPIES", "2")
        sim_config.clear_config_cache()
        try:
            assert DeckValidator().max_copies == 2
        finally:
            sim_config.clear_config_cache()

    def test_multiple_errors_reported(self, validator):
        deck = DeckSections(main=["a"] * 4 + ["b"] * 5 + distinct_cards(60))
        result = validator.validate(deck)
        codes = sorted(error.code for error in result.errors)
        assert codes == ["COPY_LIMIT", "COPY_LIMIT", "MAIN_DECK_SIZE"]
