"""Pure Python deck validator for deck construction rules.

Checks section sizes and per-card copy limits. Validation never looks at
card metadata, so decks containing cards missing from the card store can
still be validated (and simulated).
"""

from collections import Counter
from typing import Any

from backend.models.deck_models import DeckSections, DeckValidationResult, ValidationIssue
from backend.services.sim_config import get_sim_config

MAIN_DECK_MIN = 40
MAIN_DECK_MAX = 60
EXTRA_DECK_MAX = 15
SIDE_DECK_MAX = 15


class DeckValidator:
    """Validates decks against construction rules.

    Typical usage:
        validator = DeckValidator()
        result = validator.validate(DeckSections(main=[...], extra=[...]))
        if not result.valid:
            # Reject the deck
    """

    def __init__(self, max_copies: int | None = None) -> None:
        """Initialize the validator.

        Args:
            max_copies: Copies allowed per card across all sections
                (DECK_MAX_COPIES when omitted).
        """
        self.max_copies = max_copies if max_copies is not None else get_sim_config().max_copies

    def validate(
        self,
        deck: DeckSections,
        card_names: dict[str, str] | None = None,
    ) -> DeckValidationResult:
        """Validate a deck.

        Args:
            deck: Deck sections to check
            card_names: Optional display names for messages, keyed by card ID

        Returns:
            DeckValidationResult with valid flag, errors, and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        # 1. Section sizes
        size_errors, size_warnings = self._validate_section_sizes(deck)
        errors.extend(size_errors)
        warnings.extend(size_warnings)

        # 2. Copy limits across main, extra and side
        errors.extend(self._validate_copy_limits(deck, card_names or {}))

        return DeckValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            main_count=len(deck.main),
            extra_count=len(deck.extra),
            side_count=len(deck.side),
        )

    def _validate_section_sizes(
        self, deck: DeckSections
    ) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        if len(deck.main) > MAIN_DECK_MAX:
            errors.append(
                ValidationIssue(
                    code="MAIN_DECK_SIZE",
                    message=f"Main deck has {len(deck.main)} cards (max {MAIN_DECK_MAX})",
                )
            )
        elif len(deck.main) < MAIN_DECK_MIN:
            warnings.append(
                ValidationIssue(
                    code="MAIN_DECK_SIZE",
                    message=f"Main deck has only {len(deck.main)} cards (min {MAIN_DECK_MIN})",
                    severity="warning",
                )
            )

        for section, cards, limit in (
            ("Extra", deck.extra, EXTRA_DECK_MAX),
            ("Side", deck.side, SIDE_DECK_MAX),
        ):
            if len(cards) > limit:
                errors.append(
                    ValidationIssue(
                        code=f"{section.upper()}_DECK_SIZE",
                        message=f"{section} deck has {len(cards)} cards (max {limit})",
                    )
                )

        return errors, warnings

    def _validate_copy_limits(
        self,
        deck: DeckSections,
        card_names: dict[str, Any],
    ) -> list[ValidationIssue]:
        """Validate copy limits, counting copies in every section."""
        errors: list[ValidationIssue] = []
        card_counts = Counter(deck.main + deck.extra + deck.side)

        for card_id, count in card_counts.items():
            if count > self.max_copies:
                card_name = card_names.get(card_id, card_id)
                errors.append(
                    ValidationIssue(
                        code="COPY_LIMIT",
                        message=f"'{card_name}' has {count} copies (max {self.max_copies})",
                        card_id=card_id,
                    )
                )

        return errors
