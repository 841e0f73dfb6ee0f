"""Card metadata lookup for filter-card evaluation.

The lookup is loaded once per simulation run and then only read. Filter
checks are memoized per (filter, card) pair so the trial loop never
re-evaluates predicates for a card it has already seen.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from backend.models.simulation_models import CardMetadata, FilterCard


def _same_text(actual: str | None, expected: str) -> bool:
    return actual is not None and actual.casefold() == expected.casefold()


def metadata_matches_filter(metadata: CardMetadata | None, card_filter: FilterCard) -> bool:
    """Check a card's metadata against every active predicate of a filter.

    Cards without metadata never match, even a filter with no predicates.
    """
    if metadata is None:
        return False
    if card_filter.attribute is not None and metadata.attribute != card_filter.attribute:
        return False
    if card_filter.type is not None and not _same_text(metadata.type, card_filter.type):
        return False
    if card_filter.archetype is not None and not _same_text(
        metadata.archetype, card_filter.archetype
    ):
        return False
    if card_filter.level is not None and card_filter.level.is_active:
        if not card_filter.level.contains(metadata.level):
            return False
    if card_filter.atk is not None and card_filter.atk.is_active:
        if not card_filter.atk.contains(metadata.atk):
            return False
    return True


class CardMetadataLookup:
    """Read-only mapping of card identifier to CardMetadata.

    Typical usage:
        lookup = CardMetadataLookup.from_records(client.get_cards(deck))
        lookup.prime(filters, set(deck))
        lookup.matches("89631139", FilterCard(attribute="LIGHT"))
    """

    def __init__(
        self, cards: Mapping[str, CardMetadata | Mapping[str, Any]] | None = None
    ) -> None:
        self._cards: dict[str, CardMetadata] = {}
        for card_id, metadata in (cards or {}).items():
            if not isinstance(metadata, CardMetadata):
                metadata = CardMetadata.model_validate(metadata)
            self._cards[str(card_id)] = metadata
        self._filter_cache: dict[tuple[FilterCard, str], bool] = {}

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "CardMetadataLookup":
        """Build a lookup from card records carrying an ``id`` key."""
        return cls({str(record["id"]): record for record in records})

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def get(self, card_id: str) -> CardMetadata | None:
        return self._cards.get(card_id)

    def missing(self, card_ids: Iterable[str]) -> list[str]:
        """Identifiers with no metadata, in first-seen order."""
        return [card_id for card_id in dict.fromkeys(card_ids) if card_id not in self._cards]

    def matches(self, card_id: str, card_filter: FilterCard) -> bool:
        key = (card_filter, card_id)
        cached = self._filter_cache.get(key)
        if cached is None:
            cached = metadata_matches_filter(self._cards.get(card_id), card_filter)
            self._filter_cache[key] = cached
        return cached

    def prime(self, filters: Iterable[FilterCard], card_ids: Iterable[str]) -> None:
        """Evaluate every filter against every card up front."""
        card_ids = list(dict.fromkeys(card_ids))
        for card_filter in dict.fromkeys(filters):
            for card_id in card_ids:
                self.matches(card_id, card_filter)
