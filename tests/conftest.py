"""Shared pytest fixtures."""

import pytest

from backend.models.simulation_models import CardMetadata
from backend.services.hand_sim import CardMetadataLookup


@pytest.fixture
def sample_cards():
    """Card records as stored in the card store."""
    return [
        {
            "id": "89631139",
            "name": "Blue-Eyes White Dragon",
            "type": "Normal Monster",
            "attribute": "LIGHT",
            "level": 8,
            "atk": 3000,
            "archetype": "Blue-Eyes",
        },
        {
            "id": "46986414",
            "name": "Dark Magician",
            "type": "Normal Monster",
            "attribute": "DARK",
            "level": 7,
            "atk": 2500,
            "archetype": "Dark Magician",
        },
        {
            "id": "38517737",
            "name": "Blue-Eyes Alternative White Dragon",
            "type": "Effect Monster",
            "attribute": "LIGHT",
            "level": 8,
            "atk": 3000,
            "archetype": "Blue-Eyes",
        },
        {
            "id": "77585513",
            "name": "Jinzo",
            "type": "Effect Monster",
            "attribute": "DARK",
            "level": 6,
            "atk": 2400,
        },
        {
            "id": "14558127",
            "name": "Ash Blossom & Joyous Spring",
            "type": "Tuner Monster",
            "attribute": "FIRE",
            "level": 3,
            "atk": 0,
        },
        {
            "id": "83764718",
            "name": "Monster Reborn",
            "type": "Spell Card",
        },
        {
            "id": "44095762",
            "name": "Mirror Force",
            "type": "Trap Card",
        },
    ]


@pytest.fixture
def lookup(sample_cards):
    """Metadata lookup over the sample cards."""
    return CardMetadataLookup.from_records(sample_cards)


@pytest.fixture
def sample_deck():
    """Sample 40-card main deck.

    3 Blue-Eyes, 2 Dark Magician, 2 Jinzo, 3 Ash Blossom, 1 Monster Reborn,
    29 cards without metadata.
    """
    deck = (
        ["89631139"] * 3
        + ["46986414"] * 2
        + ["77585513"] * 2
        + ["14558127"] * 3
        + ["83764718"]
    )
    deck += [f"filler{i:02d}" for i in range(40 - len(deck))]
    return deck


@pytest.fixture
def dark_metadata():
    """Metadata map where only 'dark' cards are DARK."""
    return {
        "dark": CardMetadata(attribute="DARK", type="Effect Monster", level=4, atk=1800),
        "light": CardMetadata(attribute="LIGHT", type="Effect Monster", level=4, atk=1900),
        "spell": CardMetadata(type="Spell Card"),
    }
