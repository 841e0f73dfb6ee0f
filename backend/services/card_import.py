"""Card metadata import from the YGOPRODeck API.

Fetches card records and flattens them into the schema stored in the
ChromaDB ``cards`` collection (scalar metadata values only).
"""

from typing import Any, Optional

import httpx

from backend.core.logging_config import get_logger

API_URL = "https://db.ygoprodeck.com/api/v7/cardinfo.php"

logger = get_logger(__name__)

# Card record fields copied as-is when present
PASSTHROUGH_FIELDS = ("name", "type", "frameType", "race", "attribute", "archetype")
NUMERIC_FIELDS = ("level", "atk", "def", "linkval")


def fetch_cards(
    archetype: Optional[str] = None,
    card_ids: Optional[list[str]] = None,
    http_client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
) -> list[dict]:
    """Fetch card records from YGOPRODeck.

    Args:
        archetype: Restrict to one archetype (e.g. "Blue-Eyes")
        card_ids: Restrict to specific passcodes
        http_client: Client to use (a new one is created when omitted)
        timeout: Request timeout in seconds

    Returns:
        List of raw card dictionaries (empty if nothing matched)
    """
    params: dict[str, str] = {}
    if archetype:
        params["archetype"] = archetype
    if card_ids:
        params["id"] = ",".join(card_ids)

    client = http_client or httpx.Client(timeout=timeout)
    try:
        response = client.get(API_URL, params=params)
    finally:
        if http_client is None:
            client.close()

    # YGOPRODeck answers 400 when no card matches the query
    if response.status_code == 400:
        logger.info(f"No cards matched query: {params}")
        return []
    response.raise_for_status()
    return response.json().get("data", [])


def transform_card(raw: dict[str, Any]) -> dict[str, Any]:
    """Flatten a YGOPRODeck card record into the card store schema.

    Args:
        raw: Card data from the YGOPRODeck API

    Returns:
        Card dictionary with an ``id`` key and no None values
    """
    card: dict[str, Any] = {"id": str(raw["id"])}
    for field in PASSTHROUGH_FIELDS:
        if raw.get(field):
            card[field] = raw[field]
    for field in NUMERIC_FIELDS:
        if isinstance(raw.get(field), int):
            card[field] = raw[field]

    images = raw.get("card_images") or []
    if images and images[0].get("image_url"):
        card["image"] = images[0]["image_url"]

    return card


def import_cards(raw_cards: list[dict], store: Any) -> int:
    """Transform and upsert card records into a card store.

    Args:
        raw_cards: Raw YGOPRODeck card records
        store: Object with an ``add_card(card)`` method (ChromaClient)

    Returns:
        Number of cards imported
    """
    for raw in raw_cards:
        store.add_card(transform_card(raw))
    logger.info(f"Imported {len(raw_cards)} cards")
    return len(raw_cards)
