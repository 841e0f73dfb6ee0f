"""ChromaDB client for card and deck storage."""

import json
import uuid
from typing import Any, Optional

import chromadb

from backend.services.sim_config import get_sim_config

DECK_LIST_FIELDS = ("main", "extra", "side")


def _clean_metadata(record: dict[str, Any]) -> dict[str, Any]:
    """Drop the id and None values; ChromaDB metadata must be scalars."""
    return {k: v for k, v in record.items() if k != "id" and v is not None}


def _where(filters: dict[str, Any]) -> Optional[dict]:
    """Build a ChromaDB where clause from equality filters."""
    clauses = [{key: value} for key, value in filters.items() if value is not None]
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def _deck_to_metadata(deck: dict[str, Any]) -> dict[str, Any]:
    metadata = {
        "name": deck["name"],
        "notes": deck.get("notes") or "",
    }
    for field in DECK_LIST_FIELDS:
        metadata[field] = json.dumps(list(deck.get(field) or []))
    return metadata


def _deck_from_record(deck_id: str, metadata: dict[str, Any]) -> dict[str, Any]:
    deck = {"id": deck_id, "name": metadata.get("name", ""), "notes": metadata.get("notes", "")}
    for field in DECK_LIST_FIELDS:
        deck[field] = json.loads(metadata.get(field) or "[]")
    return deck


class ChromaClient:
    """ChromaDB client wrapper for the Deck Assistant."""

    def __init__(self, persist_path: Optional[str] = None):
        """Initialize ChromaDB client.

        Args:
            persist_path: Path to persist ChromaDB data (CHROMA_PATH when omitted)
        """
        self.client = chromadb.PersistentClient(path=persist_path or get_sim_config().chroma_path)
        self.cards = self.client.get_or_create_collection("cards")
        self.decks = self.client.get_or_create_collection("decks")

    # Card operations
    def get_card(self, card_id: str) -> Optional[dict]:
        """Fetch single card by ID."""
        result = self.cards.get(ids=[card_id], include=["metadatas"])
        if not result["ids"]:
            return None
        return {"id": result["ids"][0], **result["metadatas"][0]}

    def get_cards(self, card_ids: list[str]) -> list[dict]:
        """Fetch many cards by ID. Unknown IDs are skipped."""
        unique_ids = list(dict.fromkeys(card_ids))
        if not unique_ids:
            return []
        result = self.cards.get(ids=unique_ids, include=["metadatas"])
        return [
            {"id": card_id, **metadata}
            for card_id, metadata in zip(result["ids"], result["metadatas"])
        ]

    def search_cards(
        self,
        query: Optional[str] = None,
        attribute: Optional[str] = None,
        type_filter: Optional[str] = None,
        archetype: Optional[str] = None,
        limit: int = 100,
    ) -> list[dict]:
        """Search cards by name (semantic) with metadata filters."""
        where = _where({"attribute": attribute, "type": type_filter, "archetype": archetype})
        if query:
            result = self.cards.query(
                query_texts=[query],
                where=where,
                n_results=limit,
                include=["metadatas"],
            )
            ids, metadatas = result["ids"][0], result["metadatas"][0]
        else:
            result = self.cards.get(where=where, limit=limit, include=["metadatas"])
            ids, metadatas = result["ids"], result["metadatas"]
        return [{"id": card_id, **metadata} for card_id, metadata in zip(ids, metadatas)]

    def add_card(self, card: dict) -> None:
        """Insert or replace a card."""
        card_id = str(card["id"])
        self.cards.upsert(
            ids=[card_id],
            documents=[card.get("name") or card_id],
            metadatas=[_clean_metadata(card)],
        )

    # Deck operations
    def list_decks(self) -> list[dict]:
        """Return all decks."""
        result = self.decks.get(include=["metadatas"])
        return [
            _deck_from_record(deck_id, metadata)
            for deck_id, metadata in zip(result["ids"], result["metadatas"])
        ]

    def get_deck(self, deck_id: str) -> Optional[dict]:
        """Fetch single deck with its card lists."""
        result = self.decks.get(ids=[deck_id], include=["metadatas"])
        if not result["ids"]:
            return None
        return _deck_from_record(result["ids"][0], result["metadatas"][0])

    def create_deck(self, deck: dict) -> str:
        """Create deck, return new ID."""
        deck_id = str(uuid.uuid4())
        self.decks.add(
            ids=[deck_id],
            documents=[deck["name"]],
            metadatas=[_deck_to_metadata(deck)],
        )
        return deck_id

    def update_deck(self, deck_id: str, updates: dict) -> None:
        """Update deck fields.

        Raises:
            ValueError: If the deck does not exist.
        """
        existing = self.get_deck(deck_id)
        if existing is None:
            raise ValueError(f"Deck {deck_id} not found")
        merged = {**existing, **updates}
        self.decks.update(
            ids=[deck_id],
            documents=[merged["name"]],
            metadatas=[_deck_to_metadata(merged)],
        )

    def delete_deck(self, deck_id: str) -> None:
        """Remove deck."""
        self.decks.delete(ids=[deck_id])
