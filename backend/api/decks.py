"""Deck API endpoints."""

from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Depends, Response

from backend.models.deck_models import (
    DeckCreate,
    DeckImportYDK,
    DeckSections,
    DeckUpdate,
    DeckValidationResult,
)
from backend.services.chroma_client import ChromaClient
from backend.services.validators import DeckValidator
from backend.services.ydk_parser import parse_ydk, to_ydk

router = APIRouter()


def get_chroma_client() -> ChromaClient:
    """Dependency to get ChromaDB client."""
    return ChromaClient()


def get_deck_validator() -> DeckValidator:
    """Dependency to get the deck validator."""
    return DeckValidator()


def _attachment(name: str, extension: str) -> str:
    """Content-Disposition value with an ASCII fallback and an RFC 5987 UTF-8 name."""
    fallback = "".join(
        char for char in name if char.isascii() and char.isprintable() and char not in '"\\'
    ).strip()
    return (
        f"attachment; filename=\"{fallback or 'deck'}{extension}\"; "
        f"filename*=UTF-8''{quote(name + extension, safe='')}"
    )


def _validate(
    validator: DeckValidator, deck: DeckSections, client: ChromaClient
) -> DeckValidationResult:
    """Validate a deck, naming cards from the card store in messages."""
    card_ids = list(dict.fromkeys(deck.main + deck.extra + deck.side))
    card_names = {
        card["id"]: card["name"] for card in client.get_cards(card_ids) if card.get("name")
    }
    return validator.validate(deck, card_names)


def _check_valid(result: DeckValidationResult) -> None:
    if not result.valid:
        raise HTTPException(status_code=422, detail=result.model_dump())


def _store_deck(deck: dict, client: ChromaClient) -> dict:
    try:
        deck_id = client.create_deck(deck)
        return client.get_deck(deck_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create deck: {str(e)}")


@router.get("/")
async def list_decks(
    client: ChromaClient = Depends(get_chroma_client)
):
    """List all decks."""
    decks = client.list_decks()
    return decks


@router.get("/{deck_id}")
async def get_deck(
    deck_id: str,
    client: ChromaClient = Depends(get_chroma_client)
):
    """Get a single deck by ID."""
    deck = client.get_deck(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck


@router.get("/{deck_id}/ydk")
async def export_deck_ydk(
    deck_id: str,
    client: ChromaClient = Depends(get_chroma_client)
):
    """Download a deck as a .ydk file."""
    deck = client.get_deck(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    content = to_ydk(DeckSections(**deck))
    return Response(
        content,
        media_type="text/plain",
        headers={"Content-Disposition": _attachment(deck["name"], ".ydk")},
    )


@router.post("/")
async def create_deck(
    deck: DeckCreate,
    client: ChromaClient = Depends(get_chroma_client),
    validator: DeckValidator = Depends(get_deck_validator),
):
    """Create a new deck."""
    _check_valid(_validate(validator, deck, client))
    return _store_deck(deck.model_dump(), client)


@router.post("/import-ydk")
async def import_ydk(
    request: DeckImportYDK,
    client: ChromaClient = Depends(get_chroma_client),
    validator: DeckValidator = Depends(get_deck_validator),
):
    """Create a deck from .ydk file contents."""
    sections = parse_ydk(request.content)
    _check_valid(_validate(validator, sections, client))
    deck = {"name": request.name, "notes": request.notes, **sections.model_dump()}
    return _store_deck(deck, client)


@router.post("/{deck_id}/validate", response_model=DeckValidationResult)
async def validate_deck(
    deck_id: str,
    client: ChromaClient = Depends(get_chroma_client),
    validator: DeckValidator = Depends(get_deck_validator),
):
    """Validate a stored deck without modifying it."""
    deck = client.get_deck(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return _validate(validator, DeckSections(**deck), client)


@router.put("/{deck_id}")
async def update_deck(
    deck_id: str,
    updates: DeckUpdate,
    client: ChromaClient = Depends(get_chroma_client),
    validator: DeckValidator = Depends(get_deck_validator),
):
    """Update an existing deck."""
    # Filter out None values
    update_data = {k: v for k, v in updates.model_dump().items() if v is not None}

    existing = client.get_deck(deck_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Deck not found")
    _check_valid(_validate(validator, DeckSections(**{**existing, **update_data}), client))

    try:
        client.update_deck(deck_id, update_data)
        updated_deck = client.get_deck(deck_id)
        return updated_deck
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update deck: {str(e)}")


@router.delete("/{deck_id}")
async def delete_deck(
    deck_id: str,
    client: ChromaClient = Depends(get_chroma_client)
):
    """Delete a deck."""
    try:
        # Check if deck exists
        deck = client.get_deck(deck_id)
        if not deck:
            raise HTTPException(status_code=404, detail="Deck not found")

        client.delete_deck(deck_id)
        return {"message": "Deck deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete deck: {str(e)}")
