"""Card API endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Depends

from backend.services.chroma_client import ChromaClient

router = APIRouter()


def get_chroma_client() -> ChromaClient:
    """Dependency to get ChromaDB client."""
    return ChromaClient()


@router.get("/")
async def search_cards(
    search: Optional[str] = Query(None, description="Search query for card name"),
    attribute: Optional[str] = Query(None, description="Filter by attribute (e.g. DARK)"),
    type_filter: Optional[str] = Query(None, alias="type", description="Filter by card type"),
    archetype: Optional[str] = Query(None, description="Filter by archetype"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of results"),
    client: ChromaClient = Depends(get_chroma_client),
):
    """Search and filter cards."""
    cards = client.search_cards(
        query=search,
        attribute=attribute.upper() if attribute else None,
        type_filter=type_filter,
        archetype=archetype,
        limit=limit,
    )
    return cards


@router.get("/{card_id}")
async def get_card(
    card_id: str,
    client: ChromaClient = Depends(get_chroma_client)
):
    """Get a single card by ID."""
    card = client.get_card(card_id)
    if not card:
        raise HTTPException(status_code=404, detail="Card not found")
    return card
