"""Tests for YGOPRODeck card import."""

from unittest.mock import MagicMock

import httpx
import pytest

from backend.services.card_import import API_URL, fetch_cards, import_cards, transform_card


@pytest.fixture
def raw_dragon():
    """Card record as returned by YGOPRODeck."""
    return {
        "id": 89631139,
        "name": "Blue-Eyes White Dragon",
        "type": "Normal Monster",
        "frameType": "normal",
        "desc": "This legendary dragon is a powerful engine of destruction.",
        "atk": 3000,
        "def": 2500,
        "level": 8,
        "race": "Dragon",
        "attribute": "LIGHT",
        "archetype": "Blue-Eyes",
        "card_images": [
            {
                "id": 89631139,
                "image_url": "https://images.ygoprodeck.com/images/cards/89631139.jpg",
            }
        ],
    }


@pytest.fixture
def raw_link():
    return {
        "id": 1861629,
        "name": "Decode Talker",
        "type": "Link Monster",
        "frameType": "link",
        "atk": 2300,
        "linkval": 3,
        "race": "Cyberse",
        "attribute": "DARK",
        "archetype": None,
        "card_images": [],
    }


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestTransformCard:
    """Tests for transform_card."""

    def test_monster(self, raw_dragon):
        card = transform_card(raw_dragon)

        assert card == {
            "id": "89631139",
            "name": "Blue-Eyes White Dragon",
            "type": "Normal Monster",
            "frameType": "normal",
            "race": "Dragon",
            "attribute": "LIGHT",
            "archetype": "Blue-Eyes",
            "level": 8,
            "atk": 3000,
            "def": 2500,
            "image": "https://images.ygoprodeck.com/images/cards/89631139.jpg",
        }

    def test_link_rating_is_not_a_level(self, raw_link):
        card = transform_card(raw_link)

        assert card["linkval"] == 3
        assert "level" not in card
        assert "archetype" not in card
        assert "image" not in card

    def test_spell_has_no_stats(self):
        card = transform_card({"id": 83764718, "name": "Monster Reborn", "type": "Spell Card"})
        assert card == {"id": "83764718", "name": "Monster Reborn", "type": "Spell Card"}


class TestFetchCards:
    """Tests for fetch_cards."""

    def test_archetype_query(self, raw_dragon):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"data": [raw_dragon]})

        cards = fetch_cards(archetype="Blue-Eyes", http_client=mock_client(handler))

        assert cards == [raw_dragon]
        assert str(requests[0].url).startswith(API_URL)
        assert requests[0].url.params["archetype"] == "Blue-Eyes"

    def test_id_query(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["id"] = request.url.params["id"]
            return httpx.Response(200, json={"data": []})

        fetch_cards(card_ids=["89631139", "46986414"], http_client=mock_client(handler))

        assert seen["id"] == "89631139,46986414"

    def test_no_match_returns_empty(self):
        """YGOPRODeck answers 400 when nothing matches."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "No card matching your query was found"})

        assert fetch_cards(archetype="Nothing", http_client=mock_client(handler)) == []

    def test_server_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        with pytest.raises(httpx.HTTPStatusError):
            fetch_cards(archetype="Blue-Eyes", http_client=mock_client(handler))


class TestImportCards:
    """Tests for import_cards."""

    def test_upserts_transformed_cards(self, raw_dragon, raw_link):
        store = MagicMock()

        count = import_cards([raw_dragon, raw_link], store)

        assert count == 2
        stored = [call.args[0] for call in store.add_card.call_args_list]
        assert [card["id"] for card in stored] == ["89631139", "1861629"]
