"""Tests for simulation request and target hand models."""

import pytest
from pydantic import ValidationError

from backend.models.simulation_models import (
    Attribute,
    CardRef,
    Condition,
    FilterCard,
    RangeFilter,
    SimulationRequest,
    SimulationResult,
    TargetHand,
    TargetHandResult,
)


class TestGroupMembers:
    """Tests for parsing literal and filter group members."""

    def test_literal_and_filter_in_one_group(self):
        condition = Condition.model_validate(
            {
                "group": [
                    {"id": "89631139", "name": "Blue-Eyes White Dragon"},
                    {"filterByAttribute": "dark", "filterByLevel": {"min": 4, "max": 4}},
                ],
                "op": ">=",
                "count": 1,
            }
        )
        literal, card_filter = condition.group
        assert isinstance(literal, CardRef)
        assert isinstance(card_filter, FilterCard)
        assert card_filter.attribute == Attribute.DARK
        assert card_filter.level == RangeFilter(min=4, max=4)

    def test_integer_card_id(self):
        condition = Condition.model_validate({"group": [{"id": 89631139}]})
        assert condition.group[0] == CardRef(id="89631139")

    def test_filter_by_field_name(self):
        card_filter = FilterCard(attribute="WIND", archetype="Speedroid")
        assert card_filter.attribute == Attribute.WIND
        assert card_filter.archetype == "Speedroid"

    def test_blank_filter_values_are_unset(self):
        card_filter = FilterCard.model_validate(
            {"filterByAttribute": "", "filterByType": "  ", "filterByArchetype": ""}
        )
        assert card_filter == FilterCard()

    def test_unknown_attribute_rejected(self):
        with pytest.raises(ValidationError):
            FilterCard(attribute="SHADOW")

    def test_describe(self):
        card_filter = FilterCard(attribute="DARK", level=RangeFilter(min=4, max=4))
        assert card_filter.describe() == "DARK, Level 4-4"
        assert FilterCard(atk=RangeFilter(max=1500)).describe() == "ATK -1500"
        assert FilterCard().describe() == "any card"


class TestCondition:
    """Tests for Condition defaults and single-card slots."""

    def test_defaults(self):
        condition = Condition()
        assert condition.op == "="
        assert condition.count == 1
        assert condition.group == []

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValidationError):
            Condition(op="==")

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            Condition(count=-1)

    def test_single_slot_holds_one_card(self):
        condition = Condition(group=[CardRef(id="a")], single=True)
        assert condition.single

    def test_single_slot_rejects_multiple_cards(self):
        with pytest.raises(ValidationError, match="at most one card"):
            Condition(group=[CardRef(id="a"), CardRef(id="b")], single=True)

    def test_single_slot_rejects_filter(self):
        with pytest.raises(ValidationError, match="literal card"):
            Condition(group=[FilterCard(attribute="DARK")], single=True)


class TestTargetHand:
    """Tests for TargetHand parsing."""

    def test_bare_condition_list(self):
        target = TargetHand.model_validate([{"group": [{"id": "a"}], "op": ">=", "count": 1}])
        assert len(target.conditions) == 1
        assert target.name is None

    def test_filter_cards(self):
        target = TargetHand(
            conditions=[
                Condition(group=[CardRef(id="a"), FilterCard(attribute="DARK")]),
                Condition(group=[FilterCard(type="Spell Card")]),
            ]
        )
        assert target.filter_cards() == [
            FilterCard(attribute="DARK"),
            FilterCard(type="Spell Card"),
        ]


class TestSimulationRequest:
    """Tests for SimulationRequest."""

    def test_defaults(self):
        request = SimulationRequest(deck=["a"] * 40)
        assert request.hand_size == 5
        assert request.trials == 1000
        assert request.exclusive is False
        assert request.seed is None

    def test_integer_deck_entries(self):
        request = SimulationRequest(deck=[89631139, "46986414"])
        assert request.deck == ["89631139", "46986414"]

    def test_negative_hand_size_rejected(self):
        with pytest.raises(ValidationError):
            SimulationRequest(deck=["a"], hand_size=-1)

    def test_target_hands_from_wire_format(self):
        request = SimulationRequest.model_validate(
            {
                "deck": ["a", "b"],
                "target_hands": [
                    [{"group": [{"id": "a"}], "op": ">=", "count": 1}],
                    {"name": "No B", "conditions": [{"group": [{"id": "b"}], "op": "!="}]},
                ],
            }
        )
        assert request.target_hands[0].name is None
        assert request.target_hands[1].name == "No B"


class TestSimulationResult:
    """Tests for SimulationResult."""

    def test_hit_counts(self):
        result = SimulationResult(
            trials=10,
            hand_size=5,
            deck_size=40,
            exclusive=False,
            seed=1,
            results=[
                TargetHandResult(index=0, hits=3, percentage=30.0),
                TargetHandResult(index=1, hits=7, percentage=70.0),
            ],
        )
        assert result.hit_counts == [3, 7]
