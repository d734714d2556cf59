"""
Tests for the move rules.

Tests:
- Sequence validity (color and rank)
- Empty and non-empty lane placement
- Foundation placement
- Stack validity
"""

from patience.engine_core.rules import (
    can_move_stack,
    can_place_on_foundation,
    can_place_on_lane,
    foundation_placement_error,
    lane_placement_error,
    sequence_valid,
    stack_move_error,
)
from patience.engine_core.state import Foundation, Lane, Rank, Suit

from .factories import card, foundation, lane


class TestSequenceValid:
    """Tests for sequence_valid."""

    def test_opposite_color_one_lower(self):
        assert sequence_valid(card("5H"), card("6C"))

    def test_wrong_rank(self):
        assert not sequence_valid(card("5H"), card("7H"))

    def test_same_color(self):
        assert not sequence_valid(card("5H"), card("6H"))
        assert not sequence_valid(card("5H"), card("6D"))

    def test_order_matters(self):
        """The lower card must be the one placed."""
        assert not sequence_valid(card("6C"), card("5H"))

    def test_ace_on_two(self):
        assert sequence_valid(card("AS"), card("2D"))


class TestLanePlacement:
    """Tests for can_place_on_lane."""

    def test_king_on_empty_lane(self):
        assert can_place_on_lane(card("KS"), Lane(number=1))

    def test_queen_on_empty_lane(self):
        assert not can_place_on_lane(card("QD"), Lane(number=1))

    def test_continues_run(self):
        assert can_place_on_lane(card("QD"), lane(2, "KS"))
        assert not can_place_on_lane(card("QS"), lane(2, "KC"))

    def test_error_messages(self):
        assert lane_placement_error(card("KS"), Lane(number=1)) is None
        assert "Only Kings" in lane_placement_error(card("QD"), Lane(number=1))
        assert "cannot be placed" in lane_placement_error(card("9H"), lane(3, "JS"))


class TestFoundationPlacement:
    """Tests for can_place_on_foundation."""

    def test_only_ace_starts_foundation(self):
        diamonds = Foundation(suit=Suit.DIAMONDS)
        assert not can_place_on_foundation(card("5D"), diamonds)
        assert can_place_on_foundation(card("AD"), diamonds)

    def test_builds_up_in_suit(self):
        diamonds = foundation(Suit.DIAMONDS, Rank.ACE)
        assert can_place_on_foundation(card("2D"), diamonds)
        assert not can_place_on_foundation(card("2H"), diamonds)
        assert not can_place_on_foundation(card("4D"), diamonds)

    def test_ace_of_other_suit_rejected(self):
        assert not can_place_on_foundation(card("AH"), Foundation(suit=Suit.SPADES))

    def test_error_messages(self):
        assert "Only Aces" in foundation_placement_error(card("5D"), Foundation(suit=Suit.DIAMONDS))
        assert "does not belong" in foundation_placement_error(card("2H"), foundation(Suit.SPADES, Rank.ACE))


class TestStacks:
    """Tests for can_move_stack and stack_move_error."""

    def test_single_card_is_valid(self):
        assert can_move_stack([card("7C")])

    def test_descending_alternating_run(self):
        assert can_move_stack([card("10S"), card("9H"), card("8C")])

    def test_broken_run(self):
        assert not can_move_stack([card("10S"), card("9S"), card("8S")])
        assert not can_move_stack([card("10S"), card("9H"), card("7C")])

    def test_hidden_cards_cannot_be_lifted(self):
        source = lane(1, "QD", "JS", hidden=1)
        assert stack_move_error(source, 1) is None
        assert "face-up" in stack_move_error(source, 2)

    def test_not_enough_cards(self):
        assert "Not enough" in stack_move_error(lane(1, "KS"), 3)

    def test_empty_lane(self):
        assert "empty" in stack_move_error(Lane(number=4), 1)
