"""
Move Rules - Pure predicates deciding whether a transfer is legal.

These functions encode the full rule set. The reducer and the action
generator only ask questions through this module.

The *_error helpers follow the validation convention used throughout
the engine: return an error message if invalid, None if valid.
"""

from __future__ import annotations

from .state import Card, Foundation, Lane, Rank


def sequence_valid(lower: Card, upper: Card) -> bool:
    """True if `lower` may sit on `upper`: opposite colors, one rank below."""
    return lower.color != upper.color and lower.rank == upper.rank - 1


def can_place_on_lane(card: Card, lane: Lane) -> bool:
    """Kings open empty lanes; otherwise the card must continue the run."""
    top = lane.top_card
    if top is None:
        return card.rank == Rank.KING
    return sequence_valid(card, top)


def can_place_on_foundation(card: Card, foundation: Foundation) -> bool:
    """Aces open a foundation of their own suit; then same suit, one rank up."""
    if card.suit != foundation.suit:
        return False
    top = foundation.top_card
    if top is None:
        return card.rank == Rank.ACE
    return card.rank == top.rank + 1


def can_move_stack(cards: list[Card]) -> bool:
    """
    True if the cards (bottom-to-top) form a descending alternating run.

    A single card is trivially a valid stack.
    """
    return all(
        sequence_valid(upper, lower)
        for lower, upper in zip(cards, cards[1:])
    )


def lane_placement_error(card: Card, lane: Lane) -> str | None:
    if can_place_on_lane(card, lane):
        return None
    if lane.is_empty:
        return f"Only Kings can be placed in an empty lane ({card} onto lane {lane.number})."
    return f"{card} cannot be placed on {lane.top_card} in lane {lane.number}."


def foundation_placement_error(card: Card, foundation: Foundation) -> str | None:
    if can_place_on_foundation(card, foundation):
        return None
    suit_name = foundation.suit.value.capitalize()
    if card.suit != foundation.suit:
        return f"{card} does not belong on the {suit_name} suit pile."
    if foundation.is_empty:
        return f"Only Aces can be placed in an empty suit pile ({card} onto {suit_name})."
    return f"{card} cannot be placed on {foundation.top_card} in the {suit_name} suit pile."


def stack_move_error(lane: Lane, count: int) -> str | None:
    """
    Check that the top `count` cards of a lane can be lifted as one stack.

    Only face-up cards can be moved, and they must already form a run.
    """
    if lane.is_empty:
        return f"Cannot move from an empty lane (lane {lane.number})."
    if count > lane.count:
        return f"Not enough cards in lane {lane.number} to move {count}."
    if count > lane.visible_count:
        return f"Only {lane.visible_count} face-up card(s) in lane {lane.number}; cannot move {count}."
    if not can_move_stack(lane.top_cards(count)):
        return f"The top {count} cards of lane {lane.number} do not form a valid sequence."
    return None
