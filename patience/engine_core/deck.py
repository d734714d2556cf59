"""
Game Setup - Builds, shuffles and deals a new game.

This module handles:
- Creating the 52-card deck
- Shuffling with seed for determinism
- Dealing the seven lanes (lane n gets n cards, only the top face up)
- Placing the remaining 24 cards face down on the draw pile
"""

from __future__ import annotations
import random

from .state import (
    Card,
    GamePhase,
    GameState,
    Lane,
    NUM_LANES,
    PlacedCard,
    Pile,
    Rank,
    Suit,
)


def build_deck() -> list[Card]:
    """One card of every suit and rank, in suit-then-rank order."""
    return [Card(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def shuffled_deck(rng: random.Random) -> list[Card]:
    deck = build_deck()
    rng.shuffle(deck)
    return deck


def deal(deck: list[Card]) -> tuple[list[Lane], Pile]:
    """
    Deal lanes from the end of the deck.

    Returns (lanes, draw pile). The input list is not modified.
    """
    remaining = deck.copy()
    lanes = []
    for number in range(1, NUM_LANES + 1):
        slots = []
        for position in range(number):
            card = remaining.pop()
            slots.append(PlacedCard(card=card, hidden=position != number - 1))
        lanes.append(Lane(number=number, cards=slots))

    return lanes, Pile(name="draw_pile", cards=remaining)


def deal_new_game(random_seed: int | None = None) -> GameState:
    """
    Set up a new game.

    Args:
        random_seed: Seed for deterministic shuffling

    Returns:
        Initial GameState ready for play
    """
    rng = random.Random(random_seed)
    if random_seed is None:
        random_seed = rng.randint(0, 999999)
        rng = random.Random(random_seed)

    lanes, draw_pile = deal(shuffled_deck(rng))

    return GameState(
        game_id=f"patience_{random_seed}",
        phase=GamePhase.PLAYING,
        lanes=lanes,
        draw_pile=draw_pile,
        random_seed=random_seed,
    )
