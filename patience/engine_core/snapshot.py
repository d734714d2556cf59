"""
Render Snapshot - What a display is allowed to see.

Hidden lane cards are reported as placeholders with no rank or suit,
so a renderer cannot leak them.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .state import Card, GameState, Suit


@dataclass(frozen=True)
class CardView:
    """A lane slot as shown to the player."""
    hidden: bool
    card: Card | None = None


@dataclass(frozen=True)
class RenderSnapshot:
    score: int
    move_count: int
    draw_pile_count: int
    reserve_count: int
    reserve_top: Card | None
    lanes: list[list[CardView]] = field(default_factory=list)
    foundations: dict[Suit, Card | None] = field(default_factory=dict)
    is_won: bool = False


def take_snapshot(state: GameState) -> RenderSnapshot:
    lanes = [
        [
            CardView(hidden=True) if slot.hidden else CardView(hidden=False, card=slot.card)
            for slot in lane.cards
        ]
        for lane in state.lanes
    ]
    return RenderSnapshot(
        score=state.score,
        move_count=state.move_count,
        draw_pile_count=state.draw_pile.count,
        reserve_count=state.reserve.count,
        reserve_top=state.reserve.top_card,
        lanes=lanes,
        foundations={suit: f.top_card for suit, f in state.foundations.items()},
        is_won=state.is_won,
    )
