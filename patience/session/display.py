"""
Text Display - Renders a snapshot for the terminal.

Presentation only: reads a RenderSnapshot, never the GameState, so a
hidden card can only ever print as '*'.
"""

from __future__ import annotations

from ..engine_core.snapshot import RenderSnapshot
from ..engine_core.state import Suit

RULE = "-" * 74


def render_text(snapshot: RenderSnapshot) -> str:
    lines = [
        RULE,
        f"Score: {snapshot.score} || Moves: {snapshot.move_count}",
        f"Draw Pile: {snapshot.draw_pile_count} cards remaining.",
    ]
    if snapshot.reserve_top is not None:
        lines.append(f"Last drawn: {snapshot.reserve_top} ({snapshot.reserve_count} unused)")
    lines.append(RULE)

    for number, lane in enumerate(snapshot.lanes, start=1):
        if lane:
            cards = " ".join("*" if view.hidden else str(view.card) for view in lane)
        else:
            cards = "<- Empty ->"
        lines.append(f"Lane {number}: {cards}")

    lines.extend([RULE, "Suit Piles".center(74).rstrip(), RULE])
    for suit in Suit:
        top = snapshot.foundations.get(suit)
        label = f"{suit.value.capitalize()}:".ljust(10)
        lines.append(f"{label}{top if top is not None else '-'}")

    if snapshot.is_won:
        lines.extend([RULE, "You won!"])
    return "\n".join(lines)
