"""
Engine Core - Deterministic patience state management and move resolution.

The engine is the runtime that:
1. Deals a GameState
2. Parses player commands into Actions
3. Guards against oscillating lane moves
4. Applies actions via the reducer
5. Generates legal actions and render snapshots
"""

from .state import (
    Card,
    Color,
    Foundation,
    GamePhase,
    GameState,
    Lane,
    Location,
    PlacedCard,
    Pile,
    Rank,
    Suit,
)
from .action import Action, ActionType, ActionPayload, ActionResult, Outcome
from .rules import can_move_stack, can_place_on_foundation, can_place_on_lane, sequence_valid
from .reducer import Reducer, ScoringRules, apply_action
from .oscillation import OscillationGuard
from .command import Command, CommandKind, command_for, parse_command
from .deck import build_deck, deal_new_game
from .action_generator import ActionGenerator, has_possible_moves, legal_actions
from .snapshot import CardView, RenderSnapshot, take_snapshot

__all__ = [
    "Card",
    "Color",
    "Foundation",
    "GamePhase",
    "GameState",
    "Lane",
    "Location",
    "PlacedCard",
    "Pile",
    "Rank",
    "Suit",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Outcome",
    "can_move_stack",
    "can_place_on_foundation",
    "can_place_on_lane",
    "sequence_valid",
    "Reducer",
    "ScoringRules",
    "apply_action",
    "OscillationGuard",
    "Command",
    "CommandKind",
    "command_for",
    "parse_command",
    "build_deck",
    "deal_new_game",
    "ActionGenerator",
    "has_possible_moves",
    "legal_actions",
    "CardView",
    "RenderSnapshot",
    "take_snapshot",
]
