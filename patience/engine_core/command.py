"""
Command Parsing - Turns a raw input token into a Command.

Token shapes (after strip + upper-case):
    Q       quit
    D       draw
    SDN     move N cards from lane S to lane D (three digits)
    PX      reserve to lane digit X or suit letter X
    SD      one card from lane S to lane D
    SX      top card of lane S to suit pile X

Anything else is malformed and parses to None. Raw strings stop here:
the rest of the engine sees Locations and Actions only.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .action import Action, ActionType
from .state import Location, NUM_LANES, Suit


MAX_STACK_COUNT = 9

# Command digits are ASCII only
LANE_DIGITS = "".join(str(n) for n in range(1, NUM_LANES + 1))
COUNT_DIGITS = "".join(str(n) for n in range(1, MAX_STACK_COUNT + 1))


class CommandKind(Enum):
    QUIT = "quit"
    DRAW = "draw"
    LANE_STACK_MOVE = "lane_stack_move"  # three-digit form, tracked by the guard
    TRANSFER = "transfer"  # two-character form


@dataclass(frozen=True)
class Command:
    """A parsed player command."""
    kind: CommandKind
    token: str
    action: Action | None = None

    @property
    def move_code(self) -> str:
        """Source and destination characters, as tracked by the oscillation guard."""
        return self.token[:2]


def normalize(raw: str) -> str:
    return raw.strip().upper()


def _parse_lane(char: str) -> int | None:
    if len(char) == 1 and char in LANE_DIGITS:
        return int(char)
    return None


def _parse_location(char: str) -> Location | None:
    lane = _parse_lane(char)
    if lane is not None:
        return Location.lane(lane)
    suit = Suit.from_letter(char)
    if suit is not None:
        return Location.foundation(suit)
    return None


def parse_command(raw: str) -> Command | None:
    """Parse a token into a Command, or None if it matches no known shape."""
    token = normalize(raw)

    if token == "Q":
        return Command(kind=CommandKind.QUIT, token=token)

    if token == "D":
        return Command(kind=CommandKind.DRAW, token=token, action=Action.draw())

    if len(token) == 3 and token.isascii() and token.isdigit():
        source = _parse_lane(token[0])
        destination = _parse_lane(token[1])
        if source is None or destination is None or token[2] not in COUNT_DIGITS:
            return None
        count = int(token[2])
        return Command(
            kind=CommandKind.LANE_STACK_MOVE,
            token=token,
            action=Action.lane_to_lane(source, destination, count),
        )

    if len(token) == 2:
        action = _parse_transfer(token)
        if action is None:
            return None
        return Command(kind=CommandKind.TRANSFER, token=token, action=action)

    return None


def _parse_transfer(token: str) -> Action | None:
    first, second = token[0], token[1]
    destination = _parse_location(second)
    if destination is None:
        return None

    if first == "P":
        if destination.is_lane:
            return Action.reserve_to_lane(destination.lane_number)
        return Action.reserve_to_foundation(destination.suit)

    source = _parse_lane(first)
    if source is None:
        return None
    if destination.is_lane:
        return Action.lane_to_lane(source, destination.lane_number, 1)
    return Action.lane_to_foundation(source, destination.suit)


def command_for(action: Action) -> str:
    """Render an action as the input token that would produce it."""
    payload = action.payload
    if action.action_type == ActionType.DRAW:
        return "D"
    token = f"{payload.source.code}{payload.destination.code}"
    if payload.count > 1:
        token += str(payload.count)
    return token
