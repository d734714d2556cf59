"""
Game State - Cards, locations and the session state container.

Design principles:
- Immutable-friendly: all mutations return new objects
- Identity and visibility are separate: a Card never changes,
  the hidden flag lives on the lane slot that holds it
- Closed location set: every place a card can be is a Location member
- Conservation: 52 cards exist across all locations at all times
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from enum import Enum, IntEnum


NUM_LANES = 7
DECK_SIZE = 52


class Color(str, Enum):
    """Card colors."""
    RED = "red"
    BLACK = "black"


class Suit(str, Enum):
    """The four suits, in foundation order."""
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def color(self) -> Color:
        if self in (Suit.HEARTS, Suit.DIAMONDS):
            return Color.RED
        return Color.BLACK

    @property
    def letter(self) -> str:
        """Single-letter code used in commands and display (H, D, C, S)."""
        return self.value[0].upper()

    @property
    def symbol(self) -> str:
        return {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }[self]

    @classmethod
    def from_letter(cls, letter: str) -> Suit | None:
        for suit in cls:
            if suit.letter == letter.upper():
                return suit
        return None


class Rank(IntEnum):
    """Card ranks, totally ordered A < 2 < ... < K."""
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }.get(self, str(self.value))


@dataclass(frozen=True)
class Card:
    """
    A card identity.

    Cards are values: two Card(HEARTS, FIVE) objects are the same card.
    Visibility is not part of the identity (see PlacedCard).
    """
    suit: Suit
    rank: Rank

    @property
    def color(self) -> Color:
        return self.suit.color

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.letter}"


@dataclass(frozen=True)
class PlacedCard:
    """A card sitting in a lane slot, face up or face down."""
    card: Card
    hidden: bool = False

    def revealed(self) -> PlacedCard:
        if not self.hidden:
            return self
        return PlacedCard(card=self.card, hidden=False)


class Location(str, Enum):
    """Every place a card can be."""
    LANE_1 = "lane_1"
    LANE_2 = "lane_2"
    LANE_3 = "lane_3"
    LANE_4 = "lane_4"
    LANE_5 = "lane_5"
    LANE_6 = "lane_6"
    LANE_7 = "lane_7"
    FOUNDATION_HEARTS = "foundation_hearts"
    FOUNDATION_DIAMONDS = "foundation_diamonds"
    FOUNDATION_CLUBS = "foundation_clubs"
    FOUNDATION_SPADES = "foundation_spades"
    DRAW_PILE = "draw_pile"
    RESERVE = "reserve"

    @classmethod
    def lane(cls, number: int) -> Location:
        """Lane location for a 1-based lane number."""
        if not 1 <= number <= NUM_LANES:
            raise ValueError(f"Lane number out of range: {number}")
        return cls(f"lane_{number}")

    @classmethod
    def foundation(cls, suit: Suit) -> Location:
        return cls(f"foundation_{suit.value}")

    @property
    def is_lane(self) -> bool:
        return self.value.startswith("lane_")

    @property
    def is_foundation(self) -> bool:
        return self.value.startswith("foundation_")

    @property
    def lane_number(self) -> int | None:
        if not self.is_lane:
            return None
        return int(self.value.split("_")[1])

    @property
    def suit(self) -> Suit | None:
        if not self.is_foundation:
            return None
        return Suit(self.value.split("_")[1])

    @property
    def code(self) -> str | None:
        """Input token character for this location (the draw pile has none)."""
        if self.is_lane:
            return str(self.lane_number)
        if self.is_foundation:
            return self.suit.letter
        if self == Location.RESERVE:
            return "P"
        return None

    @staticmethod
    def lanes() -> list[Location]:
        return [Location.lane(n) for n in range(1, NUM_LANES + 1)]

    @staticmethod
    def foundations() -> list[Location]:
        return [Location.foundation(s) for s in Suit]


@dataclass
class Pile:
    """
    A plain ordered pile of cards (draw pile, reserve).

    The top of the pile is the end of the list. Visibility is implied by
    the pile: draw pile cards are face down, reserve cards face up.
    """
    name: str
    cards: list[Card] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def top_card(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def add_top(self, card: Card) -> Pile:
        """Return new pile with card added on top."""
        new_cards = self.cards.copy()
        new_cards.append(card)
        return Pile(name=self.name, cards=new_cards)

    def remove_top(self) -> tuple[Card | None, Pile]:
        """Return (removed card, new pile)."""
        if not self.cards:
            return None, self
        return self.cards[-1], Pile(name=self.name, cards=self.cards[:-1])


@dataclass
class Lane:
    """
    One of the seven tableau lanes.

    Cards are ordered bottom-to-top. Only the visible run at the top
    is ever moved.
    """
    number: int
    cards: list[PlacedCard] = field(default_factory=list)

    @property
    def location(self) -> Location:
        return Location.lane(self.number)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def top_card(self) -> Card | None:
        return self.cards[-1].card if self.cards else None

    @property
    def visible_count(self) -> int:
        """Number of face-up cards in the unbroken run at the top."""
        count = 0
        for slot in reversed(self.cards):
            if slot.hidden:
                break
            count += 1
        return count

    def top_cards(self, count: int) -> list[Card]:
        """The top `count` cards, bottom-to-top."""
        if count <= 0:
            return []
        return [slot.card for slot in self.cards[-count:]]

    def add_cards(self, cards: list[Card]) -> Lane:
        """Return new lane with face-up cards appended on top."""
        new_cards = self.cards.copy()
        new_cards.extend(PlacedCard(card=c, hidden=False) for c in cards)
        return Lane(number=self.number, cards=new_cards)

    def remove_top(self, count: int) -> tuple[list[Card], Lane]:
        """
        Return (removed cards bottom-to-top, new lane).

        The new top card of the remaining lane is turned face up.
        """
        if count <= 0 or count > len(self.cards):
            return [], self
        removed = [slot.card for slot in self.cards[-count:]]
        remaining = self.cards[:-count]
        if remaining:
            remaining[-1] = remaining[-1].revealed()
        return removed, Lane(number=self.number, cards=remaining)


@dataclass
class Foundation:
    """A single-suit pile built up from Ace to King."""
    suit: Suit
    cards: list[Card] = field(default_factory=list)

    @property
    def location(self) -> Location:
        return Location.foundation(self.suit)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def is_complete(self) -> bool:
        return len(self.cards) == len(Rank)

    @property
    def top_card(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def add_top(self, card: Card) -> Foundation:
        new_cards = self.cards.copy()
        new_cards.append(card)
        return Foundation(suit=self.suit, cards=new_cards)


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    WON = "won"


def _empty_lanes() -> list[Lane]:
    return [Lane(number=n) for n in range(1, NUM_LANES + 1)]


def _empty_foundations() -> dict[Suit, Foundation]:
    return {suit: Foundation(suit=suit) for suit in Suit}


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str

    phase: GamePhase = GamePhase.PLAYING

    # Locations
    lanes: list[Lane] = field(default_factory=_empty_lanes)
    foundations: dict[Suit, Foundation] = field(default_factory=_empty_foundations)
    draw_pile: Pile = field(default_factory=lambda: Pile(name="draw_pile"))
    reserve: Pile = field(default_factory=lambda: Pile(name="reserve"))

    # Scoring
    score: int = 0
    move_count: int = 0

    # Last source/destination codes of three-digit lane commands, oldest first
    recent_commands: tuple[str, ...] = ()

    # Accepted actions, in order
    action_history: list[Any] = field(default_factory=list)

    # Seed the deck was shuffled with
    random_seed: int | None = None

    def lane(self, number: int) -> Lane:
        """Get a lane by 1-based number."""
        return self.lanes[number - 1]

    def foundation(self, suit: Suit) -> Foundation:
        return self.foundations[suit]

    @property
    def card_count(self) -> int:
        """Total cards across every location."""
        return (
            self.draw_pile.count
            + self.reserve.count
            + sum(lane.count for lane in self.lanes)
            + sum(f.count for f in self.foundations.values())
        )

    @property
    def is_won(self) -> bool:
        return all(f.is_complete for f in self.foundations.values())

    @property
    def last_drawn_card(self) -> Card | None:
        """The card a reserve move would place."""
        return self.reserve.top_card

    def lane_size(self, number: int) -> int:
        return self.lane(number).count

    def foundation_size(self, suit: Suit) -> int:
        return self.foundation(suit).count

    def with_lane(self, lane: Lane) -> GameState:
        """Return new state with updated lane."""
        new_lanes = [lane if l.number == lane.number else l for l in self.lanes]
        return self._copy_with(lanes=new_lanes)

    def with_foundation(self, foundation: Foundation) -> GameState:
        """Return new state with updated foundation."""
        new_foundations = self.foundations.copy()
        new_foundations[foundation.suit] = foundation
        return self._copy_with(foundations=new_foundations)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            game_id=kwargs.get("game_id", self.game_id),
            phase=kwargs.get("phase", self.phase),
            lanes=kwargs.get("lanes", self.lanes),
            foundations=kwargs.get("foundations", self.foundations),
            draw_pile=kwargs.get("draw_pile", self.draw_pile),
            reserve=kwargs.get("reserve", self.reserve),
            score=kwargs.get("score", self.score),
            move_count=kwargs.get("move_count", self.move_count),
            recent_commands=kwargs.get("recent_commands", self.recent_commands),
            action_history=kwargs.get("action_history", self.action_history),
            random_seed=kwargs.get("random_seed", self.random_seed),
        )
