"""Card-related data structures and helpers for Rook."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Mapping, Optional, Tuple


class Suit(Enum):
    RED = auto()
    YELLOW = auto()
    GREEN = auto()
    BLACK = auto()
    BIRD = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_ordinary(self) -> bool:
        return self is not Suit.BIRD


ORDINARY_SUITS: Tuple[Suit, ...] = (Suit.RED, Suit.YELLOW, Suit.GREEN, Suit.BLACK)

RANKS: Tuple[int, ...] = tuple(range(1, 15))

# Counter values; every other ordinary rank is worth nothing.
CARD_POINTS: dict[int, int] = {5: 5, 10: 10, 14: 10}
BIRD_POINTS = 20

BIRD_ID = "rook-bird"


@dataclass(frozen=True)
class Card:
    """Immutable representation of a Rook card.

    Ordinary cards carry a rank from 1 to 14. The bird card is its own suit
    and has no rank.
    """

    suit: Suit
    rank: Optional[int] = None

    def __post_init__(self) -> None:
        if self.suit is Suit.BIRD:
            if self.rank is not None:
                raise ValueError("The bird card has no rank.")
        elif self.rank not in RANKS:
            raise ValueError(f"Rank {self.rank!r} is not valid for {self.suit}.")

    @property
    def is_bird(self) -> bool:
        return self.suit is Suit.BIRD

    def point_value(self) -> int:
        if self.is_bird:
            return BIRD_POINTS
        return CARD_POINTS.get(self.rank, 0)

    def __str__(self) -> str:
        return card_id(self)


BIRD = Card(Suit.BIRD)


def card_sort_key(card: Card) -> Tuple[int, int]:
    """Stable display/sort order: suits in deck order, ranks ascending, bird last."""
    if card.is_bird:
        return (len(ORDINARY_SUITS), 0)
    return (ORDINARY_SUITS.index(card.suit), card.rank)


def is_trump(card: Card, trump: Optional[Suit]) -> bool:
    """The bird is always a trump; ordinary cards only in the declared suit."""
    if card.is_bird:
        return True
    return trump is not None and card.suit is trump


def trump_strength(card: Card) -> int:
    """Total order among trumps. The bird ranks below every ordinary trump."""
    if card.is_bird:
        return 0
    return card.rank


def beats(candidate: Card, current: Card, led_suit: Optional[Suit], trump: Optional[Suit]) -> bool:
    """Return True if candidate wins over current within the trick context."""
    if candidate == current:
        return False

    candidate_trump = is_trump(candidate, trump)
    current_trump = is_trump(current, trump)

    if candidate_trump and not current_trump:
        return True
    if current_trump and not candidate_trump:
        return False
    if candidate_trump and current_trump:
        return trump_strength(candidate) > trump_strength(current)

    if candidate.suit is led_suit and current.suit is not led_suit:
        return True
    if candidate.suit is led_suit and current.suit is led_suit:
        return candidate.rank > current.rank
    return False


def card_id(card: Card) -> str:
    if card.is_bird:
        return BIRD_ID
    return f"{card.suit}-{card.rank}"


def card_from_id(value: str) -> Card:
    if value == BIRD_ID:
        return BIRD
    suit_name, _, rank = value.partition("-")
    try:
        return Card(Suit[suit_name.upper()], int(rank))
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown card id: {value!r}") from exc


def serialize_card(card: Card) -> dict[str, object]:
    return {"id": card_id(card), "suit": str(card.suit), "rank": card.rank, "points": card.point_value()}


def deserialize_card(payload: Mapping[str, object]) -> Card:
    suit = Suit[str(payload["suit"]).upper()]
    if suit is Suit.BIRD:
        return BIRD
    return Card(suit, int(payload["rank"]))


def card_label(card: Card) -> str:
    if card.is_bird:
        return "Rook Bird"
    return f"{card.suit.name.title()} {card.rank}"
