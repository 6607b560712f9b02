"""Deck creation and dealing for Rook."""

from __future__ import annotations

from random import Random
from typing import Iterable, List, Optional, Sequence, Tuple

from .cards import BIRD, Card, ORDINARY_SUITS, RANKS

DECK_SIZE = 57
HAND_SIZE = 13
NEST_SIZE = 5
SEATS = 4


class DealError(RuntimeError):
    """Raised when the dealer is handed a malformed deck or seat."""


def build_deck() -> List[Card]:
    """Return the ordered 57-card deck: 56 ordinary cards plus the bird."""
    cards = [Card(suit, rank) for suit in ORDINARY_SUITS for rank in RANKS]
    cards.append(BIRD)
    return cards


def shuffle_deck(deck: Sequence[Card], rng: Optional[Random] = None) -> List[Card]:
    """Return a shuffled copy of ``deck``.

    Without an explicit ``rng`` a fresh generator is created, so separate calls
    never share seed state.
    """
    cards = list(deck)
    if rng is None:
        rng = Random()
    rng.shuffle(cards)
    return cards


def has_point_cards(hand: Iterable[Card]) -> bool:
    return any(card.point_value() > 0 for card in hand)


def dealing_order(dealer: int) -> List[int]:
    """Seats in the order they receive cards, starting left of the dealer."""
    return [(dealer + offset) % SEATS for offset in range(1, SEATS + 1)]


def deal(deck: Sequence[Card], dealer: int) -> Tuple[List[List[Card]], List[Card]]:
    """Deal four 13-card hands and a 5-card nest.

    One card goes to each player clockwise from the dealer's left, then one to
    the nest, until the nest is full. The rest of the deck is dealt round the
    table until every hand holds 13 cards.
    """
    cards = list(deck)
    if len(cards) != DECK_SIZE:
        raise DealError(f"Deck must contain exactly {DECK_SIZE} cards, got {len(cards)}.")
    if len(set(cards)) != DECK_SIZE:
        raise DealError("Deck contains duplicate cards.")
    if dealer not in range(SEATS):
        raise DealError(f"Dealer seat {dealer!r} is not at the table.")

    order = dealing_order(dealer)
    hands: List[List[Card]] = [[] for _ in range(SEATS)]
    nest: List[Card] = []
    position = 0

    while len(nest) < NEST_SIZE:
        for seat in order:
            hands[seat].append(cards[position])
            position += 1
        nest.append(cards[position])
        position += 1

    while position < len(cards):
        for seat in order:
            if len(hands[seat]) < HAND_SIZE:
                hands[seat].append(cards[position])
                position += 1

    return hands, nest
