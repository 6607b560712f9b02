"""Legal move generation and renege detection for Rook."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import Card, Suit, card_sort_key
from .trick import Trick


def legal_responses(hand: Iterable[Card], lead_card: Optional[Card], trump: Optional[Suit]) -> List[Card]:
    """Return the cards of ``hand`` that may be played against ``lead_card``.

    The bird is always playable. A bird lead calls for ordinary trump; a trump
    lead with no ordinary trump in hand forces the bird if it is held.
    Otherwise the led suit must be followed when possible.
    """
    cards = list(dict.fromkeys(hand))
    if lead_card is None:
        return sorted(cards, key=card_sort_key)

    birds = [card for card in cards if card.is_bird]
    ordinary_trump = [card for card in cards if trump is not None and card.suit is trump]

    if lead_card.is_bird:
        allowed = ordinary_trump or cards
    elif trump is not None and lead_card.suit is trump:
        if ordinary_trump:
            allowed = ordinary_trump
        elif birds:
            allowed = birds
        else:
            allowed = cards
    else:
        following = [card for card in cards if card.suit is lead_card.suit]
        allowed = following or cards

    return sorted(set(allowed).union(birds), key=card_sort_key)


def legal_moves(hand: Iterable[Card], trick: Trick, trump: Optional[Suit]) -> List[Card]:
    """Return the subset of cards that are legal to play given the current trick."""
    return legal_responses(hand, trick.lead_card(), trump)


def is_renege(played: Card, hand_before: Iterable[Card], lead_card: Card, trump: Optional[Suit]) -> bool:
    """True when ``played`` broke follow-suit or forced-trump rules.

    ``hand_before`` is the hand as it was before the card left it.
    """
    if played.is_bird:
        return False
    return played not in legal_responses(hand_before, lead_card, trump)
