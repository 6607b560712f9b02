"""Nest exchange for the high bidder."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .cards import Card
from .deck import HAND_SIZE, NEST_SIZE
from .errors import RuleViolation


class InvalidNestExchange(RuleViolation):
    """Raised when nest handling violates the rules."""


def exchange_nest(
    hand: Sequence[Card],
    nest: Sequence[Card],
    *,
    add: Sequence[Card],
    discard: Sequence[Card],
    max_take: int = 3,
) -> Tuple[List[Card], List[Card]]:
    """Keep ``add`` from the nest and bury ``discard`` from the original hand.

    ``hand`` is the bidder's hand with the nest already picked up. Returns the
    new 13-card hand and the new 5-card nest.
    """
    if len(add) != len(discard):
        raise InvalidNestExchange("Must discard the same number of cards as taken from the nest.")
    if len(add) > max_take:
        raise InvalidNestExchange(f"Can only take up to {max_take} cards from the nest.")
    if len(set(add)) != len(add) or len(set(discard)) != len(discard):
        raise InvalidNestExchange("The same card cannot be picked twice.")

    nest_cards = set(nest)
    if any(card not in nest_cards for card in add):
        raise InvalidNestExchange("Cards to add must come from the nest.")

    original_hand = [card for card in hand if card not in nest_cards]
    if any(card not in original_hand for card in discard):
        raise InvalidNestExchange("Cards to discard must come from the original hand.")

    new_hand = [card for card in original_hand if card not in discard] + list(add)
    new_nest = [card for card in nest if card not in add] + list(discard)

    if len(new_hand) != HAND_SIZE:
        raise InvalidNestExchange(f"Final hand must have exactly {HAND_SIZE} cards, got {len(new_hand)}.")
    if len(new_nest) != NEST_SIZE:
        raise InvalidNestExchange(f"Nest must have exactly {NEST_SIZE} cards, got {len(new_nest)}.")
    return new_hand, new_nest
