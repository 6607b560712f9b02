"""Trump declaration and the secret partner call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Union

from .cards import Card, Suit
from .deck import SEATS
from .errors import RuleViolation


class InvalidTrump(RuleViolation):
    """Raised when the declared trump is not an ordinary suit."""


class InvalidPartnerCall(RuleViolation):
    """Raised when the called card cannot name a partner."""


class Team(Enum):
    A = "team_a"
    B = "team_b"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Unresolved:
    """No card has been called yet."""


@dataclass(frozen=True)
class HiddenPartner:
    """The engine knows who holds the called card; the table does not."""

    seat: int


@dataclass(frozen=True)
class RevealedPartner:
    seat: int


@dataclass(frozen=True)
class NoPartner:
    """The called card is in nobody's hand; the bidder plays alone."""


PartnerStatus = Union[Unresolved, HiddenPartner, RevealedPartner, NoPartner]


def validate_trump(suit: Suit) -> Suit:
    if not isinstance(suit, Suit) or not suit.is_ordinary:
        raise InvalidTrump(f"Trump must be one of the four colors, got {suit!r}.")
    return suit


def resolve_partner_call(
    card: Card,
    *,
    bidder: int,
    hands: Sequence[Sequence[Card]],
    discarded: Sequence[Card],
) -> PartnerStatus:
    """Validate the called card and find out, secretly, who holds it.

    A card left in the nest is a legal call; nobody holds it, so the bidder
    plays alone. Cards the bidder buried themselves cannot be called.
    """
    if card in hands[bidder]:
        raise InvalidPartnerCall("Cannot call a card you already hold.")
    if card in discarded:
        raise InvalidPartnerCall("Cannot call a card you discarded into the nest.")
    for seat, hand in enumerate(hands):
        if seat != bidder and card in hand:
            return HiddenPartner(seat)
    return NoPartner()


def partner_seat(status: PartnerStatus) -> Optional[int]:
    """Partner seat as the engine knows it, revealed or not."""
    if isinstance(status, (HiddenPartner, RevealedPartner)):
        return status.seat
    return None


def public_partner(status: PartnerStatus) -> Optional[int]:
    """Partner seat as the table is allowed to see it."""
    if isinstance(status, RevealedPartner):
        return status.seat
    return None


def reveal(status: PartnerStatus) -> PartnerStatus:
    if isinstance(status, HiddenPartner):
        return RevealedPartner(status.seat)
    return status


def team_assignment(bidder: int, partner: Optional[int]) -> Dict[int, Team]:
    """Bidder and partner form team A; everyone else is team B."""
    return {seat: Team.A if seat in (bidder, partner) else Team.B for seat in range(SEATS)}
