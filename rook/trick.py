"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cards import Card, Suit, beats

TRICK_SIZE = 4


class TrickError(RuntimeError):
    """Raised when trick play breaks ordering constraints."""


@dataclass
class Trick:
    leader: int
    plays: List[Tuple[int, Card]] = field(default_factory=list)
    winner: Optional[int] = None

    def is_empty(self) -> bool:
        return not self.plays

    def add_play(self, player: int, card: Card) -> None:
        if len(self.plays) >= TRICK_SIZE:
            raise TrickError("Trick already complete.")
        if not self.plays and player != self.leader:
            raise TrickError("Only the leader can start the trick.")
        if any(seat == player for seat, _ in self.plays):
            raise TrickError(f"Seat {player} already played to this trick.")
        self.plays.append((player, card))

    def replace_play(self, player: int, card: Card) -> Card:
        """Swap the card a seat played, keeping its place in play order."""
        for index, (seat, previous) in enumerate(self.plays):
            if seat == player:
                self.plays[index] = (seat, card)
                return previous
        raise TrickError(f"Seat {player} has not played to this trick.")

    def lead_card(self) -> Optional[Card]:
        return self.plays[0][1] if self.plays else None

    def led_suit(self, trump: Optional[Suit]) -> Optional[Suit]:
        """Suit that must be followed. A bird lead calls for trump."""
        lead = self.lead_card()
        if lead is None:
            return None
        if lead.is_bird:
            return trump
        return lead.suit

    def card_of(self, player: int) -> Optional[Card]:
        for seat, card in self.plays:
            if seat == player:
                return card
        return None

    def cards(self) -> List[Card]:
        return [card for _, card in self.plays]

    def is_full(self) -> bool:
        return len(self.plays) == TRICK_SIZE

    def winning_play(self, trump: Optional[Suit]) -> Tuple[int, Card]:
        if not self.plays:
            raise TrickError("Cannot determine winner on empty trick.")
        led = self.led_suit(trump)
        winning_player, winning_card = self.plays[0]
        for player, card in self.plays[1:]:
            if beats(card, winning_card, led, trump):
                winning_player, winning_card = player, card
        return winning_player, winning_card


def resolve_winner(trick: Trick, trump: Optional[Suit]) -> int:
    """Return the seat that takes a completed trick."""
    if not trick.is_full():
        raise TrickError(f"Trick must have exactly {TRICK_SIZE} cards, got {len(trick.plays)}.")
    winner, _ = trick.winning_play(trump)
    return winner
