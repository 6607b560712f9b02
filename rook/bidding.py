"""Bidding rules and the four-seat auction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Set

from .deck import SEATS
from .errors import RuleViolation, TurnViolation
from .rules_schema import DEFAULT_RULES, RuleSet


class BiddingError(RuleViolation):
    """Base class for bidding related errors."""


class BidNotAllowed(BiddingError):
    """Raised when the bid amount or the pass is not legal right now."""


class AlreadyPassed(BiddingError):
    """Raised when a player who passed tries to act again."""


class RedealNotAllowed(BiddingError):
    """Raised when a redeal is called by a hand that holds counters."""


@dataclass(frozen=True)
class Bid:
    player: int
    amount: int


@dataclass(frozen=True)
class BidAction:
    player: int
    action: str
    amount: Optional[int] = None


def validate_bid(amount: int, current: Optional[int], rules: RuleSet = DEFAULT_RULES) -> None:
    """Validate a bid amount against the increment, the limits and the high bid.

    Raises:
        BidNotAllowed: the amount breaks one of the bidding rules.
    """
    if amount % rules.bid_increment != 0:
        raise BidNotAllowed(f"Bid {amount} must move in {rules.bid_increment} point increments.")
    if amount < rules.min_bid or amount > rules.max_bid:
        raise BidNotAllowed(f"Bid {amount} must be between {rules.min_bid} and {rules.max_bid}.")
    if current is not None and amount <= current:
        raise BidNotAllowed(f"Bid {amount} must exceed the current high bid of {current}.")


def next_seat(seat: int) -> int:
    return (seat + 1) % SEATS


class AuctionPhase(Enum):
    ACTIVE = auto()
    COMPLETE = auto()


@dataclass
class Auction:
    """Four-seat auction; play moves clockwise from the seat left of the dealer."""

    starting_player: int
    rules: RuleSet = field(default_factory=RuleSet)
    phase: AuctionPhase = AuctionPhase.ACTIVE
    current_player: int = field(init=False)
    highest: Optional[Bid] = None
    high_bidder: Optional[int] = None
    passed: Set[int] = field(default_factory=set)
    history: List[BidAction] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.current_player = self.starting_player

    @property
    def highest_bid(self) -> Optional[int]:
        return self.highest.amount if self.highest else None

    def active_players(self) -> List[int]:
        return [seat for seat in range(SEATS) if seat not in self.passed]

    def is_forced(self, player: int) -> bool:
        """True when ``player`` is the last one standing and nobody has bid."""
        return self.highest is None and self.active_players() == [player]

    def bid(self, player: int, amount: int) -> None:
        self._ensure_active(player)
        validate_bid(amount, self.highest_bid, self.rules)

        self.highest = Bid(player, amount)
        self.history.append(BidAction(player, "bid", amount))

        if self.active_players() == [player]:
            self._complete(player)
        else:
            self._advance_turn()

    def pass_bid(self, player: int) -> None:
        self._ensure_active(player)
        if self.is_forced(player):
            raise BidNotAllowed("Every other player passed; the last player must bid.")

        self.passed.add(player)
        self.history.append(BidAction(player, "pass"))

        active = self.active_players()
        if len(active) == 1:
            lone = active[0]
            if self.highest is None:
                self.current_player = lone
            else:
                self._complete(lone)
        else:
            self._advance_turn()

    def _advance_turn(self) -> None:
        seat = next_seat(self.current_player)
        while seat in self.passed:
            seat = next_seat(seat)
        self.current_player = seat

    def _complete(self, player: int) -> None:
        self.high_bidder = player
        self.current_player = player
        self.phase = AuctionPhase.COMPLETE

    def _ensure_active(self, player: int) -> None:
        if self.phase is AuctionPhase.COMPLETE:
            raise BiddingError("Auction already complete.")
        if player in self.passed:
            raise AlreadyPassed(f"Seat {player} has already passed.")
        if player != self.current_player:
            raise TurnViolation("Not this player's turn to act in the auction.")

    def is_complete(self) -> bool:
        return self.phase is AuctionPhase.COMPLETE and self.high_bidder is not None

    def result(self) -> Bid:
        if not self.is_complete():
            raise BiddingError("Auction not yet complete.")
        assert self.high_bidder is not None and self.highest is not None
        return Bid(self.high_bidder, self.highest.amount)
