"""Game state records for Rook."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .bidding import Auction, Bid
from .cards import Card, Suit
from .contract import PartnerStatus, Team, Unresolved
from .rules_schema import RuleSet
from .trick import Trick


class GamePhase(Enum):
    SETUP = "setup"
    DEALING = "dealing"
    BIDDING = "bidding"
    BIDDING_COMPLETE = "bidding_complete"
    NEST_SELECTION = "nest_selection"
    TRUMP_SELECTION = "trump_selection"
    PARTNER_SELECTION = "partner_selection"
    PLAYING = "playing"
    ROUND_END = "round_end"
    GAME_END = "game_end"

    def __str__(self) -> str:
        return self.value


@dataclass
class Player:
    seat: int
    name: str
    team: Optional[Team] = None
    hand: List[Card] = field(default_factory=list)
    captured_tricks: List[List[Card]] = field(default_factory=list)


@dataclass(frozen=True)
class RenegeInfo:
    player: int
    trick_index: int
    card_played: Card
    correct_cards: Tuple[Card, ...]


@dataclass(frozen=True)
class RoundHistory:
    round_number: int
    player_scores: Dict[int, int]
    round_deltas: Dict[int, int]
    bid_amount: Optional[int]
    bidder: Optional[int]
    bid_made: Optional[bool]
    renege_penalty: bool = False


@dataclass
class GameState:
    players: List[Player]
    rules: RuleSet = field(default_factory=RuleSet)
    phase: GamePhase = GamePhase.SETUP
    deck: List[Card] = field(default_factory=list)
    nest: List[Card] = field(default_factory=list)
    discards: List[Card] = field(default_factory=list)
    dealer: int = 3
    current_player: int = 0
    auction: Optional[Auction] = None
    trump: Optional[Suit] = None
    called_card: Optional[Card] = None
    partner: PartnerStatus = field(default_factory=Unresolved)
    current_trick: Optional[Trick] = None
    completed_tricks: List[Trick] = field(default_factory=list)
    trick_completed: bool = False
    reneges: List[RenegeInfo] = field(default_factory=list)
    scores: Dict[int, int] = field(default_factory=dict)
    round_scores: Dict[Team, int] = field(default_factory=lambda: {Team.A: 0, Team.B: 0})
    score_history: List[RoundHistory] = field(default_factory=list)
    round_number: int = 0
    winners: Tuple[int, ...] = ()

    def player(self, seat: int) -> Player:
        return self.players[seat]

    def hands(self) -> List[List[Card]]:
        return [player.hand for player in self.players]

    @property
    def current_bid(self) -> Optional[Bid]:
        return self.auction.highest if self.auction else None

    @property
    def high_bidder(self) -> Optional[int]:
        return self.auction.high_bidder if self.auction else None

    @property
    def first_bidder(self) -> int:
        return (self.dealer + 1) % len(self.players)

    def team_members(self, team: Team) -> List[int]:
        return [player.seat for player in self.players if player.team is team]

    def is_finished(self) -> bool:
        return self.phase is GamePhase.GAME_END
