"""Round scoring helpers for Rook."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .cards import Card
from .contract import Team
from .trick import Trick


class ScoringError(ValueError):
    """Raised when scoring is asked to settle an impossible round."""


@dataclass(frozen=True)
class RoundScoreResult:
    round_scores: Dict[Team, int]
    new_scores: Dict[int, int]
    deltas: Dict[int, int]
    bid_made: Optional[bool]


def trick_points(cards: Iterable[Card]) -> int:
    return sum(card.point_value() for card in cards)


def team_captured_points(
    tricks: Iterable[Trick],
    members: Collection[int],
    nest: Sequence[Card] = (),
    last_trick_winner: Optional[int] = None,
) -> int:
    """Points in tricks won by ``members``, plus the nest if they took the last trick."""
    total = sum(trick_points(trick.cards()) for trick in tricks if trick.winner in members)
    if last_trick_winner is not None and last_trick_winner in members:
        total += trick_points(nest)
    return total


def apply_bid_result(captured: int, bid: int) -> int:
    """Captured points if the bid was made, otherwise minus the bid."""
    if captured >= bid:
        return captured
    return -bid


def _distribute(
    teams: Mapping[int, Team],
    round_scores: Mapping[Team, int],
    prior_scores: Mapping[int, int],
) -> Tuple[Dict[int, int], Dict[int, int]]:
    deltas = {seat: round_scores[team] for seat, team in teams.items()}
    new_scores = {seat: prior_scores.get(seat, 0) + deltas.get(seat, 0) for seat in prior_scores}
    return new_scores, deltas


def _other(team: Team) -> Team:
    return Team.B if team is Team.A else Team.A


def score_round(
    *,
    teams: Mapping[int, Team],
    captured: Mapping[Team, int],
    bidding_team: Team,
    bid_amount: int,
    prior_scores: Mapping[int, int],
) -> RoundScoreResult:
    if set(teams) != set(prior_scores):
        raise ScoringError("Every scored seat needs a team assignment.")

    defending_team = _other(bidding_team)
    bidder_captured = captured.get(bidding_team, 0)
    round_scores = {
        bidding_team: apply_bid_result(bidder_captured, bid_amount),
        defending_team: captured.get(defending_team, 0),
    }
    new_scores, deltas = _distribute(teams, round_scores, prior_scores)
    return RoundScoreResult(
        round_scores=round_scores,
        new_scores=new_scores,
        deltas=deltas,
        bid_made=bidder_captured >= bid_amount,
    )


def score_renege_penalty(
    *,
    teams: Mapping[int, Team],
    offending_team: Team,
    bid_amount: int,
    opposing_points: int,
    prior_scores: Mapping[int, int],
) -> RoundScoreResult:
    """Settle a round cut short by a renege."""
    if set(teams) != set(prior_scores):
        raise ScoringError("Every scored seat needs a team assignment.")

    round_scores = {offending_team: -bid_amount, _other(offending_team): opposing_points}
    new_scores, deltas = _distribute(teams, round_scores, prior_scores)
    return RoundScoreResult(round_scores=round_scores, new_scores=new_scores, deltas=deltas, bid_made=None)


def find_winners(scores: Mapping[int, int], threshold: int, tie_policy: str = "shared") -> Tuple[int, ...]:
    """Seats that won the game, or an empty tuple if play goes on.

    Highest cumulative score wins. Exact ties at the top are either all
    declared winners (``"shared"``) or settled by lowest seat
    (``"lowest_seat"``).
    """
    if not any(score >= threshold for score in scores.values()):
        return ()
    best = max(scores.values())
    leaders = tuple(sorted(seat for seat, score in scores.items() if score == best))
    if tie_policy == "lowest_seat":
        return leaders[:1]
    if tie_policy == "shared":
        return leaders
    raise ScoringError(f"Unknown tie policy: {tie_policy!r}")
