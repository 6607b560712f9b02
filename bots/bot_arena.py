"""Simple bot arena for Rook."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Dict, Iterable, Optional, Sequence

from rook.deck import build_deck, shuffle_deck
from rook.game import (
    Transition,
    begin_nest_selection,
    call_partner,
    clear_trick,
    deal,
    declare_trump,
    exchange_nest,
    new_game,
    pass_bid,
    place_bid,
    play_card,
    start_round,
)
from rook.rules_schema import RuleSet, load_rules
from rook.state import GamePhase, GameState

from .base import BotStrategy
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "base": BotStrategy,
    "random": RandomBot,
}

logger = logging.getLogger(__name__)


def _require(transition: Transition, what: str) -> GameState:
    if not transition.applied:
        raise RuntimeError(f"Bot submitted an illegal {what}: {transition.reason}")
    return transition.state


def _resolve_auction(state: GameState, bots: Sequence[BotStrategy]) -> GameState:
    while state.phase is GamePhase.BIDDING:
        player = state.current_player
        amount = bots[player].offer_bid(state, player)
        if amount is None:
            state = _require(pass_bid(state, player), "pass")
        else:
            state = _require(place_bid(state, player, amount), "bid")
    return state


def _resolve_contract(state: GameState, bots: Sequence[BotStrategy]) -> GameState:
    state = _require(begin_nest_selection(state), "nest pickup")
    bidder = state.high_bidder
    if bidder is None:
        raise RuntimeError("Auction not resolved before nest selection.")
    add, discard = bots[bidder].select_nest(state, bidder)
    state = _require(exchange_nest(state, bidder, add, discard), "nest exchange")
    state = _require(declare_trump(state, bidder, bots[bidder].choose_trump(state, bidder)), "trump")
    return _require(call_partner(state, bidder, bots[bidder].call_partner(state, bidder)), "partner call")


def _play_out(state: GameState, bots: Sequence[BotStrategy]) -> GameState:
    while state.phase is GamePhase.PLAYING:
        if state.trick_completed:
            state = _require(clear_trick(state), "trick clear")
            continue
        player = state.current_player
        state = _require(play_card(state, player, bots[player].play_card(state, player)), "card")
    return state


def play_round(state: GameState, bots: Sequence[BotStrategy], rng: Optional[Random] = None) -> GameState:
    """Play one round from ``setup``/``round_end`` to settlement."""
    state = _require(start_round(state, deck=shuffle_deck(build_deck(), rng)), "round start")
    state = _require(deal(state), "deal")
    for seat, bot in enumerate(bots):
        bot.on_round_start(state, seat)
    state = _resolve_auction(state, bots)
    state = _resolve_contract(state, bots)
    return _play_out(state, bots)


def run_match(
    bots: Sequence[BotStrategy],
    *,
    n_rounds: int = 10,
    seed: int | None = None,
    rules: Optional[RuleSet] = None,
) -> dict:
    if len(bots) != 4:
        raise ValueError("A Rook match needs four bots.")
    rng = Random(seed)
    state = new_game([f"{bot.name} {seat}" for seat, bot in enumerate(bots)], rules)
    history = []
    for _ in range(n_rounds):
        state = play_round(state, bots, rng)
        entry = state.score_history[-1]
        history.append(
            {
                "round": entry.round_number,
                "bidder": entry.bidder,
                "bid": entry.bid_amount,
                "bid_made": entry.bid_made,
                "deltas": dict(entry.round_deltas),
            }
        )
        logger.info("Round %s: bidder %s bid %s, made=%s", entry.round_number, entry.bidder, entry.bid_amount, entry.bid_made)
        if state.is_finished():
            break
    return {"scores": dict(state.scores), "history": history, "winners": list(state.winners), "state": state}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument("--bot", default="random", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Maximum number of rounds to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--rules", type=str, default=None, help="Path to a JSON rules file.")
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    rules = load_rules(args.rules) if args.rules else None
    bot_cls = BOT_REGISTRY[args.bot]
    bots = [bot_cls(seed=args.seed + seat) if bot_cls is RandomBot else bot_cls() for seat in range(4)]
    results = run_match(bots, n_rounds=args.n, seed=args.seed, rules=rules)

    print(f"Scores after {len(results['history'])} rounds: {results['scores']}")
    made = sum(1 for entry in results["history"] if entry["bid_made"])
    print(f"Bids made: {made}/{len(results['history'])}")
    if results["winners"]:
        print(f"Winner(s): {results['winners']}")


if __name__ == "__main__":
    main()
