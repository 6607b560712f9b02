import json

import pytest
from pydantic import ValidationError

from rook.cards import Card, Suit
from rook.deck import build_deck
from rook.game import begin_nest_selection, new_game, place_bid
from rook.intents import Deal, ExchangeNest, PlaceBid, StartRound, apply_intent
from rook.rules_schema import DEFAULT_RULES, RuleSet, load_rules
from rook.state import GamePhase


def test_default_rules():
    assert DEFAULT_RULES.winning_score == 500
    assert (DEFAULT_RULES.min_bid, DEFAULT_RULES.max_bid, DEFAULT_RULES.bid_increment) == (40, 120, 5)
    assert DEFAULT_RULES.nest_selectable_cards == 3
    assert DEFAULT_RULES.renege_policy == "flag"


def test_invalid_rules_are_refused():
    with pytest.raises(ValidationError):
        RuleSet(min_bid=130)
    with pytest.raises(ValidationError):
        RuleSet(min_bid=42)
    with pytest.raises(ValidationError):
        RuleSet(nest_selectable_cards=6)
    with pytest.raises(ValidationError):
        RuleSet(renege_policy="ignore")


def test_load_rules_from_json(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"winning_score": 300, "winner_tie_policy": "lowest_seat"}), encoding="utf-8")
    rules = load_rules(path)
    assert rules.winning_score == 300
    assert rules.winner_tie_policy == "lowest_seat"
    assert rules.min_bid == 40


def test_rules_shape_the_auction():
    state = new_game(["a", "b", "c", "d"], RuleSet(min_bid=50))
    state = apply_intent(state, StartRound(deck=tuple(build_deck()))).state
    state = apply_intent(state, Deal()).state
    assert not place_bid(state, 0, 45).applied
    assert place_bid(state, 0, 50).applied


def test_nest_selectable_cards_limit(won_by_north):
    state = begin_nest_selection(won_by_north).state
    state.rules = RuleSet(nest_selectable_cards=1)
    two = ExchangeNest(0, add=(Card(Suit.RED, 5), Card(Suit.RED, 10)), discard=(Card(Suit.RED, 1), Card(Suit.RED, 6)))
    assert not apply_intent(state, two).applied
    one = ExchangeNest(0, add=(Card(Suit.RED, 5),), discard=(Card(Suit.RED, 1),))
    assert apply_intent(state, one).state.phase is GamePhase.TRUMP_SELECTION


def test_intents_match_direct_calls(dealt):
    assert apply_intent(dealt, PlaceBid(0, 40)).state == place_bid(dealt, 0, 40).state


def test_unknown_intent_is_a_type_error(dealt):
    with pytest.raises(TypeError):
        apply_intent(dealt, "bid 40")


def test_new_game_needs_four_players():
    with pytest.raises(ValueError):
        new_game(["a", "b", "c"])
