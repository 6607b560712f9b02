from random import Random

from bots.base import BotStrategy
from bots.bot_arena import play_round
from bots.random_bot import RandomBot
from rook.contract import Team
from rook.game import new_game, start_round
from rook.scoring import trick_points
from rook.state import GamePhase


def _captured(state, seat):
    return sum(trick_points(pile) for pile in state.player(seat).captured_tricks)


def test_full_round_settles_with_every_point_captured():
    state = play_round(new_game(["a", "b", "c", "d"]), [BotStrategy() for _ in range(4)], Random(5))

    assert state.phase is GamePhase.ROUND_END
    assert len(state.completed_tricks) == 13
    assert all(not player.hand for player in state.players)
    assert sum(_captured(state, seat) for seat in range(4)) == 120

    history = state.score_history[-1]
    assert history.round_number == 1
    assert history.bidder == 3
    assert history.bid_amount == 40

    defenders = state.team_members(Team.B)
    defended = sum(_captured(state, seat) for seat in defenders)
    assert state.round_scores[Team.B] == defended
    assert all(state.scores[seat] == defended for seat in defenders)


def test_dealer_rotates_between_rounds():
    bots = [RandomBot(seed=seat) for seat in range(4)]
    state = play_round(new_game(["a", "b", "c", "d"]), bots, Random(1))
    assert state.dealer == 3

    state = start_round(state).state
    assert state.phase is GamePhase.DEALING
    assert state.round_number == 2
    assert state.dealer == 0
    assert state.current_player == 1
    assert state.completed_tricks == []
    assert len(state.score_history) == 1


def test_game_ends_when_someone_reaches_the_winning_score():
    state = new_game(["a", "b", "c", "d"])
    state.scores = {seat: 495 for seat in range(4)}
    state = play_round(state, [RandomBot(seed=seat) for seat in range(4)], Random(9))

    assert state.phase is GamePhase.GAME_END
    assert state.winners
    best = max(state.scores.values())
    assert all(state.scores[seat] == best for seat in state.winners)
    assert not start_round(state).applied


def test_same_inputs_replay_to_the_same_state():
    def run():
        bots = [RandomBot(seed=10 + seat) for seat in range(4)]
        return play_round(new_game(["a", "b", "c", "d"]), bots, Random(42))

    assert run() == run()
