import random

import pytest

from colorguess.color_space import Color, color_to_position
from colorguess.controller import EventKind, GameController, GuessPayload, Phase
from colorguess.leaderboard import LeaderboardStore
from colorguess.round_engine import accuracy_from_distance, combined_distance, score_from_accuracy
from colorguess.session import SessionTracker
from colorguess.storage import MemoryStorage

WIDTH, HEIGHT = 720, 400


def make_controller(seed=7):
    store = LeaderboardStore(MemoryStorage())
    return GameController(store, rng=random.Random(seed))


def guess_for(target: Color, hue_offset: float, sat_offset: float) -> GuessPayload:
    """A guess position shifted from the target by the given offsets."""
    guess = Color((target.hue + hue_offset) % 360, min(100.0, max(0.0, target.saturation + sat_offset)))
    px, py = color_to_position(guess, WIDTH, HEIGHT)
    return GuessPayload(px, py, WIDTH, HEIGHT)


def test_session_tracker_mean():
    tracker = SessionTracker()
    assert tracker.mean_accuracy() == 0
    for a in (100, 50, 0):
        tracker.add_accuracy(a)
    assert tracker.mean_accuracy() == pytest.approx(50)
    tracker.reset()
    assert tracker.mean_accuracy() == 0
    assert tracker.presented == [] and tracker.guessed == []


def test_full_game_totals_and_leaderboard():
    ctrl = make_controller()
    assert ctrl.phase is Phase.IDLE

    t = ctrl.dispatch(EventKind.START)
    assert t.changed and t.current is Phase.ROUND_ACTIVE

    offsets = [(0, 0), (10, 5), (-40, 12), (90, -30), (180, 40)]
    expected_scores = []
    expected_accuracies = []

    for i, (dh, ds) in enumerate(offsets):
        assert ctrl.round_number == i + 1
        rnd = ctrl.current_round
        payload = guess_for(rnd.target_color, dh, ds)

        t = ctrl.dispatch(EventKind.GUESS, payload)
        assert t.current is Phase.ROUND_RESOLVED

        guess = Color(360 * payload.px / WIDTH, 100 * payload.py / HEIGHT)
        acc = accuracy_from_distance(combined_distance(rnd.target_color, guess))
        expected_accuracies.append(acc)
        expected_scores.append(score_from_accuracy(acc))
        assert t.result.score == expected_scores[-1]

        t = ctrl.dispatch(EventKind.ADVANCE)

    assert t.current is Phase.GAME_OVER
    summary = t.result
    assert summary.total_score == sum(expected_scores)
    assert ctrl.total_score == sum(expected_scores)
    assert summary.mean_accuracy == pytest.approx(sum(expected_accuracies) / 5, abs=1e-6)
    assert summary.is_new_top is True
    assert expected_scores[0] == 1000

    entries = ctrl.leaderboard.load()
    assert len(entries) == 1
    assert entries[0].score == summary.total_score
    assert entries[0].mean_distance == pytest.approx(summary.mean_accuracy)
    assert len(entries[0].presented_colors) == 5
    assert len(entries[0].guessed_colors) == 5


def test_double_guess_is_ignored():
    ctrl = make_controller()
    ctrl.dispatch(EventKind.START)
    target = ctrl.current_round.target_color
    first = ctrl.dispatch(EventKind.GUESS, guess_for(target, 0, 0))
    second = ctrl.dispatch(EventKind.GUESS, guess_for(target, 100, 0))

    assert first.changed
    assert not second.changed
    assert ctrl.total_score == first.result.score


def test_out_of_bounds_guess_dropped():
    ctrl = make_controller()
    ctrl.dispatch(EventKind.START)
    t = ctrl.dispatch(EventKind.GUESS, GuessPayload(-1, 10, WIDTH, HEIGHT))
    assert not t.changed
    assert ctrl.phase is Phase.ROUND_ACTIVE

    t = ctrl.dispatch(EventKind.GUESS, GuessPayload(10, HEIGHT + 1, WIDTH, HEIGHT))
    assert not t.changed

    t = ctrl.dispatch(EventKind.GUESS, GuessPayload(0, 0, 0, 0))
    assert not t.changed

    # Edges are in bounds
    t = ctrl.dispatch(EventKind.GUESS, GuessPayload(WIDTH, HEIGHT, WIDTH, HEIGHT))
    assert t.changed


def test_events_out_of_phase_are_ignored():
    ctrl = make_controller()
    assert not ctrl.dispatch(EventKind.ADVANCE).changed
    assert not ctrl.dispatch(EventKind.GUESS, GuessPayload(1, 1, WIDTH, HEIGHT)).changed
    assert not ctrl.dispatch(EventKind.RESTART).changed

    ctrl.dispatch(EventKind.START)
    assert not ctrl.dispatch(EventKind.START).changed
    assert not ctrl.dispatch(EventKind.ADVANCE).changed


def test_restart_resets_session():
    ctrl = make_controller()
    ctrl.dispatch(EventKind.START)
    ctrl.dispatch(EventKind.GUESS, guess_for(ctrl.current_round.target_color, 0, 0))
    assert ctrl.total_score == 1000

    t = ctrl.dispatch(EventKind.RESTART)
    assert t.current is Phase.IDLE
    assert ctrl.total_score == 0
    assert ctrl.tracker.accuracies == []
    assert ctrl.tracker.presented == []

    ctrl.dispatch(EventKind.START)
    assert ctrl.round_number == 1
    assert len(ctrl.tracker.presented) == 1


def test_second_game_new_top_flag():
    ctrl = make_controller()

    def play(offset):
        ctrl.dispatch(EventKind.RESTART)
        ctrl.dispatch(EventKind.START)
        t = None
        for _ in range(5):
            ctrl.dispatch(EventKind.GUESS, guess_for(ctrl.current_round.target_color, offset, 0))
            t = ctrl.dispatch(EventKind.ADVANCE)
        return t.result

    assert play(0).is_new_top is True
    worse = play(60)
    assert worse.is_new_top is False
    assert [e.score for e in ctrl.leaderboard.load()] == [5000, worse.total_score]


def test_clear_leaderboard_any_phase():
    ctrl = make_controller()
    ctrl.leaderboard.record(10, 1.0, [], [])
    t = ctrl.dispatch(EventKind.CLEAR_LEADERBOARD)
    assert t.changed
    assert t.current is Phase.IDLE
    assert ctrl.leaderboard.load() == []
