import random

import pytest

from colorguess.color_space import Color
from colorguess.round_engine import (
    RoundEngine, Tier, accuracy_from_distance, combined_distance, congratulatory_tier,
    score_from_accuracy
)
from colorguess.session import SessionTracker


def make_engine(seed=1):
    tracker = SessionTracker()
    return RoundEngine(tracker, random.Random(seed)), tracker


def test_random_targets_in_range():
    engine, tracker = make_engine()
    for _ in range(500):
        rnd = engine.start_round()
        assert 0 <= rnd.target_color.hue < 360
        assert rnd.target_color.hue == int(rnd.target_color.hue)
        assert 20 <= rnd.target_color.saturation <= 90
        assert rnd.target_color.lightness == 50
        assert not rnd.is_resolved
    assert len(tracker.presented) == 500


def test_distance_uses_circular_hue():
    a = Color(10, 50)
    b = Color(350, 50)
    assert combined_distance(a, b) == pytest.approx(20 / 360 * 100)


def test_distance_combines_axes():
    d = combined_distance(Color(0, 20), Color(36, 50))
    assert d == pytest.approx((10 ** 2 + 30 ** 2) ** 0.5)


def test_score_endpoints():
    assert score_from_accuracy(100) == 1000
    assert score_from_accuracy(0) == 0
    assert score_from_accuracy(50) == 250
    assert accuracy_from_distance(0) == 100
    assert accuracy_from_distance(150) == 0


def test_score_non_increasing_with_distance():
    scores = [score_from_accuracy(accuracy_from_distance(d / 10)) for d in range(0, 1200)]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_exact_guess_scores_max():
    engine, tracker = make_engine()
    rnd = engine.start_round(Color(180.0, 50.0))
    result = engine.submit_guess(rnd, 200, 25, 400, 50)
    assert result.score == 1000
    assert result.accuracy == pytest.approx(100)
    assert result.distance == pytest.approx(0)
    assert tracker.accuracies == [pytest.approx(100)]
    assert tracker.guessed == [Color(180.0, 50.0)]


def test_maximally_wrong_guess_scores_zero():
    engine, _ = make_engine()
    rnd = engine.start_round(Color(0.0, 0.0))
    # Opposite hue, opposite saturation: distance ~111.8
    result = engine.submit_guess(rnd, 180, 100, 360, 100)
    assert result.accuracy == 0
    assert result.score == 0


def test_second_guess_is_ignored():
    engine, tracker = make_engine()
    rnd = engine.start_round(Color(90.0, 40.0))
    first = engine.submit_guess(rnd, 100, 40, 360, 100)
    assert first is not None
    assert engine.submit_guess(rnd, 0, 0, 360, 100) is None

    assert rnd.score == first.score
    assert rnd.guess_color == first.guess
    assert len(tracker.guessed) == 1
    assert len(tracker.accuracies) == 1


def test_round_fields_set_together():
    engine, _ = make_engine()
    rnd = engine.start_round(Color(45.0, 60.0))
    assert (rnd.guess_color, rnd.distance, rnd.accuracy, rnd.score) == (None, None, None, None)
    engine.submit_guess(rnd, 50, 50, 360, 100)
    assert None not in (rnd.guess_color, rnd.distance, rnd.accuracy, rnd.score)


@pytest.mark.parametrize("score, tier", [
    (1000, Tier.PERFECT),
    (800, Tier.PERFECT),
    (799, Tier.EXCELLENT),
    (600, Tier.EXCELLENT),
    (400, Tier.GREAT),
    (200, Tier.GOOD),
    (199, Tier.ENCOURAGEMENT),
    (0, Tier.ENCOURAGEMENT),
])
def test_congratulatory_tier(score, tier):
    assert congratulatory_tier(score) is tier
