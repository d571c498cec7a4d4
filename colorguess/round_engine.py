"""Round generation, guess resolution and scoring."""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from colorguess.color_space import Color, hue_distance, position_to_color, round_half_up
from colorguess.constants import (
    HUE_RANGE, MAX_SCORE, TARGET_SATURATION_MAX, TARGET_SATURATION_MIN,
    TIER_EXCELLENT, TIER_GOOD, TIER_GREAT, TIER_PERFECT
)
from colorguess.session import SessionTracker

log = logging.getLogger(__name__)


class Tier(Enum):
    """Congratulatory tier shown after a guess."""
    PERFECT = "Perfect Guess!"
    EXCELLENT = "Excellent!"
    GREAT = "Great Job!"
    GOOD = "Good Guess!"
    ENCOURAGEMENT = "Keep Trying!"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class GuessResult:
    """Outcome of a single guess."""
    score: int
    distance: float
    accuracy: float
    target: Color
    guess: Color


@dataclass
class Round:
    """One target color and, once resolved, the player's guess."""
    target_color: Color
    guess_color: Optional[Color] = None
    distance: Optional[float] = None
    accuracy: Optional[float] = None
    score: Optional[int] = None

    @property
    def is_resolved(self) -> bool:
        return self.guess_color is not None


def combined_distance(target: Color, guess: Color) -> float:
    """
    Euclidean distance on the hue/saturation plane, both axes in percent.

    Hue distance is circular and rescaled from degrees to the 0-100 scale.
    """
    hue_pct = hue_distance(guess.hue, target.hue) / HUE_RANGE * 100
    saturation_pct = abs(guess.saturation - target.saturation)
    return math.sqrt(hue_pct ** 2 + saturation_pct ** 2)


def accuracy_from_distance(distance: float) -> float:
    """100 for an exact match, falling linearly to 0."""
    return max(0.0, 100.0 - distance)


def score_from_accuracy(accuracy: float) -> int:
    """Quadratic falloff so near-exact guesses earn disproportionately more."""
    return round_half_up(MAX_SCORE * (accuracy / 100.0) ** 2)


def congratulatory_tier(score: int) -> Tier:
    """Map a round score to its congratulatory tier."""
    if score >= TIER_PERFECT:
        return Tier.PERFECT
    elif score >= TIER_EXCELLENT:
        return Tier.EXCELLENT
    elif score >= TIER_GREAT:
        return Tier.GREAT
    elif score >= TIER_GOOD:
        return Tier.GOOD
    else:
        return Tier.ENCOURAGEMENT


class RoundEngine:
    """Creates rounds and resolves guesses, feeding the session tracker."""

    def __init__(self, tracker: SessionTracker, rng: Optional[random.Random] = None):
        self.tracker = tracker
        self.rng = rng if rng is not None else random.Random()

    def random_color(self) -> Color:
        """Integer hue in [0, 360), saturation uniform in [20, 90]."""
        hue = self.rng.randrange(HUE_RANGE)
        saturation = self.rng.uniform(TARGET_SATURATION_MIN, TARGET_SATURATION_MAX)
        return Color(float(hue), saturation)

    def start_round(self, target: Optional[Color] = None) -> Round:
        """Begin a round with a fresh (or given) target color."""
        if target is None:
            target = self.random_color()
        self.tracker.add_presented(target)
        log.debug("Round started with target %s", target.to_css())
        return Round(target_color=target)

    def resolve(self, rnd: Round, guess: Color) -> Optional[GuessResult]:
        """
        Score a guess color against the round's target.

        Returns None if the round already has a guess; a round is scored once.
        """
        if rnd.is_resolved:
            log.debug("Ignoring second guess for the same round")
            return None

        distance = combined_distance(rnd.target_color, guess)
        accuracy = accuracy_from_distance(distance)
        score = score_from_accuracy(accuracy)

        # All guess fields are written together
        rnd.guess_color = guess
        rnd.distance = distance
        rnd.accuracy = accuracy
        rnd.score = score

        self.tracker.add_guessed(guess)
        self.tracker.add_accuracy(accuracy)

        log.debug("Guess %s scored %d (distance %.2f)", guess.to_css(), score, distance)
        return GuessResult(score, distance, accuracy, rnd.target_color, guess)

    def submit_guess(
        self,
        rnd: Round,
        px: float,
        py: float,
        width: float,
        height: float
    ) -> Optional[GuessResult]:
        """Resolve a guess given as a (pre-clamped) position on the heatmap."""
        return self.resolve(rnd, position_to_color(px, py, width, height))
