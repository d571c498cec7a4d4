"""Game controller: the round state machine driven by a dispatch table."""

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, Optional, Tuple

from colorguess.constants import MAX_ROUNDS
from colorguess.leaderboard import LeaderboardStore
from colorguess.round_engine import GuessResult, Round, RoundEngine
from colorguess.session import GameSession, SessionTracker

log = logging.getLogger(__name__)


class Phase(Enum):
    """Game session phases."""
    IDLE = auto()
    ROUND_ACTIVE = auto()
    ROUND_RESOLVED = auto()
    GAME_OVER = auto()


class EventKind(Enum):
    """External events the controller reacts to."""
    START = auto()
    GUESS = auto()
    ADVANCE = auto()
    RESTART = auto()
    CLEAR_LEADERBOARD = auto()


@dataclass(frozen=True)
class GuessPayload:
    """A pointer position on a heatmap of the given size."""
    px: float
    py: float
    width: float
    height: float


@dataclass(frozen=True)
class GameSummary:
    """End-of-game numbers."""
    total_score: int
    mean_accuracy: float
    is_new_top: bool


@dataclass(frozen=True)
class Transition:
    """Result of dispatching one event."""
    previous: Phase
    current: Phase
    changed: bool
    result: Any = None


class GameController:
    """
    Owns the active game session, its tracker and the leaderboard.

    All mutation happens through dispatch(); events that make no sense in
    the current phase are ignored and reported as unchanged.
    """

    def __init__(
        self,
        leaderboard: LeaderboardStore,
        rng: Optional[random.Random] = None,
        max_rounds: int = MAX_ROUNDS
    ):
        self.leaderboard = leaderboard
        self.max_rounds = max_rounds
        self.tracker = SessionTracker()
        self.engine = RoundEngine(self.tracker, rng)
        self.session = GameSession(max_rounds)
        self.phase = Phase.IDLE

        self.last_result: Optional[GuessResult] = None
        self.summary: Optional[GameSummary] = None

        self._handlers: Dict[Tuple[Phase, EventKind], Callable[[Any], Any]] = {
            (Phase.IDLE, EventKind.START): self._start_game,
            (Phase.ROUND_ACTIVE, EventKind.GUESS): self._guess,
            (Phase.ROUND_RESOLVED, EventKind.ADVANCE): self._advance,
            (Phase.ROUND_ACTIVE, EventKind.RESTART): self._restart,
            (Phase.ROUND_RESOLVED, EventKind.RESTART): self._restart,
            (Phase.GAME_OVER, EventKind.RESTART): self._restart,
        }
        for phase in Phase:
            self._handlers[(phase, EventKind.CLEAR_LEADERBOARD)] = self._clear_leaderboard

    # Observable state

    @property
    def total_score(self) -> int:
        return self.session.total_score

    @property
    def round_number(self) -> int:
        return self.session.round_number

    @property
    def current_round(self) -> Optional[Round]:
        return self.session.current_round

    def mean_accuracy(self) -> float:
        return self.tracker.mean_accuracy()

    # Dispatch

    def dispatch(self, kind: EventKind, payload: Any = None) -> Transition:
        """Apply one event. Unknown (phase, event) pairs are a no-op."""
        previous = self.phase
        handler = self._handlers.get((previous, kind))
        if handler is None:
            log.debug("Ignoring %s during %s", kind.name, previous.name)
            return Transition(previous, previous, False)

        result = handler(payload)
        if result is False:
            return Transition(previous, self.phase, False)
        return Transition(previous, self.phase, True, result)

    def _start_game(self, payload) -> Round:
        self.session = GameSession(self.max_rounds)
        self.tracker.reset()
        self.last_result = None
        self.summary = None
        return self._start_round()

    def _start_round(self) -> Round:
        rnd = self.engine.start_round()
        self.session.add_round(rnd)
        self.phase = Phase.ROUND_ACTIVE
        return rnd

    def _guess(self, payload: GuessPayload):
        if payload.width <= 0 or payload.height <= 0:
            return False
        if not (0 <= payload.px <= payload.width and 0 <= payload.py <= payload.height):
            # Outside the heatmap: silently dropped
            return False

        result = self.engine.submit_guess(
            self.session.current_round,
            payload.px, payload.py,
            payload.width, payload.height
        )
        if result is None:
            return False

        self.session.add_score(result.score)
        self.last_result = result
        self.phase = Phase.ROUND_RESOLVED
        return result

    def _advance(self, payload):
        if self.session.is_last_round:
            return self._finish_game()
        return self._start_round()

    def _finish_game(self) -> GameSummary:
        mean_accuracy = self.tracker.mean_accuracy()
        is_new_top = self.leaderboard.record(
            self.session.total_score,
            mean_accuracy,
            self.tracker.presented_colors(),
            self.tracker.guessed_colors(),
            rounds=self.max_rounds
        )
        self.summary = GameSummary(self.session.total_score, mean_accuracy, is_new_top)
        self.phase = Phase.GAME_OVER
        log.info("Game over: %d points, mean accuracy %.1f%%", self.session.total_score, mean_accuracy)
        return self.summary

    def _restart(self, payload):
        self.session = GameSession(self.max_rounds)
        self.tracker.reset()
        self.last_result = None
        self.summary = None
        self.phase = Phase.IDLE

    def _clear_leaderboard(self, payload):
        self.leaderboard.clear()
