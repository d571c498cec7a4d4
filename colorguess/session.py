"""Per-game state: the round sequence and the color/accuracy history."""

from typing import TYPE_CHECKING, List, Optional

from colorguess.color_space import Color
from colorguess.constants import LEADERBOARD_DISPLAY_COLORS, MAX_ROUNDS

if TYPE_CHECKING:
    from colorguess.round_engine import Round


class SessionTracker:
    """Colors presented and guessed during one game, plus per-round accuracy."""

    def __init__(self):
        self.presented: List[Color] = []
        self.guessed: List[Color] = []
        self.accuracies: List[float] = []

    def add_presented(self, color: Color):
        self.presented.append(color)

    def add_guessed(self, color: Color):
        self.guessed.append(color)

    def add_accuracy(self, accuracy: float):
        self.accuracies.append(accuracy)

    def presented_colors(self) -> List[Color]:
        """Presented colors, capped for leaderboard display."""
        return self.presented[:LEADERBOARD_DISPLAY_COLORS]

    def guessed_colors(self) -> List[Color]:
        """Guessed colors, capped for leaderboard display."""
        return self.guessed[:LEADERBOARD_DISPLAY_COLORS]

    def mean_accuracy(self) -> float:
        """Arithmetic mean of round accuracies; 0 before any round completes."""
        if not self.accuracies:
            return 0.0
        return sum(self.accuracies) / len(self.accuracies)

    def reset(self):
        """Forget everything from the previous game."""
        self.presented.clear()
        self.guessed.clear()
        self.accuracies.clear()


class GameSession:
    """Ordered rounds of one game and its running total."""

    def __init__(self, max_rounds: int = MAX_ROUNDS):
        self.max_rounds = max_rounds
        self.rounds: List["Round"] = []
        self.total_score = 0

    @property
    def current_round(self) -> Optional["Round"]:
        return self.rounds[-1] if self.rounds else None

    @property
    def current_round_index(self) -> int:
        """Zero-based index of the current round (-1 before the first)."""
        return len(self.rounds) - 1

    @property
    def round_number(self) -> int:
        """1-based round number for display; 1 before the game starts."""
        return max(1, len(self.rounds))

    @property
    def is_last_round(self) -> bool:
        return len(self.rounds) >= self.max_rounds

    def add_round(self, rnd: "Round"):
        self.rounds.append(rnd)

    def add_score(self, points: int):
        self.total_score += points
