"""Local top-10 leaderboard persisted as a JSON array in key/value storage."""

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from colorguess.color_space import PLACEHOLDER_COLOR, Color, parse_color
from colorguess.constants import (
    LEADERBOARD_DISPLAY_COLORS, LEADERBOARD_KEY, LEADERBOARD_SIZE, MAX_ROUNDS
)
from colorguess.storage import KeyValueStorage

log = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class LeaderboardEntry:
    """One finished game as stored on the leaderboard."""
    score: int
    timestamp: str
    mean_distance: float
    presented_colors: Tuple[Color, ...] = field(default_factory=tuple)
    guessed_colors: Tuple[Color, ...] = field(default_factory=tuple)
    rounds: int = MAX_ROUNDS

    def to_record(self) -> dict:
        """JSON-ready dict in the on-disk schema."""
        return {
            "score": self.score,
            "date": self.timestamp,
            "rounds": self.rounds,
            "meanDistance": self.mean_distance,
            "presentedColors": [c.to_css() for c in self.presented_colors],
            "guessedColors": [c.to_css() for c in self.guessed_colors],
        }

    @classmethod
    def from_record(cls, record) -> Optional["LeaderboardEntry"]:
        """
        Build an entry from a stored record, tolerating older or damaged data.

        Records without a usable score are dropped (None). Everything else
        falls back to a safe default: missing meanDistance is 0, the legacy
        'colors' field stands in for 'presentedColors', and unparseable
        color strings become the placeholder color.
        """
        if not isinstance(record, dict):
            return None

        score = _as_number(record.get("score"))
        if score is None:
            return None

        timestamp = record.get("date")
        if not isinstance(timestamp, str):
            timestamp = ""

        rounds = _as_number(record.get("rounds"))
        mean_distance = _as_number(record.get("meanDistance"))

        presented = record.get("presentedColors")
        if not isinstance(presented, list):
            presented = record.get("colors")

        return cls(
            score=int(score),
            timestamp=timestamp,
            mean_distance=float(mean_distance) if mean_distance is not None else 0.0,
            presented_colors=_parse_colors(presented),
            guessed_colors=_parse_colors(record.get("guessedColors")),
            rounds=int(rounds) if rounds is not None else MAX_ROUNDS,
        )


def _as_number(value) -> Optional[float]:
    # bool is an int subclass but never a valid score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def _parse_colors(values) -> Tuple[Color, ...]:
    if not isinstance(values, list):
        return ()
    colors = []
    for value in values[:LEADERBOARD_DISPLAY_COLORS]:
        color = parse_color(value)
        colors.append(color if color is not None else PLACEHOLDER_COLOR)
    return tuple(colors)


def display_colors(colors: Sequence[Color]) -> List[Color]:
    """Exactly five swatches: truncated, then padded with the placeholder."""
    shown = list(colors[:LEADERBOARD_DISPLAY_COLORS])
    shown.extend([PLACEHOLDER_COLOR] * (LEADERBOARD_DISPLAY_COLORS - len(shown)))
    return shown


class LeaderboardStore:
    """Loads, ranks, trims and saves leaderboard entries."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = LEADERBOARD_KEY,
        size: int = LEADERBOARD_SIZE,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.storage = storage
        self.key = key
        self.size = size
        self.clock = clock or datetime.now
        self.last_recorded: Optional[LeaderboardEntry] = None

    def load(self) -> List[LeaderboardEntry]:
        """Stored entries ranked by score (stable), or an empty list if nothing usable is stored."""
        try:
            raw = self.storage.get(self.key)
        except (OSError, ValueError) as e:
            log.warning("Leaderboard storage unavailable: %s", e)
            return []

        if raw is None:
            return []

        try:
            records = json.loads(raw)
        except ValueError:
            log.warning("Discarding corrupt leaderboard data")
            return []

        if not isinstance(records, list):
            log.warning("Leaderboard data is not a list; treating as empty")
            return []

        entries = []
        for record in records:
            entry = LeaderboardEntry.from_record(record)
            if entry is None:
                log.warning("Skipping malformed leaderboard record: %r", record)
                continue
            entries.append(entry)
        return sorted(entries, key=lambda e: e.score, reverse=True)[:self.size]

    def save(self, entries: Sequence[LeaderboardEntry]) -> List[LeaderboardEntry]:
        """Rank descending by score (stable), keep the top entries, overwrite storage."""
        ranked = sorted(entries, key=lambda e: e.score, reverse=True)[:self.size]
        payload = json.dumps([e.to_record() for e in ranked])
        try:
            self.storage.set(self.key, payload)
        except (OSError, ValueError) as e:
            log.warning("Could not save leaderboard: %s", e)
        return ranked

    def record(
        self,
        score: int,
        mean_distance: float,
        presented_colors: Sequence[Color],
        guessed_colors: Sequence[Color],
        rounds: int = MAX_ROUNDS
    ) -> bool:
        """
        Add a finished game to the leaderboard.

        Returns True when the score is a new top score: strictly above every
        previous entry, or the first entry ever.
        """
        entries = self.load()
        is_new_top = not entries or score > max(e.score for e in entries)

        entry = LeaderboardEntry(
            score=int(score),
            timestamp=self.clock().strftime(DATE_FORMAT),
            mean_distance=float(mean_distance),
            presented_colors=tuple(presented_colors[:LEADERBOARD_DISPLAY_COLORS]),
            guessed_colors=tuple(guessed_colors[:LEADERBOARD_DISPLAY_COLORS]),
            rounds=rounds,
        )
        entries.append(entry)
        self.save(entries)
        self.last_recorded = entry

        log.info("Recorded score %d%s", entry.score, " (new top score)" if is_new_top else "")
        return is_new_top

    def clear(self):
        """Erase all entries. Never raises; falls back to storing an empty list."""
        try:
            self.storage.remove(self.key)
        except (OSError, ValueError) as e:
            log.warning("Could not remove leaderboard (%s); writing empty list", e)
            try:
                self.storage.set(self.key, json.dumps([]))
            except (OSError, ValueError) as e2:
                log.warning("Could not clear leaderboard: %s", e2)
        self.last_recorded = None
