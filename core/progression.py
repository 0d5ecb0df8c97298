"""Proficiency level progression."""

import logging
from enum import Enum

from .config import LEVELS, LEVEL_THRESHOLDS, MIN_SAMPLE_SIZE

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    ADVANCE = 'advance'
    REGRESS = 'regress'
    NONE = 'none'


def evaluate(correct: int, total: int, thresholds: dict, locked: bool, has_backlog: bool,
             min_sample: int = MIN_SAMPLE_SIZE) -> tuple[Decision, bool]:
    """Decide whether the learner moves level.

    Returns (decision, reset_counters). Nothing is evaluated until total
    reaches min_sample; after that the counters are always reset.
    """
    if total < min_sample:
        return (Decision.NONE, False)
    if locked:
        return (Decision.NONE, True)

    accuracy = correct / total
    up = thresholds.get('up')
    down = thresholds.get('down')
    if up is not None and accuracy >= up and not has_backlog:
        return (Decision.ADVANCE, True)
    if down is not None and accuracy < down:
        return (Decision.REGRESS, True)
    return (Decision.NONE, True)


class LevelState:
    """Current level plus the answers counted towards the next evaluation."""

    def __init__(self, level: str, locked: bool = False):
        self.level = level
        self.correct = 0
        self.total = 0
        self.locked = locked

    def reset_counters(self) -> None:
        self.correct = 0
        self.total = 0

    @property
    def accuracy(self) -> float | None:
        if self.total == 0:
            return None
        return self.correct / self.total

    def to_dict(self) -> dict:
        return {
            'level': self.level,
            'correct': self.correct,
            'total': self.total,
            'locked': self.locked
        }


class LevelProgressionController:
    """Feeds answers into evaluate() and applies the resulting transitions."""

    def __init__(self, level: str = None, levels: list[str] = None, thresholds: dict = None,
                 min_sample: int = MIN_SAMPLE_SIZE):
        self.levels = list(levels or LEVELS)
        self.thresholds = thresholds or LEVEL_THRESHOLDS
        self.min_sample = min_sample
        self.state = LevelState(self._check_level(level or self.levels[0]))

    def _check_level(self, level: str) -> str:
        if level not in self.levels:
            raise ValueError(f"Unknown level {level!r}, expected one of {self.levels}")
        return level

    @property
    def level(self) -> str:
        return self.state.level

    @property
    def locked(self) -> bool:
        return self.state.locked

    def current_thresholds(self) -> dict:
        return self.thresholds.get(self.level, {'up': None, 'down': None})

    def record_answer(self, is_correct: bool) -> None:
        self.state.total += 1
        if is_correct:
            self.state.correct += 1

    def evaluate(self, has_backlog: bool) -> tuple[Decision, str]:
        """Evaluate the current window and move level if warranted.

        Returns (decision, level after the decision).
        """
        decision, reset = evaluate(self.state.correct, self.state.total,
                                   self.current_thresholds(), self.state.locked,
                                   has_backlog, self.min_sample)
        if reset:
            self.state.reset_counters()

        index = self.levels.index(self.level)
        if decision == Decision.ADVANCE and index < len(self.levels) - 1:
            self.state.level = self.levels[index + 1]
            logger.info(f"Advanced to level {self.level}")
        elif decision == Decision.REGRESS and index > 0:
            self.state.level = self.levels[index - 1]
            logger.info(f"Regressed to level {self.level}")
        return (decision, self.level)

    def set_level(self, level: str) -> None:
        """Jump to a level, discarding the current counters."""
        self.state.level = self._check_level(level)
        self.state.reset_counters()

    def toggle_lock(self) -> bool:
        self.state.locked = not self.state.locked
        return self.state.locked
