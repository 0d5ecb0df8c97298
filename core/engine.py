"""Game engine: composes scheduler, level controller and question generator."""

import logging
import random
from typing import Callable

from .config import DEFAULT_LEVEL, RETIRE_AFTER_CORRECT
from .interfaces import Corpus, Feedback, FeedbackEvent, NullFeedback
from .labels import category_label, level_tier
from .models import Card, LexicalEntry, Question
from .progression import Decision, LevelProgressionController
from .questions import QuestionGenerator
from .scheduler import SpacedRepetitionScheduler
from .utils import primary_form

logger = logging.getLogger(__name__)


class StatsTracker:
    """Session accuracy and the current run of correct answers."""

    def __init__(self):
        self.answers = []  # list of bools, oldest first
        self.correct_streak = 0

    def record(self, is_correct: bool) -> None:
        self.answers.append(is_correct)
        if is_correct:
            self.correct_streak += 1
        else:
            self.correct_streak = 0

    @property
    def accuracy_percent(self) -> int | None:
        if not self.answers:
            return None
        return round(100 * sum(self.answers) / len(self.answers))

    def reset_accuracy(self) -> None:
        """Start a new accuracy window but keep the streak."""
        self.answers = []

    def reset(self) -> None:
        self.answers = []
        self.correct_streak = 0


class WordGameEngine:
    """One learner's drill session.

    States: 'idle' before the first question, 'presenting' while a question
    waits for an answer, 'revealed' after it was answered and 'exhausted'
    when the corpus has nothing left for the active level.
    """

    IDLE = 'idle'
    PRESENTING = 'presenting'
    REVEALED = 'revealed'
    EXHAUSTED = 'exhausted'

    def __init__(self, corpus: Corpus, level: str = DEFAULT_LEVEL, feedback: Feedback = None,
                 rng: random.Random = None, clock: Callable[[], float] = None,
                 intervals: list[int] = None, thresholds: dict = None,
                 earliest_due_first: bool = False):
        self.corpus = corpus
        self.feedback = feedback or NullFeedback()
        self.rng = rng or random.Random()
        self.scheduler = SpacedRepetitionScheduler(intervals, clock, earliest_due_first)
        self.controller = LevelProgressionController(level, thresholds=thresholds)
        self.start_level = self.controller.level
        self.generator = QuestionGenerator(corpus, self.rng)
        self.stats_tracker = StatsTracker()
        self.correctly_answered = set()  # lemmas answered correctly this session
        self.state = self.IDLE
        self.current_card: Card | None = None
        self.current_question: Question | None = None

    @property
    def level(self) -> str:
        return self.controller.level

    @property
    def locked(self) -> bool:
        return self.controller.locked

    # ------------------------------------------------------------------
    # Presenting questions
    # ------------------------------------------------------------------

    def pick_fresh_entry(self) -> tuple[LexicalEntry, dict] | None:
        """Choose a new entry at the active level, preferring unanswered ones."""
        candidates = [e for e in self.corpus.by_level(self.level)
                      if not self.corpus.is_excluded(e.lemma)]
        if not candidates:
            return None

        unanswered = [e for e in candidates if e.lemma not in self.correctly_answered]
        entry = self.rng.choice(unanswered or candidates)
        meta = {'cloze_eligible': self.generator.is_cloze_eligible(entry), 'level': self.level}
        return (entry, meta)

    def _label(self, question: Question, entry: LexicalEntry) -> None:
        question.category_label = category_label(entry.category)
        if question.category_label is None:
            logger.warning(f"Missing category for {entry.headword!r}")
        question.level_tier = level_tier(entry.level)
        if entry.pronunciation:
            question.pronunciation = primary_form(entry.pronunciation)
        question.hint = entry.example_translation if question.mode == Question.CLOZE else None

    def next_question(self) -> Question | None:
        """Draw the next card and build its question. None when exhausted.

        An unanswered question is returned again instead of drawing past it.
        """
        if self.state == self.PRESENTING and self.current_question is not None:
            return self.current_question

        card =self.scheduler.next_card(self.pick_fresh_entry)
        if card is None:
            logger.info(f"No entries left for level {self.level}")
            self.state = self.EXHAUSTED
            self.current_card = None
            self.current_question = None
            return None

        is_review = self.scheduler.last_source == 'review'
        question = self.generator.generate(card.entry, self.level, is_review, card.cloze_eligible)
        question.card_id = card.id
        self._label(question, card.entry)

        self.current_card = card
        self.current_question = question
        self.state = self.PRESENTING
        logger.debug(f"Presenting {card.id} ({question.mode}, review={is_review})")

        if is_review:
            self.feedback.notify(FeedbackEvent.REVIEW_REINTRODUCED)
        return question

    # ------------------------------------------------------------------
    # Answering
    # ------------------------------------------------------------------

    def answer(self, card_id: str, selected: str) -> dict | None:
        """Record the learner's choice for the current question.

        Returns a result dict, or None for a stale answer (wrong card id or
        no question waiting).
        """
        if self.state != self.PRESENTING or not self.current_card or card_id != self.current_card.id:
            logger.debug(f"Ignoring stale answer for {card_id}")
            return None

        card = self.current_card
        question = self.current_question
        is_correct = question.is_correct(selected)

        self.scheduler.record_result(card.id, is_correct)
        self.stats_tracker.record(is_correct)
        if is_correct:
            self.correctly_answered.add(card.entry.lemma)
            self.feedback.notify(FeedbackEvent.ANSWERED_CORRECT)
        else:
            self.feedback.notify(FeedbackEvent.ANSWERED_INCORRECT)

        if card.consecutive_correct >= RETIRE_AFTER_CORRECT:
            logger.debug(f"Retiring {card.id} after {card.consecutive_correct} correct answers")
            self.scheduler.remove_card(card.id)

        level_changed, change_type = self._update_level(is_correct)
        self.state = self.REVEALED

        return {
            'correct': is_correct,
            'correct_answer': question.correct_answer,
            'level_changed': level_changed,
            'new_level': self.level,
            'change_type': change_type,
            'stats': self.stats()
        }

    def _update_level(self, is_correct: bool) -> tuple[bool, str | None]:
        previous = self.level
        self.controller.record_answer(is_correct)
        has_backlog = self.scheduler.stats()['review_count'] > 0
        decision, level = self.controller.evaluate(has_backlog)

        if level == previous:
            return (False, None)

        self.stats_tracker.reset_accuracy()
        if decision == Decision.REGRESS:
            self.scheduler.clear_reviews()
            self.feedback.notify(FeedbackEvent.LEVEL_REGRESSED, level)
            return (True, 'regress')
        self.feedback.notify(FeedbackEvent.LEVEL_ADVANCED, level)
        return (True, 'advance')

    # ------------------------------------------------------------------
    # Level control
    # ------------------------------------------------------------------

    def set_level(self, level: str) -> None:
        """Jump to a level. Raises ValueError for an unknown level."""
        self.controller.set_level(level)
        self.reset(keep_level=True)
        logger.info(f"Level set to {level}")

    def toggle_lock(self) -> bool:
        locked = self.controller.toggle_lock()
        self.feedback.notify(FeedbackEvent.LEVEL_LOCK_TOGGLED, self.level)
        logger.info(f"Level lock {'on' if locked else 'off'} at {self.level}")
        return locked

    def reset(self, keep_level: bool = False) -> None:
        """Clear the session and return to the starting level. The lock flag survives."""
        self.scheduler.reset()
        self.stats_tracker.reset()
        self.correctly_answered.clear()
        if not keep_level:
            self.controller.set_level(self.start_level)
        else:
            self.controller.state.reset_counters()
        self.state = self.IDLE
        self.current_card = None
        self.current_question = None

    def stats(self) -> dict:
        return {
            'review_count': self.scheduler.stats()['review_count'],
            'accuracy_percent': self.stats_tracker.accuracy_percent,
            'streak': self.stats_tracker.correct_streak,
            'level': self.level,
            'locked': self.locked,
            'thresholds': self.controller.current_thresholds()
        }
