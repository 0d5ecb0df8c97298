"""Unit tests for the game engine."""

import random
import unittest

from core.corpus import InMemoryCorpus
from core.engine import StatsTracker, WordGameEngine
from core.interfaces import Feedback, FeedbackEvent
from core.models import LexicalEntry, Question


# ============================================================================
# Mock Implementations
# ============================================================================

class FakeClock:
    """Clock returning a settable time in seconds."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += minutes * 60


class ListFeedback(Feedback):
    """Feedback that remembers every event."""

    def __init__(self):
        self.events = []

    def notify(self, event: FeedbackEvent, level: str = None) -> None:
        self.events.append((event, level))

    def names(self) -> list[FeedbackEvent]:
        return [event for event, _ in self.events]


def sample_corpus() -> InMemoryCorpus:
    return InMemoryCorpus([
        LexicalEntry("kuća", "house", "feminine", "A1"),
        LexicalEntry("knjiga", "book", "feminine", "A1"),
        LexicalEntry("voda", "water", "feminine", "A1"),
        LexicalEntry("grad", "city", "masculine", "A1"),
        LexicalEntry("stol", "table", "masculine", "A1"),
        LexicalEntry("raditi", "to work", "verb", "A1"),
        LexicalEntry("čitati", "to read", "verb", "A1"),
        LexicalEntry("ti", "you", "pronoun", "A1"),
        LexicalEntry("posao", "job", "masculine", "A2"),
        LexicalEntry("jezik", "language", "masculine", "A2"),
        LexicalEntry("kupiti", "to buy", "verb", "A2"),
        LexicalEntry("iskustvo", "experience", "neuter", "B1"),
    ], excluded=["ti"])


# ============================================================================
# Test Cases
# ============================================================================

class TestStatsTracker(unittest.TestCase):
    """Tests for StatsTracker."""

    def test_empty(self):
        stats = StatsTracker()
        self.assertIsNone(stats.accuracy_percent)
        self.assertEqual(stats.correct_streak, 0)

    def test_accuracy_and_streak(self):
        stats = StatsTracker()
        for result in (True, False, True, True):
            stats.record(result)
        self.assertEqual(stats.accuracy_percent, 75)
        self.assertEqual(stats.correct_streak, 2)

    def test_reset_accuracy_keeps_streak(self):
        stats = StatsTracker()
        stats.record(True)
        stats.record(True)
        stats.reset_accuracy()
        self.assertIsNone(stats.accuracy_percent)
        self.assertEqual(stats.correct_streak, 2)
        stats.reset()
        self.assertEqual(stats.correct_streak, 0)


class TestEngineQuestions(unittest.TestCase):
    """Presenting and answering questions."""

    def setUp(self):
        self.clock = FakeClock()
        self.feedback = ListFeedback()
        self.engine = WordGameEngine(sample_corpus(), feedback=self.feedback,
                                     rng=random.Random(0), clock=self.clock)

    def test_initial_state(self):
        self.assertEqual(self.engine.state, WordGameEngine.IDLE)
        self.assertEqual(self.engine.level, 'A1')
        self.assertEqual(self.engine.stats(), {
            'review_count': 0,
            'accuracy_percent': None,
            'streak': 0,
            'level': 'A1',
            'locked': False,
            'thresholds': {'up': 0.85, 'down': None}
        })

    def test_next_question_presents_level_entry(self):
        question = self.engine.next_question()
        self.assertIsNotNone(question.card_id)
        self.assertEqual(self.engine.state, WordGameEngine.PRESENTING)
        self.assertFalse(question.is_review)
        self.assertEqual(self.engine.current_card.entry.level, 'A1')
        self.assertNotEqual(self.engine.current_card.entry.lemma, 'ti')
        self.assertEqual(question.level_tier, 'easy')

    def test_labels_and_pronunciation(self):
        corpus = InMemoryCorpus([
            LexicalEntry("kuća", "house", "feminine", "A1", pronunciation="KOO-chah, kûća"),
            LexicalEntry("knjiga", "book", "feminine", "B1"),
        ])
        engine = WordGameEngine(corpus, rng=random.Random(0), clock=self.clock)
        question = engine.next_question()
        self.assertEqual(question.prompt, "kuća")
        self.assertEqual(question.category_label, "N - Fem")
        self.assertEqual(question.pronunciation, "KOO-chah")
        self.assertIsNone(question.hint)

    def test_cloze_hint_is_example_translation(self):
        corpus = InMemoryCorpus([
            LexicalEntry("kuća", "house", "feminine", "A1", example="Naša kuća je velika.",
                         example_translation="Our house is big."),
            LexicalEntry("knjiga", "book", "feminine", "B1"),
        ])
        engine = WordGameEngine(corpus, rng=random.Random(0), clock=self.clock)
        engine.generator.cloze_probability = 1.0
        question = engine.next_question()
        self.assertEqual(question.mode, Question.CLOZE)
        self.assertEqual(question.hint, "Our house is big.")

    def test_correct_answer(self):
        question = self.engine.next_question()
        result = self.engine.answer(question.card_id, question.correct_answer)
        self.assertTrue(result['correct'])
        self.assertEqual(result['correct_answer'], question.correct_answer)
        self.assertFalse(result['level_changed'])
        self.assertEqual(result['stats']['streak'], 1)
        self.assertEqual(result['stats']['accuracy_percent'], 100)
        self.assertEqual(self.engine.state, WordGameEngine.REVEALED)
        self.assertEqual(self.feedback.names(), [FeedbackEvent.ANSWERED_CORRECT])

    def test_stale_answers_ignored(self):
        self.assertIsNone(self.engine.answer("card-1", "house"))
        question = self.engine.next_question()
        self.assertIsNone(self.engine.answer("card-999", question.correct_answer))
        self.assertIsNotNone(self.engine.answer(question.card_id, question.correct_answer))
        self.assertIsNone(self.engine.answer(question.card_id, question.correct_answer))
        self.assertEqual(self.engine.stats()['streak'], 1)

    def test_incorrect_answer_comes_back_as_review(self):
        question = self.engine.next_question()
        result = self.engine.answer(question.card_id, "not an option")
        self.assertFalse(result['correct'])
        self.assertEqual(result['stats']['review_count'], 1)

        review = self.engine.next_question()
        self.assertEqual(review.card_id, question.card_id)
        self.assertTrue(review.is_review)
        self.assertEqual(self.feedback.names(),
                         [FeedbackEvent.ANSWERED_INCORRECT, FeedbackEvent.REVIEW_REINTRODUCED])

    def test_unanswered_question_presented_again(self):
        first = self.engine.next_question()
        again = self.engine.next_question()
        self.assertIs(again, first)
        self.assertEqual(len(self.engine.scheduler.cards), 1)
        self.assertIsNotNone(self.engine.answer(first.card_id, first.correct_answer))

    def test_unanswered_review_not_lost(self):
        question = self.engine.next_question()
        card_id = question.card_id
        self.engine.answer(card_id, "not an option")

        review = self.engine.next_question()
        self.assertEqual(review.card_id, card_id)
        self.engine.next_question()
        self.engine.next_question()
        self.assertEqual(self.feedback.names().count(FeedbackEvent.REVIEW_REINTRODUCED), 1)

        result = self.engine.answer(card_id, review.correct_answer)
        self.assertTrue(result['correct'])
        self.assertIn(card_id, self.engine.scheduler.review_ids)

    def test_prefers_entries_not_yet_answered(self):
        corpus = InMemoryCorpus([
            LexicalEntry("kuća", "house", "feminine", "A1"),
            LexicalEntry("grad", "city", "masculine", "A1"),
        ])
        engine = WordGameEngine(corpus, rng=random.Random(4), clock=self.clock)
        first = engine.next_question()
        engine.answer(first.card_id, first.correct_answer)
        second = engine.next_question()
        self.assertNotEqual(second.prompt, first.prompt)

    def test_exhausted_corpus(self):
        engine = WordGameEngine(sample_corpus(), level='C', clock=self.clock)
        self.assertIsNone(engine.next_question())
        self.assertEqual(engine.state, WordGameEngine.EXHAUSTED)
        self.assertIsNone(engine.answer("card-1", "x"))

    def test_card_retired_after_consecutive_correct(self):
        question = self.engine.next_question()
        card_id = question.card_id
        for _ in range(5):
            self.assertEqual(question.card_id, card_id)
            self.engine.answer(card_id, question.correct_answer)
            self.clock.advance(30)
            question = self.engine.next_question()
        self.assertIsNone(self.engine.scheduler.get_card(card_id))
        self.assertNotEqual(question.card_id, card_id)


class TestEngineLevels(unittest.TestCase):
    """Level transitions driven by answers."""

    def setUp(self):
        self.clock = FakeClock()
        self.feedback = ListFeedback()

    def make_engine(self, level='A1'):
        return WordGameEngine(sample_corpus(), level=level, feedback=self.feedback,
                              rng=random.Random(1), clock=self.clock)

    def play(self, engine, count, correct=True):
        result = None
        for _ in range(count):
            question = engine.next_question()
            selected = question.correct_answer if correct else "not an option"
            result = engine.answer(question.card_id, selected)
        return result

    def test_advance_after_twenty_correct(self):
        engine = self.make_engine()
        result = self.play(engine, 19)
        self.assertFalse(result['level_changed'])

        result = self.play(engine, 1)
        self.assertTrue(result['level_changed'])
        self.assertEqual(result['change_type'], 'advance')
        self.assertEqual(result['new_level'], 'A2')
        self.assertEqual(engine.level, 'A2')
        self.assertIn((FeedbackEvent.LEVEL_ADVANCED, 'A2'), self.feedback.events)
        # Streak survives the transition, accuracy starts over
        self.assertEqual(result['stats']['streak'], 20)
        self.assertIsNone(result['stats']['accuracy_percent'])

    def test_backlog_blocks_advance(self):
        engine = self.make_engine()
        self.play(engine, 19)
        for lemma in ("kuća", "grad"):
            entry = LexicalEntry(lemma, "x", "feminine", "A1")
            card_id = engine.scheduler.enqueue_new(entry)
            engine.scheduler.record_result(card_id, False)

        result = self.play(engine, 1)
        self.assertTrue(result['correct'])
        self.assertFalse(result['level_changed'])
        self.assertEqual(engine.level, 'A1')
        self.assertEqual(engine.controller.state.total, 0)

    def test_regress_after_twenty_wrong(self):
        engine = self.make_engine('A2')
        result = self.play(engine, 20, correct=False)
        self.assertTrue(result['level_changed'])
        self.assertEqual(result['change_type'], 'regress')
        self.assertEqual(engine.level, 'A1')
        self.assertEqual(engine.scheduler.review_ids, [])
        self.assertEqual(result['stats']['review_count'], 0)
        self.assertIn((FeedbackEvent.LEVEL_REGRESSED, 'A1'), self.feedback.events)

    def test_floor_does_not_regress(self):
        engine = self.make_engine('A1')
        result = self.play(engine, 20, correct=False)
        self.assertFalse(result['level_changed'])
        self.assertNotIn(FeedbackEvent.LEVEL_REGRESSED, self.feedback.names())

    def test_lock_freezes_level(self):
        engine = self.make_engine()
        self.assertTrue(engine.toggle_lock())
        self.assertEqual(self.feedback.events[-1], (FeedbackEvent.LEVEL_LOCK_TOGGLED, 'A1'))
        result = self.play(engine, 20)
        self.assertFalse(result['level_changed'])
        self.assertEqual(engine.level, 'A1')
        self.assertTrue(engine.stats()['locked'])
        self.assertFalse(engine.toggle_lock())

    def test_set_level_resets_session(self):
        engine = self.make_engine()
        engine.toggle_lock()
        self.play(engine, 3, correct=False)
        engine.set_level('B1')
        self.assertEqual(engine.level, 'B1')
        self.assertEqual(engine.state, WordGameEngine.IDLE)
        self.assertEqual(engine.scheduler.cards, {})
        self.assertEqual(engine.controller.state.total, 0)
        stats = engine.stats()
        self.assertEqual(stats['streak'], 0)
        self.assertIsNone(stats['accuracy_percent'])
        self.assertTrue(stats['locked'])

    def test_set_unknown_level_raises(self):
        engine = self.make_engine()
        with self.assertRaises(ValueError):
            engine.set_level('Z')
        with self.assertRaises(ValueError):
            WordGameEngine(sample_corpus(), level='Z')

    def test_reset_returns_to_starting_level(self):
        engine = self.make_engine('A2')
        engine.set_level('B1')
        engine.reset()
        self.assertEqual(engine.level, 'A2')
        self.assertEqual(engine.correctly_answered, set())


if __name__ == '__main__':
    unittest.main()
