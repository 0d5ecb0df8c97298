from .models import LexicalEntry, Card, Question
from .interfaces import Corpus, Feedback, FeedbackEvent, NullFeedback
from .corpus import InMemoryCorpus
from .utils import split_into_sentences
from .scheduler import SpacedRepetitionScheduler
from .progression import Decision, LevelProgressionController, evaluate
from .questions import QuestionGenerator
from .engine import StatsTracker, WordGameEngine
from .config import (
    LEVELS, DEFAULT_LEVEL, LEVEL_THRESHOLDS, MIN_SAMPLE_SIZE,
    SCHEDULER_INTERVALS, RETIRE_AFTER_CORRECT, LANGUAGE
)

__all__ = [
    'LexicalEntry', 'Card', 'Question',
    'Corpus', 'Feedback', 'FeedbackEvent', 'NullFeedback',
    'InMemoryCorpus',
    'split_into_sentences',
    'SpacedRepetitionScheduler',
    'Decision', 'LevelProgressionController', 'evaluate',
    'QuestionGenerator',
    'StatsTracker', 'WordGameEngine',
    'LEVELS', 'DEFAULT_LEVEL', 'LEVEL_THRESHOLDS', 'MIN_SAMPLE_SIZE',
    'SCHEDULER_INTERVALS', 'RETIRE_AFTER_CORRECT', 'LANGUAGE'
]
