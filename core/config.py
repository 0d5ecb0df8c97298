"""Configuration constants for the word game."""

LANGUAGE = 'Croatian'

# Proficiency levels, lowest first
LEVELS = ['A1', 'A2', 'B1', 'B2', 'C']
DEFAULT_LEVEL = 'A1'

# Accuracy thresholds per level (None = no transition in that direction)
LEVEL_THRESHOLDS = {
    'A1': {'up': 0.85, 'down': None},
    'A2': {'up': 0.9, 'down': 0.6},
    'B1': {'up': 0.94, 'down': 0.7},
    'B2': {'up': 0.975, 'down': 0.8},
    'C': {'up': None, 'down': 0.9},
}

MIN_SAMPLE_SIZE = 20          # Answers needed before a level is evaluated

# Spaced repetition
SCHEDULER_INTERVALS = [0, 2, 5, 10, 20]  # minutes per bucket
RETIRE_AFTER_CORRECT = 5      # Consecutive correct answers before a card is retired

# Question generation
CLOZE_PROBABILITY = 0.5
BANNED_CLOZE_CATEGORIES = ('numeral', 'pronoun', 'possessive', 'determiner')
MAX_DISTRACTORS = 3
BLANK = '_____'
