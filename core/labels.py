"""Display labels for grammatical categories and proficiency levels."""

import logging

logger = logging.getLogger(__name__)

# Category prefix -> short label, first match wins
CATEGORY_LABELS = [
    ('noun', 'Noun'),
    ('masculine', 'N - Masc'),
    ('feminine', 'N - Fem'),
    ('neuter', 'N - Neut'),
    ('adjective', 'Adj'),
    ('adverb', 'Adv'),
    ('conjunction', 'Conj'),
    ('determiner', 'Det'),
    ('expression', 'Exp'),
    ('interjection', 'Inter'),
    ('numeral', 'Num'),
    ('particle', 'Part'),
    ('possessive', 'Poss'),
    ('preposition', 'Prep'),
    ('pronoun', 'Pron'),
    ('verb', 'Verb'),
]

LEVEL_TIERS = {
    'A1': 'easy',
    'A2': 'easy',
    'B1': 'medium',
    'B2': 'medium',
    'C': 'hard',
}


def category_label(category: str | None) -> str | None:
    """Short label for a category; unknown categories are returned as-is."""
    if not category:
        return None
    lowered = category.lower()
    for prefix, label in CATEGORY_LABELS:
        if lowered.startswith(prefix):
            return label
    return category


def level_tier(level: str | None) -> str | None:
    tier = LEVEL_TIERS.get(level or '')
    if tier is None:
        logger.warning(f"Missing or unknown level value: {level!r}")
    return tier
