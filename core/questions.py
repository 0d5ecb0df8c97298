"""Question and distractor generation."""

import logging
import random

from .config import BANNED_CLOZE_CATEGORIES, BLANK, CLOZE_PROBABILITY, MAX_DISTRACTORS
from .interfaces import Corpus
from .models import LexicalEntry, Question
from .morphology import (attach_particle, inflect, is_reflexive, matches_form,
                         split_reflexive, suffix_pattern)
from .utils import primary_form, replace_word, split_into_sentences, starts_upper, tokenize

logger = logging.getLogger(__name__)


def _match_case(form: str, reference: str) -> str:
    """Capitalise form when the reference starts with a capital (sentence start)."""
    if form and starts_upper(reference) and not starts_upper(form):
        return form[0].upper() + form[1:]
    return form


class QuestionGenerator:
    """Builds flashcard and cloze questions for one target entry at a time."""

    def __init__(self, corpus: Corpus, rng: random.Random = None,
                 cloze_probability: float = CLOZE_PROBABILITY,
                 max_distractors: int = MAX_DISTRACTORS):
        self.corpus = corpus
        self.rng = rng or random.Random()
        self.cloze_probability = cloze_probability
        self.max_distractors = max_distractors

    def is_cloze_eligible(self, entry: LexicalEntry) -> bool:
        """Entries in banned categories, or without an example, never become cloze."""
        if not entry.example:
            return False
        if not entry.category:
            return True
        category = entry.category.lower()
        return not any(category.startswith(banned) for banned in BANNED_CLOZE_CATEGORIES)

    def generate(self, entry: LexicalEntry, level: str, is_review: bool = False,
                 cloze_eligible: bool = None) -> Question:
        """Build a question, trying cloze first when the coin flip says so."""
        if cloze_eligible is None:
            cloze_eligible = self.is_cloze_eligible(entry)
        if cloze_eligible and self.rng.random() < self.cloze_probability:
            question = self.build_cloze(entry, level, is_review)
            if question is not None:
                return question
            logger.debug(f"No cloze target for {entry.headword!r}, using flashcard")
        return self.build_flashcard(entry, level, is_review)

    # ------------------------------------------------------------------
    # Candidate pools
    # ------------------------------------------------------------------

    def _shuffled(self, items: list) -> list:
        return self.rng.sample(items, len(items))

    def _is_usable(self, candidate: LexicalEntry, target: LexicalEntry) -> bool:
        if self.corpus.is_excluded(candidate.lemma):
            return False
        return candidate.lemma.lower() != target.lemma.lower()

    def _stages(self, entry: LexicalEntry, level: str) -> list[list[LexicalEntry]]:
        """Candidate pools from narrowest to broadest."""
        same_category = self.corpus.by_category(entry.category) if entry.category else []
        return [
            [e for e in same_category if e.level == level],
            same_category,
            self.corpus.entries(),
        ]

    # ------------------------------------------------------------------
    # Flashcards
    # ------------------------------------------------------------------

    def flashcard_distractors(self, entry: LexicalEntry, level: str) -> list[str]:
        correct = entry.translation
        capitalised = starts_upper(correct)
        seen = {primary_form(correct).lower()}
        chosen = []

        for stage in self._stages(entry, level):
            pool = [e for e in stage
                    if e.translation and self._is_usable(e, entry)
                    and starts_upper(e.translation) == capitalised]
            for candidate in self._shuffled(pool):
                if len(chosen) >= self.max_distractors:
                    break
                key = primary_form(candidate.translation).lower()
                if key in seen:
                    continue
                seen.add(key)
                chosen.append(candidate.translation)
            if len(chosen) >= self.max_distractors:
                break

        if len(chosen) < self.max_distractors:
            logger.debug(f"Only {len(chosen)} flashcard distractors for {entry.headword!r}")
        return chosen

    def build_flashcard(self, entry: LexicalEntry, level: str, is_review: bool = False) -> Question:
        correct = entry.translation
        options = self._shuffled([correct] + self.flashcard_distractors(entry, level))
        return Question(entry.headword, correct, options, Question.FLASHCARD, is_review)

    # ------------------------------------------------------------------
    # Cloze
    # ------------------------------------------------------------------

    def find_cloze_target(self, entry: LexicalEntry) -> tuple[str, str] | None:
        """Find the first example sentence containing a form of the lemma.

        Returns (sentence with the form blanked, the form) or None.
        """
        lemma = entry.headword
        _, particle, _ = split_reflexive(lemma)

        for unit in split_into_sentences(entry.example or ''):
            tokens = tokenize(unit)
            for i, token in enumerate(tokens):
                if not matches_form(lemma, token, entry.category):
                    continue
                answer = token
                if particle:
                    if i > 0 and tokens[i - 1].lower() == particle.lower():
                        answer = f"{tokens[i - 1]} {token}"
                    elif i + 1 < len(tokens) and tokens[i + 1].lower() == particle.lower():
                        answer = f"{token} {tokens[i + 1]}"
                prompt = replace_word(unit, answer, BLANK)
                if BLANK not in prompt:
                    # Particle and verb not adjacent in the text
                    answer = token
                    prompt = replace_word(unit, answer, BLANK)
                return (prompt, answer)
        return None

    def cloze_distractors(self, entry: LexicalEntry, answer: str, level: str) -> list[str]:
        """Inflect other entries into the slot of the answer."""
        lemma = entry.headword
        base, particle, _ = split_reflexive(lemma)
        answer_form, answer_particle, answer_position = split_reflexive(answer)

        # An uninflected answer gives no ending to filter on
        pattern = None
        if answer_form.lower() != base.lower():
            pattern = suffix_pattern(answer_form, entry.category)

        seen = {lemma.lower(), base.lower(), answer.lower(), answer_form.lower()}
        chosen = []

        for stage in self._stages(entry, level):
            pool = [e for e in stage if self._is_usable(e, entry)]
            if particle:
                pool = [e for e in pool if is_reflexive(e.headword)]
            for candidate in self._shuffled(pool):
                if len(chosen) >= self.max_distractors:
                    break
                candidate_base = split_reflexive(candidate.headword)[0]
                form = inflect(candidate_base, candidate.category or entry.category, answer_form)
                if pattern is not None and not pattern.search(form):
                    continue
                form = _match_case(form, answer_form)
                option = attach_particle(form, answer_particle, answer_position)
                if option.lower() in seen or form.lower() in seen:
                    continue
                seen.add(option.lower())
                seen.add(form.lower())
                chosen.append(option)
            if len(chosen) >= self.max_distractors:
                break

        if len(chosen) < self.max_distractors:
            logger.debug(f"Only {len(chosen)} cloze distractors for {answer!r}")
        return chosen

    def build_cloze(self, entry: LexicalEntry, level: str, is_review: bool = False) -> Question | None:
        target = self.find_cloze_target(entry)
        if target is None:
            return None
        prompt, answer = target
        options = self._shuffled([answer] + self.cloze_distractors(entry, answer, level))
        return Question(prompt, answer, options, Question.CLOZE, is_review)
