"""Domain models for the word game."""

from .utils import primary_form


class LexicalEntry:
    """A dictionary entry supplied by the corpus. Never mutated by the game."""

    def __init__(self, lemma: str, translation: str, category: str = None,
                 level: str = None, pronunciation: str = None, example: str = None,
                 example_translation: str = None):
        self.lemma = lemma
        self.translation = translation
        self.category = category
        self.level = level
        self.pronunciation = pronunciation
        self.example = example
        self.example_translation = example_translation

    def __eq__(self, other):
        if not isinstance(other, LexicalEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.lemma, self.translation, self.category, self.level))

    def __repr__(self):
        return f"LexicalEntry({self.lemma!r}, {self.translation!r}, {self.category!r}, {self.level!r})"

    @property
    def headword(self) -> str:
        """Canonical citation form (first of the comma-separated lemmas)."""
        return primary_form(self.lemma)

    def to_dict(self) -> dict:
        return {
            'lemma': self.lemma,
            'translation': self.translation,
            'category': self.category,
            'level': self.level,
            'pronunciation': self.pronunciation,
            'example': self.example,
            'example_translation': self.example_translation
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'LexicalEntry':
        return cls(
            data['lemma'],
            data['translation'],
            category=data.get('category'),
            level=data.get('level'),
            pronunciation=data.get('pronunciation'),
            example=data.get('example'),
            example_translation=data.get('example_translation')
        )


class Card:
    """A schedulable drill unit bound to one entry."""

    def __init__(self, card_id: str, entry: LexicalEntry, due: float, meta: dict = None):
        self.id = card_id
        self.entry = entry
        self.bucket = 0
        self.due = due
        self.consecutive_correct = 0
        self.meta = dict(meta or {})
        self.cloze_eligible = bool(self.meta.get('cloze_eligible'))

    def __repr__(self):
        return f"Card({self.id!r}, {self.entry.headword!r}, bucket={self.bucket}, due={self.due})"

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'entry': self.entry.to_dict(),
            'bucket': self.bucket,
            'due': self.due,
            'consecutive_correct': self.consecutive_correct,
            'cloze_eligible': self.cloze_eligible,
            'meta': self.meta
        }


class Question:
    """One presented question: a prompt plus its option set."""

    FLASHCARD = 'flashcard'
    CLOZE = 'cloze'

    def __init__(self, prompt: str, correct_answer: str, options: list[str], mode: str,
                 is_review: bool = False, card_id: str = None):
        self.prompt = prompt
        self.correct_answer = correct_answer
        self.options = options
        self.mode = mode
        self.is_review = is_review
        self.card_id = card_id
        # Renderer extras, filled in by the engine
        self.category_label = None
        self.level_tier = None
        self.pronunciation = None
        self.hint = None

    @property
    def displayed_options(self) -> list[str]:
        """Options as shown to the learner (flashcards show the primary form only)."""
        if self.mode == self.FLASHCARD:
            return [primary_form(o) for o in self.options]
        return list(self.options)

    def is_correct(self, selected: str) -> bool:
        """Check a selected option against the correct answer."""
        selected = (selected or '').strip().lower()
        if self.mode == self.CLOZE:
            return selected == self.correct_answer.strip().lower()
        return primary_form(selected) == primary_form(self.correct_answer).lower()

    def to_dict(self) -> dict:
        return {
            'card_id': self.card_id,
            'prompt': self.prompt,
            'correct_answer': self.correct_answer,
            'options': self.displayed_options,
            'mode': self.mode,
            'is_review': self.is_review,
            'category_label': self.category_label,
            'level_tier': self.level_tier,
            'pronunciation': self.pronunciation,
            'hint': self.hint
        }
