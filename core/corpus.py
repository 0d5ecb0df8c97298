"""In-memory corpus implementation."""

from .interfaces import Corpus
from .models import LexicalEntry


class InMemoryCorpus(Corpus):
    """Corpus backed by a list of entries and an exclusion list of lemmas."""

    def __init__(self, entries: list[LexicalEntry], excluded: list[str] = None):
        self._entries = list(entries)
        self._excluded = {e.lower() for e in (excluded or [])}

    def __len__(self):
        return len(self._entries)

    def entries(self) -> list[LexicalEntry]:
        return list(self._entries)

    def by_level(self, level: str) -> list[LexicalEntry]:
        return [e for e in self._entries if e.level == level]

    def by_category(self, prefix: str) -> list[LexicalEntry]:
        if not prefix:
            return []
        prefix = prefix.lower()
        return [e for e in self._entries
                if e.category and e.category.lower().startswith(prefix)]

    def is_excluded(self, lemma: str) -> bool:
        return (lemma or '').lower() in self._excluded
