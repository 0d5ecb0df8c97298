"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod
from enum import Enum

from .models import LexicalEntry


class FeedbackEvent(str, Enum):
    """Categorical events the core reports to the feedback collaborator."""

    ANSWERED_CORRECT = 'answeredCorrect'
    ANSWERED_INCORRECT = 'answeredIncorrect'
    REVIEW_REINTRODUCED = 'reviewReintroduced'
    LEVEL_ADVANCED = 'levelAdvanced'
    LEVEL_REGRESSED = 'levelRegressed'
    LEVEL_LOCK_TOGGLED = 'levelLockToggled'


class Corpus(ABC):
    """Abstract base class for read-only access to the word corpus."""

    @abstractmethod
    def entries(self) -> list[LexicalEntry]:
        """All entries, in corpus order."""
        pass

    @abstractmethod
    def by_level(self, level: str) -> list[LexicalEntry]:
        """Entries whose level equals the given level."""
        pass

    @abstractmethod
    def by_category(self, prefix: str) -> list[LexicalEntry]:
        """Entries whose category starts with the given prefix (case-insensitive)."""
        pass

    @abstractmethod
    def is_excluded(self, lemma: str) -> bool:
        """True if the lemma is on the exclusion list."""
        pass


class Feedback(ABC):
    """Abstract base class for perceptual feedback (sounds, banners)."""

    @abstractmethod
    def notify(self, event: FeedbackEvent, level: str = None) -> None:
        """Report an event. level is set for level-related events."""
        pass


class NullFeedback(Feedback):
    """Feedback sink that ignores every event."""

    def notify(self, event: FeedbackEvent, level: str = None) -> None:
        pass
