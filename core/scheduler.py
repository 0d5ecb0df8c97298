"""Spaced repetition scheduler for drill cards."""

import logging
import time
from typing import Callable, Optional

from .config import SCHEDULER_INTERVALS
from .models import Card, LexicalEntry

logger = logging.getLogger(__name__)


class SpacedRepetitionScheduler:
    """Interleaves new cards with review cards that have come due.

    Cards move up one bucket per correct answer and down one per incorrect
    answer; the bucket picks the delay (in minutes) before the card is due
    again. A card id lives in at most one of the new queue and the review
    list.
    """

    def __init__(self, intervals: list[int] = None, clock: Callable[[], float] = None,
                 earliest_due_first: bool = False):
        self.intervals = list(intervals or SCHEDULER_INTERVALS)
        self.clock = clock or time.time
        self.earliest_due_first = earliest_due_first
        self.cards = {}          # card id -> Card
        self.new_queue = []      # undrawn card ids, FIFO
        self.review_ids = []     # answered card ids, insertion order
        self.counter = 0
        self.last_source = None  # 'review', 'new' or 'fresh' for the last drawn card

    @property
    def max_bucket(self) -> int:
        return len(self.intervals) - 1

    def now(self) -> float:
        return self.clock()

    def reset(self) -> None:
        self.cards.clear()
        self.new_queue = []
        self.review_ids = []
        self.counter = 0
        self.last_source = None

    def enqueue_new(self, entry: LexicalEntry, meta: dict = None) -> str:
        """Create a bucket-0 card due now and append it to the new queue."""
        self.counter += 1
        card_id = f"card-{self.counter}"
        self.cards[card_id] = Card(card_id, entry, self.now(), meta)
        self.new_queue.append(card_id)
        return card_id

    def get_card(self, card_id: str) -> Card | None:
        return self.cards.get(card_id)

    def _due_ids(self, now: float) -> list[str]:
        return [cid for cid in self.review_ids
                if cid in self.cards and self.cards[cid].due <= now]

    def _pull_due_card(self, now: float) -> Card | None:
        due = self._due_ids(now)
        if not due:
            return None
        if self.earliest_due_first:
            # min() keeps the first id on ties, so insertion order breaks them
            card_id = min(due, key=lambda cid: self.cards[cid].due)
        else:
            card_id = due[0]
        self.review_ids.remove(card_id)
        return self.cards[card_id]

    def next_card(self, generate_fresh: Callable[[], Optional[tuple]] = None) -> Card | None:
        """Return the next card to present, or None if nothing is left.

        Due review cards come first, then queued new cards, then whatever
        generate_fresh() supplies as an (entry, meta) tuple.
        """
        now = self.now()
        card = self._pull_due_card(now)
        if card:
            logger.debug(f"Review card due: {card.id}")
            self.last_source = 'review'
            return card

        while self.new_queue:
            card_id = self.new_queue.pop(0)
            card = self.cards.get(card_id)
            if card:
                self.last_source = 'new'
                return card

        fresh = generate_fresh() if generate_fresh else None
        if not fresh:
            return None
        entry, meta = fresh
        card_id = self.enqueue_new(entry, meta)
        self.new_queue.remove(card_id)
        self.last_source = 'fresh'
        return self.cards[card_id]

    def record_result(self, card_id: str, is_correct: bool) -> None:
        """Move a card between buckets and reschedule it."""
        card = self.cards.get(card_id)
        if not card:
            return

        if is_correct:
            card.bucket = min(card.bucket + 1, self.max_bucket)
            card.consecutive_correct += 1
        else:
            card.bucket = max(card.bucket - 1, 0)
            card.consecutive_correct = 0

        card.due = self.now() + self.intervals[card.bucket] * 60

        if card_id in self.new_queue:
            self.new_queue.remove(card_id)
        if card_id not in self.review_ids:
            self.review_ids.append(card_id)

    def remove_card(self, card_id: str) -> None:
        self.cards.pop(card_id, None)
        self.review_ids = [cid for cid in self.review_ids if cid != card_id]
        self.new_queue = [cid for cid in self.new_queue if cid != card_id]

    def clear_reviews(self) -> None:
        """Drop every card waiting for review."""
        for card_id in self.review_ids:
            self.cards.pop(card_id, None)
        self.review_ids = []

    def stats(self) -> dict:
        return {'review_count': len(self._due_ids(self.now()))}
