"""File-based corpus loading."""

import json
import logging
import os

from core.corpus import InMemoryCorpus
from core.models import LexicalEntry

logger = logging.getLogger(__name__)

# Project root is one level up from server/
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CORPUS_FILE = os.path.join(PROJECT_ROOT, 'data', 'sample_corpus.json')


def parse_entries(raw_entries: list) -> list[LexicalEntry]:
    """Build entries from dicts, skipping any without a lemma or translation."""
    entries = []
    for i, data in enumerate(raw_entries):
        if not isinstance(data, dict) or not data.get('lemma') or not data.get('translation'):
            logger.warning(f"Skipping malformed corpus entry #{i}: {data!r}")
            continue
        entry = LexicalEntry.from_dict(data)
        if not entry.level:
            logger.warning(f"Corpus entry {entry.headword!r} has no level")
        entries.append(entry)
    return entries


def load_corpus(path: str = None) -> InMemoryCorpus:
    """Load a JSON corpus file of the form {"entries": [...], "excluded": [...]}."""
    path = path or DEFAULT_CORPUS_FILE
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Corpus file not found at {path}\n"
            f"Set WORDGAME_CORPUS to a JSON file with an \"entries\" list"
        )
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    entries = parse_entries(data.get('entries', []))
    excluded = data.get('excluded', [])
    logger.info(f"Loaded {len(entries)} entries ({len(excluded)} excluded) from {path}")
    return InMemoryCorpus(entries, excluded)
