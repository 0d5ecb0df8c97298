"""Utility functions for the word game."""

import re

_TAG_RE = re.compile(r'<[^>]+>')
_WORD_RE = re.compile(r'[^\W\d_]+')


def split_into_sentences(text: str) -> list[str]:
    """Split an example text into individual sentence units."""
    sentences = re.split(r'(?<=[.!?])\s+', strip_markup(text).strip())
    cleaned = []
    for s in sentences:
        s = s.strip()
        s = re.sub(r'^\d+[.)]\s*', '', s)
        if s and _WORD_RE.search(s):
            cleaned.append(s)
    return cleaned


def strip_markup(text: str) -> str:
    """Remove HTML tags, keeping their text content."""
    if not text:
        return ''
    return _TAG_RE.sub('', text)


def tokenize(text: str) -> list[str]:
    """Return the letter-only tokens of a text, in order."""
    return _WORD_RE.findall(text or '')


def primary_form(value: str) -> str:
    """First comma-separated form of a lemma or translation."""
    return (value or '').split(',')[0].strip()


def starts_upper(value: str) -> bool:
    return (value or '')[:1].isupper()


def replace_word(text: str, target: str, replacement: str) -> str:
    """Replace the first whole-word occurrence of target in text.

    Multi-word targets match with any whitespace between their words.
    """
    parts = [re.escape(p) for p in target.split()]
    pattern = r'(?<!\w)' + r'\s+'.join(parts) + r'(?!\w)'
    return re.sub(pattern, lambda _: replacement, text, count=1)
