"""
NoteKeeper Backend - Word Frequency Analyzer
=============================================

What:  Turns free text into an ordered word -> count table.
How:   lower-case → delete every non-letter, non-whitespace character →
       split on whitespace runs → count → order by descending count.
Who:   Called by NoteService.get_word_statistics for GET /api/notes/{id}/stats.

Alphabet:
    Latin a-z plus the Cyrillic letters used by Ukrainian (а-я, і, є, ї, ґ).
    Everything else, digits included, is deleted rather than replaced by a
    space, so "don't" counts as "dont" and "e-mail" as "email".

Ordering:
    Counter keeps first-seen insertion order and `most_common()` sorts
    stably, so words with equal counts stay in the order they first appear.

Example:
    >>> word_frequencies("note is just a note")
    {'note': 2, 'is': 1, 'just': 1, 'a': 1}
"""

import re
from collections import Counter
from typing import Dict

# Compiled once at import. re.ASCII limits \s to [ \t\n\r\f\v]; the letter
# ranges are literal code points and are unaffected by the flag.
_NON_WORD_PATTERN = re.compile(r"[^a-zа-яієїґ\s]", re.ASCII)
_WHITESPACE_PATTERN = re.compile(r"\s+", re.ASCII)


def word_frequencies(text: str) -> Dict[str, int]:
    """
    Count the words of `text`, most frequent first.

    Args:
        text: Raw note body; may be empty.

    Returns:
        Insertion-ordered dict of lowercase word → occurrence count.
        Empty when the text has no letters left after cleaning.
    """
    cleaned = _NON_WORD_PATTERN.sub("", text.lower())
    if not cleaned.strip():
        return {}

    counts = Counter(word for word in _WHITESPACE_PATTERN.split(cleaned) if word)
    return dict(counts.most_common())
