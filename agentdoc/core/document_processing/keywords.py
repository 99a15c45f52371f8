"""
Keyword extraction.

Frequency-based keywords per chunk: no model, no I/O, deterministic.

Dependencies: re, collections (stdlib)
System role: Chunk keyword derivation for ingestion
"""

import re
from collections import Counter

_PUNCTUATION = re.compile(r"[^\w\s]")

STOP_WORDS = frozenset(
    {
        "the", "and", "that", "have", "for", "not", "with", "this", "but",
        "from", "they", "will", "would", "there", "their", "what", "about",
        "which", "when", "make", "like", "time", "just", "know", "take",
        "people", "into", "year", "your", "good", "some", "could", "them",
        "than", "then", "look", "only", "come", "over", "think", "also",
        "back", "after", "work", "first", "well", "even", "want", "because",
        "these", "give", "most",
    }
)


def extract_keywords(text: str, limit: int = 10) -> list[str]:
    """
    Return the most frequent meaningful words of text.

    Text is lower-cased and stripped of punctuation, then split on
    whitespace. Words of three characters or fewer and stop words are
    dropped. Ties keep first-occurrence order.

    Args:
        text: Source text (may be empty)
        limit: Maximum keywords returned

    Returns:
        list[str]: Keywords by descending frequency

    Example:
        >>> extract_keywords("Neural networks train. Networks learn.")
        ['networks', 'neural', 'train', 'learn']
    """
    words = _PUNCTUATION.sub("", text.lower()).split()
    counts = Counter(w for w in words if len(w) > 3 and w not in STOP_WORDS)
    # Counter preserves insertion order and most_common sorts stably
    return [word for word, _ in counts.most_common(limit)]
