from __future__ import annotations

import re

_NON_TOKEN = re.compile(r"[^a-z0-9\s'-]")

# Common words to ignore in queries. Document text is never filtered.
STOP_WORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "can",
        "had", "her", "was", "one", "our", "out", "has", "have", "been",
        "will", "with", "this", "that", "from", "they", "were", "which",
        "their", "said", "each", "than", "its", "also", "into", "any",
        "such", "shall", "may", "upon", "other", "would", "under",
        "what", "how", "does", "about", "more",
    }
)


def tokenize(text: str) -> list[str]:
    """Lowercase `text` and split it into alphanumeric tokens longer than two characters.

    Hyphens and apostrophes are kept inside tokens; every other character acts
    as a separator.
    """
    cleaned = _NON_TOKEN.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) > 2]


def query_tokens(query: str) -> list[str]:
    """Tokenize a user query and drop stop words."""
    return [token for token in tokenize(query) if token not in STOP_WORDS]
