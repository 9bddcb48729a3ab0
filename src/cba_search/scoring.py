from __future__ import annotations

from collections.abc import Iterable

from .chunking import split_sections
from .schema import Document, QueryTerms, ScoredDocument
from .text import query_tokens
from .topics import expand_topics

TITLE_TOKEN_WEIGHT = 10
TITLE_BOOST_WEIGHT = 15
SECTION_BOOST_WEIGHT = 5
PHRASE_BONUS = 20


def build_query_terms(query: str) -> QueryTerms:
    """Tokenize and topic-expand a raw query once so every tier can reuse it."""
    tokens = query_tokens(query)
    query_lower = query.lower().strip()
    return QueryTerms(
        tokens=tuple(tokens),
        query_lower=query_lower,
        boosted_terms=tuple(expand_topics(query_lower, tokens)),
    )


def score_document(document: Document, terms: QueryTerms) -> ScoredDocument:
    """Score one document against a query.

    Title hits are presence-based (+10 per query token, +15 per boosted term).
    Within each section, query tokens add one point per occurrence, boosted
    terms add +5 when present, and the verbatim query adds +20. Sections with
    a positive score are kept as `"### heading\\ntext"` blocks in document
    order.

    Args:
        document: Corpus document.
        terms: Output of `build_query_terms`.

    Returns:
        Scored document; a zero score always comes with no sections.
    """
    score = 0
    title_lower = document.title.lower()
    for token in terms.tokens:
        if token in title_lower:
            score += TITLE_TOKEN_WEIGHT
    for term in terms.boosted_terms:
        if term in title_lower:
            score += TITLE_BOOST_WEIGHT

    # An all-stop-word query must not score through the phrase bonus.
    phrase = terms.query_lower if terms.tokens else ""

    matching_sections: list[str] = []
    for section in split_sections(document):
        section_lower = f"{section.heading} {section.text}".lower()
        section_score = 0
        for token in terms.tokens:
            section_score += section_lower.count(token)
        for term in terms.boosted_terms:
            if term in section_lower:
                section_score += SECTION_BOOST_WEIGHT
        if phrase and phrase in section_lower:
            section_score += PHRASE_BONUS

        if section_score > 0:
            score += section_score
            matching_sections.append(f"### {section.heading}\n{section.text}")

    return ScoredDocument(document=document, score=score, matching_sections=matching_sections)


def rank_documents(documents: Iterable[Document], terms: QueryTerms) -> list[ScoredDocument]:
    """Score every document and keep positive hits, best first.

    `sorted` is stable, so equal scores keep corpus order.
    """
    scored = [score_document(document, terms) for document in documents]
    hits = [item for item in scored if item.score > 0]
    return sorted(hits, key=lambda item: item.score, reverse=True)
