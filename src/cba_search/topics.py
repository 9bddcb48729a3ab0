from __future__ import annotations

from collections.abc import Sequence

# Informal phrasing -> terms that actually appear in the agreement text.
TOPIC_MAP: dict[str, list[str]] = {
    "salary cap": ["basketball related income", "salary cap", "tax level", "apron"],
    "free agent": ["free agency", "restricted", "unrestricted", "qualifying"],
    "trade": ["trade", "assignment", "prohibition of no-trade"],
    "rookie": ["rookie scale", "draft", "eligibility"],
    "contract": ["uniform player contract", "length of player contracts", "option"],
    "sign and trade": ["free agency", "sign-and-trade"],
    "bird rights": ["free agency", "qualifying veteran", "early qualifying"],
    "exception": ["salary cap", "exception", "mid-level", "bi-annual", "traded player"],
    "max contract": ["salary cap", "maximum", "individual", "free agency"],
    "two-way": ["two-way", "g league", "nba g league"],
    "super max": ["designated veteran", "designated player", "supermax"],
    "luxury tax": ["tax level", "apron", "basketball related income"],
    "minimum salary": ["minimum", "salary scale", "baseline"],
    "draft": ["draft", "eligibility", "lottery", "rookie"],
    "extension": ["extension", "free agency", "contract"],
    "option": ["option clauses", "player option", "team option", "early termination"],
    "waive": ["right of set-off", "waiver"],
    "buyout": ["right of set-off", "buyout"],
    "cap hold": ["free agency", "salary cap", "cap hold"],
    "disabled player": ["salary cap", "disabled player exception"],
    "hardship": ["salary cap", "hardship exception"],
    "second apron": ["apron", "second apron", "salary cap"],
}


def expand_topics(
    query_lower: str,
    tokens: Sequence[str],
    topic_map: dict[str, list[str]] | None = None,
) -> list[str]:
    """Collect boosted terms for a query.

    A topic contributes its terms once if the whole topic phrase occurs in the
    query, and once more for every query token that is a substring of the
    topic phrase. Repeats are kept on purpose: each one adds its own weight
    during scoring.

    Args:
        query_lower: Lowercased raw query.
        tokens: Stop-word-filtered query tokens.
        topic_map: Optional replacement table, mainly for tests.

    Returns:
        Boosted terms in discovery order, duplicates included.
    """
    table = TOPIC_MAP if topic_map is None else topic_map
    boosted: list[str] = []
    for topic, terms in table.items():
        if topic in query_lower:
            boosted.extend(terms)
    for token in tokens:
        for topic, terms in table.items():
            if token in topic:
                boosted.extend(terms)
    return boosted
