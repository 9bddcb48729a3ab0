from __future__ import annotations

from collections.abc import Callable, Sequence

from .schema import (
    TIER_FAQ,
    TIER_GUIDE,
    TIER_PRIMARY,
    ScoredDocument,
    SearchOptions,
    SearchResult,
    SourceRef,
)

NO_RESULTS_CONTEXT = "No relevant CBA sections found for this query."

# Guide and FAQ may each take up to this share of the budget; Primary gets the rest.
TIER_SHARE = 0.3
FULL_CONTENT_THRESHOLD = 15000
TITLE_ONLY_PREFIX_CHARS = 3000
MAX_SOURCES = 5


def format_guide_block(item: ScoredDocument) -> str:
    return f"\n\n--- CBA GUIDE: {item.title} ---\n\n{item.content}"


def format_faq_block(item: ScoredDocument) -> str:
    return f"\n\n--- CBA 101 FAQ: {item.title} ---\n\n{item.content}"


def format_primary_block(item: ScoredDocument, max_sections: int) -> str:
    """Render a Primary article in full, by matched sections, or as a prefix.

    Short articles are included whole. Long ones contribute up to
    `max_sections` matched sections; a long article with no sections to show
    (a title-only match, or `max_sections` of 0) falls back to a fixed-length
    prefix of its content.
    """
    if len(item.content) < FULL_CONTENT_THRESHOLD:
        return f"\n\n--- ARTICLE: {item.title} ---\n\n{item.content}"
    sections = item.matching_sections[:max_sections]
    if sections:
        body = "\n\n".join(sections)
        return f"\n\n--- ARTICLE: {item.title} (relevant sections) ---\n\n{body}"
    prefix = item.content[:TITLE_ONLY_PREFIX_CHARS]
    return f"\n\n--- ARTICLE: {item.title} (opening excerpt) ---\n\n{prefix}"


def _fill_tier(
    hits: Sequence[ScoredDocument],
    render: Callable[[ScoredDocument], str],
    tier_budget: int,
    remaining: int,
    limit: int,
) -> list[tuple[ScoredDocument, str]]:
    """Take ranked hits until the next whole block would overflow either budget."""
    included: list[tuple[ScoredDocument, str]] = []
    used = 0
    for item in hits[:limit]:
        block = render(item)
        if used + len(block) > min(tier_budget, remaining):
            break
        included.append((item, block))
        used += len(block)
    return included


def collect_sources(tiered: Sequence[tuple[str, ScoredDocument]], limit: int = MAX_SOURCES) -> list[SourceRef]:
    """Deduplicate provenance by `(tier, id)` and by label in first-seen order, then cap it.

    Same-titled documents in one tier share a label; only the first is kept.
    The cap is applied regardless of how many documents reached the context,
    so the list can under-report a context that drew on many documents.
    """
    seen_keys: set[tuple[str, str]] = set()
    by_label: dict[str, SourceRef] = {}
    for tier, item in tiered:
        key = (tier, item.id)
        if key in seen_keys:
            continue
        seen_keys.add(key)
        source = SourceRef(tier=tier, doc_id=item.id, title=item.title)
        by_label.setdefault(source.label, source)
    return list(by_label.values())[:limit]


def assemble_context(
    guide_hits: Sequence[ScoredDocument],
    faq_hits: Sequence[ScoredDocument],
    primary_hits: Sequence[ScoredDocument],
    options: SearchOptions,
) -> SearchResult:
    """Merge ranked hits from the three tiers into one budgeted context.

    Tiers are emitted Guide, then FAQ, then Primary. Inputs are the positive,
    ranked hits produced by `rank_documents`.

    Args:
        guide_hits: Ranked Guide-tier hits.
        faq_hits: Ranked FAQ-tier hits.
        primary_hits: Ranked Primary-tier hits.
        options: Budget and per-tier caps.

    Returns:
        The assembled `SearchResult`, or the no-results sentinel when nothing
        fits.
    """
    max_chars = options.max_chars
    shared_budget = int(max_chars * TIER_SHARE)
    blocks: list[str] = []
    provenance: list[tuple[str, ScoredDocument]] = []
    used = 0

    tiers = (
        (TIER_GUIDE, guide_hits, format_guide_block, shared_budget, options.guide_max_sections),
        (TIER_FAQ, faq_hits, format_faq_block, shared_budget, options.faq_max_entries),
        (
            TIER_PRIMARY,
            primary_hits,
            lambda item: format_primary_block(item, options.primary_max_sections),
            max_chars,
            options.primary_max_articles,
        ),
    )
    for tier, hits, render, tier_budget, limit in tiers:
        for item, block in _fill_tier(hits, render, tier_budget, max_chars - used, limit):
            blocks.append(block)
            provenance.append((tier, item))
            used += len(block)

    context = "".join(blocks).lstrip("\n")
    if not context:
        return SearchResult(context=NO_RESULTS_CONTEXT, sources=[])
    return SearchResult(context=context, sources=collect_sources(provenance))
