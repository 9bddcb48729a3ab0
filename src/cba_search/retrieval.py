from __future__ import annotations

from collections.abc import Iterable
import logging

from .assembly import NO_RESULTS_CONTEXT, assemble_context
from .entities import match_entities
from .schema import Document, EntityRecord, SearchOptions, SearchResult
from .scoring import build_query_terms, rank_documents

logger = logging.getLogger(__name__)


class CorpusIndex:
    """Read-only snapshot of the three corpus tiers and the player records.

    Nothing is mutated after construction, so one instance can serve
    concurrent searches without locking.
    """

    def __init__(
        self,
        guide: Iterable[Document],
        faq: Iterable[Document],
        primary: Iterable[Document],
        entities: Iterable[EntityRecord] = (),
    ) -> None:
        self.guide: tuple[Document, ...] = tuple(guide)
        self.faq: tuple[Document, ...] = tuple(faq)
        self.primary: tuple[Document, ...] = tuple(primary)
        self.entities: tuple[EntityRecord, ...] = tuple(entities)

    def search(self, query: str, options: SearchOptions | None = None) -> SearchResult:
        """Return a budgeted, tiered context for `query` and its sources.

        Args:
            query: Raw user utterance.
            options: Budget and per-tier caps; defaults to `SearchOptions()`.

        Returns:
            `SearchResult`; the no-results sentinel with empty sources when no
            document scores above zero.
        """
        options = options or SearchOptions()
        terms = build_query_terms(query)
        if terms.is_empty:
            logger.debug("query %r has no searchable terms", query)
            return SearchResult(context=NO_RESULTS_CONTEXT, sources=[])

        guide_hits = rank_documents(self.guide, terms)
        faq_hits = rank_documents(self.faq, terms)
        primary_hits = rank_documents(self.primary, terms)
        logger.debug(
            "query %r hits: guide=%d faq=%d primary=%d",
            query,
            len(guide_hits),
            len(faq_hits),
            len(primary_hits),
        )

        result = assemble_context(guide_hits, faq_hits, primary_hits, options)
        logger.debug("assembled %d chars from %d sources", len(result.context), len(result.sources))
        return result

    def match_entities(self, query: str) -> str:
        """Player summary block for `query`, or an empty string."""
        return match_entities(self.entities, query)

    def table_of_contents(self) -> str:
        return "\n".join(f"- {document.id}: {document.title}" for document in self.primary)
