"""Tests for retrieval.py - CorpusIndex search, entity delegation and TOC."""
from __future__ import annotations

import pytest

from cba_search.assembly import NO_RESULTS_CONTEXT
from cba_search.retrieval import CorpusIndex
from cba_search.schema import Document, SearchOptions, SearchResult


class TestSearch:
    def test_returns_search_result(self, corpus_index):
        assert isinstance(corpus_index.search("salary cap"), SearchResult)

    def test_bird_rights_prefers_guide(self, corpus_index):
        result = corpus_index.search("How do Bird rights work?")
        tiers = [source.tier for source in result.sources]
        assert tiers[0] == "guide"
        assert "primary" in tiers
        assert tiers.index("guide") < tiers.index("primary")
        assert "Bird Rights" in result.context

    def test_bird_rights_sources(self, corpus_index):
        result = corpus_index.search("How do Bird rights work?")
        assert [source.doc_id for source in result.sources] == ["guide-0", "article-11"]

    @pytest.mark.parametrize("query", ["", "   ", "what does the", "how is it"])
    def test_degenerate_queries_return_sentinel(self, corpus_index, query):
        result = corpus_index.search(query)
        assert result.context == NO_RESULTS_CONTEXT
        assert result.sources == []

    def test_unmatched_query_returns_sentinel(self, corpus_index):
        result = corpus_index.search("zebra xylophone")
        assert result.context == NO_RESULTS_CONTEXT
        assert result.sources == []

    def test_tier_order_in_context(self, corpus_index):
        context = corpus_index.search("restricted free agency").context
        guide_at = context.index("--- CBA GUIDE")
        faq_at = context.index("--- CBA 101 FAQ")
        primary_at = context.index("--- ARTICLE")
        assert guide_at < faq_at < primary_at

    def test_zero_score_documents_excluded(self, corpus_index):
        result = corpus_index.search("restricted free agency")
        assert "article-24" not in [source.doc_id for source in result.sources]
        assert "No-Trade" not in result.context

    @pytest.mark.parametrize("budget", [50, 200, 400, 1000, 5000])
    def test_respects_budget(self, corpus_index, budget):
        result = corpus_index.search("restricted free agency", SearchOptions(max_chars=budget))
        assert result.context == NO_RESULTS_CONTEXT or len(result.context) <= budget

    def test_sources_unique_and_capped(self):
        guide = [
            Document(id=f"guide-{i}", title=f"Bird Rights {i}", content="Bird rights detail.")
            for i in range(8)
        ]
        index = CorpusIndex(guide=guide, faq=[], primary=[])
        result = index.search("bird rights", SearchOptions(guide_max_sections=8))
        assert result.context.count("--- CBA GUIDE") == 8
        assert len(result.sources) == 5
        assert len({(s.tier, s.doc_id) for s in result.sources}) == 5

    def test_same_titled_sections_share_one_label(self):
        guide = [
            Document(id="guide-3", title="Overview", content="Bird rights overview text."),
            Document(id="guide-9", title="Overview", content="More bird rights notes."),
        ]
        index = CorpusIndex(guide=guide, faq=[], primary=[])
        result = index.search("bird rights")
        labels = result.source_labels()
        assert labels == ["CBA Guide: Overview"]
        assert result.context.count("--- CBA GUIDE: Overview") == 2

    def test_deterministic(self, corpus_index):
        first = corpus_index.search("luxury tax apron")
        second = corpus_index.search("luxury tax apron")
        assert first == second

    def test_source_labels(self, corpus_index):
        labels = corpus_index.search("How do Bird rights work?").source_labels()
        assert labels == ["CBA Guide: Bird Rights", "CBA: Article XI: Free Agency"]


class TestCorpusIndex:
    def test_snapshots_are_tuples(self, corpus_index):
        assert isinstance(corpus_index.guide, tuple)
        assert isinstance(corpus_index.primary, tuple)
        assert isinstance(corpus_index.entities, tuple)

    def test_table_of_contents(self, corpus_index):
        toc = corpus_index.table_of_contents()
        assert toc.splitlines() == [
            "- article-7: Article VII: Basketball Related Income, Salary Cap, Tax Level and Apron Levels",
            "- article-11: Article XI: Free Agency",
            "- article-24: Article XXIV: Prohibition of No-Trade Contracts",
        ]

    def test_empty_table_of_contents(self):
        assert CorpusIndex(guide=[], faq=[], primary=[]).table_of_contents() == ""

    def test_match_entities_delegates(self, corpus_index):
        block = corpus_index.match_entities("Williams")
        assert "Mark Williams" in block
        assert "Grant Williams" in block

    def test_match_entities_without_records(self):
        assert CorpusIndex(guide=[], faq=[], primary=[]).match_entities("Lakers") == ""
