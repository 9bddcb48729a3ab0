from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Callable

from .schema import QueryExample, SearchResult


@dataclass(slots=True)
class EvalRow:
    """Single-query evaluation output used for aggregate reporting."""

    query_id: str
    recall_at_k: float
    mrr: float
    latency_ms: float
    context_chars: int


def _is_target(query: QueryExample, tier: str, doc_id: str) -> bool:
    return tier == query.target_tier and doc_id == query.target_doc_id


def recall_at_k(result: SearchResult, query: QueryExample, k: int = 5) -> float:
    """Binary Recall@k: 1.0 if the target document is among the first `k` sources."""
    for source in result.sources[:k]:
        if _is_target(query, source.tier, source.doc_id):
            return 1.0
    return 0.0


def reciprocal_rank(result: SearchResult, query: QueryExample) -> float:
    """Reciprocal rank of the target document within the sources."""
    for rank, source in enumerate(result.sources, start=1):
        if _is_target(query, source.tier, source.doc_id):
            return 1.0 / rank
    return 0.0


def evaluate_single(
    query: QueryExample,
    search_fn: Callable[[str], SearchResult],
    top_k: int = 5,
) -> EvalRow:
    """Run one search and compute recall, MRR, latency and context size.

    Args:
        query: Labelled query.
        search_fn: Callable such as `CorpusIndex.search`.
        top_k: Number of sources considered for recall.

    Returns:
        `EvalRow` for the query.
    """
    started = time.perf_counter()
    result = search_fn(query.question)
    elapsed_ms = (time.perf_counter() - started) * 1000

    return EvalRow(
        query_id=query.query_id,
        recall_at_k=recall_at_k(result, query, k=top_k),
        mrr=reciprocal_rank(result, query),
        latency_ms=elapsed_ms,
        context_chars=len(result.context),
    )


def summarize(rows: list[EvalRow]) -> dict[str, float]:
    """Aggregate per-query metrics into simple mean summary values."""
    if not rows:
        return {"recall_at_k": 0.0, "mrr": 0.0, "latency_ms": 0.0, "context_chars": 0.0}

    return {
        "recall_at_k": sum(row.recall_at_k for row in rows) / len(rows),
        "mrr": sum(row.mrr for row in rows) / len(rows),
        "latency_ms": sum(row.latency_ms for row in rows) / len(rows),
        "context_chars": sum(row.context_chars for row in rows) / len(rows),
    }
