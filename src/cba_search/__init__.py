"""Keyword retrieval and context assembly over the NBA CBA corpus."""

from .retrieval import CorpusIndex
from .schema import Document, EntityRecord, SearchOptions, SearchResult, SourceRef

__all__ = ["CorpusIndex", "Document", "EntityRecord", "SearchOptions", "SearchResult", "SourceRef"]
