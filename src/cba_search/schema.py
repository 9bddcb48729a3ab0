from __future__ import annotations

from dataclasses import dataclass, field

TIER_GUIDE = "guide"
TIER_FAQ = "faq"
TIER_PRIMARY = "primary"

TIER_LABELS = {
    TIER_GUIDE: "CBA Guide",
    TIER_FAQ: "CBA 101 FAQ",
    TIER_PRIMARY: "CBA",
}


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable corpus entry whose content uses `#`-style heading markers."""

    id: str
    title: str
    content: str


@dataclass(frozen=True, slots=True)
class Section:
    """Heading-delimited span of a document."""

    heading: str
    text: str


@dataclass(slots=True)
class ScoredDocument:
    """Per-query relevance of one document plus its matching section blocks."""

    document: Document
    score: int = 0
    matching_sections: list[str] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.document.id

    @property
    def title(self) -> str:
        return self.document.title

    @property
    def content(self) -> str:
        return self.document.content


@dataclass(frozen=True, slots=True)
class QueryTerms:
    """Tokenized and topic-expanded view of one raw query, shared across tiers."""

    tokens: tuple[str, ...]
    query_lower: str
    boosted_terms: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.tokens and not self.boosted_terms


@dataclass(frozen=True, slots=True)
class SourceRef:
    """Structured provenance entry for one document included in a context."""

    tier: str
    doc_id: str
    title: str

    @property
    def label(self) -> str:
        return f"{TIER_LABELS.get(self.tier, self.tier)}: {self.title}"


@dataclass(slots=True)
class SearchResult:
    """Assembled context block and the deduplicated sources behind it."""

    context: str
    sources: list[SourceRef] = field(default_factory=list)

    def source_labels(self) -> list[str]:
        return [source.label for source in self.sources]


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Character budget and per-tier caps for one search call."""

    max_chars: int = 60000
    guide_max_sections: int = 4
    faq_max_entries: int = 4
    primary_max_articles: int = 6
    primary_max_sections: int = 8


@dataclass(frozen=True, slots=True)
class EntityRecord:
    """One player row: identity, season totals, shooting splits and contract years."""

    name: str
    team: str = ""
    position: str = ""
    age: int = 0
    games: int = 0
    games_started: int = 0
    points: int = 0
    rebounds: int = 0
    assists: int = 0
    steals: int = 0
    blocks: int = 0
    turnovers: int = 0
    field_pct: float = 0.0
    three_pct: float = 0.0
    ft_pct: float = 0.0
    minutes_per_game: float = 0.0
    salaries: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class QueryExample:
    """Evaluation query labelled with the document it should surface."""

    query_id: str
    question: str
    target_doc_id: str
    target_tier: str
    rationale: str = ""
