"""Shared pytest fixtures for cba_search unit tests."""
from __future__ import annotations

import pytest

from cba_search.retrieval import CorpusIndex
from cba_search.schema import Document, EntityRecord


@pytest.fixture()
def guide_documents() -> list[Document]:
    return [
        Document(
            id="guide-0",
            title="Bird Rights",
            content=(
                "Bird rights let a team exceed the salary cap to re-sign its own free agents. "
                "A qualifying veteran free agent holds full Bird rights."
            ),
        ),
        Document(
            id="guide-1",
            title="Luxury Tax",
            content="Teams above the tax level pay a luxury tax, and the apron levels add restrictions.",
        ),
    ]


@pytest.fixture()
def faq_documents() -> list[Document]:
    return [
        Document(
            id="cba101-001",
            title="Q1: What is the length of the CBA?",
            content="The agreement runs for seven seasons through 2029-30.",
        ),
        Document(
            id="cba101-002",
            title="Q2: Who becomes a restricted free agent?",
            content="A player finishing a rookie scale contract becomes a restricted free agent after a qualifying offer.",
        ),
    ]


@pytest.fixture()
def primary_documents() -> list[Document]:
    return [
        Document(
            id="article-7",
            title="Article VII: Basketball Related Income, Salary Cap, Tax Level and Apron Levels",
            content=(
                "## Section 1. Basketball Related Income\n"
                "Basketball Related Income covers all league revenue.\n"
                "## Section 2. Salary Cap\n"
                "The salary cap is set each season from projected revenue."
            ),
        ),
        Document(
            id="article-11",
            title="Article XI: Free Agency",
            content=(
                "This Article governs free agency.\n"
                "## Section 1. Restricted Free Agency\n"
                "A qualifying offer makes a player subject to restricted free agency.\n"
                "## Section 2. Unrestricted Free Agency\n"
                "All other players become unrestricted free agents."
            ),
        ),
        Document(
            id="article-24",
            title="Article XXIV: Prohibition of No-Trade Contracts",
            content="No player contract may prohibit a trade unless the player holds eight years of service.",
        ),
    ]


@pytest.fixture()
def players() -> list[EntityRecord]:
    return [
        EntityRecord(
            name="LeBron James",
            team="LAL",
            position="F",
            age=40,
            games=70,
            games_started=70,
            points=1708,
            rebounds=546,
            assists=574,
            steals=70,
            blocks=42,
            turnovers=259,
            field_pct=0.513,
            three_pct=0.376,
            ft_pct=0.782,
            minutes_per_game=34.9,
            salaries={"2025-26": "$52,627,153 (Player Option)", "2024-25": "$48,728,845"},
        ),
        EntityRecord(name="Austin Reaves", team="LAL", position="G", age=26, games=73, points=1483),
        EntityRecord(name="Luka Doncic", team="LAL", position="G", age=26, games=50, points=1400),
        EntityRecord(name="Bronny James", team="LAL", position="G", age=20, games=20, points=50),
        EntityRecord(name="Mark Williams", team="CHA", position="C", age=23, games=44, points=700),
        EntityRecord(name="Grant Williams", team="CHA", position="F", age=26, games=16, points=170),
        EntityRecord(
            name="Dereck Lively II",
            team="DAL",
            position="C",
            age=20,
            salaries={"2024-25": "$4,998,000"},
        ),
    ]


@pytest.fixture()
def corpus_index(guide_documents, faq_documents, primary_documents, players) -> CorpusIndex:
    return CorpusIndex(
        guide=guide_documents,
        faq=faq_documents,
        primary=primary_documents,
        entities=players,
    )
