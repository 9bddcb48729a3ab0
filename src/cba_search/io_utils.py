from __future__ import annotations

import json
import logging
from pathlib import Path

from .chunking import split_markdown_documents
from .exceptions import CorpusLoadError
from .retrieval import CorpusIndex
from .schema import Document, EntityRecord

logger = logging.getLogger(__name__)

GUIDE_FILE = "cba-guide.json"
FAQ_FILE = "cba101.json"
PRIMARY_FILE = "cba-articles.json"
PLAYERS_FILE = "players.json"

# Snapshot key -> (EntityRecord field, converter)
_ENTITY_NUMBER_FIELDS = {
    "age": ("age", int),
    "games": ("games", int),
    "gamesStarted": ("games_started", int),
    "points": ("points", int),
    "rebounds": ("rebounds", int),
    "assists": ("assists", int),
    "steals": ("steals", int),
    "blocks": ("blocks", int),
    "turnovers": ("turnovers", int),
    "fieldPercent": ("field_pct", float),
    "threePercent": ("three_pct", float),
    "ftPercent": ("ft_pct", float),
    "minutesPerGame": ("minutes_per_game", float),
}


def _load_json_list(path: str | Path) -> list[dict]:
    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as file_handle:
            payload = json.load(file_handle)
    except FileNotFoundError as exc:
        raise CorpusLoadError(f"snapshot not found: {source}") from exc
    except json.JSONDecodeError as exc:
        raise CorpusLoadError(f"snapshot is not valid JSON: {source}: {exc}") from exc

    if not isinstance(payload, list):
        raise CorpusLoadError(f"snapshot must hold a JSON array: {source}")
    for position, record in enumerate(payload):
        if not isinstance(record, dict):
            raise CorpusLoadError(f"record {position} in {source} is not an object")
    return payload


def _document_from_record(record: dict, position: int, source: Path) -> Document:
    missing = [key for key in ("id", "title", "content") if not isinstance(record.get(key), str)]
    if missing:
        raise CorpusLoadError(f"record {position} in {source} lacks string field(s): {', '.join(missing)}")
    return Document(id=record["id"], title=record["title"], content=record["content"])


def load_documents(path: str | Path) -> list[Document]:
    """Load one corpus tier from a JSON array of `{id, title, content}` objects."""
    source = Path(path)
    documents = [_document_from_record(record, idx, source) for idx, record in enumerate(_load_json_list(source))]
    logger.info("loaded %d documents from %s", len(documents), source)
    return documents


def load_guide_markdown(path: str | Path, id_prefix: str = "guide") -> list[Document]:
    """Load the plain-English guide straight from its markdown source."""
    source = Path(path)
    try:
        markdown_text = source.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CorpusLoadError(f"guide not found: {source}") from exc
    documents = split_markdown_documents(markdown_text, id_prefix=id_prefix)
    logger.info("split %d guide documents from %s", len(documents), source)
    return documents


def _entity_from_record(record: dict, position: int, source: Path) -> EntityRecord:
    name = record.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CorpusLoadError(f"player {position} in {source} has no name")
    salaries = record.get("salaries") or {}
    if not isinstance(salaries, dict):
        raise CorpusLoadError(f"player {name!r} in {source} has non-object salaries")

    values: dict = {}
    for key, (field_name, convert) in _ENTITY_NUMBER_FIELDS.items():
        raw = record.get(key)
        if raw is None:
            continue
        try:
            values[field_name] = convert(raw)
        except (TypeError, ValueError) as exc:
            raise CorpusLoadError(f"player {name!r} in {source} has invalid {key}: {raw!r}") from exc

    return EntityRecord(
        name=name.strip(),
        team=str(record.get("team") or ""),
        position=str(record.get("position") or ""),
        salaries={str(season): str(value) for season, value in salaries.items()},
        **values,
    )


def load_entities(path: str | Path) -> list[EntityRecord]:
    """Load player records from the merged stats/salary snapshot."""
    source = Path(path)
    records = [_entity_from_record(record, idx, source) for idx, record in enumerate(_load_json_list(source))]
    logger.info("loaded %d player records from %s", len(records), source)
    return records


def load_corpus(data_dir: str | Path = "data") -> CorpusIndex:
    """Build a `CorpusIndex` from the four snapshot files in `data_dir`.

    Raises:
        CorpusLoadError: If any snapshot is missing or malformed.
    """
    root = Path(data_dir)
    return CorpusIndex(
        guide=load_documents(root / GUIDE_FILE),
        faq=load_documents(root / FAQ_FILE),
        primary=load_documents(root / PRIMARY_FILE),
        entities=load_entities(root / PLAYERS_FILE),
    )
