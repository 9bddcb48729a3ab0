from __future__ import annotations

from collections.abc import Sequence
import re
import unicodedata

from .schema import EntityRecord
from .text import query_tokens, tokenize

MAX_ENTITIES = 15
GROUP_TOP_N = 10
MIN_LAST_NAME_LENGTH = 4

FULL_NAME_MATCH = 3
FIRST_AND_LAST_MATCH = 2
LAST_NAME_MATCH = 1

ENTITY_HEADER = "PLAYER DATA (season stats and contracts):"

TEAM_ALIASES: dict[str, list[str]] = {
    "ATL": ["hawks", "atlanta"],
    "BOS": ["celtics", "boston"],
    "BKN": ["nets", "brooklyn"],
    "CHA": ["hornets", "charlotte"],
    "CHI": ["bulls", "chicago"],
    "CLE": ["cavaliers", "cavs", "cleveland"],
    "DAL": ["mavericks", "mavs", "dallas"],
    "DEN": ["nuggets", "denver"],
    "DET": ["pistons", "detroit"],
    "GSW": ["warriors", "golden state"],
    "HOU": ["rockets", "houston"],
    "IND": ["pacers", "indiana"],
    "LAC": ["clippers"],
    "LAL": ["lakers"],
    "MEM": ["grizzlies", "memphis"],
    "MIA": ["heat", "miami"],
    "MIL": ["bucks", "milwaukee"],
    "MIN": ["timberwolves", "wolves", "minnesota"],
    "NOP": ["pelicans", "new orleans"],
    "NYK": ["knicks", "new york"],
    "OKC": ["thunder", "oklahoma city"],
    "ORL": ["magic", "orlando"],
    "PHI": ["76ers", "sixers", "philadelphia"],
    "PHX": ["suns", "phoenix"],
    "POR": ["trail blazers", "blazers", "portland"],
    "SAC": ["kings", "sacramento"],
    "SAS": ["spurs", "san antonio"],
    "TOR": ["raptors", "toronto"],
    "UTA": ["jazz", "utah"],
    "WAS": ["wizards", "washington"],
}

_NAME_SUFFIXES = frozenset({"jr", "sr", "ii", "iii", "iv"})
_NAME_PUNCTUATION = re.compile(r"[.']")
_NAME_SEPARATOR = re.compile(r"[^a-z0-9\s-]")


def normalize_name(text: str) -> str:
    """Fold accents, lowercase, drop periods/apostrophes and collapse whitespace.

    Any other character the tokenizer treats as a separator becomes a space,
    so a normalized name splits into the same tokens as a normalized query.
    """
    decomposed = unicodedata.normalize("NFKD", text.lower())
    folded = "".join(char for char in decomposed if not unicodedata.combining(char))
    cleaned = _NAME_SEPARATOR.sub(" ", _NAME_PUNCTUATION.sub("", folded))
    return " ".join(cleaned.split())


def _contains_phrase(phrase: str, text: str) -> bool:
    return re.search(rf"\b{re.escape(phrase)}\b", text) is not None


def _first_and_last(name: str) -> tuple[str, str]:
    parts = normalize_name(name).split()
    while len(parts) > 1 and parts[-1] in _NAME_SUFFIXES:
        parts.pop()
    if not parts:
        return "", ""
    return parts[0], parts[-1]


def name_match_strength(record: EntityRecord, normalized_query: str) -> int:
    """Grade how strongly a query names a record.

    A full-name hit beats first and last name appearing as separate tokens,
    which beats a one-token query equal to the last name. The last tier only
    fires for one-token queries so that a common surname in a longer question
    does not drag in every player who shares it.

    Args:
        record: Candidate record.
        normalized_query: Query passed through `normalize_name`.

    Returns:
        0 for no match, otherwise one of the `*_MATCH` constants.
    """
    full_name = normalize_name(record.name)
    if full_name and _contains_phrase(full_name, normalized_query):
        return FULL_NAME_MATCH

    first, last = _first_and_last(record.name)
    if not last:
        return 0
    all_tokens = set(tokenize(normalized_query))
    if first != last and first in all_tokens and last in all_tokens:
        return FIRST_AND_LAST_MATCH

    meaningful = query_tokens(normalized_query)
    if len(meaningful) == 1 and meaningful[0] == last and len(last) >= MIN_LAST_NAME_LENGTH:
        return LAST_NAME_MATCH
    return 0


def direct_matches(records: Sequence[EntityRecord], query: str) -> list[EntityRecord]:
    """Records named by the query, strongest first.

    Equal strengths are ordered by total points, highest first; that stat is
    the intended tie-break for ambiguous surnames.
    """
    normalized_query = normalize_name(query)
    if not normalized_query:
        return []
    graded = [(name_match_strength(record, normalized_query), record) for record in records]
    graded = [pair for pair in graded if pair[0] > 0]
    graded.sort(key=lambda pair: (-pair[0], -pair[1].points))
    return [record for _, record in graded]


def mentioned_teams(query: str) -> list[str]:
    """Team codes whose aliases appear as whole words in the query."""
    query_lower = query.lower()
    codes: list[str] = []
    for code, aliases in TEAM_ALIASES.items():
        for alias in aliases:
            if _contains_phrase(alias, query_lower):
                codes.append(code)
                break
    return codes


def team_matches(records: Sequence[EntityRecord], query: str, top_n: int = GROUP_TOP_N) -> list[EntityRecord]:
    """Top `top_n` players by points for every team mentioned in the query."""
    matches: list[EntityRecord] = []
    for code in mentioned_teams(query):
        roster = [record for record in records if record.team == code]
        roster.sort(key=lambda record: record.points, reverse=True)
        matches.extend(roster[:top_n])
    return matches


def find_entities(records: Sequence[EntityRecord], query: str, limit: int = MAX_ENTITIES) -> list[EntityRecord]:
    """Direct name matches followed by team matches, unique by name, capped at `limit`."""
    seen: dict[str, EntityRecord] = {}
    for record in [*direct_matches(records, query), *team_matches(records, query)]:
        seen.setdefault(record.name, record)
    return list(seen.values())[:limit]


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def format_entity(record: EntityRecord) -> str:
    """Render a record as an identity line plus optional stats and contract lines.

    Per-game rates are only computed when the player has appeared in a game,
    so a record with zero games never shows a rate.
    """
    details = [part for part in (record.team, record.position) if part]
    if record.age > 0:
        details.append(f"age {record.age}")
    lines = [f"{record.name} ({', '.join(details)})" if details else record.name]

    if record.games > 0:
        games = record.games
        lines.append(
            f"  Stats: {games} GP, {record.games_started} GS, {record.minutes_per_game:.1f} MPG, "
            f"{record.points / games:.1f} PPG, {record.rebounds / games:.1f} RPG, "
            f"{record.assists / games:.1f} APG, {record.steals / games:.1f} SPG, "
            f"{record.blocks / games:.1f} BPG, {record.turnovers / games:.1f} TOV, "
            f"FG {_pct(record.field_pct)}, 3P {_pct(record.three_pct)}, FT {_pct(record.ft_pct)}"
        )

    if record.salaries:
        contract = " | ".join(f"{season}: {record.salaries[season]}" for season in sorted(record.salaries))
        lines.append(f"  Contract: {contract}")

    return "\n".join(lines)


def match_entities(records: Sequence[EntityRecord], query: str) -> str:
    """Render every record the query refers to, or return an empty string."""
    matched = find_entities(records, query)
    if not matched:
        return ""
    body = "\n\n".join(format_entity(record) for record in matched)
    return f"{ENTITY_HEADER}\n\n{body}"
