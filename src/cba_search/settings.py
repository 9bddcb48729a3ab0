from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .schema import SearchOptions


@dataclass(slots=True)
class OpenAISettings:
    """Runtime model configuration for answer generation calls."""

    chat_model: str = "gpt-4.1-mini"


@dataclass(slots=True)
class Paths:
    """Location of the corpus and player snapshots."""

    data_dir: str = "data"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value}")
    return value


def load_search_options() -> SearchOptions:
    """Build `SearchOptions` from `CBA_*` environment variables."""
    defaults = SearchOptions()
    return SearchOptions(
        max_chars=_env_int("CBA_MAX_CHARS", defaults.max_chars),
        guide_max_sections=_env_int("CBA_GUIDE_MAX_SECTIONS", defaults.guide_max_sections),
        faq_max_entries=_env_int("CBA_FAQ_MAX_ENTRIES", defaults.faq_max_entries),
        primary_max_articles=_env_int("CBA_PRIMARY_MAX_ARTICLES", defaults.primary_max_articles),
        primary_max_sections=_env_int("CBA_PRIMARY_MAX_SECTIONS", defaults.primary_max_sections),
    )


def load_settings() -> tuple[OpenAISettings, SearchOptions, Paths]:
    """Load environment-backed settings and return typed config objects.

    Returns:
        Tuple of model settings, default search options and snapshot paths.

    Raises:
        ConfigurationError: If a numeric variable is not a non-negative integer.
    """
    load_dotenv()
    return (
        OpenAISettings(chat_model=os.getenv("OPENAI_CHAT_MODEL", "gpt-4.1-mini")),
        load_search_options(),
        Paths(data_dir=os.getenv("CBA_DATA_DIR", "data")),
    )
