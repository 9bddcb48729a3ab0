"""Tests for settings.py - load_settings defaults and env overrides."""
from __future__ import annotations

import pytest

from cba_search.exceptions import ConfigurationError
from cba_search.schema import SearchOptions
from cba_search.settings import OpenAISettings, Paths, load_search_options, load_settings

_SEARCH_VARS = (
    "CBA_MAX_CHARS",
    "CBA_GUIDE_MAX_SECTIONS",
    "CBA_FAQ_MAX_ENTRIES",
    "CBA_PRIMARY_MAX_ARTICLES",
    "CBA_PRIMARY_MAX_SECTIONS",
)


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (*_SEARCH_VARS, "OPENAI_CHAT_MODEL", "CBA_DATA_DIR"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestOpenAISettings:
    def test_default_chat_model(self):
        assert OpenAISettings().chat_model == "gpt-4.1-mini"


class TestPaths:
    def test_default_data_dir(self):
        assert Paths().data_dir == "data"


class TestLoadSearchOptions:
    def test_defaults_when_env_vars_absent(self, clean_env):
        assert load_search_options() == SearchOptions()

    def test_env_vars_override_defaults(self, clean_env):
        clean_env.setenv("CBA_MAX_CHARS", "12000")
        clean_env.setenv("CBA_PRIMARY_MAX_SECTIONS", "3")
        options = load_search_options()
        assert options.max_chars == 12000
        assert options.primary_max_sections == 3
        assert options.guide_max_sections == SearchOptions().guide_max_sections

    def test_blank_value_uses_default(self, clean_env):
        clean_env.setenv("CBA_FAQ_MAX_ENTRIES", " ")
        assert load_search_options().faq_max_entries == 4

    def test_non_integer_raises(self, clean_env):
        clean_env.setenv("CBA_MAX_CHARS", "lots")
        with pytest.raises(ConfigurationError, match="CBA_MAX_CHARS"):
            load_search_options()

    def test_negative_raises(self, clean_env):
        clean_env.setenv("CBA_GUIDE_MAX_SECTIONS", "-1")
        with pytest.raises(ConfigurationError, match="negative"):
            load_search_options()


class TestLoadSettings:
    def test_returns_typed_tuple(self, clean_env):
        openai_settings, options, paths = load_settings()
        assert isinstance(openai_settings, OpenAISettings)
        assert isinstance(options, SearchOptions)
        assert isinstance(paths, Paths)

    def test_env_vars_override_defaults(self, clean_env):
        clean_env.setenv("OPENAI_CHAT_MODEL", "gpt-4o")
        clean_env.setenv("CBA_DATA_DIR", "/srv/cba")
        openai_settings, _, paths = load_settings()
        assert openai_settings.chat_model == "gpt-4o"
        assert paths.data_dir == "/srv/cba"

