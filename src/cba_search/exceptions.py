from __future__ import annotations


class CorpusLoadError(Exception):
    """Raised when a corpus or player snapshot is missing or malformed."""


class ConfigurationError(Exception):
    """Raised for invalid or missing configuration."""
