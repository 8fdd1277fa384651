from __future__ import annotations

from typing import Iterable


class AnalyzerError(Exception):
    """Base class for errors raised by the complexity analyzer."""


class UnsupportedLanguageError(AnalyzerError, ValueError):
    """No analyzer is registered for the requested language tag."""

    def __init__(self, language: str, supported_languages: Iterable[str]):
        self.language = language
        self.supported_languages = frozenset(supported_languages)
        super().__init__(f"Unsupported language for complexity analysis: {language}")


class EmptyInputError(AnalyzerError, ValueError):
    """A request arrived without code or without a language tag."""
