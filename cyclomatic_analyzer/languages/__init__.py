from __future__ import annotations

from .base import LanguageAnalyzer
from .java import JavaAnalyzer
from .javascript import JavaScriptAnalyzer
from .python import PythonAnalyzer

__all__ = ["LanguageAnalyzer", "JavaAnalyzer", "JavaScriptAnalyzer", "PythonAnalyzer"]
