from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Union

from loguru import logger

from .config import settings
from .errors import EmptyInputError, UnsupportedLanguageError
from .languages import JavaAnalyzer, JavaScriptAnalyzer, LanguageAnalyzer, PythonAnalyzer
from .models import AnalysisError, AnalysisResult

__all__ = [
    "analyze_code",
    "analyze_file",
    "available_languages",
    "detect_language",
    "format_text_report",
    "get_analyzer",
    "supported_languages",
    "validate_request",
]


def _build_analyzers() -> List[LanguageAnalyzer]:
    return [
        JavaAnalyzer(),
        JavaScriptAnalyzer(),
        PythonAnalyzer(),
    ]


def _build_registry(analyzers: List[LanguageAnalyzer]) -> Mapping[str, LanguageAnalyzer]:
    registry: Dict[str, LanguageAnalyzer] = {}
    for analyzer in analyzers:
        key = analyzer.language.lower()
        if key in registry:
            raise ValueError(f"Duplicate analyzer registered for language '{key}'")
        registry[key] = analyzer
    return MappingProxyType(registry)


# Built once at import; read-only afterwards.
_REGISTRY: Mapping[str, LanguageAnalyzer] = _build_registry(_build_analyzers())


def available_languages() -> List[str]:
    return sorted(_REGISTRY)


def supported_languages() -> FrozenSet[str]:
    return frozenset(_REGISTRY)


def detect_language(path: Path) -> Optional[str]:
    for analyzer in _REGISTRY.values():
        if analyzer.supports(path):
            return analyzer.language
    return None


def get_analyzer(language: str) -> LanguageAnalyzer:
    analyzer = _REGISTRY.get(language.lower())
    if analyzer is None:
        raise UnsupportedLanguageError(language, _REGISTRY)
    return analyzer


def validate_request(code: Optional[str], language: Optional[str]) -> None:
    """Reject requests without code or language before they reach an analyzer."""
    if not code:
        raise EmptyInputError("Code content cannot be empty.")
    if not language:
        raise EmptyInputError("Language cannot be empty.")


def analyze_code(code: str, language: str) -> Union[AnalysisResult, AnalysisError]:
    """
    Score every function found in *code* with the analyzer registered for *language*.

    The tag is matched case-insensitively.  An unknown tag yields an
    :class:`AnalysisError` listing the supported languages instead of raising.
    """
    try:
        analyzer = get_analyzer(language)
    except UnsupportedLanguageError as exc:
        logger.debug(str(exc))
        return AnalysisError(message=str(exc), supported_languages=exc.supported_languages)

    logger.debug(f"Dispatching {len(code)} characters to the {analyzer.language} analyzer")
    return analyzer.analyze(code)


def analyze_file(file_path: Union[str, Path], language: Optional[str] = None) -> AnalysisResult:
    """
    Analyze a source file using the registered analyzer for the detected or specified language.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(str(path))

    if language:
        analyzer = get_analyzer(language)
    else:
        detected = detect_language(path)
        if not detected:
            raise ValueError(f"Could not detect language from file extension '{path.suffix}'. Specify --language explicitly.")
        analyzer = _REGISTRY[detected]

    return analyzer.analyze(path.read_text(encoding="utf-8", errors="ignore"))


def format_text_report(result: AnalysisResult, source: str = "<stdin>", limit: Optional[int] = None) -> str:
    limit = settings.report_limit if limit is None else limit
    summary = result.summary

    lines = []
    lines.append(f"Source: {source}")
    lines.append("- Summary:")
    lines.append(f"  Functions={summary.total_functions}  TotalComplexity={summary.total_complexity}")
    if result.methods:
        ranked = sorted(result.methods, key=lambda m: m.complexity, reverse=True)
        lines.append(f"- By Function (top {limit}):")
        for fn in ranked[:limit]:
            lines.append(f"    {fn.name} (L{fn.line}): CC={fn.complexity} depth={fn.nesting_depth} [{fn.status}]")
    return "\n".join(lines)
