from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Sequence, Tuple

SIMPLE = "simple"
MODERATE = "moderate"
COMPLEX = "complex"


def status_tier(complexity: int) -> str:
    if complexity <= 5:
        return SIMPLE
    if complexity <= 10:
        return MODERATE
    return COMPLEX


@dataclass(frozen=True)
class FunctionRecord:
    """Score of one function or method, as found in the source text."""

    name: str
    line: int
    complexity: int
    nesting_depth: int = 0

    @property
    def status(self) -> str:
        return status_tier(self.complexity)

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "line": self.line,
            "complexity": self.complexity,
            "status": self.status,
            "nestingDepth": self.nesting_depth,
        }


@dataclass(frozen=True)
class ComplexitySummary:
    total_functions: int
    total_complexity: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalMethods": self.total_functions,
            "totalComplexity": self.total_complexity,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Records for every successfully bounded function, in source order."""

    methods: Tuple[FunctionRecord, ...] = ()

    @classmethod
    def from_records(cls, records: Sequence[FunctionRecord]) -> "AnalysisResult":
        return cls(methods=tuple(records))

    @property
    def summary(self) -> ComplexitySummary:
        return ComplexitySummary(
            total_functions=len(self.methods),
            total_complexity=sum(m.complexity for m in self.methods),
        )

    def to_dict(self) -> Dict[str, object]:
        methods: List[Dict[str, object]] = [m.to_dict() for m in self.methods]
        return {"summary": self.summary.to_dict(), "methods": methods}


@dataclass(frozen=True)
class AnalysisError:
    """Result variant returned when no analyzer handles the requested language."""

    message: str
    supported_languages: FrozenSet[str]

    def to_dict(self) -> Dict[str, object]:
        return {
            "error": self.message,
            "supportedLanguages": sorted(self.supported_languages),
        }
