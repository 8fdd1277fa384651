from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from loguru import logger

from ..models import AnalysisResult, FunctionRecord
from .lexing import LexicalSyntax, find_brace_end, line_number, mask_literals


class BodyScore(NamedTuple):
    complexity: int
    nesting_depth: int


class LanguageAnalyzer(ABC):
    """
    Per-language cyclomatic complexity engine.

    ``analyze`` masks the source once, then repeatedly searches the masked
    text for the next function signature, asks the subclass where its body
    ends and scores that body.  A signature whose body cannot be bounded is
    logged and skipped; the search then resumes one character past it.  After
    a successful match the search resumes at the end of the scored body, so
    constructs nested inside it are never reported on their own.
    """

    #: Lowercased file extensions supported by this analyzer (including leading dot).
    extensions: Iterable[str] = ()
    #: Registry key for the language (e.g., "python", "java").
    language: str = "unknown"
    syntax: LexicalSyntax
    signature_pattern: re.Pattern[str]

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in set(ext.lower() for ext in self.extensions)

    def analyze(self, code: str) -> AnalysisResult:
        masked = mask_literals(code, self.syntax)
        records: List[FunctionRecord] = []
        pos = 0
        while pos <= len(masked):
            match = self.signature_pattern.search(masked, pos)
            if match is None:
                break

            name = self.function_name(match, len(records))
            line = line_number(masked, _signature_start(masked, match))
            bounds = self.locate_body(code, masked, match)
            if bounds is None or bounds[1] <= match.start():
                logger.warning(f"Could not find end of {self.language} function '{name}' starting at line {line}")
                pos = match.start() + 1
                continue

            body_start, body_end = bounds
            score = self.score(masked[body_start:body_end])
            record = FunctionRecord(
                name=name,
                line=line,
                complexity=score.complexity,
                nesting_depth=score.nesting_depth,
            )
            logger.debug(f"{self.language}: {name} (L{line}) CC={record.complexity} depth={record.nesting_depth}")
            records.append(record)
            pos = body_end

        return AnalysisResult.from_records(records)

    def function_name(self, match: re.Match, index: int) -> str:
        return match.group("name")

    @abstractmethod
    def locate_body(self, code: str, masked: str, match: re.Match) -> Optional[Tuple[int, int]]:
        """Return ``(start, end)`` offsets of the matched function's body, or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def score(self, body: str) -> BodyScore:
        """Score a masked function body."""
        raise NotImplementedError


def _signature_start(text: str, match: re.Match) -> int:
    start = match.start()
    while start < match.end() and text[start].isspace():
        start += 1
    return start


CONTROL_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\bif\s*\("),
    re.compile(r"\bfor\s*\("),
    re.compile(r"\bwhile\s*\("),
    re.compile(r"\bdo\s*\{"),
    re.compile(r"\belse\b(?!\s*if\b)"),
    re.compile(r"\btry\s*\{"),
)

DECISION_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\bcase\s+[^:]+:"),
    re.compile(r"\bdefault\s*:"),
    re.compile(r"&&|\|\|"),
    # Every '?' counts, including ones that are not part of a ternary.
    re.compile(r"\?"),
    re.compile(r"\bcatch\s*\("),
)


def scan_control_flow(body: str, patterns: Sequence[re.Pattern[str]], nested_weight: int = 1) -> BodyScore:
    """
    Count control structures line by line while tracking brace depth.

    A keyword found while the brace depth is above zero counts
    *nested_weight* instead of 1.  The depth seen by a keyword includes the
    opening braces that precede it on its own line; closing braces only take
    effect once the line is done.
    """
    count = 0
    depth = 0
    max_depth = 0
    for raw_line in body.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        for pattern in patterns:
            for match in pattern.finditer(line):
                level = depth + line.count("{", 0, match.start())
                count += nested_weight if level > 0 else 1

        depth += line.count("{")
        max_depth = max(max_depth, depth)
        depth = max(0, depth - line.count("}"))

    return BodyScore(count, max_depth)


def count_decision_points(body: str, patterns: Sequence[re.Pattern[str]]) -> int:
    return sum(len(pattern.findall(body)) for pattern in patterns)


class CurlyBraceAnalyzer(LanguageAnalyzer):
    """Shared engine for brace-delimited languages."""

    control_patterns: Tuple[re.Pattern[str], ...] = CONTROL_PATTERNS
    decision_patterns: Tuple[re.Pattern[str], ...] = DECISION_PATTERNS
    #: Weight of a control keyword found inside a nested block.
    nested_control_weight: int = 1

    def locate_body(self, code: str, masked: str, match: re.Match) -> Optional[Tuple[int, int]]:
        body_start = match.end()
        body_end = find_brace_end(code, body_start, self.syntax)
        if body_end is None:
            return None
        return body_start, body_end

    def score(self, body: str) -> BodyScore:
        control = scan_control_flow(body, self.control_patterns, self.nested_control_weight)
        decisions = count_decision_points(body, self.decision_patterns)
        return BodyScore(1 + control.complexity + decisions, control.nesting_depth)
