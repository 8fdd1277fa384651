from __future__ import annotations

import re
from typing import Optional, Tuple

from .base import BodyScore, LanguageAnalyzer
from .lexing import PYTHON_SYNTAX, find_indented_block_end, is_def_line, leading_whitespace

DEF_PATTERN = re.compile(
    r"^[ \t]*(?:async[ \t]+)?def[ \t]+(?P<name>[a-zA-Z_][a-zA-Z0-9_]*)\s*\([^)]*\)(?:\s*->\s*[^:\n]+)?\s*:",
    re.MULTILINE,
)

# Colon-terminated statement forms; each one counts at most once per line.
CONTROL_PATTERNS = (
    re.compile(r"\b(if|elif)\b[^:]*:\s*|\b(else)\s*:"),
    re.compile(r"\b(for|while)\b[^:]*:\s*"),
    re.compile(r"\b(try|except|finally|with)\b[^:]*\s*:"),
)

LOGICAL_PATTERN = re.compile(r"\b(and|or)\b")
TERNARY_PATTERN = re.compile(r"\b\S+\s+if\s+.*?\s+else\s+[^\s]+\b")

# Indentation columns per nesting level.
INDENT_WIDTH = 4


class PythonAnalyzer(LanguageAnalyzer):
    """
    Function-level complexity for Python.

    Python has no braces to balance, so a function's extent comes from
    indentation and nesting depth is approximated by how far each line is
    indented past its ``def``.  Nested functions stay part of the enclosing
    function's block and are not reported separately.
    """

    language = "python"
    extensions = {".py", ".pyw"}
    syntax = PYTHON_SYNTAX
    signature_pattern = DEF_PATTERN

    def locate_body(self, code: str, masked: str, match: re.Match) -> Optional[Tuple[int, int]]:
        return match.start(), find_indented_block_end(masked, match.start(), match.end())

    def score(self, body: str) -> BodyScore:
        complexity = 1
        max_depth = 0
        def_indent = leading_whitespace(body)

        # Parameter lists may wrap; scoring starts on the line after the header.
        header = DEF_PATTERN.match(body)
        header_end = body.find("\n", header.end() if header else 0)
        if header_end == -1:
            return BodyScore(complexity, max_depth)

        for line in body[header_end + 1:].splitlines():
            stripped = line.strip()
            if not stripped:
                continue

            indent = leading_whitespace(line)
            max_depth = max(max_depth, max(0, indent - def_indent) // INDENT_WIDTH)

            if is_def_line(stripped):
                continue

            complexity += sum(1 for pattern in CONTROL_PATTERNS if pattern.search(stripped))
            complexity += len(LOGICAL_PATTERN.findall(stripped))
            complexity += len(TERNARY_PATTERN.findall(stripped))

        return BodyScore(complexity, max_depth)
