from __future__ import annotations

import re

from .base import CurlyBraceAnalyzer
from .lexing import JAVASCRIPT_SYNTAX

_IDENT = r"[a-zA-Z_$][a-zA-Z0-9_$]*"

# The last alternative also accepts call-like statements
# such as ``if (ready) {`` and reports them as a function named after the keyword.
FUNCTION_PATTERN = re.compile(
    rf"(?:\bfunction\s+(?P<declared>{_IDENT})\s*\([^)]*\)\s*\{{"
    rf"|(?:const|let|var)\s+(?P<expression>{_IDENT})?\s*=\s*function\s*\([^)]*\)\s*\{{"
    rf"|(?:const|let|var)?\s*(?P<arrow>{_IDENT})?\s*=\s*\([^)]*\)\s*=>\s*\{{"
    rf"|(?P<method>{_IDENT})\s*\([^)]*\)\s*\{{"
    r")"
)

_NAME_GROUPS = ("declared", "expression", "arrow", "method")


class JavaScriptAnalyzer(CurlyBraceAnalyzer):
    language = "javascript"
    extensions = {".js", ".jsx", ".mjs", ".cjs"}
    syntax = JAVASCRIPT_SYNTAX
    signature_pattern = FUNCTION_PATTERN

    def function_name(self, match: re.Match, index: int) -> str:
        for group in _NAME_GROUPS:
            name = match.group(group)
            if name and name.strip():
                return name
        return f"anonymous_or_unnamed_function_{index + 1}"
