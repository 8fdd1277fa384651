from __future__ import annotations

import re

from .base import DECISION_PATTERNS, CurlyBraceAnalyzer
from .lexing import JAVA_SYNTAX

_IDENT = r"[a-zA-Z_$][a-zA-Z0-9_$]*"

JAVA_MODIFIERS = (
    "public",
    "protected",
    "private",
    "static",
    "final",
    "abstract",
    "synchronized",
    "native",
    "default",
    "strictfp",
)

# Words that open statements or declarations and can never be a return type
# or a method name.
_NOT_A_NAME = (
    r"(?:if|else|for|while|do|switch|case|catch|try|finally|synchronized|return|new|throw|throws"
    r"|class|interface|enum)\b"
)

# ``record`` is contextual: it opens a record declaration but is a legal method name.
_NOT_A_TYPE = rf"(?:{_NOT_A_NAME}|record\b)"

METHOD_PATTERN = re.compile(
    r"(?<![\w$.])"
    rf"(?:(?:{'|'.join(JAVA_MODIFIERS)})\s+)*"
    r"(?:<[^(){};]+>\s*)?"
    rf"(?!{_NOT_A_TYPE}){_IDENT}(?:\.{_IDENT})*(?:\s*<[^(){{}};]*>)?(?:\s*\[\s*\])*\s+"
    rf"(?!{_NOT_A_NAME})(?P<name>{_IDENT})\s*\((?P<params>[^)]*)\)\s*"
    r"(?:throws\s+[^{;]*)?\{"
)


class JavaAnalyzer(CurlyBraceAnalyzer):
    """
    Method-level complexity for Java.

    Control keywords met inside a nested block count twice, and every
    ``synchronized`` adds a decision point.
    """

    language = "java"
    extensions = {".java"}
    syntax = JAVA_SYNTAX
    signature_pattern = METHOD_PATTERN
    decision_patterns = DECISION_PATTERNS + (re.compile(r"\bsynchronized\b"),)
    nested_control_weight = 2
