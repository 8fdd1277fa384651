"""
Lexical helpers shared by the language analyzers.

Everything here works on raw source text without tokenizing it.  A single
character-level state machine (:func:`iter_code_flags`) decides which
characters are code and which belong to comments or literals; the masker and
the brace-balanced boundary locator are both driven by it, so they always
agree on where literals start and end.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class LexicalSyntax:
    """Comment and literal delimiters of one language."""

    line_comment: str
    block_comment: Optional[Tuple[str, str]] = None
    quotes: str = "\"'"
    #: Multi-line quote character (JavaScript template literals).
    template_quote: Optional[str] = None
    #: Python-style triple-quoted strings, masked like comments.
    triple_quotes: bool = False
    #: Ordinary string literals stop at the end of the line.
    single_line_strings: bool = False


JAVA_SYNTAX = LexicalSyntax(line_comment="//", block_comment=("/*", "*/"))
JAVASCRIPT_SYNTAX = LexicalSyntax(line_comment="//", block_comment=("/*", "*/"), template_quote="`")
PYTHON_SYNTAX = LexicalSyntax(line_comment="#", triple_quotes=True, single_line_strings=True)

_TRIPLE_QUOTES = ('"""', "'''")


def iter_code_flags(text: str, syntax: LexicalSyntax, start: int = 0) -> Iterator[Tuple[int, bool]]:
    """
    Yield ``(index, is_code)`` for every character of *text* from *start* on.

    *start* must be a position in code context (not inside a comment or a
    literal).  Quote delimiters of ordinary strings count as code so that
    masked text keeps its ``""`` placeholders; comment and triple-quote
    delimiters do not.  An unterminated comment or literal swallows the rest
    of the input.
    """
    block_open, block_close = syntax.block_comment or ("", "")
    in_line_comment = False
    in_block = False
    delimiter: Optional[str] = None

    i = start
    n = len(text)
    while i < n:
        ch = text[i]

        if in_line_comment:
            if ch == "\n":
                in_line_comment = False
                yield i, True
            else:
                yield i, False
            i += 1
            continue

        if in_block:
            if text.startswith(block_close, i):
                for k in range(len(block_close)):
                    yield i + k, False
                in_block = False
                i += len(block_close)
            else:
                yield i, False
                i += 1
            continue

        if delimiter:
            if ch == "\\" and i + 1 < n:
                yield i, False
                yield i + 1, False
                i += 2
                continue
            if text.startswith(delimiter, i):
                triple = len(delimiter) > 1
                for k in range(len(delimiter)):
                    yield i + k, not triple
                i += len(delimiter)
                delimiter = None
                continue
            if ch == "\n" and syntax.single_line_strings and len(delimiter) == 1:
                delimiter = None
                yield i, True
                i += 1
                continue
            yield i, False
            i += 1
            continue

        if text.startswith(syntax.line_comment, i):
            in_line_comment = True
            yield i, False
            i += 1
            continue

        if block_open and text.startswith(block_open, i):
            in_block = True
            for k in range(len(block_open)):
                yield i + k, False
            i += len(block_open)
            continue

        if syntax.triple_quotes and text.startswith(_TRIPLE_QUOTES, i):
            delimiter = text[i : i + 3]
            for k in range(3):
                yield i + k, False
            i += 3
            continue

        if ch in syntax.quotes or ch == syntax.template_quote:
            delimiter = ch
            yield i, True
            i += 1
            continue

        yield i, True
        i += 1


def mask_literals(text: str, syntax: LexicalSyntax) -> str:
    """
    Blank out comments and literal contents, keeping every offset and newline.

    ``s = "if (x) {}"; // if`` becomes ``s = "         ";     `` so keyword
    and operator scans over the result cannot fire on literal text.
    """
    chars: List[str] = list(text)
    for i, is_code in iter_code_flags(text, syntax):
        if not is_code and chars[i] != "\n":
            chars[i] = " "
    return "".join(chars)


def find_brace_end(text: str, start: int, syntax: LexicalSyntax) -> Optional[int]:
    """
    Return the index just past the brace closing the block opened before *start*.

    *start* is the index right after an opening ``{``.  Braces inside comments
    and literals are ignored.  Returns ``None`` when the input ends first.
    """
    depth = 1
    for i, is_code in iter_code_flags(text, syntax, start):
        if not is_code:
            continue
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def leading_whitespace(line: str) -> int:
    return len(line) - len(line.lstrip())


def is_def_line(stripped: str) -> bool:
    return stripped.startswith("def ") or stripped.startswith("async def ")


def find_indented_block_end(masked: str, def_start: int, header_end: Optional[int] = None) -> int:
    """
    Return the end offset of the Python block whose ``def`` starts at *def_start*.

    *masked* must already have comments and docstrings blanked out, which turns
    comment-only and docstring lines into blank lines that are skipped here.
    *header_end* is where the signature ends, so parameter lists spread over
    several lines are not mistaken for the body.  The body indentation is
    taken from the first non-blank line after the header.  The block ends at
    the start of the first later line indented less than that, or at a ``def``
    indented no deeper than the starting one, or at end of input.
    """
    n = len(masked)
    line_start = masked.rfind("\n", 0, def_start) + 1
    def_line_end = masked.find("\n", line_start)
    def_indent = leading_whitespace(masked[line_start:] if def_line_end == -1 else masked[line_start:def_line_end])
    first_newline = masked.find("\n", def_start if header_end is None else header_end)
    if first_newline == -1:
        return n

    body_indent: Optional[int] = None
    pos = first_newline + 1
    while pos < n:
        newline = masked.find("\n", pos)
        line_end = n if newline == -1 else newline
        line = masked[pos:line_end]
        stripped = line.strip()
        if stripped:
            indent = leading_whitespace(line)
            if body_indent is None:
                if indent <= def_indent:
                    # Inline body (``def f(): return 1``): the block is the def line.
                    return pos
                body_indent = indent
            elif indent < body_indent or (indent <= def_indent and is_def_line(stripped)):
                return pos
        pos = line_end + 1
    return n


def line_number(text: str, index: int) -> int:
    """1-based line number of the character at *index*."""
    return text.count("\n", 0, index) + 1
