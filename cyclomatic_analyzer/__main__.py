from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import settings
from .core import analyze_code, available_languages, detect_language, format_text_report, validate_request
from .errors import EmptyInputError
from .log import configure_logging
from .models import AnalysisError


def main(argv: list[str] | None = None) -> int:
    langs = available_languages()
    p = argparse.ArgumentParser(description="Per-function cyclomatic complexity for supported languages")
    p.add_argument("file", nargs="?", help="Path to a source file, or '-' to read standard input")
    p.add_argument("--format", choices=["text", "json"], default=settings.output_format, help="Output format")
    p.add_argument(
        "--language",
        choices=["auto", *langs],
        default="auto",
        help="Explicitly set the source language (defaults to auto-detect from extension)",
    )
    p.add_argument("--list-languages", action="store_true", help="Print the supported languages and exit")
    p.add_argument("--log-level", default=None, help="Log level for diagnostics on stderr")
    args = p.parse_args(argv)

    configure_logging(args.log_level)

    if args.list_languages:
        print(json.dumps({"languages": langs}))
        return 0
    if not args.file:
        p.error("a source file (or '-') is required")

    language = None if args.language == "auto" else args.language
    if args.file == "-":
        source = "<stdin>"
        code = sys.stdin.read()
    else:
        path = Path(args.file)
        source = str(path)
        if not path.exists():
            print(f"File not found: {path}", file=sys.stderr)
            return 2
        code = path.read_text(encoding="utf-8", errors="ignore")
        language = language or detect_language(path)
        if language is None:
            print(f"Could not detect language from file extension '{path.suffix}'. Specify --language explicitly.", file=sys.stderr)
            return 3

    try:
        validate_request(code, language)
    except EmptyInputError as exc:
        print(str(exc), file=sys.stderr)
        return 3

    result = analyze_code(code, language)
    if isinstance(result, AnalysisError):
        print(json.dumps(result.to_dict()), file=sys.stderr)
        return 3

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_text_report(result, source))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
