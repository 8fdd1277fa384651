"""
Cyclomatic Complexity Analyzer

Heuristic, per-function cyclomatic complexity for Java, JavaScript and Python
source text. Functions are found with lexical scans (no parsing): comments and
literals are masked, bodies are bounded by brace balance or by indentation,
and control structures plus decision operators are counted.

Usage (library):
  from cyclomatic_analyzer import analyze_code
  analyze_code(source_text, "java").to_dict()

Usage (CLI):
  python -m cyclomatic_analyzer path/to/File.java
  python -m cyclomatic_analyzer --language python --format json - < script.py
"""

from loguru import logger

__all__ = [
    "analyze_code",
    "analyze_file",
    "available_languages",
    "detect_language",
    "format_text_report",
    "supported_languages",
]

from .core import (  # re-export for convenience
    analyze_code,
    analyze_file,
    available_languages,
    detect_language,
    format_text_report,
    supported_languages,
)

# Silent as a library; the CLI turns logging back on.
logger.disable(__name__)
