import io
import json
from concurrent.futures import ThreadPoolExecutor
from textwrap import dedent

import pytest

from cyclomatic_analyzer.__main__ import main
from cyclomatic_analyzer.core import (
    analyze_code,
    analyze_file,
    available_languages,
    detect_language,
    format_text_report,
    get_analyzer,
    supported_languages,
    validate_request,
)
from cyclomatic_analyzer.errors import EmptyInputError, UnsupportedLanguageError
from cyclomatic_analyzer.models import AnalysisError, AnalysisResult, FunctionRecord, status_tier


JAVA_SOURCE = dedent(
    """\
    public class Example {
        public int compute(int a, int b) {
            int sum = a + b;
            if (sum > 10 && a > 0) {
                return sum;
            } else if (sum == 0) {
                return 0;
            }
            return sum - 1;
        }

        private void log(String msg) {
            System.out.println(msg);
        }
    }
    """
)


def test_available_languages_are_sorted_and_known():
    assert available_languages() == ["java", "javascript", "python"]
    assert supported_languages() == {"java", "javascript", "python"}


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("example.py", "python"),
        ("Example.JAVA", "java"),
        ("widget.jsx", "javascript"),
        ("unknown.txt", None),
    ],
)
def test_detect_language_from_extension(tmp_path, filename, expected):
    path = tmp_path / filename
    path.write_text("x = 1\n")
    assert detect_language(path) == expected


@pytest.mark.parametrize("tag", ["java", "JAVA", "Python", "javaScript"])
def test_dispatch_is_case_insensitive(tag):
    assert get_analyzer(tag).language == tag.lower()


def test_unsupported_language_returns_error_variant():
    result = analyze_code("puts 'hi'", "ruby")

    assert isinstance(result, AnalysisError)
    assert result.supported_languages == {"java", "javascript", "python"}
    assert result.message == "Unsupported language for complexity analysis: ruby"
    assert result.to_dict() == {
        "error": "Unsupported language for complexity analysis: ruby",
        "supportedLanguages": ["java", "javascript", "python"],
    }


def test_get_analyzer_raises_for_unknown_tag():
    with pytest.raises(UnsupportedLanguageError) as excinfo:
        get_analyzer("cobol")
    assert excinfo.value.supported_languages == {"java", "javascript", "python"}
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize(
    "code, language, message",
    [
        ("", "java", "Code content cannot be empty."),
        (None, "java", "Code content cannot be empty."),
        ("int x;", "", "Language cannot be empty."),
    ],
)
def test_validate_request_rejects_empty_input(code, language, message):
    with pytest.raises(EmptyInputError, match=message):
        validate_request(code, language)


def test_success_result_shape_and_summary():
    result = analyze_code(JAVA_SOURCE, "java")

    assert isinstance(result, AnalysisResult)
    data = result.to_dict()
    assert data["summary"] == {"totalMethods": 2, "totalComplexity": 6}
    assert data["methods"] == [
        {"name": "compute", "line": 2, "complexity": 5, "status": "simple", "nestingDepth": 2},
        {"name": "log", "line": 12, "complexity": 1, "status": "simple", "nestingDepth": 0},
    ]


@pytest.mark.parametrize(
    "language, code",
    [
        ("java", JAVA_SOURCE),
        ("javascript", "function a(x) { return x ? 1 : 2; }\nconst b = (y) => { if (y) { return 1; } };\n"),
        ("python", "def a(x):\n    if x and x > 1:\n        return 1\n\ndef b():\n    return 2\n"),
    ],
)
def test_total_complexity_is_exact_sum(language, code):
    result = analyze_code(code, language)
    assert result.summary.total_complexity == sum(m.complexity for m in result.methods)
    assert result.summary.total_functions == len(result.methods)
    assert all(m.complexity >= 1 for m in result.methods)


def test_analysis_is_idempotent():
    assert analyze_code(JAVA_SOURCE, "java") == analyze_code(JAVA_SOURCE, "java")


def test_parallel_analyses_match_sequential_results():
    expected = analyze_code(JAVA_SOURCE, "java")
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: analyze_code(JAVA_SOURCE, "java"), range(32)))
    assert all(result == expected for result in results)


@pytest.mark.parametrize(
    "complexity, expected",
    [(1, "simple"), (5, "simple"), (6, "moderate"), (10, "moderate"), (11, "complex"), (40, "complex")],
)
def test_status_tier_thresholds(complexity, expected):
    assert status_tier(complexity) == expected
    assert FunctionRecord(name="f", line=1, complexity=complexity).status == expected


def test_function_records_are_immutable():
    record = FunctionRecord(name="f", line=1, complexity=1)
    with pytest.raises(AttributeError):
        record.complexity = 3


def test_analyze_file_detects_language(tmp_path):
    path = tmp_path / "Example.java"
    path.write_text(JAVA_SOURCE)

    result = analyze_file(path)

    assert [m.name for m in result.methods] == ["compute", "log"]


def test_analyze_file_rejects_unknown_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello\n")
    with pytest.raises(ValueError, match="Could not detect language"):
        analyze_file(path)


def test_analyze_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        analyze_file(tmp_path / "missing.py")


def test_text_report_lists_functions_by_complexity():
    report = format_text_report(analyze_code(JAVA_SOURCE, "java"), "Example.java")

    assert "Source: Example.java" in report
    assert "Functions=2  TotalComplexity=6" in report
    lines = report.splitlines()
    assert lines.index("    compute (L2): CC=5 depth=2 [simple]") < lines.index("    log (L12): CC=1 depth=0 [simple]")


def test_cli_json_output(tmp_path, capsys):
    path = tmp_path / "Example.java"
    path.write_text(JAVA_SOURCE)

    exit_code = main([str(path), "--format", "json"])
    assert exit_code == 0

    data = json.loads(capsys.readouterr().out)
    assert data["summary"] == {"totalMethods": 2, "totalComplexity": 6}
    assert [m["name"] for m in data["methods"]] == ["compute", "log"]


def test_cli_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("def f(x):\n    return x or 0\n"))

    exit_code = main(["-", "--language", "python", "--format", "json"])
    assert exit_code == 0

    data = json.loads(capsys.readouterr().out)
    assert data["methods"][0]["name"] == "f"
    assert data["methods"][0]["complexity"] == 2


def test_cli_rejects_empty_code(tmp_path, capsys):
    path = tmp_path / "empty.py"
    path.write_text("")

    assert main([str(path)]) == 3
    assert "Code content cannot be empty." in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.java")]) == 2
    assert "File not found" in capsys.readouterr().err


def test_cli_lists_languages(capsys):
    assert main(["--list-languages"]) == 0
    assert json.loads(capsys.readouterr().out) == {"languages": ["java", "javascript", "python"]}
