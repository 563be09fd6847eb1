import pytest

from splint.errors import InvariantError
from splint.models.rule import Rule, RuleSet
from splint.models.violation import SourceFile
from splint.services.diagnostics import build_violation, build_violations
from splint.services.matcher import find_matches, match_rules
from splint.services.tokenizer import tokenize
from tests.utils import UNWRAP_PATTERN, make_rule, make_tokens

SOURCE = "fn main() {\n    let v = x.unwrap();\n}\n"


def _only_window(rule: Rule, text: str):
    matches = find_matches(rule, tokenize(text))
    assert len(matches) == 1
    return matches[0][1]


def test_build_violation__second_line__computes_extent(unwrap_rule: Rule) -> None:
    window = _only_window(unwrap_rule, SOURCE)

    violation = build_violation(unwrap_rule, window, SOURCE, "main.rs")

    extent = violation.extent
    assert extent.byte_start == 24
    assert extent.byte_end == 34
    assert extent.column_start == 13
    assert extent.column_end == 23
    assert extent.line_start == 2
    assert extent.line_end == 2
    assert violation.source_line.text == "    let v = x.unwrap();"
    assert violation.source_line.offset == 11
    assert extent.highlight_end == 13
    assert extent.highlight_start == 3


def test_build_violation__first_line__offset_is_zero(unwrap_rule: Rule) -> None:
    window = _only_window(unwrap_rule, "x.unwrap()")

    violation = build_violation(unwrap_rule, window, "x.unwrap()", "main.rs")

    assert violation.source_line.offset == 0
    assert violation.extent.column_start == 1
    assert violation.extent.column_end == 11
    assert violation.extent.highlight_end == 0
    assert violation.extent.highlight_start == -10


def test_build_violation__multi_line_window__reports_both_lines() -> None:
    text = "fn main() {\n    x\n        .unwrap();\n}\n"
    rule = make_rule(*UNWRAP_PATTERN)

    violation = build_violation(rule, _only_window(rule, text), text, "main.rs")

    assert violation.extent.line_start == 2
    assert violation.extent.line_end == 3
    assert violation.source_line.text == "    x"


def test_build_violation__crlf_source__strips_carriage_returns(unwrap_rule: Rule) -> None:
    text = "fn main() {\r\n    x.unwrap();\r\n}\r\n"

    violation = build_violation(unwrap_rule, _only_window(unwrap_rule, text), text, "main.rs")

    assert violation.source_line.text == "    x.unwrap();"
    assert violation.source_line.offset == len("fn main() {")
    assert violation.extent.byte_start == 17


def test_build_violation__keeps_rule_and_window(unwrap_rule: Rule) -> None:
    window = _only_window(unwrap_rule, SOURCE)

    violation = build_violation(unwrap_rule, window, SOURCE, "main.rs")

    assert violation.rule == unwrap_rule
    assert violation.window == tuple(window)
    assert violation.file_name == "main.rs"
    assert violation.fails
    assert [token.text for token in violation.highlighted] == [".", "unwrap", "(", ")"]


def test_build_violation__empty_window__raises(unwrap_rule: Rule) -> None:
    with pytest.raises(InvariantError):
        build_violation(unwrap_rule, [], SOURCE, "main.rs")


def test_build_violation__window_length_mismatch__raises(unwrap_rule: Rule) -> None:
    window = make_tokens(("Ident", "x"), ("Punct", "."))

    with pytest.raises(InvariantError):
        build_violation(unwrap_rule, window, SOURCE, "main.rs")


def test_build_violation__line_outside_source__raises() -> None:
    rule = make_rule(["Ident"])
    window = make_tokens(("Ident", "x"), line=9)

    with pytest.raises(InvariantError):
        build_violation(rule, window, "x\n", "main.rs")


def test_build_violations__keeps_match_order(unwrap_rules: RuleSet) -> None:
    text = "fn main() {\n    a.unwrap();\n    b.unwrap();\n}\n"
    matches = match_rules(unwrap_rules, tokenize(text))

    violations = build_violations(matches, SourceFile(name="main.rs", text=text))

    assert [v.extent.line_start for v in violations] == [2, 3]
    assert [v.source_line.offset for v in violations] == [11, 26]


def test_source_file__lines__drop_final_terminator() -> None:
    assert SourceFile(name="a", text="a\nb\n").lines == ("a", "b")
    assert SourceFile(name="a", text="a\r\nb").lines == ("a", "b")
    assert SourceFile(name="a", text="").lines == ("",)
