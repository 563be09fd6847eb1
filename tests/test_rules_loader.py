from pathlib import Path

import pytest

from splint.errors import RulesConfigError
from splint.loaders.rules_loader import (
    RULES_FILES,
    load_rules,
    parse_rules,
    resolve_rules_path,
)
from splint.models.rule import Applicability
from splint.models.token import TokenKind
from tests.consts import JSON_RULES_FILE, TOML_RULES_FILE, YAML_RULES_FILE


def test_load_rules__json__keeps_declaration_order() -> None:
    rules = load_rules(JSON_RULES_FILE)

    assert list(rules.rules) == ["no_unwrap", "no_expect", "no_todo"]
    no_unwrap = rules.rules["no_unwrap"]
    assert no_unwrap.fails
    assert no_unwrap.range == (1, 3)
    assert no_unwrap.replace == "?"
    assert no_unwrap.pattern[1].value == "unwrap"
    assert rules.rules["no_todo"].link == "https://doc.rust-lang.org/std/macro.todo.html"


def test_load_rules__toml__parses_regex_needles() -> None:
    rules = load_rules(TOML_RULES_FILE)

    test_prefix = rules.rules["test_prefix"]
    assert test_prefix.pattern[1].is_regex
    assert not test_prefix.fails


def test_load_rules__yaml__accepts_object_needles_and_default_range() -> None:
    rules = load_rules(YAML_RULES_FILE)

    any_literal = rules.rules["any_literal"]
    assert any_literal.pattern[0].kind == TokenKind.LITERAL
    assert any_literal.pattern[0].value is None
    assert any_literal.range == (0, 0)


def test_parse_rules__applicability__is_read() -> None:
    content = (
        '{"rules": {"r": {"name": "r", "description": "d", "pattern": [["Ident"]],'
        ' "replace": "y", "applicability": "MachineApplicable"}}}'
    )

    rules = parse_rules(content)

    assert rules.rules["r"].applicability == Applicability.MACHINE_APPLICABLE


def test_parse_rules__empty_rules__is_valid() -> None:
    assert parse_rules('{"rules": {}}').rules == {}


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        "{}",
        '{"rule": {}}',
        '{"rules": {"r": {"description": "d", "pattern": [["Ident"]]}}}',
        '{"rules": {"r": {"name": "r", "description": "d", "pattern": []}}}',
        '{"rules": {"r": {"name": "r", "description": "d", "pattern": [["Ident", "/(/"]]}}}',
        '{"rules": {"r": {"name": "r", "description": "d", "pattern": [["Ident"]], "range": [0, 3]}}}',
        '{"rules": {"r": {"name": "r", "description": "d", "pattern": [["Group"]]}}}',
    ],
)
def test_parse_rules__invalid_content__raises(content: str) -> None:
    with pytest.raises(RulesConfigError, match="Couldn't parse rules"):
        parse_rules(content)


def test_parse_rules__invalid_toml__raises() -> None:
    with pytest.raises(RulesConfigError, match="Couldn't parse rules"):
        parse_rules("[rules.r\nname =", ".toml")


def test_parse_rules__unsupported_suffix__raises() -> None:
    with pytest.raises(RulesConfigError, match="Unsupported"):
        parse_rules("{}", ".ini")


def test_load_rules__missing_file__raises(tmp_path: Path) -> None:
    with pytest.raises(RulesConfigError, match="Couldn't read rules"):
        load_rules(tmp_path / "splint.json")


def test_resolve_rules_path__prefers_earlier_candidates(tmp_path: Path) -> None:
    (tmp_path / ".splint.toml").write_text("", encoding="utf-8")
    (tmp_path / "splint.json").write_text("{}", encoding="utf-8")

    assert resolve_rules_path(tmp_path) == tmp_path / "splint.json"


def test_resolve_rules_path__hidden_file__is_found(tmp_path: Path) -> None:
    (tmp_path / ".splint.yaml").write_text("", encoding="utf-8")

    assert resolve_rules_path(tmp_path) == tmp_path / ".splint.yaml"


def test_resolve_rules_path__directory_named_like_rules__is_ignored(tmp_path: Path) -> None:
    (tmp_path / "splint.json").mkdir()

    assert resolve_rules_path(tmp_path) is None


def test_rules_files__json_comes_first() -> None:
    assert RULES_FILES[:2] == ("splint.json", ".splint.json")
