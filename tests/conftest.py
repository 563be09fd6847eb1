import json
from pathlib import Path
from typing import Any

import pytest

from splint.models.rule import Rule, RuleSet
from splint.pipeline import LintPipeline

from tests.utils import UNWRAP_PATTERN


@pytest.fixture
def unwrap_rule() -> Rule:
    return Rule.model_validate(
        {
            "name": "no_unwrap",
            "description": "Avoid calling unwrap",
            "help": "Use ? instead",
            "pattern": UNWRAP_PATTERN,
            "range": [1, 4],
            "fails": True,
        }
    )


@pytest.fixture
def unwrap_rules(unwrap_rule: Rule) -> RuleSet:
    return RuleSet(rules={"no_unwrap": unwrap_rule})


@pytest.fixture
def pipeline(unwrap_rules: RuleSet) -> LintPipeline:
    return LintPipeline(rules=unwrap_rules)


@pytest.fixture
def write_rules(tmp_path: Path):
    """Write a JSON rules file into ``tmp_path`` and return its path."""

    def _write(rules: dict[str, dict[str, Any]], name: str = "splint.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"rules": rules}), encoding="utf-8")
        return path

    return _write
