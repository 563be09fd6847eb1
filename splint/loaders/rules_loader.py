from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import ValidationError

from splint.errors import RulesConfigError
from splint.models.rule import RuleSet

logger = logging.getLogger(__name__)

RULES_FILES: Final[tuple[str, ...]] = (
    "splint.json",
    ".splint.json",
    "splint.toml",
    ".splint.toml",
    "splint.yaml",
    ".splint.yaml",
)


def resolve_rules_path(cwd: Path, candidates: Sequence[str] = RULES_FILES) -> Path | None:
    """Return the first candidate rules file that exists in ``cwd``."""
    for name in candidates:
        path = cwd / name
        if path.is_file():
            return path
    return None


def _decode(content: str, suffix: str) -> Any:
    if suffix == ".toml":
        return tomllib.loads(content)
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(content)
    if suffix == ".json":
        return json.loads(content)
    raise RulesConfigError(f"Unsupported rules file format: {suffix or '<none>'}")


def parse_rules(content: str, suffix: str = ".json") -> RuleSet:
    """Parse rules file content.

    Args:
        content: Text of the rules file.
        suffix: File suffix selecting the format (.json, .toml, .yaml or .yml).

    Returns:
        Validated rule set.

    Raises:
        RulesConfigError: If the content cannot be decoded or fails validation.
    """
    try:
        raw = _decode(content, suffix.lower())
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise RulesConfigError(f"Couldn't parse rules: {e}") from e

    if not isinstance(raw, dict):
        raise RulesConfigError("Couldn't parse rules: top level must be an object")

    try:
        return RuleSet.model_validate(raw)
    except ValidationError as e:
        raise RulesConfigError(f"Couldn't parse rules: {e}") from e


def load_rules(path: Path) -> RuleSet:
    """Read and validate a rules file."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RulesConfigError(f"Couldn't read rules: {path}: {e}") from e

    rules = parse_rules(content, path.suffix)
    logger.debug("Loaded %d rule(s) from %s", len(rules.rules), path)
    return rules
