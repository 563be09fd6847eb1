import json
from pathlib import Path
from typing import Any, Final

from splint.errors import CanonicalPathError
from splint.models.rule import Applicability
from splint.models.violation import Violation
from splint.services.render.text import render_text

LINTER_NAME: Final[str] = "splint"
FALLBACK_HELP: Final[str] = "Lint failed here"


def _canonical_path(file_name: str) -> str:
    try:
        return str(Path(file_name).resolve(strict=True))
    except (OSError, RuntimeError) as e:
        raise CanonicalPathError(f"Cannot canonicalize {file_name}: {e}") from e


def compiler_span(violation: Violation) -> dict[str, Any]:
    """Primary span of a violation in the rustc JSON diagnostic format."""

    extent = violation.extent
    replacement = violation.rule.replace
    applicability: str | None = None
    if replacement is not None:
        applicability = str(violation.rule.applicability or Applicability.UNSPECIFIED)

    return {
        "byte_end": extent.byte_end,
        "byte_start": extent.byte_start,
        "column_end": extent.column_end,
        "column_start": extent.column_start,
        "expansion": None,
        "file_name": violation.file_name,
        "is_primary": True,
        "label": None,
        "line_end": extent.line_end,
        "line_start": extent.line_start,
        "suggested_replacement": replacement,
        "suggestion_applicability": applicability,
        "text": [
            {
                "highlight_end": extent.highlight_end,
                "highlight_start": extent.highlight_start,
                "text": violation.source_line.text,
            }
        ],
    }


def render_structured(violation: Violation) -> dict[str, Any]:
    """Render a violation as a cargo ``compiler-message`` record.

    IDEs that consume ``cargo check --message-format=json`` display the result
    like a compiler diagnostic.

    Args:
        violation: Violation to render.

    Returns:
        JSON-serializable message object.

    Raises:
        CanonicalPathError: If the violation's file cannot be resolved to an
            absolute path.
    """
    rule = violation.rule
    span = compiler_span(violation)
    src_path = _canonical_path(violation.file_name)

    return {
        "reason": "compiler-message",
        "package_id": "",
        "manifest_path": "",
        "target": {
            "kind": ["bin"],
            "crate_types": ["bin"],
            "name": LINTER_NAME,
            "src_path": src_path,
            "edition": "2021",
            "doc": True,
            "doctest": False,
            "test": True,
        },
        "message": {
            "rendered": render_text(violation),
            "$message_type": "diagnostic",
            "children": [
                {
                    "children": [],
                    "code": None,
                    "level": "note",
                    "message": rule.description,
                    "rendered": None,
                    "spans": [],
                },
                {
                    "children": [],
                    "code": None,
                    "level": "help",
                    "message": rule.help or FALLBACK_HELP,
                    "rendered": None,
                    "spans": [span],
                },
            ],
            "code": {"code": rule.name, "explanation": None},
            "level": str(rule.severity),
            "message": rule.name,
            "spans": [span],
        },
    }


def render_json_line(violation: Violation) -> str:
    return json.dumps(render_structured(violation), ensure_ascii=False)
