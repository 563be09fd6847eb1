from typing import Any

from splint.models.rule import Rule
from splint.models.token import SourcePosition, Token, TokenKind


def make_tokens(*items: tuple[str, str], line: int = 1, gap: int = 1) -> list[Token]:
    """Lay ``(kind, text)`` pairs out on one line, ``gap`` spaces apart."""
    tokens: list[Token] = []
    column = 0
    for kind, text in items:
        end = column + len(text)
        tokens.append(
            Token(
                kind=TokenKind(kind),
                text=text,
                span=SourcePosition(
                    start_line=line,
                    start_column=column,
                    end_line=line,
                    end_column=end,
                    byte_start=column,
                    byte_end=end,
                ),
            )
        )
        column = end + gap
    return tokens


def make_rule(*pattern: Any, **fields: Any) -> Rule:
    payload: dict[str, Any] = {
        "name": "test_rule",
        "description": "A rule used in tests",
        "pattern": list(pattern),
    }
    payload.update(fields)
    return Rule.model_validate(payload)


UNWRAP_PATTERN: list[list[str]] = [
    ["Ident"],
    ["Punct", "."],
    ["Ident", "unwrap"],
    ["OpenDelim", "("],
    ["CloseDelim", ")"],
]
