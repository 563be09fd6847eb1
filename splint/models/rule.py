import re
from enum import StrEnum
from functools import cached_property
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from splint.models.token import Token, TokenKind


class Severity(StrEnum):
    """Severity reported for a rule match."""

    ERROR = "error"
    WARNING = "warning"


class Applicability(StrEnum):
    """How safely a suggested replacement may be applied by tooling."""

    MACHINE_APPLICABLE = "MachineApplicable"
    MAYBE_INCORRECT = "MaybeIncorrect"
    HAS_PLACEHOLDERS = "HasPlaceholders"
    UNSPECIFIED = "Unspecified"


class Needle(BaseModel):
    """Single-token matcher.

    Rule files write a needle either as an object ``{"kind": ..., "value": ...}``
    or as a ``[kind, value]`` array where ``value`` may be omitted or null.
    A value wrapped in slashes (``"/^test_/"``) is a regular expression searched
    anywhere in the token text; any other value must equal the text exactly.
    """

    model_config = ConfigDict(frozen=True)

    kind: TokenKind = Field(..., description="Token kind, compared exactly")
    value: str | None = Field(default=None, description="Exact text or /regex/")

    @model_validator(mode="before")
    @classmethod
    def from_array(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if not 1 <= len(data) <= 2:
                raise ValueError("needle must be a [kind] or [kind, value] array")
            return {"kind": data[0], "value": data[1] if len(data) == 2 else None}
        return data

    @field_validator("value")
    @classmethod
    def validate_regex(cls, value: str | None) -> str | None:
        if value is not None and _is_regex(value):
            try:
                re.compile(value[1:-1])
            except re.error as e:
                raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value

    @property
    def is_regex(self) -> bool:
        return self.value is not None and _is_regex(self.value)

    @cached_property
    def regex(self) -> re.Pattern[str] | None:
        if self.value is None or not _is_regex(self.value):
            return None
        return re.compile(self.value[1:-1])

    def matches(self, token: Token) -> bool:
        """Return True when ``token`` satisfies this needle."""

        if token.kind != self.kind:
            return False
        if self.value is None:
            return True
        regex = self.regex
        if regex is not None:
            return regex.search(token.text) is not None
        return token.text == self.value

    def __str__(self) -> str:
        return f'{self.kind}("{self.value or ""}")'


def _is_regex(value: str) -> bool:
    return len(value) >= 2 and value.startswith("/") and value.endswith("/")


class Rule(BaseModel):
    """A token-sequence pattern plus the metadata used to report its matches."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Rule name, used as the diagnostic code")
    description: str = Field(..., description="One-line explanation of the problem")
    help: str | None = Field(default=None, description="How to fix the problem")
    link: str | None = Field(default=None, description="External documentation URL")
    pattern: tuple[Needle, ...] = Field(..., min_length=1)
    range: tuple[int, int] = Field(
        ..., description="Inclusive [start, end] pattern indices to highlight"
    )
    fails: bool = Field(default=False, description="Whether a match fails the build")
    replace: str | None = Field(default=None, description="Suggested replacement text")
    applicability: Applicability | None = Field(
        default=None, description="Applicability of the suggested replacement"
    )

    @model_validator(mode="before")
    @classmethod
    def default_range(cls, data: Any) -> Any:
        """Highlight the whole pattern when no range is given."""

        if isinstance(data, dict) and data.get("range") is None:
            pattern = data.get("pattern")
            if isinstance(pattern, (list, tuple)) and pattern:
                return {**data, "range": (0, len(pattern) - 1)}
        return data

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        start, end = self.range
        last = len(self.pattern) - 1
        if not 0 <= start <= end <= last:
            raise ValueError(f"range [{start}, {end}] must lie within [0, {last}]")
        return self

    @property
    def severity(self) -> Severity:
        return Severity.ERROR if self.fails else Severity.WARNING

    def highlight(self, window: tuple[Token, ...]) -> tuple[Token, ...]:
        """Slice the part of a matched window selected by ``range``."""

        start, end = self.range
        return window[start : end + 1]


class RuleSet(BaseModel):
    """Rules keyed by identifier, in declaration order."""

    model_config = ConfigDict(frozen=True)

    rules: dict[str, Rule] = Field(..., description="Rules by identifier")
