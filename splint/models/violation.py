from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field

from splint.models.rule import Rule, Severity
from splint.models.token import Token


class SourceFile(BaseModel):
    """Represents a linted file: its display name and full text."""

    model_config = ConfigDict(frozen=True)

    name: str
    text: str

    @cached_property
    def lines(self) -> tuple[str, ...]:
        """Lines split on ``\\n`` with a trailing ``\\r`` removed.

        A final line break does not produce an extra empty line.
        """
        lines = [line.removesuffix("\r") for line in self.text.split("\n")]
        if len(lines) > 1 and self.text.endswith("\n"):
            lines.pop()
        return tuple(lines)


class SourceLine(BaseModel):
    """The line a violation starts on and the character offset of its start."""

    model_config = ConfigDict(frozen=True)

    text: str
    offset: int = Field(..., ge=0, description="Characters in all preceding lines")


class SpanExtent(BaseModel):
    """Position metadata of a matched window, as reported to tooling."""

    model_config = ConfigDict(frozen=True)

    byte_start: int
    byte_end: int
    column_start: int = Field(..., ge=1)
    column_end: int = Field(..., ge=1)
    line_start: int = Field(..., ge=1)
    line_end: int = Field(..., ge=1)
    highlight_start: int
    highlight_end: int


class Violation(BaseModel):
    """One match of a rule in a file, ready for rendering."""

    model_config = ConfigDict(frozen=True)

    rule: Rule
    window: tuple[Token, ...]
    source_line: SourceLine
    source: SourceFile
    extent: SpanExtent

    @property
    def fails(self) -> bool:
        return self.rule.fails

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    @property
    def file_name(self) -> str:
        return self.source.name

    @property
    def highlighted(self) -> tuple[Token, ...]:
        return self.rule.highlight(self.window)
