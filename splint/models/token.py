from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TokenKind(StrEnum):
    """Kinds of flattened tokens. The values are the names used in rule files."""

    IDENT = "Ident"
    PUNCT = "Punct"
    LITERAL = "Literal"
    OPEN_DELIM = "OpenDelim"
    CLOSE_DELIM = "CloseDelim"


class SourcePosition(BaseModel):
    """Location of a token in its file.

    Lines are 1-based. Columns are 0-based character offsets into the line.
    Byte offsets index the UTF-8 encoded file.
    """

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(..., ge=1, description="Line of the first character")
    start_column: int = Field(..., ge=0, description="Column of the first character")
    end_line: int = Field(..., ge=1, description="Line just after the last character")
    end_column: int = Field(..., ge=0, description="Column just after the last character")
    byte_start: int = Field(..., ge=0, description="Byte offset of the first character")
    byte_end: int = Field(..., ge=0, description="Byte offset just after the last character")

    @model_validator(mode="after")
    def validate_ordering(self) -> Self:
        """Ensure the end of the span does not precede its start."""

        if self.end < self.start:
            raise ValueError("span end must not precede span start")
        if self.byte_end < self.byte_start:
            raise ValueError("byte_end must be greater than or equal to byte_start")
        return self

    @property
    def start(self) -> tuple[int, int]:
        return (self.start_line, self.start_column)

    @property
    def end(self) -> tuple[int, int]:
        return (self.end_line, self.end_column)


class Token(BaseModel):
    """Atomic lexical unit of a flattened token sequence."""

    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    text: str
    span: SourcePosition

    def __str__(self) -> str:
        return f'{self.kind}("{self.text}")'
