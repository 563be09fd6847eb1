from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

from splint.models.violation import Violation


class FailureKind(StrEnum):
    """Why a file produced no lint result."""

    IO = "io"
    TOKENIZE = "tokenize"


class FileFailure(BaseModel):
    path: Path
    kind: FailureKind
    reason: str


class FileReport(BaseModel):
    """Violations found in a single file."""

    path: Path
    violations: list[Violation] = Field(default_factory=list)

    @property
    def fails(self) -> int:
        return sum(1 for violation in self.violations if violation.fails)

    @property
    def warnings(self) -> int:
        return len(self.violations) - self.fails


class LintReport(BaseModel):
    """Aggregated result of linting a set of files."""

    files: list[FileReport] = Field(default_factory=list)
    failures: list[FileFailure] = Field(default_factory=list)
    elapsed_ms: int = Field(default=0, ge=0)

    @property
    def violations(self) -> list[Violation]:
        return [violation for report in self.files for violation in report.violations]

    @property
    def fails(self) -> int:
        return sum(report.fails for report in self.files)

    @property
    def warnings(self) -> int:
        return sum(report.warnings for report in self.files)

    @property
    def files_checked(self) -> int:
        return len(self.files)

    @property
    def has_failures(self) -> bool:
        """True when at least one violation comes from a failing rule."""
        return self.fails > 0
