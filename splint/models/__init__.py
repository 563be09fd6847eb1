from .report import FailureKind, FileFailure, FileReport, LintReport
from .rule import Applicability, Needle, Rule, RuleSet, Severity
from .token import SourcePosition, Token, TokenKind
from .violation import SourceFile, SourceLine, SpanExtent, Violation

__all__ = [
    "Applicability",
    "FailureKind",
    "FileFailure",
    "FileReport",
    "LintReport",
    "Needle",
    "Rule",
    "RuleSet",
    "Severity",
    "SourceFile",
    "SourceLine",
    "SourcePosition",
    "SpanExtent",
    "Token",
    "TokenKind",
    "Violation",
]
