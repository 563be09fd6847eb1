from collections.abc import Iterable, Sequence

from splint.errors import InvariantError
from splint.models.rule import Rule
from splint.models.token import Token
from splint.models.violation import SourceFile, SourceLine, SpanExtent, Violation


def _source_line(source: SourceFile, line_number: int) -> SourceLine:
    """Text of a 1-based line and the number of characters before it.

    Line terminators are not counted in the offset.
    """
    lines = source.lines
    if not 1 <= line_number <= len(lines):
        raise InvariantError(
            f"line {line_number} is outside {source.name} ({len(lines)} lines)"
        )
    offset = sum(len(line) for line in lines[: line_number - 1])
    return SourceLine(text=lines[line_number - 1], offset=offset)


def _extent(window: Sequence[Token], source_line: SourceLine) -> SpanExtent:
    first, last = window[0].span, window[-1].span
    byte_start = first.byte_start
    byte_end = last.byte_end
    highlight_end = byte_start - source_line.offset
    highlight_start = highlight_end - (byte_end - byte_start)
    return SpanExtent(
        byte_start=byte_start,
        byte_end=byte_end,
        column_start=first.start_column + 1,
        column_end=last.end_column + 1,
        line_start=first.start_line,
        line_end=last.end_line,
        highlight_start=highlight_start,
        highlight_end=highlight_end,
    )


def build_violation(
    rule: Rule, window: Sequence[Token], full_source_text: str, file_name: str
) -> Violation:
    """Build the violation for one matched window.

    Args:
        rule: Rule that matched.
        window: Matched tokens, exactly ``len(rule.pattern)`` of them.
        full_source_text: Text the tokens were produced from.
        file_name: Name reported for the file.

    Returns:
        The violation with its source line and position extent resolved.

    Raises:
        InvariantError: If the window is empty, has the wrong length, or starts
            on a line the source text does not have.
    """
    return _build(rule, window, SourceFile(name=file_name, text=full_source_text))


def build_violations(
    matches: Iterable[tuple[Rule, Sequence[Token]]], source: SourceFile
) -> list[Violation]:
    """Build violations for the output of ``match_rules`` over one file."""
    return [_build(rule, window, source) for rule, window in matches]


def _build(rule: Rule, window: Sequence[Token], source: SourceFile) -> Violation:
    if not window:
        raise InvariantError(f"rule {rule.name} produced an empty match window")
    if len(window) != len(rule.pattern):
        raise InvariantError(
            f"rule {rule.name} window has {len(window)} tokens, "
            f"pattern has {len(rule.pattern)}"
        )

    source_line = _source_line(source, window[0].span.start_line)
    return Violation(
        rule=rule,
        window=tuple(window),
        source_line=source_line,
        source=source,
        extent=_extent(window, source_line),
    )
