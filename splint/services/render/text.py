from typing import Final

import typer

from splint.models.rule import Severity
from splint.models.violation import Violation

TAB_WIDTH: Final[int] = 4

SEVERITY_COLORS: Final[dict[Severity, str]] = {
    Severity.ERROR: typer.colors.RED,
    Severity.WARNING: typer.colors.YELLOW,
}


def _display(text: str) -> str:
    return text.replace("\t", " " * TAB_WIDTH)


def _underline_columns(violation: Violation) -> tuple[int, int]:
    """Character columns on the starting line covered by the highlighted tokens.

    The underline is clamped to the window's first line: a highlight that
    starts on a later line falls back to the window start, and one that ends
    on a later line runs to the end of the line.
    """
    line_number = violation.extent.line_start
    line_text = violation.source_line.text
    highlighted = violation.highlighted

    first = highlighted[0].span
    if first.start_line != line_number:
        first = violation.window[0].span
    last = highlighted[-1].span
    end_column = last.end_column if last.end_line == line_number else len(line_text)
    return first.start_column, max(end_column, first.start_column)


def render_text(violation: Violation, color: bool = False) -> str:
    """Render a violation as a rustc-style source excerpt.

    Args:
        violation: Violation to render.
        color: Whether to include ANSI styles.

    Returns:
        Multi-line text without a trailing newline.
    """

    def style(text: str, fg: str | None = None, bold: bool = False) -> str:
        if not color:
            return text
        return typer.style(text, fg=fg, bold=bold)

    rule = violation.rule
    severity_color = SEVERITY_COLORS[rule.severity]
    line_number = violation.extent.line_start
    line_text = violation.source_line.text
    start_column, end_column = _underline_columns(violation)

    pad = " " * len(str(line_number))
    bar = style("|", fg=typer.colors.BLUE, bold=True)
    indent = len(_display(line_text[:start_column]))
    width = max(1, len(_display(line_text[start_column:end_column])))

    header = style(f"{rule.severity}[{rule.name}]", fg=severity_color, bold=True)
    out: list[str] = [
        f"{header}{style(':', bold=True)} {rule.description}",
        f"{pad}{style('-->', fg=typer.colors.BLUE, bold=True)} "
        f"{violation.file_name}:{line_number}:{start_column + 1}",
        f"{pad} {bar}",
        f"{style(str(line_number), fg=typer.colors.BLUE, bold=True)} {bar} {_display(line_text)}",
        f"{pad} {bar} {' ' * indent}{style('^' * width, fg=severity_color, bold=True)}",
    ]

    notes: list[tuple[str, str]] = []
    if rule.help:
        notes.append(("help", rule.help))
    if rule.link:
        notes.append(("link", rule.link))
    if notes:
        out.append(f"{pad} {bar}")
    for label, text in notes:
        out.append(f"{pad} {style('=', fg=typer.colors.BLUE, bold=True)} {style(label, bold=True)}: {text}")

    return "\n".join(out)
