from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated, Final

import typer

from splint import __version__
from splint.clients.cargo import CargoChecker
from splint.errors import CanonicalPathError, RulesConfigError
from splint.loaders.rules_loader import load_rules, resolve_rules_path
from splint.loaders.source_loader import expand_paths
from splint.models.report import LintReport
from splint.pipeline import LintPipeline
from splint.services.languages import LanguageName
from splint.services.render import render_json_line, render_text

EXIT_FAILED: Final[int] = 1
EXIT_ERROR: Final[int] = 2

app = typer.Typer(
    name="splint",
    add_completion=False,
    help="A simple linter to avoid pain in your codebases.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str, quiet: bool) -> typer.Exit:
    """Report a fatal error and build the exit to raise."""
    if not quiet:
        typer.secho(f"error: {message}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=EXIT_ERROR)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"splint {__version__}")
        raise typer.Exit()


def _print_text(report: LintReport) -> None:
    for violation in report.violations:
        typer.echo(render_text(violation, color=True) + "\n", err=True)

    fails = typer.style(f"{report.fails} fails", fg=typer.colors.RED)
    warnings = typer.style(f"{report.warnings} warnings", fg=typer.colors.YELLOW)
    typer.echo(f"{fails}, {warnings}")
    typer.echo(
        f"Finished linting {report.files_checked} files in {report.elapsed_ms}ms"
    )


def _print_structured(report: LintReport) -> None:
    for violation in report.violations:
        try:
            line = render_json_line(violation)
        except CanonicalPathError as e:
            raise _fail(str(e), quiet=False) from e
        typer.echo(line)


@app.command()
def lint(
    files: Annotated[
        list[str] | None,
        typer.Argument(
            help="The files to lint: paths, glob patterns or directories.",
            show_default=False,
        ),
    ] = None,
    rules: Annotated[
        Path | None,
        typer.Option(
            "--rules",
            "-r",
            help="The rules to lint against (json|toml|yaml).",
            envvar="SPLINT_RULES",
            dir_okay=False,
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Quiet mode: only the exit code reports results."),
    ] = False,
    analyze: Annotated[
        bool,
        typer.Option(
            "--analyze",
            "-a",
            help="Print one compiler-style JSON diagnostic per line (rust-analyzer mode).",
        ),
    ] = False,
    cargo_check: Annotated[
        bool,
        typer.Option(
            "--cargo-check",
            help="With --analyze, also run `cargo check` and forward its JSON messages.",
        ),
    ] = False,
    jobs: Annotated[
        int | None,
        typer.Option("--jobs", "-j", min=1, help="Number of files linted in parallel."),
    ] = None,
    language: Annotated[
        LanguageName,
        typer.Option(
            "--language",
            case_sensitive=False,
            help="Grammar used for files whose suffix is not recognised.",
        ),
    ] = LanguageName.RUST,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug information to stderr."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Lint source files against token-pattern rules.

    Exits with 1 when a failing rule matched, and with 2 when the rules could
    not be loaded or a file could not be read or tokenized.
    """
    _configure_logging(verbose)

    rules_path = rules or resolve_rules_path(Path.cwd())
    if rules_path is None:
        raise _fail(
            "Couldn't find rules file in current directory. You can specify one with -r",
            quiet,
        )

    try:
        ruleset = load_rules(rules_path)
    except RulesConfigError as e:
        raise _fail(str(e), quiet) from e

    paths = expand_paths(files or [])
    if not paths:
        raise _fail("No files provided.", quiet)

    report = LintPipeline(rules=ruleset, jobs=jobs, default_language=language).lint_paths(paths)

    if analyze and not quiet:
        _print_structured(report)
        if cargo_check:
            sys.stdout.flush()
            CargoChecker().run()
    elif not quiet:
        _print_text(report)

    if report.failures:
        if not quiet:
            for failure in report.failures:
                typer.secho(
                    f"error: {failure.path}: {failure.reason}",
                    fg=typer.colors.RED,
                    err=True,
                )
        raise typer.Exit(code=EXIT_ERROR)

    if report.has_failures:
        raise typer.Exit(code=EXIT_FAILED)


def main() -> None:
    """Entry point for executing the Typer application."""
    app()


if __name__ == "__main__":
    main()
