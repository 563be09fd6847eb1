import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pydantic import BaseModel, Field

from splint.errors import SourceReadError, TokenizeError
from splint.loaders.source_loader import read_source
from splint.models.report import FailureKind, FileFailure, FileReport, LintReport
from splint.models.rule import RuleSet
from splint.models.violation import SourceFile, Violation
from splint.services.diagnostics import build_violations
from splint.services.languages import LanguageName, language_for_path
from splint.services.matcher import match_rules
from splint.services.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class LintPipeline(BaseModel):
    """Tokenize, match and build violations for source files."""

    rules: RuleSet
    jobs: int | None = Field(default=None, ge=1, description="Worker threads for lint_paths")
    default_language: LanguageName = LanguageName.RUST

    def lint_source(
        self, text: str, file_name: str, language: LanguageName | None = None
    ) -> list[Violation]:
        """Lint source text that has already been read.

        Args:
            text: Full source text.
            file_name: Name reported in diagnostics.
            language: Grammar to tokenize with; defaults to ``default_language``.

        Returns:
            Violations grouped by rule in declaration order, each group in
            source order.

        Raises:
            TokenizeError: If the text cannot be tokenized.
        """
        tokenizer = Tokenizer(language=language or self.default_language)
        tokens = tokenizer.tokenize(text)
        matches = match_rules(self.rules, tokens)
        return build_violations(matches, SourceFile(name=file_name, text=text))

    def lint_file(self, path: Path) -> FileReport:
        """Read and lint one file.

        Raises:
            SourceReadError: If the file cannot be read.
            TokenizeError: If the file cannot be tokenized.
        """
        text = read_source(path)
        language = language_for_path(path, default=self.default_language)
        violations = self.lint_source(text, str(path), language)
        logger.debug("Linted %s: %d violation(s)", path, len(violations))
        return FileReport(path=path, violations=violations)

    def _lint_or_fail(self, path: Path) -> FileReport | FileFailure:
        try:
            return self.lint_file(path)
        except SourceReadError as e:
            logger.warning("Skipping unreadable file %s: %s", path, e)
            return FileFailure(path=path, kind=FailureKind.IO, reason=str(e))
        except TokenizeError as e:
            logger.warning("Skipping file that failed to tokenize %s: %s", path, e)
            return FileFailure(path=path, kind=FailureKind.TOKENIZE, reason=str(e))

    def lint_paths(self, paths: Sequence[Path]) -> LintReport:
        """Lint files concurrently.

        Files that cannot be read or tokenized are reported as failures and do
        not stop the run. Results keep the order of ``paths``.
        """
        started = time.perf_counter()
        with ThreadPoolExecutor(max_workers=self.jobs) as executor:
            results = list(executor.map(self._lint_or_fail, paths))

        report = LintReport(
            files=[r for r in results if isinstance(r, FileReport)],
            failures=[r for r in results if isinstance(r, FileFailure)],
            elapsed_ms=int((time.perf_counter() - started) * 1000),
        )
        logger.debug(
            "Linted %d file(s) in %dms: %d fails, %d warnings, %d failure(s)",
            report.files_checked,
            report.elapsed_ms,
            report.fails,
            report.warnings,
            len(report.failures),
        )
        return report
