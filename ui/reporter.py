"""
Report rendering for analysis results.

Two formats are supported. Text output lists only violations (warn and error)
followed by a translated summary, coloured with Rich. JSON output contains
every result, including passes, plus a summary block.
"""

from dataclasses import asdict
import json
from typing import IO, Protocol

from rich.console import Console

from models import AnalysisReport, OutputFormat, Severity
from ui.i18n import Translator

SEVERITY_STYLES = {
    Severity.WARN: ("check.warn", "yellow"),
    Severity.ERROR: ("check.error", "red"),
}


class Reporter(Protocol):
    """Protocol for rendering an AnalysisReport."""

    def report(self, report: AnalysisReport, warnings: list[str]) -> None:
        """
        Render the report.

        Args:
            report: The analysis to render.
            warnings: Already translated warnings (e.g., ignore-file conflicts).
        """


class TextReporter:
    """
    Human-readable reporter.

    Colours are dropped automatically when the output is not a terminal or
    NO_COLOR is set.
    """

    def __init__(self, translator: Translator, console: Console):
        self.translator = translator
        self.console = console

    def _line(self, text: str, style: str | None = None) -> None:
        self.console.print(
            text, style=style, markup=False, highlight=False, soft_wrap=True
        )

    def report(self, report: AnalysisReport, warnings: list[str]) -> None:
        for warning in warnings:
            self._line(f"  WARN  {warning}", "yellow")
        if warnings:
            self._line("")

        has_violation = False
        for result in report.results:
            if result.severity not in SEVERITY_STYLES:
                continue
            key, style = SEVERITY_STYLES[result.severity]
            line = self.translator.t(key, result.path, result.lines, result.limit)
            self._line(f"  {line}", style)
            has_violation = True

        if has_violation:
            self._line("")

        self._line(
            self.translator.t(
                "check.summary", report.errors, report.warnings, report.passed
            )
        )


class JSONReporter:
    """Machine-readable reporter; writes one indented JSON document."""

    def __init__(self, stream: IO[str]):
        self.stream = stream

    def report(self, report: AnalysisReport, warnings: list[str]) -> None:
        output = {
            "results": [asdict(result) for result in report.results],
            "summary": {
                "errors": report.errors,
                "warnings": report.warnings,
                "passed": report.passed,
                "total": report.total,
            },
        }
        self.stream.write(json.dumps(output, indent=2, ensure_ascii=False) + "\n")
        self.stream.flush()


def create_reporter(
    output_format: OutputFormat,
    translator: Translator,
    stream: IO[str],
    force_terminal: bool | None = None,
) -> Reporter:
    """
    Return the reporter for an output format.

    Args:
        output_format: TEXT or JSON.
        translator: Translator for text output messages.
        stream: Where the report is written.
        force_terminal: Passed to the Rich console; None lets Rich detect it.
    """
    if output_format == OutputFormat.JSON:
        return JSONReporter(stream)
    return TextReporter(
        translator, Console(file=stream, force_terminal=force_terminal)
    )
