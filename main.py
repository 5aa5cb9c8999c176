"""
linecap CLI Entry Point.

linecap enforces line-count budgets on a source tree. The `check` command runs
the pipeline in five stages:

1.  **Configuration**: Loads `.linecap.yml` (or the file given with
    `--config`), validates it, and applies command-line overrides.
2.  **Scanning**: Walks the target directory, pruning anything matched by the
    default excludes, the config's `ignore` list or `.linecapignore`.
3.  **Counting**: Counts every kept file concurrently, either all lines or
    code lines only (blank lines and comments excluded).
4.  **Analysis**: Compares each file and each directory with its limit and
    assigns pass, warn or error.
5.  **Reporting**: Prints violations and a summary (text) or the full result
    set (JSON).

Exit codes: 0 when no errors were found, 1 when at least one limit was
exceeded beyond the warning threshold, 2 on runtime failures (bad config,
unreadable files, unexpected errors).

Usage:
    $ python main.py check src --count-mode code_only
    $ python main.py init

Dependencies:
    - Typer: CLI argument parsing and app structure.
    - Rich: Terminal colors and progress visualization.
    - Inquirer: Interactive confirmation prompt for `init`.
"""

from dataclasses import replace
import os
from pathlib import Path
import platform
import sys
from typing import Annotated, NoReturn, Optional

import inquirer  # type: ignore
from inquirer.themes import GreenPassion  # type: ignore
from rich.markup import escape
import typer

from constants import (
    CONFIG_FILE_NAMES,
    DEFAULT_CONFIG_TEMPLATE,
    LANG_ENV_VAR,
    MAX_COUNT_WORKERS,
    VERSION,
)
from core.analyzer import analyze
from core.config import Config, Overrides, load_config
from core.counter import count_files
from core.exceptions import (
    ConfigError,
    FileIOError,
    FileWriteError,
    ScanError,
    UnsupportedLanguageError,
    ValidationErrors,
)
from core.file_io import FileWriter, FilesystemFileWriter
from core.scanner import scan
from models import AnalysisReport, CountMode, ExitCode, OutputFormat
from ui.i18n import Translator, resolve_language
from ui.progress_display import NoOpProgressDisplay, ProgressDisplay, RichProgressDisplay
from ui.reporter import create_reporter
from utils import console, debug, err_console, set_verbose

app = typer.Typer(
    help="linecap checks source code line counts against configured rules.",
    no_args_is_help=True,
)

LangOption = Annotated[
    Optional[str],
    typer.Option("--lang", help="Message language (en or ja). Overrides LINECAP_LANG."),
]


@app.command()
def check(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to check. Defaults to the current directory."),
    ] = Path("."),
    config: Annotated[
        Optional[str],
        typer.Option("--config", "-c", help="Config file (default is .linecap.yml)."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format."),
    ] = OutputFormat.TEXT,
    max_lines_per_file: Annotated[
        Optional[int], typer.Option(help="Max lines per file.")
    ] = None,
    max_lines_per_directory: Annotated[
        Optional[int], typer.Option(help="Max lines per directory.")
    ] = None,
    warning_threshold: Annotated[
        Optional[int], typer.Option(help="Warning threshold (%).")
    ] = None,
    count_mode: Annotated[
        Optional[CountMode], typer.Option(help="Count mode.")
    ] = None,
    ignore: Annotated[
        Optional[list[str]],
        typer.Option(help="Ignore pattern (can be specified multiple times)."),
    ] = None,
    no_default_excludes: Annotated[
        bool, typer.Option("--no-default-excludes", help="Disable default excludes.")
    ] = False,
    lang: LangOption = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Print debug output to stderr.")
    ] = False,
):
    """
    Check source code line counts against configured rules and report violations.

    Flags given explicitly override the values from the config file.

    Raises:
        typer.Exit: With code 1 when violations were found, 2 on runtime errors.
    """
    set_verbose(verbose)
    translator = init_translator(lang)

    overrides = Overrides(
        max_lines_per_file=max_lines_per_file,
        max_lines_per_directory=max_lines_per_directory,
        warning_threshold=warning_threshold,
        count_mode=count_mode.value if count_mode is not None else None,
        ignore=ignore,
        no_default_excludes=no_default_excludes,
    )

    try:
        cfg = load_config(config)
        # The config language applies unless the user chose one explicitly
        if not lang and not os.environ.get(LANG_ENV_VAR) and cfg.language != translator.lang:
            translator = Translator(cfg.language)
        cfg.apply_overrides(overrides)
        report = run_check(path, cfg, translator, output_format)
    except (ConfigError, ValidationErrors) as e:
        print_runtime_err(translate_config_error(translator, e), e)
    except ScanError as e:
        print_runtime_err(translator.t("err.scan", e.message), e)
    except FileIOError as e:
        print_runtime_err(translator.t("err.count", e.message), e)
    except Exception as e:  # noqa: BLE001
        print_unexpected_err(translator, e)

    if report.errors > 0:
        raise typer.Exit(code=ExitCode.VIOLATION)


def run_check(
    path: Path,
    cfg: Config,
    translator: Translator,
    output_format: OutputFormat,
) -> AnalysisReport:
    """
    Scan, count, analyze and report.

    Counting uses absolute paths; results are reported relative to the target
    directory with forward slashes. At most MAX_COUNT_WORKERS files are open
    at once, so large trees do not start one thread per file.

    Returns:
        The AnalysisReport that was printed.

    Raises:
        ScanError: If the target cannot be walked.
        ConfigError: If the ignore file cannot be read.
        FileIOError: If any file cannot be counted.
    """
    _, warning_keys = cfg.ignore_patterns()
    scan_result = scan(path, cfg)

    target = path.resolve()
    file_paths = [str(target / entry.path) for entry in scan_result.files]

    counts = count_files(
        file_paths,
        cfg.mode,
        max_workers=min(len(file_paths), MAX_COUNT_WORKERS),
        progress_display=make_progress_display(output_format),
    )
    counts = [
        replace(count, path=entry.path)
        for count, entry in zip(counts, scan_result.files)
    ]

    report = analyze(counts, scan_result, cfg)
    debug(
        f"{report.total} results: {report.errors} errors, "
        f"{report.warnings} warnings, {report.passed} passed"
    )

    reporter = create_reporter(output_format, translator, sys.stdout)
    reporter.report(report, [translator.t(key) for key in warning_keys])
    return report


def make_progress_display(output_format: OutputFormat) -> ProgressDisplay:
    """Show a progress bar only for text output on an interactive terminal."""
    if output_format == OutputFormat.TEXT and err_console.is_terminal:
        return RichProgressDisplay(err_console)
    return NoOpProgressDisplay()


@app.command()
def init(
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing file without asking.")
    ] = False,
    lang: LangOption = None,
):
    """Create a .linecap.yml configuration file with default settings."""
    translator = init_translator(lang)
    writer = FilesystemFileWriter(Path(CONFIG_FILE_NAMES[0]))

    try:
        message_key = write_default_config(writer, translator, force)
    except FileWriteError as e:
        print_runtime_err(translator.t("err.write_config", e.message), e)

    console.print(translator.t(message_key), markup=False, highlight=False)


def write_default_config(writer: FileWriter, translator: Translator, force: bool) -> str:
    """
    Write the default config, asking before overwriting an existing file.

    Returns:
        The translation key of the message describing what happened.

    Raises:
        FileWriteError: If the file cannot be written.
    """
    if not writer.exists():
        writer.write_file(DEFAULT_CONFIG_TEMPLATE)
        return "init.created"

    if not force and not confirm_overwrite(translator):
        return "init.cancelled"

    writer.write_file(DEFAULT_CONFIG_TEMPLATE)
    return "init.overwritten"


def confirm_overwrite(translator: Translator) -> bool:
    """Ask whether the existing config file may be replaced."""
    questions = [
        inquirer.Confirm(
            "overwrite", message=translator.t("init.overwrite"), default=False
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())

    if not answers:
        return False
    return bool(answers["overwrite"])


@app.command()
def version():
    """Print version information."""
    translator = init_translator(None)
    console.print(
        translator.t(
            "version.info",
            VERSION,
            platform.python_version(),
            sys.platform,
            platform.machine(),
        ),
        markup=False,
        highlight=False,
    )


def init_translator(lang: Optional[str]) -> Translator:
    """
    Create the translator for the resolved language.

    Raises:
        typer.Exit: With the runtime-error code if the language is unsupported.
    """
    try:
        return Translator(resolve_language(lang))
    except UnsupportedLanguageError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=ExitCode.RUNTIME_ERROR) from e


def translate_config_error(
    translator: Translator, err: ConfigError | ValidationErrors
) -> str:
    """Render a config failure in the user's language."""
    if isinstance(err, ValidationErrors):
        return "; ".join(translator.t(e.code) for e in err.errors)
    if err.detail:
        return translator.t(err.code, err.detail)
    return translator.t(err.code)


def print_runtime_err(message: str, e: Exception) -> NoReturn:
    """
    Print a runtime failure on stderr and exit.

    Raises:
        typer.Exit: Always, with ExitCode.RUNTIME_ERROR.
    """
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
    original = getattr(e, "original_exception", None)
    if original:
        debug(f"Caused by: {type(original).__name__}: {original}")
    raise typer.Exit(code=ExitCode.RUNTIME_ERROR) from e


def print_unexpected_err(translator: Translator, e: Exception) -> NoReturn:
    """
    Print an unexpected exception without a stack trace and exit.

    Raises:
        typer.Exit: Always, with ExitCode.RUNTIME_ERROR.
    """
    message = translator.t("err.unexpected", type(e).__name__, e)
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
    if e.__cause__:
        debug(f"Caused by: {e.__cause__}")
    raise typer.Exit(code=ExitCode.RUNTIME_ERROR) from e


if __name__ == "__main__":
    app()
