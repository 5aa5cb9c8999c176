"""
Type definitions and data models used across the linecap CLI application.

This module contains shared enums and dataclasses that flow between the
counting engine, the analyzer and the reporters, so that every stage agrees on
the same vocabulary (count modes, severities, result shapes).
"""

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum


class CountMode(StrEnum):
    """
    How lines are counted for each file.

    ALL counts every physical line. CODE_ONLY drops blank lines and comments,
    using the comment grammar detected from the file extension.
    """

    ALL = "all"
    CODE_ONLY = "code_only"


class Severity(StrEnum):
    PASS = "pass"
    WARN = "warn"
    ERROR = "error"


class ResultType(StrEnum):
    FILE = "file"
    DIRECTORY = "directory"


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


class ExitCode(IntEnum):
    """Process exit codes. Violations and runtime failures are kept apart."""

    OK = 0
    VIOLATION = 1
    RUNTIME_ERROR = 2


@dataclass(frozen=True)
class LanguageGrammar:
    """
    Comment syntax of one programming language.

    Attributes:
        name: Display name (e.g., "Python").
        extensions: File extensions, leading dot included (e.g., ".go").
        line_comment_prefixes: Prefixes that mark a trimmed line as a comment.
        block_comment_start: Opening block delimiter, empty when the language
            has no block comments.
        block_comment_end: Closing block delimiter, empty when the language
            has no block comments.
        docstring_delimiters: Triple-quote delimiters. When present they
            replace the block delimiters and follow the prefix/suffix rules
            of Python docstrings.
    """

    name: str
    extensions: frozenset[str]
    line_comment_prefixes: tuple[str, ...] = ()
    block_comment_start: str = ""
    block_comment_end: str = ""
    docstring_delimiters: tuple[str, ...] = ()

    @property
    def has_block_comments(self) -> bool:
        return bool(self.block_comment_start) or bool(self.docstring_delimiters)


@dataclass(frozen=True)
class LineCountResult:
    """
    Line counts of a single file.

    Attributes:
        path: The identifier the file was submitted under.
        total_lines: Number of physical lines.
        code_lines: Number of lines classified as code. Equal to total_lines
            in CountMode.ALL.
    """

    path: str
    total_lines: int
    code_lines: int

    def lines_for(self, mode: CountMode) -> int:
        return self.code_lines if mode == CountMode.CODE_ONLY else self.total_lines


@dataclass(frozen=True)
class FileEntry:
    path: str
    dir: str


@dataclass
class ScanResult:
    """
    Outcome of walking a target directory.

    Attributes:
        files: Kept files, relative to the target, forward-slash separated,
            in walk order.
        dirs: Directories that directly contain at least one kept file, in
            first-discovery order. The target itself is ".".
    """

    files: list[FileEntry] = field(default_factory=list)
    dirs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    path: str
    type: ResultType
    lines: int
    limit: int
    threshold: int
    severity: Severity


@dataclass
class AnalysisReport:
    results: list[AnalysisResult] = field(default_factory=list)
    errors: int = 0
    warnings: int = 0
    passed: int = 0

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.passed

    def record(self, result: AnalysisResult) -> None:
        self.results.append(result)
        if result.severity == Severity.PASS:
            self.passed += 1
        elif result.severity == Severity.WARN:
            self.warnings += 1
        else:
            self.errors += 1
