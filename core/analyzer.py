"""
Rule evaluation: compares line counts with the configured limits.

Every file and every directory gets a severity. A count up to the limit
passes, a count up to the threshold (limit plus warning_threshold percent)
warns, anything above is an error. Directory totals only include the files
directly inside the directory, not those in its subdirectories.
"""

from collections import defaultdict
import posixpath

from core.config import Config
from models import (
    AnalysisReport,
    AnalysisResult,
    CountMode,
    LineCountResult,
    ResultType,
    ScanResult,
    Severity,
)


def calc_threshold(limit: int, threshold_pct: int) -> int:
    """Return the warn/error boundary, rounding the percentage part down."""
    return limit + limit * threshold_pct // 100


def judge_severity(lines: int, limit: int, threshold: int) -> Severity:
    if lines <= limit:
        return Severity.PASS
    if lines <= threshold:
        return Severity.WARN
    return Severity.ERROR


def calc_directory_lines(
    counts: list[LineCountResult], mode: CountMode
) -> dict[str, int]:
    """Sum the lines of each directory's direct children."""
    dir_lines: dict[str, int] = defaultdict(int)
    for lc in counts:
        path = lc.path.replace("\\", "/")
        directory = posixpath.dirname(path) or "."
        dir_lines[directory] += lc.lines_for(mode)
    return dir_lines


def analyze(
    counts: list[LineCountResult], scan_result: ScanResult, config: Config
) -> AnalysisReport:
    """
    Evaluate file and directory limits.

    Args:
        counts: Line counts whose paths are relative to the scanned target.
        scan_result: The scan that produced the counted files; its dirs are
            the directories to evaluate.
        config: Limits, threshold and count mode.

    Returns:
        An AnalysisReport with file results first (in input order), then
        directory results, plus the per-severity totals.
    """
    report = AnalysisReport()
    mode = config.mode
    rules = config.rules

    max_file = rules.max_lines_per_file
    max_dir = rules.max_lines_per_directory
    file_threshold = calc_threshold(max_file, rules.warning_threshold)
    dir_threshold = calc_threshold(max_dir, rules.warning_threshold)

    for lc in counts:
        lines = lc.lines_for(mode)
        report.record(
            AnalysisResult(
                path=lc.path.replace("\\", "/"),
                type=ResultType.FILE,
                lines=lines,
                limit=max_file,
                threshold=file_threshold,
                severity=judge_severity(lines, max_file, file_threshold),
            )
        )

    dir_lines = calc_directory_lines(counts, mode)
    for directory in scan_result.dirs:
        lines = dir_lines.get(directory, 0)
        report.record(
            AnalysisResult(
                path="./" if directory == "." else f"{directory}/",
                type=ResultType.DIRECTORY,
                lines=lines,
                limit=max_dir,
                threshold=dir_threshold,
                severity=judge_severity(lines, max_dir, dir_threshold),
            )
        )

    return report
