"""
Per-file line counting and the concurrent multi-file orchestrator.

count_file reads one file and produces its LineCountResult. count_files runs
count_file for many paths on a thread pool, writes each result at its input
index, and re-raises the first failure once every unit has finished.
"""

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import BinaryIO, Iterator

from constants import MAX_LINE_BYTES
from core.classifier import classify_lines
from core.exceptions import FileReadError, LineTooLongError
from core.languages import detect_language
from models import CountMode, LineCountResult
from ui.progress_display import NoOpProgressDisplay, ProgressDisplay
from utils import debug


def count_file(
    path: str,
    mode: CountMode,
    max_line_bytes: int = MAX_LINE_BYTES,
) -> LineCountResult:
    """
    Count the lines of a single file.

    In CountMode.ALL every physical line is counted and code_lines equals
    total_lines. In CountMode.CODE_ONLY the grammar is detected from the file
    extension and each line goes through the classifier; files without a known
    grammar count every non-blank line as code.

    Args:
        path: Path of the file to read. Returned unchanged in the result.
        mode: The counting mode.
        max_line_bytes: Longest accepted physical line, terminator excluded.

    Returns:
        The LineCountResult for the file. An empty file yields 0/0.

    Raises:
        FileReadError: If the file cannot be opened or read.
        LineTooLongError: If a line is longer than max_line_bytes.
    """
    try:
        with Path(path).open("rb") as fh:
            lines = _iter_lines(fh, path, max_line_bytes)
            if mode == CountMode.CODE_ONLY:
                total, code = classify_lines(lines, detect_language(path))
            else:
                total = sum(1 for _ in lines)
                code = total
    except OSError as e:
        raise FileReadError(
            message=f"Failed to read file: {path}",
            file_path=str(path),
            original_exception=e,
        ) from e

    return LineCountResult(path=path, total_lines=total, code_lines=code)


def _iter_lines(fh: BinaryIO, path: str, max_line_bytes: int) -> Iterator[str]:
    """
    Yield decoded physical lines without their terminators.

    Lines are split on "\\n" and a trailing "\\r" is dropped. A final line without
    a terminator is still yielded. Reads are capped so an oversized line is
    detected without loading it whole. Undecodable bytes become U+FFFD, so a
    line in a legacy encoding is never mistaken for a blank one.
    """
    while True:
        raw = fh.readline(max_line_bytes + 1)
        if not raw:
            return
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        elif len(raw) > max_line_bytes:
            raise LineTooLongError(file_path=str(path), limit=max_line_bytes)
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        yield raw.decode("utf-8", errors="replace")


def count_files(
    paths: list[str],
    mode: CountMode,
    *,
    max_workers: int | None = None,
    progress_display: ProgressDisplay | None = None,
) -> list[LineCountResult]:
    """
    Count the lines of many files concurrently.

    One unit of work is submitted per path. Without max_workers the pool is as
    wide as the input, so every file is read in parallel. Each future is tagged
    with its input index and its result is stored at that index, so the output
    order always matches the input order regardless of completion order.

    Every unit runs to completion. If any of them failed, the first failure
    seen on the completion stream is raised and no partial result is returned;
    which failure wins among several is not specified.

    Args:
        paths: Files to count, in the order results should be returned.
        mode: The counting mode applied to every file.
        max_workers: Optional bound on concurrently running units.
        progress_display: Optional progress display, advanced once per
            finished unit. Defaults to a no-op display.

    Returns:
        One LineCountResult per input path, in input order.

    Raises:
        FileReadError: The first read failure encountered.
    """
    if not paths:
        return []

    display = progress_display if progress_display is not None else NoOpProgressDisplay()
    workers = max_workers if max_workers is not None else len(paths)
    results: list[LineCountResult | None] = [None] * len(paths)
    first_error: Exception | None = None

    debug(f"Counting {len(paths)} files in {mode} mode with {workers} workers")

    with display as pd:
        pd.on_start(f"Counting lines in {len(paths)} files...", total=len(paths))

        with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
            futures: dict[Future[LineCountResult], int] = {
                executor.submit(count_file, path, mode): idx
                for idx, path in enumerate(paths)
            }

            for future in as_completed(futures):
                idx = futures[future]
                pd.on_update(advance=1)
                try:
                    results[idx] = future.result()
                except Exception as e:  # noqa: BLE001
                    debug(f"Failed to count {paths[idx]}: {e}")
                    if first_error is None:
                        first_error = e

        if first_error is not None:
            pd.on_fail(f"Failed to count lines: {first_error}")
            raise first_error

        pd.on_complete(f"Counted lines in {len(paths)} files.", completed=len(paths))

    return [r for r in results if r is not None]
