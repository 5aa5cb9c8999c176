"""
Directory walking with gitignore-style exclusion.

The walk is depth-first in lexical order, like `git ls-files` output. Excluded
directories are pruned without descending into them. Symbolic links are listed
as files and never followed into.
"""

import os
from pathlib import Path

import pathspec

from core.config import Config
from core.exceptions import ScanError
from models import FileEntry, ScanResult
from utils import debug


def build_matcher(patterns: list[str]) -> pathspec.GitIgnoreSpec | None:
    """Compile exclude patterns, or return None when there are none."""
    if not patterns:
        return None
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def should_exclude(
    matcher: pathspec.GitIgnoreSpec | None, rel_path: str, is_dir: bool
) -> bool:
    if matcher is None:
        return False
    # Directory-only patterns ("vendor/") need the trailing slash to match
    return matcher.match_file(rel_path + "/" if is_dir else rel_path)


def scan(target: Path, config: Config) -> ScanResult:
    """
    Walk a target directory and collect the files to check.

    Args:
        target: Directory to walk.
        config: Configuration providing the exclude patterns.

    Returns:
        A ScanResult with relative, forward-slash file paths in walk order, and
        the directories that directly contain kept files, in first-discovery
        order ("." for the target itself).

    Raises:
        ScanError: If the target is not a directory or a directory cannot be read.
        ConfigError: If the ignore file cannot be read.
    """
    root = target.resolve()
    if not root.is_dir():
        raise ScanError(message=f"Not a directory: {target}", path=str(target))

    matcher = build_matcher(config.exclude_patterns())
    result = ScanResult()
    seen_dirs: set[str] = set()

    def walk(directory: Path, rel_dir: str) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise ScanError(
                message=f"Failed to read directory: {directory}",
                path=str(directory),
                original_exception=e,
            ) from e

        for entry in entries:
            rel = f"{rel_dir}/{entry.name}" if rel_dir != "." else entry.name

            if entry.is_dir(follow_symlinks=False):
                if should_exclude(matcher, rel, True):
                    debug(f"Skipping directory {rel}")
                    continue
                walk(Path(entry.path), rel)
                continue

            if should_exclude(matcher, rel, False):
                continue

            result.files.append(FileEntry(path=rel, dir=rel_dir))
            if rel_dir not in seen_dirs:
                seen_dirs.add(rel_dir)
                result.dirs.append(rel_dir)

    walk(root, ".")
    debug(f"Scanned {len(result.files)} files in {len(result.dirs)} directories")
    return result
