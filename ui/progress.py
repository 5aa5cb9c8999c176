"""
Progress bar creation and management module using Rich.

Progress bars are drawn on stderr and removed once finished, so they never mix
with the report written to stdout. States are colour coded (in progress,
complete, error).
"""

from enum import StrEnum
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
)


class ProgressState(StrEnum):
    """
    Enumeration of progress bar states with associated color codes.

    Attributes:
        IN_PROGRESS: Magenta color for tasks currently being processed.
        COMPLETE: Green color for successfully completed tasks.
        ERROR: Red color for tasks that have failed.
    """

    IN_PROGRESS = "magenta"
    COMPLETE = "green"
    ERROR = "red"


def create_progress(console: Optional[Console] = None) -> Progress:
    """
    Creates a Rich Progress instance with the standard linecap columns.

    Args:
        console: Console to draw on. Defaults to a stderr console.

    Returns:
        Progress: A transient progress instance ready for task management.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console if console is not None else Console(stderr=True),
        transient=True,
    )


def create_task(progress: Progress, description: str, total: Optional[int]) -> TaskID:
    """Adds a task in the IN_PROGRESS state and returns its id."""
    return progress.add_task(f"[{ProgressState.IN_PROGRESS}]{description}", total=total)


def update_progress(
    progress: Progress,
    task: TaskID,
    progress_state: Optional[ProgressState] = None,
    total: Optional[float] = None,
    completed: Optional[float] = None,
    advance: Optional[float] = None,
    description: Optional[str] = None,
) -> None:
    """
    Updates a progress task with new state, progress, or description.

    `progress_state` and `description` go together: the description is
    styled with the state color.

    Raises:
        ValueError: If only one of progress_state and description is given.
    """
    if bool(progress_state) != bool(description):
        raise ValueError("progress_state and description must be provided together.")

    # Rich treats description=None as "clear", so it is left out entirely
    if description:
        progress.update(
            task,
            total=total,
            completed=completed,
            advance=advance,
            description=f"[{progress_state}]{description}",
        )
    else:
        progress.update(task, total=total, completed=completed, advance=advance)
