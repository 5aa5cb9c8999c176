"""
Progress reporting protocol for decoupling UI from the counting engine.

The orchestrator reports progress through this protocol, so the engine never
imports Rich directly and tests (or JSON output) can use the no-op variant.
"""

from types import TracebackType
from typing import Protocol

from rich.console import Console
from rich.progress import Progress, TaskID

from ui.progress import (
    ProgressState,
    create_progress,
    create_task,
    update_progress,
)


class ProgressDisplay(Protocol):
    """
    Protocol for progress reporting.

    The lifecycle is:
    1. Context manager entry (__enter__)
    2. on_start() - Called once at the beginning
    3. on_update() - Called once per finished unit of work
    4. on_complete() or on_fail() - Called once at the end
    5. Context manager exit (__exit__)
    """

    def __enter__(self) -> "ProgressDisplay":
        """Enter the progress context."""

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the progress context."""

    def on_start(self, description: str, total: int | None) -> None:
        """Start a task with an optional total (None means indeterminate)."""

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        """Advance the counter, update the description, or both."""

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        """Mark the task as complete."""

    def on_fail(self, description: str) -> None:
        """Mark the task as failed."""


class RichProgressDisplay:
    """
    Rich UI implementation of ProgressDisplay.

    Draws on a stderr console by default; pass a console to redirect it.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> "RichProgressDisplay":
        self._progress = create_progress(self._console)
        self._progress.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._progress:
            self._progress.__exit__(exc_type, exc_val, exc_tb)

    def _require_task(self, method: str) -> tuple[Progress, TaskID]:
        if not self._progress:
            raise RuntimeError(
                "RichProgressDisplay must be used as a context manager. "
                "Use: with RichProgressDisplay() as rpd:"
            )
        if self._task is None:
            raise RuntimeError(f"on_start() must be called before {method}()")
        return self._progress, self._task

    def on_start(self, description: str, total: int | None) -> None:
        """
        Create the Rich task.

        Raises:
            RuntimeError: If not used as a context manager.
        """
        if not self._progress:
            raise RuntimeError(
                "RichProgressDisplay must be used as a context manager. "
                "Use: with RichProgressDisplay() as rpd:"
            )
        self._task = create_task(self._progress, description, total=total)

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        """
        Advance the task and/or replace its description.

        Raises:
            RuntimeError: If used outside the context or before on_start().
            ValueError: If neither advance nor description is provided.
        """
        progress, task = self._require_task("on_update")

        if not (advance or description):
            raise ValueError(
                "At least one of 'advance' or 'description' must be provided to on_update()"
            )

        if description:
            update_progress(
                progress,
                task,
                ProgressState.IN_PROGRESS,
                advance=advance,
                description=description,
            )
        else:
            update_progress(progress, task, advance=advance)

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        progress, task = self._require_task("on_complete")
        update_progress(
            progress,
            task,
            ProgressState.COMPLETE,
            completed=completed,
            total=total,
            description=description,
        )

    def on_fail(self, description: str) -> None:
        progress, task = self._require_task("on_fail")
        update_progress(progress, task, ProgressState.ERROR, description=description)


class NoOpProgressDisplay:
    """No-op implementation of ProgressDisplay for tests and machine output."""

    def __enter__(self) -> "NoOpProgressDisplay":
        return self

    def __exit__(self, *args) -> None:
        pass

    def on_start(self, description: str, total: int | None) -> None:
        pass

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        pass

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        pass

    def on_fail(self, description: str) -> None:
        pass
