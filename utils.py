"""
General utility functions for the CLI application.

Console output goes through Rich: `console` for reports on stdout,
`err_console` for errors and diagnostics on stderr.
"""

from rich.console import Console

console: Console = Console()
err_console: Console = Console(stderr=True)

_verbose: bool = False


def set_verbose(enabled: bool) -> None:
    """Turn debug output on or off for the rest of the process."""
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def debug(
    *values: object,
    sep: str = " ",
    end: str = "\n",
) -> None:
    """
    Print a debug message on stderr with orange formatting.

    Messages are only printed when verbose output was enabled with
    `set_verbose(True)` (the `--verbose` flag). Markup in the values is not
    interpreted, so file paths with brackets print as-is.

    Args:
        *values: Objects to print. All values are converted to strings.
        sep: Separator string between values. Defaults to a single space.
        end: String appended after the last value. Defaults to newline.
    """
    if not _verbose:
        return

    message = sep.join(str(v) for v in values)
    err_console.print(
        f"DEBUG: {message}",
        end=end,
        style="orange1",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
