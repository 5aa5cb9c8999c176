"""
Custom exception classes for the linecap CLI.

This module defines application-specific exceptions raised while loading the
configuration, walking the target directory and counting lines. Each exception
keeps enough context (paths, translation codes, the original exception) for
the CLI to print a useful message and pick the runtime-error exit code.
"""

from typing import Optional


class FileIOError(Exception):
    """
    Base exception for file I/O errors.

    Attributes:
        message: A human-readable error message describing what went wrong.
        file_path: The path of the file involved, if known.
        original_exception: The underlying exception that caused this error, if any.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or "A file I/O error occurred"
        super().__init__(self.message)
        self.file_path = file_path
        self.original_exception = original_exception


class FileReadError(FileIOError):
    """
    Raised when a file cannot be opened or read.

    Covers missing files, permission problems, directories passed as files,
    and any OSError raised while streaming the file's lines.
    """


class LineTooLongError(FileReadError):
    """
    Raised when a single physical line exceeds the line-buffer capacity.

    Attributes:
        limit: The maximum accepted line length in bytes.
    """

    def __init__(
        self,
        file_path: Optional[str] = None,
        limit: int = 0,
    ):
        super().__init__(
            message=f"Line exceeds {limit} bytes in file: {file_path}",
            file_path=file_path,
        )
        self.limit = limit


class FileWriteError(FileIOError):
    """Raised when data cannot be written to a file."""


class ScanError(Exception):
    """
    Raised when the target directory cannot be walked.

    Attributes:
        message: A human-readable error message.
        path: The path that could not be read.
        original_exception: The underlying exception, if any.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or "Failed to scan files"
        super().__init__(self.message)
        self.path = path
        self.original_exception = original_exception


class ConfigError(Exception):
    """
    Raised when the configuration file cannot be found, parsed or used.

    Attributes:
        code: Translation key identifying the failure (e.g., "err.config_not_found").
        detail: Optional detail substituted into the translated message.
        message: The English message.
    """

    def __init__(self, code: str, message: str, detail: Optional[str] = None):
        self.code = code
        self.detail = detail
        self.message = message
        super().__init__(self.message)


class ValidationError(Exception):
    """A single invalid configuration value."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(self.message)


class ValidationErrors(Exception):
    """
    Raised when one or more configuration values are invalid.

    All failures are collected before raising, so the user sees every problem
    at once instead of fixing them one at a time.

    Attributes:
        errors: The individual validation failures, in check order.
    """

    def __init__(self, errors: list[ValidationError]):
        self.errors = errors
        self.message = "; ".join(e.message for e in errors)
        super().__init__(self.message)

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]


class UnsupportedLanguageError(ValueError):
    """Raised when a message catalogue is requested for an unknown language."""

    def __init__(self, lang: str):
        self.lang = lang
        super().__init__(f"unsupported language: {lang}")
