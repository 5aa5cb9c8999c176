from pathlib import Path
from typing import Protocol

from core.exceptions import FileWriteError


class FileWriter(Protocol):
    """
    Protocol defining the interface for file writing operations.

    Allows `init` to be tested without touching the filesystem.
    """

    def write_file(self, data: str, mode: str = "w") -> None:
        """
        Write data to a file.

        Args:
            data: String data to write.
            mode: File mode ("w" for write/truncate, "a" for append). Defaults to "w".
        """

    def exists(self) -> bool:
        """Return True when the target file already exists."""


class FilesystemFileWriter:
    def __init__(self, file_path: Path):
        self.file_path = file_path

    def exists(self) -> bool:
        return self.file_path.exists()

    def write_file(self, data: str, mode: str = "w") -> None:
        """
        Writes data to the target file.

        Args:
            data: String data to write
            mode: File mode ("w" for write/truncate, "a" for append)

        Raises:
            FileWriteError: If writing to the file fails.
        """
        try:
            with open(self.file_path, mode, encoding="utf-8") as f:
                f.write(data)
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to write to file: {self.file_path}",
                file_path=str(self.file_path),
                original_exception=e,
            ) from e


class MockFileWriter:
    """
    Mock implementation of FileWriter for testing.

    Records every write and keeps the resulting content in memory.
    """

    def __init__(self, existing_content: str | None = None):
        """
        Args:
            existing_content: Content the "file" starts with. None means the
                file does not exist yet.

        Attributes (for test inspection):
            write_file_calls: List of tuples (data, mode) passed to write_file()
            written_data: The content after all writes, or None if never written.
        """
        self.written_data: str | None = existing_content
        self.write_file_calls: list[tuple[str, str]] = []

    def exists(self) -> bool:
        return self.written_data is not None

    def write_file(self, data: str, mode: str = "w") -> None:
        self.write_file_calls.append((data, mode))
        if mode == "w" or self.written_data is None:
            self.written_data = data
        else:  # mode == "a"
            self.written_data += data
