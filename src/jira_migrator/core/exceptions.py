from __future__ import annotations

from pathlib import Path


class MigrationError(RuntimeError):
    """
    Base class for errors that abort a run.
    """


class ConfigError(MigrationError, ValueError):
    """
    Raised when a configuration file or value cannot be used.
    """


class InputFileNotFoundError(MigrationError):
    def __init__(self, path: Path, role: str) -> None:
        self.path = path
        self.role = role
        super().__init__(f"{role} input file not found: {path}")


class InputFormatError(MigrationError):
    """
    Raised when an input file exists but cannot be parsed as CSV with a header row.
    """


class OutputWriteError(MigrationError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to write output {path}: {reason}")
