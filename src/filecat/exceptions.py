from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FilecatError(Exception):
    """Base exception for fatal configuration errors in filecat."""

    def __str__(self) -> str:
        return self.__class__.__doc__ or self.__class__.__name__


@dataclass(frozen=True)
class InvalidPatternError(FilecatError):
    """Raised when an exclusion pattern is not a valid glob."""

    pattern: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid pattern '{self.pattern}': {self.reason}"


@dataclass(frozen=True)
class InvalidInputError(FilecatError):
    """Raised when an input path pattern is not a valid glob."""

    pattern: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid input pattern '{self.pattern}': {self.reason}"


@dataclass(frozen=True)
class NoInputPathsError(FilecatError):
    """Raised when no file or directory path was given on the command line."""

    message: str = "No files or directories provided"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class OutputPathExistsError(FilecatError):
    """Raised when the requested output file already exists."""

    path: Path
    message: str = "Output file already exists"

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


@dataclass(frozen=True)
class OutputPathIsDirectoryError(FilecatError):
    """Raised when the requested output path is a directory."""

    path: Path
    message: str = "Output path is a directory"

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"
