"""Custom exceptions for the katas runner.

A failing exercise is never an exception: stages report that with ``False``.
These exceptions mean a stage could not be attempted at all.
"""

from __future__ import annotations

from typing import Optional


class KataError(Exception):
    """Base exception for all katas errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ExecutionError(KataError):
    """Raised when an external program cannot be spawned."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        self.command = command
        self.cause = cause
        details = {"command": command}
        if cause:
            details["cause"] = str(cause)
        super().__init__(message, details)


class DocumentParseError(KataError):
    """Raised when a question document cannot be read or parsed."""

    def __init__(self, message: str, file_path: Optional[str] = None, cause: Optional[Exception] = None):
        self.file_path = file_path
        self.cause = cause
        details = {"file_path": file_path}
        if cause:
            details["cause"] = str(cause)
        super().__init__(message, details)


class ExtractionError(KataError):
    """Raised when a document has no heading-led question or no code-block answer."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        self.file_path = file_path
        super().__init__(message, {"file_path": file_path})


class UnsupportedExerciseError(KataError):
    """Raised when no pipeline exists for an exercise's file type."""

    def __init__(self, exercise_name: str, ext: str):
        self.exercise_name = exercise_name
        self.ext = ext
        super().__init__(
            f"Unsupported exercise type: {exercise_name} (.{ext})",
            {"exercise": exercise_name, "ext": ext},
        )


class ExerciseNotFoundError(KataError):
    """Raised when an exercise name doesn't exist in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Exercise not found: {name}", {"name": name})


class CatalogError(KataError):
    """Raised when the exercise catalog cannot be loaded."""

    def __init__(self, message: str, file_path: Optional[str] = None, cause: Optional[Exception] = None):
        self.file_path = file_path
        self.cause = cause
        details = {"file_path": file_path}
        if cause:
            details["cause"] = str(cause)
        super().__init__(message, details)


class ConfigurationError(KataError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        super().__init__(message, {"config_key": config_key})
