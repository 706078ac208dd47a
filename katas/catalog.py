"""Exercise catalog - loads exercise descriptions from the YAML info file.

Example ``info.yaml``::

    exercises:
      - name: variables1
        dir: variables
        hint: Declare the variable with `let`.
      - name: multiplier
        ext: circom
      - name: ownership_quiz
        ext: md
        test: false
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml  # type: ignore

from katas.exceptions import CatalogError, ExerciseNotFoundError
from katas.models import Exercise

logger = logging.getLogger(__name__)

EXERCISES_DIR = "exercises"


class ExerciseCatalog:
    """Load exercise definitions from an info file."""

    def __init__(self, info_file: Path):
        self.info_file = Path(info_file)
        self._exercises: Optional[list[Exercise]] = None

    @staticmethod
    def exercise_path(name: str, ext: str, dir: Optional[str] = None) -> str:
        """Path of an exercise file starting with the `exercises/` directory."""
        parts = [EXERCISES_DIR]
        if dir:
            parts.append(dir)
        parts.append(f"{name}.{ext}")
        return "/".join(parts)

    def _parse_exercise(self, data: dict) -> Exercise:
        """Parse an exercise dictionary into an Exercise object."""
        if not isinstance(data, dict):
            raise CatalogError(
                f"Exercise entry must be a mapping, got: {data!r}",
                file_path=str(self.info_file),
            )
        try:
            name = data["name"]
        except KeyError as e:
            raise CatalogError(
                f"Missing required field in exercise: {e}",
                file_path=str(self.info_file),
            )

        ext = str(data.get("ext", "rs"))
        dir = data.get("dir")

        return Exercise(
            name=name,
            ext=ext,
            path=self.exercise_path(name, ext, dir),
            test=bool(data.get("test", True)),
            strict_clippy=bool(data.get("strict_clippy", False)),
            hint=str(data.get("hint", "")).strip(),
            done=bool(data.get("done", False)),
            dir=dir,
        )

    def load(self) -> list[Exercise]:
        """
        Load all exercises in manifest order.

        Raises:
            CatalogError: If the info file is missing or malformed.
        """
        if self._exercises is not None:
            return self._exercises

        try:
            with open(self.info_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise CatalogError(
                f"Failed to read info file: {e}",
                file_path=str(self.info_file),
                cause=e,
            )
        except yaml.YAMLError as e:
            raise CatalogError(
                f"Invalid YAML in info file: {e}",
                file_path=str(self.info_file),
                cause=e,
            )

        if not isinstance(data, dict) or not isinstance(data.get("exercises"), list):
            raise CatalogError(
                "Info file must contain an `exercises` list",
                file_path=str(self.info_file),
            )

        exercises = [self._parse_exercise(item) for item in data["exercises"]]

        names = [e.name for e in exercises]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise CatalogError(
                f"Duplicate exercise names: {', '.join(duplicates)}",
                file_path=str(self.info_file),
            )

        logger.debug("Loaded %d exercises from %s", len(exercises), self.info_file)
        self._exercises = exercises
        return exercises

    def get(self, name: str) -> Exercise:
        """
        Look up an exercise by name.

        Raises:
            ExerciseNotFoundError: If no exercise has that name.
        """
        for exercise in self.load():
            if exercise.name == name:
                return exercise
        raise ExerciseNotFoundError(name)

    def names(self) -> list[str]:
        return [e.name for e in self.load()]
