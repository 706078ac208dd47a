"""
Katas

Runs small programming exercises through their toolchains (cargo, circom,
or a Markdown quiz) and reduces the stages to a single pass/fail verdict.
"""

from katas.catalog import ExerciseCatalog
from katas.config import KataConfig, detect_dev_mode, in_official_repo
from katas.exceptions import (
    CatalogError,
    ConfigurationError,
    DocumentParseError,
    ExecutionError,
    ExerciseNotFoundError,
    ExtractionError,
    KataError,
    UnsupportedExerciseError,
)
from katas.models import CommandSpec, Exercise, ExerciseKind, QuestionAnswer
from katas.runner import ExercisePipeline

__version__ = "0.1.0"
__all__ = [
    # Models
    "Exercise",
    "ExerciseKind",
    "CommandSpec",
    "QuestionAnswer",
    # Config
    "KataConfig",
    "detect_dev_mode",
    "in_official_repo",
    # Catalog
    "ExerciseCatalog",
    # Pipeline
    "ExercisePipeline",
    # Exceptions
    "KataError",
    "ExecutionError",
    "DocumentParseError",
    "ExtractionError",
    "UnsupportedExerciseError",
    "ExerciseNotFoundError",
    "CatalogError",
    "ConfigurationError",
]
