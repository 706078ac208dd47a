"""
Katas Runner Module

Drives the toolchains for one exercise and reduces the stages to a verdict.
"""

from katas.runner.cargo import CargoCommand
from katas.runner.circom import CircomCommand, generate_proof, verify_proof
from katas.runner.command import filter_warnings, run_cmd
from katas.runner.pipeline import ExercisePipeline
from katas.runner.quiz import (
    ask_question,
    extract_question_and_answer,
    parse_document,
    run_quiz,
)

__all__ = [
    # Command runner
    "run_cmd",
    "filter_warnings",
    # Toolchains
    "CargoCommand",
    "CircomCommand",
    "generate_proof",
    "verify_proof",
    # Quiz
    "parse_document",
    "extract_question_and_answer",
    "ask_question",
    "run_quiz",
    # Orchestration
    "ExercisePipeline",
]
