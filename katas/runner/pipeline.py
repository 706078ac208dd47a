"""Exercise pipeline - runs the stages for one exercise and returns a verdict.

Each stage appends to a shared output buffer and reports success as a bool.
The first failing required stage ends the run. Problems that stop a stage
from running at all (missing toolchain, malformed quiz, unknown exercise
type) are raised as `KataError` subclasses instead.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from katas import style
from katas.config import KataConfig
from katas.exceptions import UnsupportedExerciseError
from katas.models import CommandSpec, Exercise, ExerciseKind
from katas.runner import command
from katas.runner.cargo import CargoCommand
from katas.runner.circom import CircomCommand, generate_proof, verify_proof
from katas.runner.quiz import run_quiz

logger = logging.getLogger(__name__)

# `--profile test` is required to also check code with `#[cfg(test)]`.
CLIPPY_ARGS = ("--profile", "test")
CLIPPY_STRICT_ARGS = CLIPPY_ARGS + ("--", "-D", "warnings")
TEST_ARGS = ("--", "--color", "always", "--show-output")

FAILED_RUN_BANNER = "The exercise didn't run successfully (nonzero exit code)"


class ExercisePipeline:
    """Build, check and run exercises of every supported kind."""

    def __init__(
        self,
        target_dir: Path,
        circuit_dir: Path,
        root: Optional[Path] = None,
        dev: bool = False,
        cargo: str = "cargo",
        circom: str = "circom",
        read_answer: Callable[[str], str] = input,
    ):
        """
        Initialize the pipeline.

        Args:
            target_dir: Cargo target directory shared by every stage.
            circuit_dir: Directory holding the circom circuits.
            root: Repository root that exercise paths are relative to.
            dev: Developing katas itself. Never set for learners.
            cargo: Cargo executable.
            circom: Circom executable.
            read_answer: Prompts for and returns one line of quiz input.
        """
        self.target_dir = Path(target_dir)
        self.circuit_dir = Path(circuit_dir)
        self.root = Path(root) if root is not None else Path(".")
        self.dev = dev
        self.cargo = cargo
        self.circom = circom
        self.read_answer = read_answer

    @classmethod
    def from_config(cls, config: KataConfig, read_answer: Callable[[str], str] = input) -> ExercisePipeline:
        assert config.target_dir is not None
        assert config.circuit_dir is not None
        return cls(
            target_dir=config.target_dir,
            circuit_dir=config.circuit_dir,
            root=config.root,
            dev=config.dev,
            cargo=config.cargo,
            circom=config.circom,
            read_answer=read_answer,
        )

    def run_exercise(self, exercise: Exercise, output: bytearray) -> bool:
        """
        Run every stage of an exercise. `output` is cleared first.

        Raises:
            UnsupportedExerciseError: If no pipeline handles the exercise's type.
        """
        kind = exercise.kind
        logger.info("Running %s exercise %s", exercise.ext, exercise.name)

        if kind is ExerciseKind.RUST:
            return self.run(exercise, exercise.name, output)
        elif kind is ExerciseKind.CIRCOM:
            return self.run_circom(exercise, output)
        elif kind is ExerciseKind.MARKDOWN:
            return self.run_markdown(exercise, output)

        raise UnsupportedExerciseError(exercise.name, exercise.ext)

    def run_solution(self, exercise: Exercise, output: bytearray) -> bool:
        """Same as `run_exercise` for Rust, but against the `<name>_sol` binary."""
        if exercise.kind is not ExerciseKind.RUST:
            raise UnsupportedExerciseError(exercise.name, exercise.ext)
        return self.run(exercise, exercise.solution_bin_name, output)

    def _cargo(
        self,
        subcommand: str,
        bin_name: str,
        description: str,
        args: tuple[str, ...] = (),
        hide_warnings: bool = False,
    ) -> CargoCommand:
        return CargoCommand(
            subcommand=subcommand,
            bin_name=bin_name,
            target_dir=self.target_dir,
            description=description,
            args=args,
            hide_warnings=hide_warnings,
            dev=self.dev,
            cargo=self.cargo,
            cwd=self.root,
        )

    def run(self, exercise: Exercise, bin_name: str, output: bytearray) -> bool:
        """Compile, check and run a Rust exercise or its solution."""
        output.clear()

        build = self._cargo("build", bin_name, "cargo build …")
        if not build.run(output):
            return False

        # Clippy reports the same diagnostics as the build.
        output.clear()

        clippy_args = CLIPPY_STRICT_ARGS if exercise.strict_clippy else CLIPPY_ARGS
        clippy = self._cargo("clippy", bin_name, "cargo clippy …", args=clippy_args)
        if not clippy.run(output):
            return False

        if not exercise.test:
            return self.run_bin(bin_name, output)

        # Warnings were already shown by Clippy.
        test = self._cargo("test", bin_name, "cargo test …", args=TEST_ARGS, hide_warnings=True)
        test_success = test.run(output)

        # Run even if the tests failed so the learner sees the program output.
        run_success = self.run_bin(bin_name, output)

        return test_success and run_success

    def bin_path(self, bin_name: str) -> Path:
        return self.target_dir / "debug" / bin_name

    def run_bin(self, bin_name: str, output: bytearray) -> bool:
        """
        Run an already built exercise binary and append its output.

        A failure banner is appended on a nonzero exit so that an exercise
        exiting without printing anything still shows why it isn't done.
        """
        output.extend(f"{style.underlined('Output')}\n".encode())

        path = self.bin_path(bin_name)
        spec = CommandSpec(program=str(path), description=str(path))
        success = command.run_cmd(spec, output)

        if not success:
            output.extend(f"{style.failure(FAILED_RUN_BANNER)}\n".encode())

        return success

    def run_circom(self, exercise: Exercise, output: bytearray) -> bool:
        """Compile a circuit, then prove and verify it."""
        output.clear()
        output.extend(f"{style.underlined('Compiling Circom circuit...')}\n".encode())

        compile_cmd = CircomCommand(
            subcommand="compile",
            circuit_name=exercise.name,
            circuit_dir=self.circuit_dir,
            description="Compiling Circom circuit",
            circom=self.circom,
        )
        compile_success = compile_cmd.run(output)
        if not compile_success:
            return False

        if not generate_proof(exercise.name, self.circuit_dir, output):
            return False

        return verify_proof(exercise.name, self.circuit_dir, output)

    def run_markdown(self, exercise: Exercise, output: bytearray) -> bool:
        """Ask the quiz question and compare the reply to the answer."""
        output.clear()
        return run_quiz(self.root / exercise.path, output, self.read_answer)
