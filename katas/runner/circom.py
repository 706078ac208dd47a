"""Circom invoker - compile, prove and verify stages for circuit exercises."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from katas import style
from katas.models import CommandSpec
from katas.runner import command

logger = logging.getLogger(__name__)

# Constraint system, witness generator and symbol table.
COMPILE_ARGS = ("--r1cs", "--wasm", "--sym")


@dataclass
class CircomCommand:
    """A circom action against one circuit in `circuit_dir`."""

    subcommand: str
    circuit_name: str
    circuit_dir: Path
    description: str
    args: tuple[str, ...] = COMPILE_ARGS
    circom: str = "circom"

    @property
    def circuit_file(self) -> str:
        return f"{self.circuit_name}.circom"

    def build_args(self) -> list[str]:
        return [self.subcommand, self.circuit_file, *self.args]

    def to_spec(self) -> CommandSpec:
        return CommandSpec(
            program=self.circom,
            args=tuple(self.build_args()),
            cwd=self.circuit_dir,
            description=self.description,
        )

    def run(self, output: bytearray) -> bool:
        success = command.run_cmd(self.to_spec(), output)
        logger.info("%s (%s): %s", self.description, self.circuit_name, "ok" if success else "failed")
        return success


# No prover is integrated yet. The two stages below always pass but stay
# in the pipeline so a prover can be wired in without changing its shape.

def generate_proof(circuit_name: str, circuit_dir: Path, output: bytearray) -> bool:
    """Proof generation stage. Currently a no-op that succeeds."""
    output.extend(f"{style.underlined('Generating proof...')}\n".encode())
    logger.debug("Proof generation for %s is not implemented, passing", circuit_name)
    return True


def verify_proof(circuit_name: str, circuit_dir: Path, output: bytearray) -> bool:
    """Proof verification stage. Currently a no-op that succeeds."""
    output.extend(f"{style.underlined('Verifying proof...')}\n".encode())
    logger.debug("Proof verification for %s is not implemented, passing", circuit_name)
    return True
