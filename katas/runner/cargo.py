"""Cargo invoker - one build/clippy/test action for an exercise binary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from katas import style
from katas.models import CommandSpec
from katas.runner import command

logger = logging.getLogger(__name__)

# Manifest of the development checkout, relative to the repository root.
DEV_MANIFEST = "dev/Cargo.toml"


@dataclass
class CargoCommand:
    """A single cargo subcommand scoped to one exercise binary."""

    subcommand: str
    bin_name: str
    target_dir: Path
    description: str
    args: tuple[str, ...] = ()
    hide_warnings: bool = False
    dev: bool = False
    cargo: str = "cargo"
    cwd: Optional[Path] = None

    def build_args(self) -> list[str]:
        """Arguments following the cargo executable."""
        args = [self.subcommand]
        if self.dev:
            args += ["--manifest-path", DEV_MANIFEST]
        args += [
            "--target-dir",
            str(self.target_dir),
            "--color",
            "always",
            "-q",
            "--bin",
            self.bin_name,
        ]
        args += self.args
        return args

    def to_spec(self) -> CommandSpec:
        env = (("RUSTFLAGS", "-A warnings"),) if self.hide_warnings else ()
        return CommandSpec(
            program=self.cargo,
            args=tuple(self.build_args()),
            cwd=self.cwd,
            description=self.description,
            hide_warnings=self.hide_warnings,
            env=env,
        )

    def run(self, output: bytearray) -> bool:
        """Write the description header, then run cargo into `output`."""
        output.extend(f"{style.header(self.description)}\n".encode())
        success = command.run_cmd(self.to_spec(), output)
        logger.info("%s (%s): %s", self.description, self.bin_name, "ok" if success else "failed")
        return success
