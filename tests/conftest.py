"""Pytest fixtures for katas tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Optional
from unittest.mock import patch

import pytest

from katas.models import CommandSpec, Exercise


class FakeRunner:
    """Stands in for `run_cmd`, recording every spec it receives.

    Results are keyed by stage: the cargo subcommand (`build`, `clippy`,
    `test`), `compile` for circom, or `bin` for an exercise binary.
    Each call appends `<stage output>` to the buffer.
    """

    def __init__(self, results: Optional[dict[str, bool]] = None):
        self.results = results or {}
        self.calls: list[CommandSpec] = []

    @staticmethod
    def stage_of(spec: CommandSpec) -> str:
        if spec.program in ("cargo", "circom"):
            return spec.args[0]
        return "bin"

    @property
    def stages(self) -> list[str]:
        return [self.stage_of(spec) for spec in self.calls]

    def spec_for(self, stage: str) -> CommandSpec:
        for spec in self.calls:
            if self.stage_of(spec) == stage:
                return spec
        raise AssertionError(f"stage {stage} was never run")

    def __call__(self, spec: CommandSpec, output: bytearray) -> bool:
        self.calls.append(spec)
        stage = self.stage_of(spec)
        output.extend(f"<{stage} output>\n".encode())
        return self.results.get(stage, True)


@pytest.fixture
def fake_runner():
    """Patch the command runner. Call with a result map to configure it."""
    patchers = []

    def _install(results: Optional[dict[str, bool]] = None) -> FakeRunner:
        runner = FakeRunner(results)
        patcher = patch("katas.runner.command.run_cmd", runner)
        patcher.start()
        patchers.append(patcher)
        return runner

    yield _install

    for patcher in reversed(patchers):
        patcher.stop()


@pytest.fixture
def make_exercise() -> Callable[..., Exercise]:
    """Factory for exercises with sensible defaults."""

    def _make(name: str = "intro1", ext: str = "rs", **kwargs) -> Exercise:
        kwargs.setdefault("path", f"exercises/{name}.{ext}")
        return Exercise(name=name, ext=ext, **kwargs)

    return _make


@pytest.fixture
def python_script() -> Callable[[str], CommandSpec]:
    """Build a spec that runs a snippet with the current interpreter."""

    def _spec(code: str, **kwargs) -> CommandSpec:
        kwargs.setdefault("description", "python snippet")
        return CommandSpec(program=sys.executable, args=("-u", "-c", code), **kwargs)

    return _spec


@pytest.fixture
def exercise_binary(tmp_path: Path) -> Callable[[str, int, str], Path]:
    """Write an executable into `<tmp>/target/debug/` that prints and exits."""

    def _write(bin_name: str, exit_code: int = 0, text: str = "") -> Path:
        path = tmp_path / "target" / "debug" / bin_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            f"#!{sys.executable}\n"
            "import sys\n"
            f"sys.stdout.write({text!r})\n"
            f"sys.exit({exit_code})\n",
            encoding="utf-8",
        )
        os.chmod(path, 0o755)
        return path

    return _write


QUIZ_DOCUMENT = """\
# What is six times seven?

Answer with digits only.

```
42
```
"""


@pytest.fixture
def quiz_file(tmp_path: Path) -> Path:
    """A well-formed quiz document under `<tmp>/exercises/`."""
    path = tmp_path / "exercises" / "quiz1.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(QUIZ_DOCUMENT, encoding="utf-8")
    return path
