"""Command runner - runs one external program and captures its output."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from typing import Iterable, Iterator

from katas.exceptions import ExecutionError
from katas.models import CommandSpec
from katas.style import strip_ansi

logger = logging.getLogger(__name__)

# rustc/cargo diagnostics: `warning: ...`, `warning[E0xxx]: ...`
_WARNING_RE = re.compile(r"^warning(\[[^\]]+\])?:")
# Lines belonging to the diagnostic above: indented notes, `-->` locations,
# `|` gutters with or without a line number, `...` elisions.
_CONTINUATION_RE = re.compile(r"^(\s|\||=|-->|\d+\s*\||\.\.\.)")


def filter_warnings(lines: Iterable[bytes]) -> Iterator[bytes]:
    """
    Drop warning diagnostics from a stream of output lines.

    A diagnostic starts at a `warning:` line and takes the continuation
    lines after it. It ends at a blank line, which is dropped too, or at the
    first line that is not a continuation, which is then checked like any
    other line. Everything else passes through untouched.
    """
    in_warning = False
    for line in lines:
        raw = strip_ansi(line.decode("utf-8", errors="replace")).rstrip("\r\n")
        text = raw.strip()
        if in_warning:
            if not text:
                in_warning = False
                continue
            if _CONTINUATION_RE.match(raw):
                continue
            in_warning = False
        if _WARNING_RE.match(text):
            in_warning = True
            continue
        yield line


def run_cmd(spec: CommandSpec, output: bytearray) -> bool:
    """
    Run a command to completion, appending its output to `output`.

    Stdout and stderr share one pipe so the output keeps the order it was
    produced in.

    Args:
        spec: The program, arguments and working directory to use.
        output: Buffer to append to. Never cleared here.

    Returns:
        True if the program exited with code 0.

    Raises:
        ExecutionError: If the program could not be started.
    """
    env = None
    if spec.env:
        env = {**os.environ, **dict(spec.env)}

    logger.debug("Running %s: %s (cwd=%s)", spec.description, spec.command_line, spec.cwd)

    try:
        process = subprocess.Popen(
            spec.argv,
            cwd=spec.cwd,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except OSError as e:
        raise ExecutionError(
            f"Failed to run the command `{spec.description or spec.command_line}`: {e}",
            command=spec.command_line,
            cause=e,
        ) from e

    with process:
        assert process.stdout is not None
        lines: Iterable[bytes] = process.stdout
        if spec.hide_warnings:
            lines = filter_warnings(lines)
        for line in lines:
            output.extend(line)
        exit_code = process.wait()

    logger.debug("%s exited with code %d", spec.command_line, exit_code)
    return exit_code == 0
