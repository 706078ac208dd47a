"""ANSI styling for transcript headers and banners."""

from __future__ import annotations

import re

BOLD = "\033[1m"
UNDERLINE = "\033[4m"
RED = "\033[91m"
GREEN = "\033[92m"
BLUE = "\033[94m"
RESET = "\033[0m"

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def bold(text: str) -> str:
    return f"{BOLD}{text}{RESET}"


def underlined(text: str) -> str:
    return f"{UNDERLINE}{text}{RESET}"


def header(text: str) -> str:
    """Bold and underlined, used for toolchain descriptions."""
    return f"{BOLD}{UNDERLINE}{text}{RESET}"


def failure(text: str) -> str:
    return f"{BOLD}{RED}{text}{RESET}"


def success(text: str) -> str:
    return f"{BOLD}{GREEN}{text}{RESET}"


def link(target: str, text: str) -> str:
    """OSC 8 hyperlink, rendered underlined and blue."""
    return f"\033]8;;{target}\033\\{UNDERLINE}{BLUE}{text}{RESET}\033]8;;\033\\"


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)
