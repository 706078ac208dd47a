"""Runner configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from katas.exceptions import ConfigurationError

# Present only in the katas source checkout itself.
OFFICIAL_REPO_MARKER = Path("dev") / "katas-repo.txt"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


def _env_flag(name: str) -> bool:
    value = os.getenv(name, "").strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}", config_key=name)


def in_official_repo(root: Path) -> bool:
    """Check whether `root` is the katas development checkout."""
    return (root / OFFICIAL_REPO_MARKER).exists()


def detect_dev_mode(root: Path) -> bool:
    """Dev mode needs both a debug build flag and the development checkout."""
    return _env_flag("KATAS_DEBUG") and in_official_repo(root)


@dataclass
class KataConfig:
    """Configuration for running exercises."""

    # Paths
    root: Path = Path(".")
    target_dir: Optional[Path] = None
    circuit_dir: Optional[Path] = None
    info_file: Optional[Path] = None

    # Toolchains
    cargo: str = "cargo"
    circom: str = "circom"

    # Developing katas itself; stricter cargo invocation
    dev: bool = False

    def __post_init__(self) -> None:
        """Initialize derived paths."""
        self.root = Path(self.root)
        if self.target_dir is None:
            self.target_dir = self.root / "target"
        if self.circuit_dir is None:
            self.circuit_dir = self.root / "circuits"
        if self.info_file is None:
            self.info_file = self.root / "info.yaml"

    @classmethod
    def from_env(cls) -> KataConfig:
        """
        Build a config from KATAS_* environment variables.

        Call `load_dotenv()` first if a .env file should be honoured.
        """
        root = Path(os.getenv("KATAS_ROOT") or Path.cwd())

        def _path(name: str) -> Optional[Path]:
            value = os.getenv(name)
            return Path(value) if value else None

        return cls(
            root=root,
            target_dir=_path("KATAS_TARGET_DIR"),
            circuit_dir=_path("KATAS_CIRCUIT_DIR"),
            info_file=_path("KATAS_INFO_FILE"),
            cargo=os.getenv("KATAS_CARGO", "cargo"),
            circom=os.getenv("KATAS_CIRCOM", "circom"),
            dev=detect_dev_mode(root),
        )
