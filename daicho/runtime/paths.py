"""Centralized path management for the daicho project.

This module provides a single source of truth for project paths (config
files and the vendor directory), independent of where modules live.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

HOME_ENV_VAR = "DAICHO_HOME"


def _get_project_root() -> Path:
    """Determine the project root directory ($DAICHO_HOME, else the working directory)."""
    env_root = os.environ.get(HOME_ENV_VAR, "").strip()
    if env_root:
        return Path(env_root).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root, ensuring consistency
    across all modules regardless of the current working directory.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        # Ensure root is resolved to absolute path
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def ledger_format(self) -> Path:
        """Project-level ledger format overrides TOML file."""
        return self.config / "ledger_format.toml"

    @property
    def vendor_directory(self) -> Path:
        """Vendor directory text file (recipient + vendor address blocks)."""
        return self.config / "gyousya.txt"

    # --- Output paths ---
    @property
    def exports(self) -> Path:
        """Directory for export text written by the CLI."""
        return self.root / "exports"


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths (e.g. after DAICHO_HOME changes)."""
    global _paths
    _paths = None
