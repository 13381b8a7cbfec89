"""Runtime infrastructure for the daicho project.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Config loading via load_ledger_format(), load_vendor_directory()

Usage:
    from daicho.runtime import get_logger, get_paths, load_ledger_format

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.ledger_format)
"""

from daicho.runtime.ledger_format_rules import load_ledger_format
from daicho.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from daicho.runtime.paths import (
    ProjectPaths,
    get_paths,
    reset_paths,
)
from daicho.runtime.vendor_rules import load_vendor_directory

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Config
    "load_ledger_format",
    "load_vendor_directory",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
