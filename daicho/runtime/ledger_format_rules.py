"""Runtime loader for the ledger format table."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from daicho.ledger.format_rules import LedgerFormat, LedgerFormatError, build_ledger_format
from daicho.runtime.logging import get_logger
from daicho.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise LedgerFormatError(f"{path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=8)
def load_ledger_format(
    config_paths: tuple[str, ...] | None = None,
    two_token_policy: str | None = None,
) -> LedgerFormat:
    """
    Load the ledger format from runtime-configured TOML files.

    Args:
        config_paths: Override files, later ones win. If None, uses the
            packaged default table, then the project's
            config/ledger_format.toml (when it exists).
        two_token_policy: Optional "amount"/"price" override applied last.

    Returns:
        Built-in format layered with the loaded overrides
    """
    if config_paths is None:
        module_default_format = (
            Path(__file__).resolve().parents[1] / "ledger" / "rules" / "default_ledger_format.toml"
        )
        seen_paths: set[Path] = set()
        files: list[Path] = []
        for candidate in (module_default_format, get_paths().ledger_format):
            resolved = candidate.resolve()
            if resolved in seen_paths:
                continue
            seen_paths.add(resolved)
            files.append(candidate)
    else:
        files = [Path(path) for path in config_paths]

    configs: list[dict[str, Any]] = []
    for path in files:
        config = _load_toml(path)
        if config:
            logger.debug("Loaded ledger format overrides from %s", path)
            configs.append(config)

    if two_token_policy is not None:
        configs.append({"two_token_policy": two_token_policy})

    return build_ledger_format(configs)
