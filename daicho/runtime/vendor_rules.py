"""Runtime loader for the vendor directory file."""

from __future__ import annotations

from pathlib import Path

from daicho.domain.vendor import VendorDirectory
from daicho.ledger.vendor_directory import parse_vendor_directory
from daicho.runtime.logging import get_logger
from daicho.runtime.paths import get_paths

logger = get_logger(__name__)


def load_vendor_directory(path: str | Path | None = None) -> VendorDirectory:
    """
    Load the vendor directory (gyousya.txt).

    Args:
        path: Optional file override. If None, uses config/gyousya.txt.

    Returns:
        Parsed directory; an empty directory if the file does not exist
            or cannot be decoded
    """
    file_path = Path(path) if path is not None else get_paths().vendor_directory
    if not file_path.exists():
        logger.info("Vendor directory not found: %s", file_path)
        return VendorDirectory()

    try:
        # utf-8-sig: files saved by Windows editors often carry a BOM
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read vendor directory %s: %s", file_path, exc)
        return VendorDirectory()
    directory = parse_vendor_directory(text)
    logger.debug("Loaded %d vendor records from %s", len(directory.records), file_path)
    return directory
