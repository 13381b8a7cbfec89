"""Split ledger lines into item blocks anchored by 4-digit item codes."""

from dataclasses import dataclass

from ..format_rules import LedgerFormat


@dataclass(frozen=True)
class ItemBlock:
    """Line range [start, end) belonging to one item."""

    code: str
    code_start: int  # character index of the code on the start line
    code_end: int
    start: int
    end: int
    vendor: str = ""


def _find_vendor_line(lines: list[str], header_idx: int) -> int | None:
    """Return the index of the first non-blank line after a vendor/date header."""
    for idx in range(header_idx + 1, len(lines)):
        if lines[idx].strip():
            return idx
    return None


def _find_block_end(lines: list[str], code_idx: int, ledger_format: LedgerFormat) -> int:
    """
    Scan forward from a code line for the end of its block (exclusive index).

    - next item-code line: block ends before it
    - remainder-blank line ("以　下　余　白"): block ends after it
    - page/section header: block ends before it
    - nothing found: block runs to end of text
    """
    for idx in range(code_idx + 1, len(lines)):
        stripped = lines[idx].strip()
        if not stripped:
            continue
        if ledger_format.item_code_pattern.search(lines[idx]):
            return idx
        if ledger_format.is_section_header(stripped):
            return idx
        if ledger_format.is_remainder_blank(stripped):
            return idx + 1
    return len(lines)


def segment_blocks(lines: list[str], ledger_format: LedgerFormat) -> list[ItemBlock]:
    """
    Partition normalized ledger lines into item blocks, in source order.

    The current vendor is carried from block to block: a vendor/date header
    ("令和○年○月") makes the next non-blank line the vendor for every following
    block until the next header. That vendor line belongs to no block.
    """
    blocks: list[ItemBlock] = []
    current_vendor = ""
    idx = 0
    while idx < len(lines):
        line = lines[idx]
        stripped = line.strip()

        if stripped and ledger_format.is_era_header(stripped):
            vendor_idx = _find_vendor_line(lines, idx)
            if vendor_idx is None:
                break
            current_vendor = lines[vendor_idx].strip()
            idx = vendor_idx + 1
            continue

        if not stripped:
            idx += 1
            continue

        match = ledger_format.item_code_pattern.search(line)
        if not match:
            idx += 1
            continue

        end = _find_block_end(lines, idx, ledger_format)
        blocks.append(
            ItemBlock(
                code=match.group(0),
                code_start=match.start(),
                code_end=match.end(),
                start=idx,
                end=end,
                vendor=current_vendor,
            )
        )
        idx = end
    return blocks
