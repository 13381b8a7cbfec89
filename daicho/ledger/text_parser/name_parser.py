"""Product name and unit-of-measure assembly inside an item block."""

from daicho.domain.ledger import NumberToken

from ..format_rules import LedgerFormat
from .blocks_parser import ItemBlock


def split_name_and_unit(full_name: str, ledger_format: LedgerFormat) -> tuple[str, str]:
    """Split a unit code glued to the end of a name, e.g. "苺タルトEA" -> ("苺タルト", "EA")."""
    trimmed = full_name.rstrip()
    if not trimmed:
        return "", ""
    match = ledger_format.glued_unit_pattern.match(trimmed)
    if match and match.group(1).strip():
        return match.group(1).rstrip(), match.group(2)
    return trimmed, ""


def assemble_name_and_unit(
    lines: list[str],
    block: ItemBlock,
    tokens_by_line: list[list[NumberToken]],
    ledger_format: LedgerFormat,
) -> tuple[str, str]:
    """
    Rebuild a possibly wrapped product name and find its unit code.

    Args:
        lines: All normalized ledger lines
        block: The item block being assembled
        tokens_by_line: Lexer output for each block line (index 0 = code line)
        ledger_format: Marker/unit table

    Returns:
        (name, unit); either may be empty
    """
    name_parts: list[str] = []
    unit = ""

    # Code line: whatever follows the 4-digit code
    tail = lines[block.start][block.code_end :].strip()
    if tail:
        unit_match = ledger_format.unit_pattern.search(tail)
        if unit_match:
            head = tail[: unit_match.start()].rstrip()
            if head:
                name_parts.append(head)
            unit = unit_match.group(1)
        else:
            name_parts.append(tail)

    for idx in range(block.start + 1, block.end):
        line = lines[idx]
        stripped = line.strip()
        if not stripped:
            continue

        unit_match = ledger_format.unit_pattern.search(line)
        tokens = tokens_by_line[idx - block.start]

        if not tokens and not unit_match:
            # Wrapped name continuation
            name_parts.append(stripped)
            continue

        # A unit line gives everything before the unit ("2個入り EA");
        # a number-only line gives the text before its first number.
        cut = unit_match.start() if unit_match else tokens[0].position
        prefix = line[:cut].strip()
        if prefix:
            name_parts.append(prefix)
        if unit_match and not unit:
            unit = unit_match.group(1)
        break

    full_name = "".join(name_parts)
    if unit:
        return full_name, unit
    return split_name_and_unit(full_name, ledger_format)
