from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from daicho.ledger import parse
from daicho.ledger.format_rules import LedgerFormatError, build_ledger_format, get_default_ledger_format
from daicho.runtime import load_ledger_format


def test_default_format_markers() -> None:
    fmt = get_default_ledger_format()

    assert fmt.is_era_header("令和７年１１月")
    assert not fmt.is_era_header("令和")
    assert fmt.is_remainder_blank("-　以　下　余　白　-")
    assert fmt.is_section_header("納　地　　　　業 者 名")
    # Both location fragments are required
    assert not fmt.is_section_header("納　地")
    assert fmt.is_section_header("納入台帳")
    assert fmt.is_section_header("課税対象額　4,350.00")
    assert not fmt.is_section_header("牛乳")
    assert fmt.two_token_policy == "amount"
    assert fmt.match_tolerance == Decimal("0.5")


def test_unit_pattern_requires_a_boundary() -> None:
    fmt = get_default_ledger_format()

    assert fmt.unit_pattern.search("牛乳 PC").group(1) == "PC"
    assert fmt.unit_pattern.search("PC\t12").group(1) == "PC"
    assert fmt.unit_pattern.search("PCS") is None
    assert fmt.unit_pattern.search("12PC") is None


def test_layers_merge_sub_tables() -> None:
    fmt = build_ledger_format([{"markers": {"remainder_blank": ["以下余白"]}}, {"unit_codes": ["BT"]}])

    assert fmt.remainder_blank == ("以下余白",)
    # Untouched markers keep their defaults
    assert fmt.ledger_title == ("納入台帳",)
    assert fmt.unit_codes == ("BT",)


@pytest.mark.parametrize(
    "config",
    [
        {"two_token_policy": "quantity"},
        {"unit_codes": []},
        {"item_code_pattern": "("},
        {"match_tolerance": "half"},
        {"markers": {"era_header": 3}},
        {"summary_fallback_lines": -1},
        {"summary_fallback_lines": "ten"},
        {"summary_fallback_lines": None},
        {"match_tolerance": "nan"},
        {"fit_tolerance": "Infinity"},
        {"match_tolerance": "-1"},
        {"markers": ["以", "余"]},
        {"labels": "課税対象額"},
        {"unit_codes": "PC"},
    ],
)
def test_invalid_configs_raise(config: dict) -> None:
    with pytest.raises(LedgerFormatError):
        build_ledger_format([config])


def test_extra_unit_code_is_recognized() -> None:
    fmt = build_ledger_format([{"unit_codes": ["PC", "BG", "KG", "EA", "CA", "CN", "SH", "BT"]}])

    result = parse("0001 醤油 BT\n2 300.00\n600.00", fmt)

    assert result.rows[0].unit == "BT"
    assert result.rows[0].name == "醤油"


def test_runtime_loader_reads_project_config(isolated_project_root: Path) -> None:
    config_dir = isolated_project_root / "config"
    config_dir.mkdir()
    (config_dir / "ledger_format.toml").write_text('two_token_policy = "price"\n', encoding="utf-8")

    fmt = load_ledger_format()

    assert fmt.two_token_policy == "price"


def test_runtime_loader_without_config_uses_defaults() -> None:
    assert load_ledger_format() == get_default_ledger_format()


def test_runtime_loader_explicit_paths_and_policy(tmp_path: Path) -> None:
    first = tmp_path / "a.toml"
    second = tmp_path / "b.toml"
    first.write_text('match_mark = "OK"\n[markers]\nledger_title = ["台帳"]\n', encoding="utf-8")
    second.write_text('match_mark = "*"\n', encoding="utf-8")

    fmt = load_ledger_format((str(first), str(second)), "price")

    assert fmt.match_mark == "*"
    assert fmt.ledger_title == ("台帳",)
    assert fmt.two_token_policy == "price"


def test_runtime_loader_rejects_broken_toml(tmp_path: Path) -> None:
    broken = tmp_path / "broken.toml"
    broken.write_text("unit_codes = [\n", encoding="utf-8")

    with pytest.raises(LedgerFormatError):
        load_ledger_format((str(broken),))


def test_non_table_layer_raises() -> None:
    with pytest.raises(LedgerFormatError):
        build_ledger_format([["two_token_policy", "price"]])  # type: ignore[list-item]


def test_item_code_pattern_is_ascii_only() -> None:
    fmt = get_default_ledger_format()

    assert fmt.item_code_pattern.search("0１２３") is None
    assert fmt.item_code_pattern.search("0123").group(0) == "0123"


def test_runtime_loader_rejects_bad_values(tmp_path: Path) -> None:
    config = tmp_path / "bad.toml"
    config.write_text('summary_fallback_lines = "ten"\n', encoding="utf-8")

    with pytest.raises(LedgerFormatError):
        load_ledger_format((str(config),))
