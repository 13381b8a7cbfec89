from __future__ import annotations

from pathlib import Path

from daicho.domain.vendor import VendorDirectory
from daicho.ledger import extract_vendor_from_header, find_vendor, parse_vendor_directory
from daicho.runtime import load_vendor_directory

DIRECTORY_TEXT = """\
滝川駐屯地 会計隊 御中,〒073-0000 北海道滝川市,TEL 0124-00-0000

トワニ旭川, 代表 太郎, 〒070-0000 北海道旭川市, 担当 佐藤, 0166-00-0000
セイコーフレッシュフーズ,代表 花子
,名前なし
"""


def test_parse_vendor_directory() -> None:
    directory = parse_vendor_directory(DIRECTORY_TEXT)

    assert directory.recipient_lines == ("滝川駐屯地 会計隊 御中", "〒073-0000 北海道滝川市", "TEL 0124-00-0000")
    assert [record.key for record in directory.records] == ["トワニ旭川", "セイコーフレッシュフーズ"]
    assert directory.records[0].vendor_lines == (
        "トワニ旭川",
        "代表 太郎",
        "〒070-0000 北海道旭川市",
        "担当 佐藤",
        "0166-00-0000",
    )
    # Short rows are padded to the full block
    assert directory.records[1].vendor_lines == ("セイコーフレッシュフーズ", "代表 花子", "", "", "")
    assert directory.records[1].recipient_lines == directory.recipient_lines


def test_parse_empty_directory() -> None:
    directory = parse_vendor_directory("")

    assert directory.records == ()
    assert directory.recipient_lines == ("", "", "")


def test_extract_vendor_from_header() -> None:
    header = "日付: 令和7年11月30日\n宛先:\n業者名: 株式会社トワニ旭川食品\n"

    assert extract_vendor_from_header(header) == "株式会社トワニ旭川食品"
    assert extract_vendor_from_header("業者名：セイコー") == "セイコー"
    assert extract_vendor_from_header("宛先:\n") == ""
    assert extract_vendor_from_header(None) == ""


def test_find_vendor_matches_by_containment() -> None:
    directory = parse_vendor_directory(DIRECTORY_TEXT)

    assert find_vendor(directory, "滝川駐屯地　株式会社トワニ旭川食品").key == "トワニ旭川"
    assert find_vendor(directory, "セイコー").key == "セイコーフレッシュフーズ"
    assert find_vendor(directory, "丸山青果") is None
    assert find_vendor(directory, "  ") is None


def test_load_vendor_directory_from_project_config(isolated_project_root: Path) -> None:
    config_dir = isolated_project_root / "config"
    config_dir.mkdir()
    (config_dir / "gyousya.txt").write_text("\ufeff" + DIRECTORY_TEXT, encoding="utf-8")

    directory = load_vendor_directory()

    # BOM is not part of the first recipient line
    assert directory.recipient_lines[0] == "滝川駐屯地 会計隊 御中"
    assert len(directory.records) == 2


def test_load_missing_vendor_directory(tmp_path: Path) -> None:
    assert load_vendor_directory(tmp_path / "missing.txt") == VendorDirectory()
