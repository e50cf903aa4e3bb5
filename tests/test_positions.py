import gzip
from pathlib import Path

import pytest

from poscompare.positions import PositionTableError, parse_position_line, read_positions

HEADER = "#Chromosome\tPosition\tStatus\tReference\tgenomeA"


def _write(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_read_positions_splits_by_status(tmp_path: Path) -> None:
    tsv = _write(
        tmp_path / "v.tsv",
        [
            HEADER,
            "chr1\t10\tvalid\tA\tG",
            "chr1\t20\tfiltered-coverage\tC\tN",
            "chr2\t5\tvalid\tG\tT",
        ],
    )
    table = read_positions(tsv)

    assert table.header == HEADER
    assert table.valid == {("chr1", "10", "A", "G"), ("chr2", "5", "G", "T")}
    assert table.invalid == {("chr1", "20", "C", "N")}
    assert table.all == table.valid | table.invalid


def test_status_is_not_part_of_key() -> None:
    key_a, status_a = parse_position_line("chr1\t10\tvalid\tA\tG")
    key_b, status_b = parse_position_line("chr1\t10\tinvalid\tA\tG")
    assert key_a == key_b
    assert (status_a, status_b) == ("valid", "invalid")


def test_row_without_bases() -> None:
    key, status = parse_position_line("chr1\t10\tvalid")
    assert key == ("chr1", "10")
    assert status == "valid"


def test_trailing_empty_fields_ignored() -> None:
    key, _ = parse_position_line("chr1\t10\tvalid\tA\t\t")
    assert key == ("chr1", "10", "A")


def test_bad_header(tmp_path: Path) -> None:
    tsv = _write(tmp_path / "v.tsv", ["Chromosome\tPosition\tStatus", "chr1\t10\tvalid\tA"])
    with pytest.raises(PositionTableError, match="header"):
        read_positions(tsv)


def test_empty_file(tmp_path: Path) -> None:
    tsv = tmp_path / "empty.tsv"
    tsv.write_text("", encoding="utf-8")
    with pytest.raises(PositionTableError):
        read_positions(tsv)


@pytest.mark.parametrize(
    "line",
    [
        "chr1\tten\tvalid\tA",
        "chr1\t1O\tvalid\tA",
        "chr1",
        "",
    ],
)
def test_malformed_position(line: str) -> None:
    with pytest.raises(PositionTableError, match="Error with line"):
        parse_position_line(line)


@pytest.mark.parametrize("line", ["chr1\t10", "chr1\t10\t\tA"])
def test_missing_status(line: str) -> None:
    with pytest.raises(PositionTableError, match="status not properly defined"):
        parse_position_line(line)


def test_error_names_file(tmp_path: Path) -> None:
    tsv = _write(tmp_path / "bad.tsv", [HEADER, "chr1\tx\tvalid\tA\tG"])
    with pytest.raises(PositionTableError, match="bad.tsv"):
        read_positions(tsv)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PositionTableError, match="Could not open"):
        read_positions(tmp_path / "nope.tsv")


def test_gzipped_table(tmp_path: Path) -> None:
    gz = tmp_path / "v.tsv.gz"
    with gzip.open(gz, "wt") as fh:
        fh.write(HEADER + "\nchr1\t10\tvalid\tA\tG\n")
    table = read_positions(gz)
    assert table.valid == {("chr1", "10", "A", "G")}


def test_parse_is_idempotent(tmp_path: Path) -> None:
    tsv = _write(
        tmp_path / "v.tsv",
        [HEADER, "chr1\t10\tvalid\tA\tG", "chr1\t11\tfiltered\tA\tN"],
    )
    assert read_positions(tsv) == read_positions(tsv)


def test_valid_status_is_case_sensitive(tmp_path: Path) -> None:
    tsv = _write(
        tmp_path / "v.tsv",
        [HEADER, "chr1\t10\tValid\tA\tG", "chr1\t11\tVALID\tA\tG", "chr1\t12\tvalid\tA\tG"],
    )
    table = read_positions(tsv)
    assert table.valid == {("chr1", "12", "A", "G")}
    assert table.invalid == {("chr1", "10", "A", "G"), ("chr1", "11", "A", "G")}


def test_invalid_utf8(tmp_path: Path) -> None:
    tsv = tmp_path / "latin1.tsv"
    tsv.write_bytes(HEADER.encode() + b"\nchr1\t10\tvalid\t\xff\tG\n")
    with pytest.raises(PositionTableError, match="latin1.tsv"):
        read_positions(tsv)
