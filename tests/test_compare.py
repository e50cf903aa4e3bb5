import math

import pytest

from poscompare.compare import MetricError, compare_positions, compare_tables
from poscompare.models import PositionTable
from poscompare.validation import HeaderMismatchError

A = ("chr1", "1", "A", "G")
B = ("chr1", "2", "C", "T")
C = ("chr2", "7", "G", "A")


def _table(header: str, valid: set, path: str = "t.tsv") -> PositionTable:
    return PositionTable(
        path=path,
        header=header,
        valid=frozenset(valid),
        invalid=frozenset(),
        all=frozenset(valid),
    )


def test_worked_example() -> None:
    r = compare_positions({A, B}, {B, C}, 10)
    assert (r.tp, r.fp, r.fn, r.tn) == (1, 1, 1, 8)
    # accuracy denominator is TP+FP+TN+FN = 11
    assert r.accuracy == pytest.approx(9 / 11)
    assert r.specificity == pytest.approx(8 / 9)
    assert r.sensitivity == pytest.approx(0.5)
    assert r.precision == pytest.approx(0.5)
    assert r.fp_rate == pytest.approx(1 / 9)
    assert (r.true_variants, r.variants_detected, r.reference_size) == (2, 2, 10)


def test_identical_sets() -> None:
    r = compare_positions({A, B, C}, {A, B, C}, 100)
    assert r.fp == 0
    assert r.fn == 0
    assert r.tp == 3
    assert r.accuracy == 1.0


def test_disjoint_sets() -> None:
    r = compare_positions({A}, {B, C}, 50)
    assert r.tp == 0
    assert r.fp == 2
    assert r.fn == 1


@pytest.mark.parametrize("detected", [set(), {A}, {A, B, C}])
def test_true_negatives_from_reference_size(detected: set) -> None:
    r = compare_positions({A, B}, detected, 20)
    assert r.tn == 20 - len(detected)


def test_zero_division_gives_nan() -> None:
    r = compare_positions({A}, set(), 10)
    assert math.isnan(r.precision)
    assert r.sensitivity == 0.0


def test_zero_division_error_policy() -> None:
    with pytest.raises(MetricError, match="Precision"):
        compare_positions({A}, set(), 10, zero_division="error")


def test_unknown_zero_division_policy() -> None:
    with pytest.raises(ValueError):
        compare_positions({A}, {A}, 10, zero_division="zero")


def test_compare_tables_uses_valid_sets() -> None:
    header = "#Chromosome\tPosition\tStatus\tg1"
    r = compare_tables(_table(header, {A, B}), _table(header, {B, C}), 10)
    assert r.tp == 1


def test_compare_tables_header_mismatch() -> None:
    t = _table("#Chromosome\tPosition\tStatus\tg1\tg2", {A}, path="true.tsv")
    d = _table("#Chromosome\tPosition\tStatus\tg2\tg1", {A}, path="detected.tsv")
    with pytest.raises(HeaderMismatchError, match="different order"):
        compare_tables(t, d, 10)


def test_header_mismatch_duplicate_columns() -> None:
    t = _table("#a\ta", {A}, path="true.tsv")
    d = _table("#a", {A}, path="detected.tsv")
    with pytest.raises(HeaderMismatchError, match="2 vs 1 columns"):
        compare_tables(t, d, 10)
