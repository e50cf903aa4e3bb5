from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple

# (chrom, position, base1, base2, ...); status is not part of the key.
PositionKey = Tuple[str, ...]


@dataclass(frozen=True)
class PositionTable:
    """A variant position table loaded from one file.

    Attributes
    ----------
    path:
        File the table was read from.
    header:
        First line of the file (starts with ``#``), without the newline.
        Lists the genomes in column order.
    valid:
        Keys of rows whose status is exactly ``valid``.
    invalid:
        Keys of rows with any other status.
    all:
        Keys of every row.
    """

    path: str
    header: str
    valid: FrozenSet[PositionKey]
    invalid: FrozenSet[PositionKey]
    all: FrozenSet[PositionKey]


@dataclass(frozen=True)
class ComparisonResult:
    """Confusion counts and derived rates for one true/detected comparison.

    Rates are ``nan`` when their denominator is zero.
    """

    reference_size: int
    true_variants: int
    variants_detected: int
    tp: int
    fp: int
    tn: int
    fn: int
    accuracy: float
    specificity: float
    sensitivity: float
    precision: float
    fp_rate: float
