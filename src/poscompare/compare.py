from __future__ import annotations

import logging
from typing import AbstractSet

from .models import ComparisonResult, PositionKey, PositionTable
from .validation import check_headers_match

logger = logging.getLogger(__name__)

ZERO_DIVISION_POLICIES = ("nan", "error")


class MetricError(ZeroDivisionError):
    """Raised for an undefined rate when zero_division='error'."""


def _ratio(name: str, num: int, den: int, zero_division: str) -> float:
    if den != 0:
        return num / den
    if zero_division == "error":
        raise MetricError(f"{name} is undefined: denominator is zero")
    logger.warning("%s is undefined (denominator is zero); reporting NaN", name)
    return float("nan")


def compare_positions(
    true_positions: AbstractSet[PositionKey],
    detected_positions: AbstractSet[PositionKey],
    reference_size: int,
    *,
    zero_division: str = "nan",
) -> ComparisonResult:
    """Score detected positions against true positions.

    True negatives are reference positions with no detected variant, so
    ``tn = reference_size - len(detected_positions)``. This treats the whole
    reference as the comparable universe.
    """
    if zero_division not in ZERO_DIVISION_POLICIES:
        raise ValueError(f"zero_division must be one of {ZERO_DIVISION_POLICIES}, got {zero_division!r}")

    tp = len(true_positions & detected_positions)
    fp = len(detected_positions - true_positions)
    fn = len(true_positions - detected_positions)
    tn = reference_size - len(detected_positions)
    if tn < 0:
        logger.warning(
            "More detected positions (%d) than reference positions (%d); TN is negative",
            len(detected_positions),
            reference_size,
        )

    return ComparisonResult(
        reference_size=reference_size,
        true_variants=len(true_positions),
        variants_detected=len(detected_positions),
        tp=tp,
        fp=fp,
        tn=tn,
        fn=fn,
        accuracy=_ratio("Accuracy", tp + tn, tp + fp + tn + fn, zero_division),
        specificity=_ratio("Specificity", tn, tn + fp, zero_division),
        sensitivity=_ratio("Sensitivity", tp, tp + fn, zero_division),
        precision=_ratio("Precision", tp, tp + fp, zero_division),
        fp_rate=_ratio("FP_Rate", fp, tn + fp, zero_division),
    )


def compare_tables(
    true_table: PositionTable,
    detected_table: PositionTable,
    reference_size: int,
    *,
    zero_division: str = "nan",
) -> ComparisonResult:
    """Check both tables cover the same genomes, then compare their valid positions."""
    check_headers_match(true_table, detected_table)
    return compare_positions(
        true_table.valid,
        detected_table.valid,
        reference_size,
        zero_division=zero_division,
    )
