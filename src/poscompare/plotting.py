from __future__ import annotations

import logging
import math
from pathlib import Path

import matplotlib.pyplot as plt

from .models import ComparisonResult

logger = logging.getLogger(__name__)


def plot_confusion_counts(
    *,
    result: ComparisonResult,
    out_png: str | Path,
    title: str = "Detected vs true variant positions",
) -> None:
    """Bar chart of TP/FP/FN. TN is left out; it is on the scale of the genome."""
    out_png = Path(out_png)
    out_png.parent.mkdir(parents=True, exist_ok=True)

    labels = ["TP", "FP", "FN"]
    values = [result.tp, result.fp, result.fn]

    plt.figure()
    plt.bar(labels, values, color=["tab:green", "tab:red", "tab:orange"])
    plt.ylabel("Positions")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(out_png, dpi=160)
    plt.close()


def plot_metrics(
    *,
    result: ComparisonResult,
    out_png: str | Path,
    title: str = "Classification rates",
) -> None:
    out_png = Path(out_png)
    out_png.parent.mkdir(parents=True, exist_ok=True)

    labels = ["Accuracy", "Specificity", "Sensitivity", "Precision", "FP rate"]
    raw = [
        result.accuracy,
        result.specificity,
        result.sensitivity,
        result.precision,
        result.fp_rate,
    ]
    # undefined rates are drawn as empty bars
    values = [0.0 if math.isnan(v) else v for v in raw]

    plt.figure()
    plt.bar(labels, values)
    plt.ylim(0.0, 1.05)
    plt.ylabel("Rate")
    plt.title(title)
    plt.xticks(rotation=15, ha="right")
    plt.tight_layout()
    plt.savefig(out_png, dpi=160)
    plt.close()
