from __future__ import annotations

import datetime as _dt
import logging
import math
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from jinja2 import Template

from .models import ComparisonResult, PositionTable

logger = logging.getLogger(__name__)

REPORT_COLUMNS = (
    "Reference_Genome_File",
    "Reference_Genome_Size",
    "Variants_True_File",
    "Variants_Detected_File",
    "True_Variants",
    "Variants_Detected",
    "TP",
    "FP",
    "TN",
    "FN",
    "Accuracy",
    "Specificity",
    "Sensitivity",
    "Precision",
    "FP_Rate",
)


def format_rate(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    text = f"{value:.4f}"
    # tiny negative rates (negative TN) round to "-0.0000"
    if text == "-0.0000":
        return "0.0000"
    return text


def report_row(
    *,
    reference_genome_file: str,
    variants_true_file: str,
    variants_detected_file: str,
    result: ComparisonResult,
) -> List[str]:
    """Values for one report line, in :data:`REPORT_COLUMNS` order."""
    return [
        str(reference_genome_file),
        str(result.reference_size),
        str(variants_true_file),
        str(variants_detected_file),
        str(result.true_variants),
        str(result.variants_detected),
        str(result.tp),
        str(result.fp),
        str(result.tn),
        str(result.fn),
        format_rate(result.accuracy),
        format_rate(result.specificity),
        format_rate(result.sensitivity),
        format_rate(result.precision),
        format_rate(result.fp_rate),
    ]


def format_report(
    *,
    reference_genome_file: str,
    variants_true_file: str,
    variants_detected_file: str,
    result: ComparisonResult,
) -> str:
    """Tab-separated header line plus one data line, newline terminated."""
    row = report_row(
        reference_genome_file=reference_genome_file,
        variants_true_file=variants_true_file,
        variants_detected_file=variants_detected_file,
        result=result,
    )
    return "\t".join(REPORT_COLUMNS) + "\n" + "\t".join(row) + "\n"


_REPORT_TEMPLATE = Template(
    """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>poscompare Report</title>
  <style>
    body { font-family: Arial, Helvetica, sans-serif; margin: 24px; }
    code, pre { background: #f6f8fa; padding: 2px 4px; border-radius: 4px; }
    h1, h2, h3 { margin-top: 1.2em; }
    table { border-collapse: collapse; margin-top: 0.6em; }
    th, td { border: 1px solid #ddd; padding: 8px; }
    th { background: #f2f2f2; text-align: left; }
    .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; }
    .card { border: 1px solid #ddd; border-radius: 8px; padding: 12px; }
    .small { color: #666; font-size: 0.9em; }
    img { max-width: 100%; height: auto; border: 1px solid #eee; border-radius: 6px; }
  </style>
</head>
<body>

<h1>poscompare Report</h1>
<p class="small">Generated: {{ generated_at }}</p>

<h2>Inputs</h2>
<table>
  <tr><th>Reference genome</th><td><code>{{ reference_genome_file }}</code></td><td>{{ result.reference_size }} bp</td></tr>
  {% for t in tables %}
  <tr><th>{{ t.label }}</th><td><code>{{ t.path }}</code></td>
      <td>{{ t.valid }} valid / {{ t.invalid }} invalid / {{ t.all }} total</td></tr>
  {% endfor %}
</table>

<h2>Confusion matrix</h2>
<div class="grid">
  <div class="card">
    <table>
      <tr><th></th><th>Detected</th><th>Not detected</th></tr>
      <tr><th>True variant</th><td>TP = {{ result.tp }}</td><td>FN = {{ result.fn }}</td></tr>
      <tr><th>No variant</th><td>FP = {{ result.fp }}</td><td>TN = {{ result.tn }}</td></tr>
    </table>
  </div>
  <div class="card">
    <table>
      {% for name, value in rates %}
      <tr><th>{{ name }}</th><td>{{ value }}</td></tr>
      {% endfor %}
    </table>
  </div>
</div>

{% if plots %}
<h2>Plots</h2>
<div class="grid">
  <div class="card">
    <h3>Confusion counts</h3>
    <img src="{{ plots.confusion_counts }}" alt="confusion counts">
  </div>
  <div class="card">
    <h3>Rates</h3>
    <img src="{{ plots.metrics }}" alt="metrics">
  </div>
</div>
{% endif %}

{% if contigs %}
<h2>Reference records</h2>
<table>
  <tr><th>Record</th><th>Length</th></tr>
  {% for name, length in contigs.items() %}
  <tr><td><code>{{ name }}</code></td><td>{{ length }}</td></tr>
  {% endfor %}
</table>
{% endif %}

<h2>Interpretation notes</h2>
<ul>
  <li>Only positions with status <code>valid</code> are compared.</li>
  <li>TN counts every reference position without a detected variant.</li>
  <li>NaN means the rate's denominator was zero.</li>
</ul>

<hr>
<p class="small">poscompare {{ version }}</p>
</body>
</html>"""
)


def _table_summary(label: str, table: PositionTable) -> Dict[str, object]:
    return {
        "label": label,
        "path": table.path,
        "valid": len(table.valid),
        "invalid": len(table.invalid),
        "all": len(table.all),
    }


def render_report(
    *,
    outdir: str | Path,
    version: str,
    reference_genome_file: str,
    true_table: PositionTable,
    detected_table: PositionTable,
    result: ComparisonResult,
    contigs: Optional[Mapping[str, int]] = None,
    plots: Optional[Dict[str, str]] = None,
) -> Path:
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    rates = [
        ("Accuracy", format_rate(result.accuracy)),
        ("Specificity", format_rate(result.specificity)),
        ("Sensitivity", format_rate(result.sensitivity)),
        ("Precision", format_rate(result.precision)),
        ("FP rate", format_rate(result.fp_rate)),
    ]

    html = _REPORT_TEMPLATE.render(
        generated_at=_dt.datetime.now().isoformat(timespec="seconds"),
        version=version,
        reference_genome_file=reference_genome_file,
        tables=[
            _table_summary("Variants (true)", true_table),
            _table_summary("Variants (detected)", detected_table),
        ],
        result=result,
        rates=rates,
        contigs=dict(contigs or {}),
        plots=plots,
    )

    out_path = outdir / "report.html"
    out_path.write_text(html, encoding="utf-8")
    logger.info("Report written: %s", out_path)
    return out_path
