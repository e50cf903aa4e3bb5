from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

from .utils import ensure_outdir, write_json

TOY_HEADER = "#Chromosome\tPosition\tStatus\tReference\tgenomeA"

TOY_CONTIGS = {
    "chr1": ("ACGT" * 50)[:200],
    "chr2": ("GGCA" * 25)[:100],
}

# chrom, position, status, reference base, genomeA base
TOY_TRUE_ROWS = [
    ("chr1", "10", "valid", "C", "G"),
    ("chr1", "50", "valid", "C", "T"),
    ("chr1", "80", "filtered-invalid", "T", "N"),
    ("chr2", "5", "valid", "G", "A"),
]

TOY_DETECTED_ROWS = [
    ("chr1", "10", "filtered-coverage", "C", "G"),
    ("chr1", "50", "valid", "C", "T"),
    ("chr2", "5", "valid", "G", "A"),
    ("chr2", "40", "valid", "A", "C"),
]


def _write_fasta(path: Path, contigs: Dict[str, str]) -> None:
    lines: List[str] = []
    for name, seq in contigs.items():
        lines.append(f">{name}")
        for i in range(0, len(seq), 60):
            lines.append(seq[i : i + 60])
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def write_positions_table(path: str | Path, header: str, rows: Sequence[Sequence[str]]) -> Path:
    path = Path(path)
    lines = [header] + ["\t".join(r) for r in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def make_toy_data(*, outdir: str | Path) -> Dict[str, str]:
    """Create a tiny reference and a pair of position tables for demos/tests.

    The outputs include:
    - toy_ref.fa, 300 bp over two records
    - variants-true.tsv
    - variants-detected.tsv

    Comparing the two tables against the reference gives TP=2, FP=1, FN=1,
    TN=297.

    Returns
    -------
    dict
        Paths to the generated files.
    """
    outdir_p = ensure_outdir(outdir)

    ref_fa = outdir_p / "toy_ref.fa"
    _write_fasta(ref_fa, TOY_CONTIGS)

    true_tsv = write_positions_table(outdir_p / "variants-true.tsv", TOY_HEADER, TOY_TRUE_ROWS)
    detected_tsv = write_positions_table(
        outdir_p / "variants-detected.tsv", TOY_HEADER, TOY_DETECTED_ROWS
    )

    summary = {
        "ref_fa": str(ref_fa),
        "variants_true": str(true_tsv),
        "variants_detected": str(detected_tsv),
        "outdir": str(outdir_p),
    }

    write_json(outdir_p / "toy_summary.json", summary)
    return summary
