"""Reference genome size.

The reference only contributes its total length, which is the universe of
positions used to count true negatives.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import pysam

from .utils import open_textmaybe_gzip

logger = logging.getLogger(__name__)


class ReferenceGenomeError(ValueError):
    """Raised when the reference FASTA cannot be read."""


def _has_content(fasta_path: str | Path) -> bool:
    with open_textmaybe_gzip(fasta_path, "rt") as fh:
        return any(line.strip() for line in fh)


def reference_contig_lengths(fasta_path: str | Path) -> Dict[str, int]:
    """Return ``{record name: sequence length}`` for every FASTA record.

    Plain and gzip-compressed FASTA are both accepted. Duplicate record names
    are summed under the same key. An empty file gives an empty mapping; a
    non-empty file without any ``>`` record is rejected.
    """
    lengths: Dict[str, int] = {}
    try:
        with pysam.FastxFile(str(fasta_path)) as fh:
            for entry in fh:
                seq = entry.sequence or ""
                lengths[entry.name] = lengths.get(entry.name, 0) + len(seq)
        if not lengths and _has_content(fasta_path):
            raise ReferenceGenomeError(f"No FASTA records found in reference genome {fasta_path}")
    except (OSError, UnicodeDecodeError) as e:
        raise ReferenceGenomeError(f"Could not read reference genome {fasta_path}: {e}") from e

    if not lengths:
        logger.warning("Reference genome %s contains no sequences", fasta_path)
    logger.info(
        "Reference genome %s: %d records, %d bp",
        fasta_path,
        len(lengths),
        sum(lengths.values()),
    )
    return lengths


def reference_genome_size(fasta_path: str | Path) -> int:
    """Sum of sequence lengths over all records in a FASTA file."""
    return sum(reference_contig_lengths(fasta_path).values())
