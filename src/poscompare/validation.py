from __future__ import annotations

import logging
from typing import List

from .models import PositionTable

logger = logging.getLogger(__name__)


class HeaderMismatchError(ValueError):
    """Raised when two position tables do not describe the same genomes."""


def header_columns(header: str) -> List[str]:
    """Split a table header into its column names (leading ``#`` removed)."""
    return header.lstrip("#").split("\t")


def check_headers_match(true_table: PositionTable, detected_table: PositionTable) -> None:
    """Require identical headers, i.e. the same genomes in the same order."""
    if true_table.header == detected_table.header:
        return

    true_cols = header_columns(true_table.header)
    detected_cols = header_columns(detected_table.header)
    if sorted(true_cols) == sorted(detected_cols):
        detail = "same columns in a different order"
    else:
        missing = [c for c in true_cols if c not in detected_cols]
        extra = [c for c in detected_cols if c not in true_cols]
        if missing or extra:
            detail = f"missing from detected: {missing}; only in detected: {extra}"
        else:
            detail = f"{len(true_cols)} vs {len(detected_cols)} columns"
    logger.debug("true header: %r", true_table.header)
    logger.debug("detected header: %r", detected_table.header)
    raise HeaderMismatchError(
        f"Error: headers did not match between {true_table.path} and {detected_table.path} ({detail})"
    )
