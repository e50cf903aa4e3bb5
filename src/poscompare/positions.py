from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Set

from .models import PositionKey, PositionTable
from .utils import open_textmaybe_gzip

logger = logging.getLogger(__name__)

HEADER_MARKER = "#"
VALID_STATUS = "valid"

_POSITION_RE = re.compile(r"\d+")


class PositionTableError(ValueError):
    """Raised when a position table has a malformed header or row."""


def _split_fields(line: str) -> List[str]:
    fields = line.split("\t")
    # Trailing empty columns carry no information.
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def parse_position_line(line: str, *, path: str | Path = "<string>") -> tuple[PositionKey, str]:
    """Parse one data row into ``(key, status)``.

    The key is ``(chrom, position, *bases)``; the status column is left out so
    that the same call matches across tables regardless of its label.
    """
    fields = _split_fields(line)
    if len(fields) < 2 or not _POSITION_RE.fullmatch(fields[1]):
        raise PositionTableError(f"Error with line {line!r} in {path}")
    if len(fields) < 3 or fields[2] == "":
        raise PositionTableError(f"Error with line {line!r} in {path}, status not properly defined")

    chrom, position, status = fields[0], fields[1], fields[2]
    key: PositionKey = (chrom, position, *fields[3:])
    return key, status


def read_positions(path: str | Path) -> PositionTable:
    """Load a variant position table.

    Format (tab separated)::

        #Chromosome  Position  Status  genome1  genome2 ...
        chr1         120       valid   A        G
        chr1         345       filtered-coverage  C  N

    The first line must start with ``#`` and is kept verbatim. Rows with status
    ``valid`` go to :attr:`PositionTable.valid`, all others to
    :attr:`PositionTable.invalid`; every row goes to :attr:`PositionTable.all`.
    """
    valid: Set[PositionKey] = set()
    invalid: Set[PositionKey] = set()
    every: Set[PositionKey] = set()

    try:
        with open_textmaybe_gzip(path, "rt") as fh:
            header = fh.readline().rstrip("\n")
            if not header.startswith(HEADER_MARKER):
                raise PositionTableError(f"Error with header line: {header!r} in {path}")

            for line in fh:
                key, status = parse_position_line(line.rstrip("\n"), path=path)
                every.add(key)
                if status == VALID_STATUS:
                    valid.add(key)
                else:
                    invalid.add(key)
    except UnicodeDecodeError as e:
        raise PositionTableError(f"{path} is not valid UTF-8 text: {e}") from e
    except OSError as e:
        raise PositionTableError(f"Could not open {path}: {e}") from e

    logger.info(
        "Read %s: %d positions (%d valid, %d invalid)",
        path,
        len(every),
        len(valid),
        len(invalid),
    )
    return PositionTable(
        path=str(path),
        header=header,
        valid=frozenset(valid),
        invalid=frozenset(invalid),
        all=frozenset(every),
    )
