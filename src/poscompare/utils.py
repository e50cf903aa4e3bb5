from __future__ import annotations

import gzip
import json
import logging
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any, Mapping, TextIO

logger = logging.getLogger(__name__)


def ensure_outdir(path: str | Path) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def open_textmaybe_gzip(path: str | Path, mode: str = "rt", encoding: str = "utf-8") -> TextIO:
    p = str(path)
    if p.endswith(".gz"):
        return gzip.open(p, mode, encoding=encoding)  # type: ignore[return-value]
    return open(p, mode, encoding=encoding)


def _nan_to_none(value: Any) -> Any:
    # JSON has no NaN literal
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def write_json(path: str | Path, obj: Any) -> None:
    with open(path, "wt", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, sort_keys=True)


def dataclass_to_jsonable(dc: Any) -> Mapping[str, Any]:
    return {k: _nan_to_none(v) for k, v in asdict(dc).items()}
