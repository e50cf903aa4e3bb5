"""poscompare: score detected variant positions against a truth table.

Public API is intentionally small; most users should use the CLI:

    poscompare --variants-true ... --variants-detected ... --reference-genome ...

"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
