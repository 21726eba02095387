"""
Comparison-sort baseline: Python's built-in `sorted()` (Timsort).

Used by the benchmark runner as the reference point the presence sort is
measured against. Accepts any integers, duplicates included.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = ["sort"]


def sort(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    # `config` is accepted for signature parity and ignored.
    return sorted(a)
