"""
Threshold-based flagging of similar document pairs.

Thresholds are fractions in [0, 1]. Percentages only exist at the display
boundary via ``to_percent`` / ``from_percent``.
"""

from typing import List, NamedTuple

import numpy as np


class Flag(NamedTuple):
    """A document pair whose similarity met the threshold (``i < j``)."""

    i: int
    j: int
    score: float

    @property
    def percent(self) -> float:
        return to_percent(self.score)


def to_percent(fraction: float) -> float:
    return fraction * 100.0


def from_percent(percent: float) -> float:
    return percent / 100.0


def flag_pairs(matrix: np.ndarray, threshold: float) -> List[Flag]:
    """
    Return every pair ``(i, j)`` with ``i < j`` and ``matrix[i][j] >= threshold``.

    Pairs come out in lexicographic ``(i, j)`` order; self pairs and mirrored
    duplicates are never produced.
    """
    n = len(matrix)
    flags = []
    for i in range(n):
        for j in range(i + 1, n):
            score = float(matrix[i][j])
            if score >= threshold:
                flags.append(Flag(i, j, score))
    return flags
