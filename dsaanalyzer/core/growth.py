"""
Growth curves for complexity visualization.

Maps a Big-O label to illustrative magnitudes over a fixed set of input sizes.
The values drive the frontend charts; they are not measured performance.
"""
from __future__ import annotations

import math
from enum import Enum


SAMPLE_SIZES: tuple[int, ...] = (10, 20, 40, 80, 160)


class GrowthClass(str, Enum):
    CONSTANT = "constant"
    LOGARITHMIC = "logarithmic"
    LOG_LINEAR = "log-linear"
    QUADRATIC = "quadratic"
    CUBIC = "cubic"
    EXPONENTIAL = "exponential"
    LINEAR = "linear"


# Order matters: first match wins
_MARKERS: list[tuple[GrowthClass, tuple[str, ...]]] = [
    (GrowthClass.CONSTANT, ("O(1)",)),
    (GrowthClass.LOGARITHMIC, ("O(LOG N)", "O(LOGN)")),
    (GrowthClass.LOG_LINEAR, ("O(N LOG N)", "O(NLOGN)")),
    (GrowthClass.QUADRATIC, ("O(N²)", "O(N^2)")),
    (GrowthClass.CUBIC, ("O(N³)", "O(N^3)")),
    (GrowthClass.EXPONENTIAL, ("O(2^N)",)),
]


def classify_complexity(label: str) -> GrowthClass:
    """
    Classify a Big-O label into a growth class.

    Args:
        label: Complexity string as returned by the model, e.g. "O(n log n)"

    Returns:
        Matching GrowthClass, LINEAR when nothing matches
    """
    normalized = (label or "").strip().upper()
    for growth_class, markers in _MARKERS:
        if any(marker in normalized for marker in markers):
            return growth_class
    return GrowthClass.LINEAR


def _magnitude(growth_class: GrowthClass, n: int) -> int:
    if growth_class is GrowthClass.CONSTANT:
        return 5
    if growth_class is GrowthClass.LOGARITHMIC:
        return int(math.log2(n)) * 5
    if growth_class is GrowthClass.LOG_LINEAR:
        return int(n * math.log2(n))
    if growth_class is GrowthClass.QUADRATIC:
        return n * n // 10
    if growth_class is GrowthClass.CUBIC:
        return n * n * n // 100
    if growth_class is GrowthClass.EXPONENTIAL:
        return 2 ** (n // 10)
    return n


def generate_growth_curve(label: str) -> list[int]:
    """
    Generate sample magnitudes for a complexity label.

    Args:
        label: Complexity string, e.g. "O(n^2)"

    Returns:
        One magnitude per entry of SAMPLE_SIZES, in size order
    """
    growth_class = classify_complexity(label)
    return [_magnitude(growth_class, n) for n in SAMPLE_SIZES]
