"""
Population Benchmarks

Average per-cycle spontaneous-conception probability by maternal age band,
used to put an individual result in context.
"""
from __future__ import annotations

from typing import List, Tuple

SIMILAR_MARGIN = 2.0   # percentage points

# (upper age bound inclusive, population average %)
AGE_BENCHMARKS: List[Tuple[int, float]] = [
    (29, 22.5),
    (34, 17.5),
    (37, 12.5),
    (40, 7.5),
    (42, 3.5),
]
OLDEST_BENCHMARK = 1.0


def benchmark_for_age(age: int) -> float:
    for upper, average in AGE_BENCHMARKS:
        if age <= upper:
            return average
    return OLDEST_BENCHMARK


def compare_to_benchmark(prognosis: float, age: int) -> str:
    """
    Phrase comparing an individual result to the age-band average.

    Within ±2 points counts as similar; anything else is notably above or below.
    """
    average = benchmark_for_age(age)
    difference = prognosis - average
    if abs(difference) <= SIMILAR_MARGIN:
        relation = "similar to"
    elif difference > 0:
        relation = "notably above"
    else:
        relation = "notably below"
    return (
        f"Your result is {relation} the average for women of your age "
        f"({average:.1f}% per cycle)."
    )
