"""Timing and report helpers for the benchmarks."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Dict, Iterator, List, Sequence

import numpy as np

Samples = Dict[str, List[float]]


@contextmanager
def timed(samples: Samples, phase: str) -> Iterator[None]:
    """Append the wall time of the ``with`` body to ``samples[phase]``."""
    start = time.perf_counter()
    try:
        yield
    finally:
        samples.setdefault(phase, []).append(time.perf_counter() - start)


def median_ms(times: Sequence[float]) -> str:
    if not times:
        return "-"
    return f"{float(np.median(times)) * 1000:.2f}ms"


def print_report(title: str, phases: Sequence[str], rows: Dict[str, Samples], width: int = 12) -> None:
    """Print one row per label with the median time of every phase."""
    print(f"\n{title}")
    header = f"{'size':<10}" + "".join(f"{p:>{width}}" for p in phases)
    print(header)
    print("-" * len(header))
    for label, samples in rows.items():
        print(f"{label:<10}" + "".join(f"{median_ms(samples.get(p, [])):>{width}}" for p in phases))
