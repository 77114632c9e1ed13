"""timing.py — stopwatch utilities for the chalkboard pipeline stages

Features
--------
* **Timer** context‑manager – `with Timer("mask"):`
* Global accumulation per label & a formatted summary

Example
-------
```python
from chalkboard.io_utils.timing import Timer

with Timer("mask", silent=True):
    mask = make_mask(img)

print(Timer.summary())
```
"""

from __future__ import annotations

import time
from collections import defaultdict
from typing import Dict

__all__ = ["Timer"]

# ----------------------------------------------------------------------------
# Core timer
# ----------------------------------------------------------------------------

class Timer:
    """Context‑manager style stopwatch with global accumulation.

    Parameters
    ----------
    label : str
        Pipeline stage name (``load``, ``mask``, ``invert``, ``save``).
    accumulate : bool, default True
        If *True*, elapsed seconds are added to an internal accumulator
        keyed by *label* so a summary can be produced later.
    silent : bool, default False
        If *True*, do **not** print the end‑of‑block timing line.
    """

    _acc: Dict[str, float] = defaultdict(float)  # cumulative seconds per label

    def __init__(self, label: str, *, accumulate: bool = True, silent: bool = False):
        self.label = label
        self.accumulate = accumulate
        self.silent = silent
        self._start: float | None = None
        self.elapsed: float | None = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._start is None:
            raise RuntimeError("Timer was never started; use it as a context manager")
        self.elapsed = time.perf_counter() - self._start
        if self.accumulate:
            Timer._acc[self.label] += self.elapsed
        if not self.silent:
            print(f"[TIMER] {self.label:<8s}: {Timer._fmt(self.elapsed)}")

    # seconds → ms string
    @staticmethod
    def _fmt(seconds: float) -> str:
        return f"{seconds*1000:.2f} ms"

    # Public API ---------------------------------------------------------

    @staticmethod
    def stats() -> Dict[str, float]:
        """Return *copy* of cumulative timing dict {label: seconds}."""
        return dict(Timer._acc)

    @staticmethod
    def summary(reset: bool = False) -> str:
        """Format cumulative statistics and optionally reset them."""
        if not Timer._acc:
            return "[TIMER] No measurements recorded."

        width = max(len(k) for k in Timer._acc)
        lines = ["---------- timings ----------"]
        total = 0.0
        for lbl, sec in Timer._acc.items():
            total += sec
            lines.append(f"{lbl.ljust(width)} : {Timer._fmt(sec)}")
        lines.append(f"{'total'.ljust(width)} : {Timer._fmt(total)}")

        if reset:
            Timer.reset()
        return "\n".join(lines)

    @staticmethod
    def reset() -> None:
        """Clear all accumulated statistics."""
        Timer._acc.clear()

