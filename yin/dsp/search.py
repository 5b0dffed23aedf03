# yin/dsp/search.py
# YIN stages 3-4: absolute-threshold lag search and lag -> Hz.

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray


def absolute_threshold(
    cmndf: NDArray[np.floating], tau_min: int, tau_max: int, threshold: float
) -> Optional[int]:
    """First local minimum after the first dip below threshold, or None."""

    values = np.asarray(cmndf)
    # lag 0 is the "no lag" sentinel
    start = max(int(tau_min), 1)
    stop = min(int(tau_max), values.size)
    if start >= stop:
        return None

    # NaN compares False, so silent regions never qualify
    below = np.flatnonzero(values[start:stop] < threshold)
    if below.size == 0:
        return None

    tau = start + int(below[0])
    while tau + 1 < stop and values[tau + 1] < values[tau]:
        tau += 1
    return tau


def lag_to_frequency(lag: Optional[int], sample_rate: int) -> Optional[float]:
    if not lag:
        return None
    return float(sample_rate) / float(lag)
