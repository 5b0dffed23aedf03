# yin/dsp/difference.py
# YIN stages 1-2: difference function and its cumulative-mean normalization.

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


def difference_function(sample: ArrayLike, tau_max: int) -> NDArray[np.floating]:
    """Squared-difference function over one window shared by every lag."""

    x = np.asarray(sample)
    if not np.issubdtype(x.dtype, np.floating):
        x = x.astype(np.float64)
    x = x.reshape(-1)

    diff = np.zeros(max(0, int(tau_max)), dtype=x.dtype)
    effective = min(x.size, diff.size)
    window = x.size - effective
    if window <= 0:
        return diff

    # x[j + tau] stays in bounds because window + tau < x.size
    head = x[:window]
    for tau in range(1, effective):
        delta = head - x[tau : tau + window]
        diff[tau] = np.dot(delta, delta)
    return diff


def cumulative_mean_normalized_difference(
    diff: NDArray[np.floating],
) -> NDArray[np.floating]:
    """CMNDF. Index 0 stays 0, zero running sums give NaN."""

    d = np.asarray(diff)
    out = np.zeros_like(d)
    if d.size < 2:
        return out

    tail = d[1:]
    running_sum = np.cumsum(tail)
    lags = np.arange(1, d.size, dtype=d.dtype)
    with np.errstate(divide="ignore", invalid="ignore"):
        out[1:] = tail * lags / running_sum
    return out
