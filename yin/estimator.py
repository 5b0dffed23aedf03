from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from yin.config import DTYPES, EstimatorConfig, YinSettings
from yin.dsp.difference import cumulative_mean_normalized_difference, difference_function
from yin.dsp.search import absolute_threshold, lag_to_frequency
from yin.errors import UnknownPitch

logger = logging.getLogger(__name__)


def _estimate(
    sample: ArrayLike, tau_min: int, tau_max: int, sample_rate: int, threshold: float
) -> Optional[float]:
    diff = difference_function(sample, tau_max)
    cmndf = cumulative_mean_normalized_difference(diff)
    lag = absolute_threshold(cmndf, tau_min, tau_max, threshold)
    return lag_to_frequency(lag, sample_rate)


def compute_sample_frequency(
    sample: ArrayLike, tau_min: int, tau_max: int, sample_rate: int, threshold: float
) -> float:
    """Stateless YIN pipeline. ``math.inf`` means no pitch was found."""

    freq = _estimate(sample, tau_min, tau_max, sample_rate, threshold)
    return math.inf if freq is None else freq


class Yin:
    """Reusable YIN estimator for a fixed frequency range and sample rate."""

    def __init__(
        self,
        threshold: float,
        freq_min: float,
        freq_max: float,
        sample_rate: int,
        dtype: str = "float64",
    ) -> None:
        if dtype not in DTYPES:
            raise ValueError(f"dtype must be one of {DTYPES}, got {dtype!r}")
        self._config = EstimatorConfig.from_frequency_range(
            threshold, freq_min, freq_max, sample_rate
        )
        self._dtype = np.dtype(dtype)
        logger.debug(
            "YIN estimator: tau=[%d, %d) sr=%d threshold=%.3f dtype=%s",
            self._config.tau_min,
            self._config.tau_max,
            self._config.sample_rate,
            self._config.threshold,
            self._dtype.name,
        )

    @classmethod
    def from_settings(cls, settings: YinSettings) -> "Yin":
        return cls(
            settings.threshold,
            settings.freq_min,
            settings.freq_max,
            settings.sample_rate,
            dtype=settings.dtype,
        )

    @property
    def config(self) -> EstimatorConfig:
        return self._config

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def estimate_freq(self, sample: ArrayLike) -> float:
        """Estimate the fundamental frequency of ``sample`` in Hz.

        Raises ``UnknownPitch`` when no period is found in the configured range.
        """

        cfg = self._config
        x = np.asarray(sample, dtype=self._dtype)
        freq = _estimate(x, cfg.tau_min, cfg.tau_max, cfg.sample_rate, cfg.threshold)
        if freq is None or not math.isfinite(freq):
            logger.debug("no pitch in %d samples", x.size)
            raise UnknownPitch()
        return freq
