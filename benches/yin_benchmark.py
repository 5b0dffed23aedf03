"""Time the YIN pipeline on a 100 Hz sine sampled at 1 kHz."""

from __future__ import annotations

import argparse
import time

import numpy as np

from yin.config import EstimatorConfig
from yin.estimator import compute_sample_frequency

SAMPLE_RATE = 1000
FREQ_HZ = 100.0
N_SAMPLES = 44100


def norm_sine(sr: int = SAMPLE_RATE, freq: float = FREQ_HZ, n: int = N_SAMPLES) -> np.ndarray:
    t = np.arange(n) / sr
    return np.sin(2 * np.pi * freq * t)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--iterations", type=int, default=50)
    parser.add_argument("--threshold", type=float, default=0.1)
    parser.add_argument("--freq-min", type=float, default=50.0)
    parser.add_argument("--freq-max", type=float, default=400.0)
    args = parser.parse_args()

    cfg = EstimatorConfig.from_frequency_range(
        args.threshold, args.freq_min, args.freq_max, SAMPLE_RATE
    )
    sample = norm_sine()

    timings = []
    freq = float("inf")
    for _ in range(max(1, args.iterations)):
        t0 = time.perf_counter()
        freq = compute_sample_frequency(
            sample, cfg.tau_min, cfg.tau_max, cfg.sample_rate, cfg.threshold
        )
        timings.append(time.perf_counter() - t0)

    ms = np.asarray(timings) * 1e3
    print(f"{SAMPLE_RATE} sr, {FREQ_HZ} freq: {freq:.3f} Hz")
    print(f"mean {ms.mean():.3f} ms, min {ms.min():.3f} ms over {ms.size} runs")


if __name__ == "__main__":
    main()
