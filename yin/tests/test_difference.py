from __future__ import annotations

import numpy as np
import pytest

from yin.dsp.difference import cumulative_mean_normalized_difference, difference_function


def _reference_difference(x: np.ndarray, tau_max: int) -> np.ndarray:
    out = np.zeros(tau_max)
    effective = min(x.size, tau_max)
    for tau in range(1, effective):
        for j in range(x.size - effective):
            out[tau] += (x[j] - x[j + tau]) ** 2
    return out


def test_difference_matches_fixed_window_loop(rng) -> None:
    x = rng.standard_normal(50)
    d = difference_function(x, 10)
    assert d.shape == (10,)
    np.testing.assert_allclose(d, _reference_difference(x, 10))


def test_difference_lag_zero_is_zero(rng) -> None:
    x = rng.standard_normal(300)
    for tau_max in (1, 7, 64):
        assert difference_function(x, tau_max)[0] == 0.0


def test_difference_uses_same_window_for_every_lag() -> None:
    x = np.arange(12, dtype=np.float64)
    d = difference_function(x, 4)
    # window is 12 - 4 = 8 samples, each differing by exactly tau
    np.testing.assert_allclose(d, [0.0, 8.0, 32.0, 72.0])


@pytest.mark.parametrize("n", [0, 1, 5, 10])
def test_difference_short_buffers_are_all_zero(n: int) -> None:
    x = np.ones(n) if n else np.empty(0)
    d = difference_function(np.cumsum(x), 10)
    assert d.shape == (10,)
    assert not np.any(d)


def test_difference_accepts_integer_lists() -> None:
    d = difference_function([0, 1, 0, 1, 0, 1, 0, 1], 3)
    assert d.dtype.kind == "f"
    np.testing.assert_allclose(d, [0.0, 5.0, 0.0])


def test_difference_leaves_input_untouched(rng) -> None:
    x = rng.standard_normal(40).astype(np.float32)
    before = x.copy()
    d = difference_function(x, 8)
    np.testing.assert_array_equal(x, before)
    assert d.dtype == np.float32


def test_cmndf_known_values() -> None:
    out = cumulative_mean_normalized_difference(np.array([0.0, 1.0, 2.0, 3.0]))
    np.testing.assert_allclose(out, [0.0, 1.0, 4.0 / 3.0, 1.5])


def test_cmndf_length_and_sentinel(rng) -> None:
    d = np.abs(rng.standard_normal(32))
    d[0] = 0.0
    out = cumulative_mean_normalized_difference(d)
    assert out.shape == d.shape
    assert out[0] == 0.0


def test_cmndf_silence_propagates_nan() -> None:
    out = cumulative_mean_normalized_difference(np.zeros(6))
    assert out[0] == 0.0
    assert np.all(np.isnan(out[1:]))


def test_cmndf_recovers_after_leading_zeros() -> None:
    out = cumulative_mean_normalized_difference(np.array([0.0, 0.0, 2.0]))
    assert np.isnan(out[1])
    assert out[2] == pytest.approx(2.0)


def test_cmndf_tiny_inputs() -> None:
    assert cumulative_mean_normalized_difference(np.empty(0)).size == 0
    np.testing.assert_array_equal(cumulative_mean_normalized_difference(np.array([3.0])), [0.0])
