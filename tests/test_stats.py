import math

import numpy as np
import pytest

from dsutil.errors import InvalidPercentileError
from dsutil.stats import get_corr, get_mean, get_percentile, get_percentiles


def test_percentiles_match_linear_interpolation():
    sample = [7.0, 1.0, np.nan, 3.0, 10.0, 4.0]
    got = get_percentiles(sample, [0, 25, 50, 90, 100])

    # sorted without NaN: [1, 3, 4, 7, 10], rank = p/100 * 4
    expected = [1.0, 3.0, 4.0, 7.0 + 0.6 * 3.0, 10.0]
    np.testing.assert_allclose(got, expected)
    # numpy's default method is also linear
    np.testing.assert_allclose(got, np.percentile([1, 3, 4, 7, 10], [0, 25, 50, 90, 100]))


def test_median_of_odd_sample_is_middle_element():
    assert get_percentile([5.0, 2.0, 9.0, 1.0, 7.0], 50) == 5.0


def test_single_element_ignores_percentile():
    assert get_percentiles([42.0, np.nan], [0, 33, 100]).tolist() == [42.0, 42.0, 42.0]


@pytest.mark.parametrize("sample", [[], [np.nan, np.nan]])
def test_percentiles_of_empty_sample_are_nan(sample):
    got = get_percentiles(sample, [10, 50, 90])
    assert len(got) == 3
    assert np.isnan(got).all()


@pytest.mark.parametrize("p", [-0.1, 100.5, float("nan")])
def test_out_of_range_percentile_raises(p):
    with pytest.raises(InvalidPercentileError):
        get_percentiles([1.0, 2.0, 3.0], [50, p])


def test_mean():
    assert math.isnan(get_mean([]))
    assert math.isnan(get_mean([np.nan]))
    assert get_mean([1, 2, 3]) == 2.0
    assert get_mean([1.0, np.nan, 4.0]) == 2.5


def test_mean_large_magnitudes_do_not_overflow():
    big = [1e308, 1e308, 1e308]
    assert get_mean(big) == pytest.approx(1e308)


def test_corr_of_linear_relation_is_one():
    x = np.array([0.5, 1.0, 2.0, 4.5, 7.0, 11.0])
    assert get_corr(x, 2.0 * x + 3.0) == pytest.approx(1.0)
    assert get_corr(x, -0.5 * x + 1.0) == pytest.approx(-1.0)


def test_corr_constant_series_is_nan():
    assert math.isnan(get_corr([3.0, 3.0, 3.0], [1.0, 1.0, 1.0]))
    assert math.isnan(get_corr([1.0, 2.0, 3.0], [4.0, 4.0, 4.0]))


def test_corr_drops_nan_pairs_and_needs_two():
    x = [1.0, np.nan, 2.0, 3.0]
    y = [2.0, 5.0, np.nan, 6.0]
    # valid pairs: (1, 2), (3, 6)
    assert get_corr(x, y) == pytest.approx(1.0)
    assert math.isnan(get_corr([1.0, np.nan], [np.nan, 2.0]))
    assert math.isnan(get_corr([1.0], [1.0]))


def test_corr_is_bounded():
    rng = np.random.default_rng(7)
    for _ in range(20):
        x = rng.normal(size=50)
        y = rng.normal(size=50)
        r = get_corr(x, y)
        assert -1.0 <= r <= 1.0
        assert r == pytest.approx(np.corrcoef(x, y)[0, 1])


def test_only_nan_is_dropped():
    assert get_mean([1.0, np.inf, np.nan]) == np.inf
    assert get_percentile([np.inf, 1.0, np.nan], 100) == np.inf
