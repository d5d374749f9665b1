from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ..errors import InvalidPercentileError


def _drop_nan(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64).ravel()
    return arr[~np.isnan(arr)]


def _online_mean(values: np.ndarray) -> float:
    mean = 0.0
    count = 0
    for v in values:
        count += 1
        mean += (float(v) - mean) / count
    return mean


def get_percentiles(
    values: Sequence[float], percentiles: Sequence[float]
) -> np.ndarray:
    """
    Linear-interpolation percentiles of ``values`` (NaN ignored).

    For each p in [0, 100] the fractional rank is p/100 * (n-1) into the
    sorted sample. An empty sample yields NaN for every p.
    """
    ps = [float(p) for p in percentiles]
    sample = np.sort(_drop_nan(values))
    n = len(sample)

    if n == 0:
        return np.full(len(ps), np.nan)

    out = np.empty(len(ps), dtype=np.float64)
    for i, p in enumerate(ps):
        if not 0.0 <= p <= 100.0:
            raise InvalidPercentileError(
                f"Percentile must be between 0 and 100, got {p}"
            )
        if n == 1:
            out[i] = sample[0]
            continue

        rank = p / 100.0 * (n - 1)
        lower = math.floor(rank)
        upper = math.ceil(rank)
        if lower == upper:
            out[i] = sample[lower]
        else:
            weight = rank - lower
            out[i] = sample[lower] * (1.0 - weight) + sample[upper] * weight
    return out


def get_percentile(values: Sequence[float], percentile: float) -> float:
    return float(get_percentiles(values, [percentile])[0])


def get_mean(values: Sequence[float]) -> float:
    """Mean over non-NaN values using an incremental update; NaN if none."""
    sample = _drop_nan(values)
    if len(sample) == 0:
        return math.nan
    return _online_mean(sample)


def get_corr(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation over positions where both x and y are non-NaN.

    Returns NaN for fewer than two valid pairs or a constant series. The
    result is clamped to [-1, 1].
    """
    xa = np.asarray(x, dtype=np.float64).ravel()
    ya = np.asarray(y, dtype=np.float64).ravel()
    n = min(len(xa), len(ya))
    xa, ya = xa[:n], ya[:n]

    keep = ~(np.isnan(xa) | np.isnan(ya))
    xs, ys = xa[keep], ya[keep]
    if len(xs) < 2:
        return math.nan

    mean_x = _online_mean(xs)
    mean_y = _online_mean(ys)

    cov = 0.0
    ss_x = 0.0
    ss_y = 0.0
    for xv, yv in zip(xs, ys):
        dx = float(xv) - mean_x
        dy = float(yv) - mean_y
        cov += dx * dy
        ss_x += dx * dx
        ss_y += dy * dy

    if ss_x == 0.0 or ss_y == 0.0:
        return math.nan

    r = cov / math.sqrt(ss_x * ss_y)
    return max(-1.0, min(1.0, r))
