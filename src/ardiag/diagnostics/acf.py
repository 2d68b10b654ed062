"""Sample autocorrelation function of residual series."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


def autocorrelations(resid: ArrayLike, max_lag: int) -> NDArray[np.floating[Any]]:
    """Sample autocorrelations at lags ``1..max_lag``.

    Parameters
    ----------
    resid : ArrayLike
        Residual series in time order.
    max_lag : int
        Largest lag to compute. Must satisfy ``0 < max_lag < len(resid)``.

    Returns
    -------
    NDArray[np.floating]
        Array of length ``max_lag`` where entry ``k - 1`` holds the lag-k
        autocorrelation. Lag 0 (always 1) is not included. A constant
        series yields an all-nan array.

    Raises
    ------
    ValueError
        If ``resid`` is not 1-dimensional or ``max_lag`` is out of range.

    Notes
    -----
    Uses the biased autocovariance estimator, dividing every lag by ``N``
    rather than ``N - k``:

        r_k = sum_{t=k}^{N-1} (e_t - m)(e_{t-k} - m) / sum_{t=0}^{N-1} (e_t - m)^2

    This is the convention of ``statsmodels.tsa.stattools.acf`` with
    ``adjusted=False`` and the one the Ljung-Box statistic is defined on.
    """
    x = np.asarray(resid, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"resid must be 1-dimensional, got {x.ndim}")

    n = len(x)
    if not 0 < max_lag < n:
        raise ValueError(
            f"max_lag must satisfy 0 < max_lag < len(resid)={n}, got {max_lag}"
        )

    xc = x - x.mean()
    denom = float(np.dot(xc, xc))
    if denom == 0:
        return np.full(max_lag, np.nan)

    acf = np.empty(max_lag)
    for k in range(1, max_lag + 1):
        acf[k - 1] = np.dot(xc[k:], xc[:-k]) / denom
    return acf
