"""Hypothesis strategies for property-based testing of ardiag.

This module provides reusable data generators for property tests using
the Hypothesis library.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from hypothesis import strategies as st
from numpy.typing import NDArray

from ardiag import ModelSummary


@st.composite
def residual_series(
    draw: st.DrawFn,
    min_n: int = 20,
    max_n: int = 200,
) -> NDArray[np.floating[Any]]:
    """Generate a residual series with real variation.

    Draws either white noise or a stationary AR(1) so that both
    uncorrelated and autocorrelated residuals are exercised.

    Parameters
    ----------
    draw : st.DrawFn
        Hypothesis draw function.
    min_n : int
        Minimum number of observations.
    max_n : int
        Maximum number of observations.

    Returns
    -------
    NDArray
        Residuals (n,).
    """
    n = draw(st.integers(min_value=min_n, max_value=max_n))
    phi = draw(
        st.floats(min_value=-0.9, max_value=0.9, allow_nan=False, allow_infinity=False)
    )
    scale = draw(st.floats(min_value=0.1, max_value=10.0))

    # Use a seeded random generator to ensure non-degenerate data
    rng = np.random.default_rng(draw(st.integers(min_value=0, max_value=2**31 - 1)))
    e = rng.standard_normal(n) * scale
    for t in range(1, n):
        e[t] += phi * e[t - 1]
    return e


@st.composite
def residual_summaries(
    draw: st.DrawFn,
    min_n: int = 20,
    max_n: int = 200,
    max_params: int = 5,
) -> ModelSummary:
    """Generate a ModelSummary around a drawn residual series.

    Parameters
    ----------
    draw : st.DrawFn
        Hypothesis draw function.
    min_n : int
        Minimum number of observations.
    max_n : int
        Maximum number of observations.
    max_params : int
        Maximum number of coefficients (including the intercept).

    Returns
    -------
    ModelSummary
        Summary with placeholder coefficients and the drawn residuals.
    """
    resid = draw(residual_series(min_n=min_n, max_n=max_n))
    k = draw(st.integers(min_value=1, max_value=max_params))
    return ModelSummary(
        order=k - 1,
        params=np.zeros(k),
        cov_params_matrix=np.eye(k),
        resid=resid,
        sigma2=float(np.var(resid)),
        nobs=len(resid),
    )


positive_variances = st.floats(
    min_value=1e-6, max_value=1e6, allow_nan=False, allow_infinity=False
)
