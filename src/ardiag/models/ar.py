"""Autoregressive estimation backing the diagnostic engine.

The diagnostics never estimate anything themselves; they receive
``ModelSummary`` objects and, for the ARCH test, a callable with the
signature of :func:`fit_ar`. This module provides that callable using
exact Gaussian maximum likelihood from statsmodels.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any, Literal

import numpy as np
import pandas as pd
from statsmodels.tsa.arima.model import ARIMA

from ardiag.results.base import ModelSummary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike, NDArray
    from statsmodels.tsa.arima.model import ARIMAResults


Trend = Literal["c", "n"]


def _ensure_series(
    data: ArrayLike | pd.Series[Any], name: str = "series"
) -> NDArray[np.floating[Any]]:
    """Copy input data into a writable 1-D float array."""
    if isinstance(data, pd.Series):
        arr = data.to_numpy(dtype=np.float64, copy=True)
    else:
        arr = np.array(data, dtype=np.float64)

    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-dimensional, got {arr.ndim}")
    return arr


def _coefficient_names(order: int, trend: Trend) -> list[str]:
    """statsmodels parameter names in ModelSummary order (AR first, then const)."""
    names = [f"ar.L{lag}" for lag in range(1, order + 1)]
    if trend == "c":
        names.append("const")
    return names


def summary_from_arima(
    results: ARIMAResults, order: int, model_name: str = "AR"
) -> ModelSummary:
    """Convert a fitted statsmodels ARIMA(p, 0, 0) into a ModelSummary.

    Parameters
    ----------
    results : ARIMAResults
        Fitted results from ``statsmodels.tsa.arima.model.ARIMA``.
    order : int
        Autoregressive order ``p`` of the fitted model.
    model_name : str
        Label stored on the summary.

    Returns
    -------
    ModelSummary
        Coefficients reordered so that AR terms come first and the
        intercept last. The innovation variance is moved out of the
        coefficient vector into ``sigma2``.
    """
    sm_names = list(results.model.param_names)
    trend: Trend = "c" if "const" in sm_names else "n"
    names = _coefficient_names(order, trend)
    missing = [name for name in names + ["sigma2"] if name not in sm_names]
    if missing:
        raise ValueError(f"results are missing parameters: {missing}")

    idx = [sm_names.index(name) for name in names]
    params = np.asarray(results.params, dtype=np.float64)
    cov = np.asarray(results.cov_params(), dtype=np.float64)

    display = [f"y.L{lag}" for lag in range(1, order + 1)]
    if trend == "c":
        display.append("const")

    return ModelSummary(
        order=order,
        params=params[idx],
        cov_params_matrix=cov[np.ix_(idx, idx)],
        resid=np.asarray(results.resid, dtype=np.float64),
        sigma2=float(params[sm_names.index("sigma2")]),
        nobs=int(results.nobs),
        param_names=display,
        model_name=model_name,
    )


def fit_ar(
    series: ArrayLike | pd.Series[Any],
    order: int,
    fixed: Sequence[float] | None = None,
    trend: Trend = "c",
) -> ModelSummary:
    """Fit an AR(p) model by exact Gaussian maximum likelihood.

    Parameters
    ----------
    series : ArrayLike | pd.Series
        Observed series (n_obs,).
    order : int
        Autoregressive order ``p``. Zero gives the intercept-only model.
    fixed : Sequence[float] | None
        Optional coefficient mask in ModelSummary order (AR coefficients,
        then the intercept when ``trend="c"``). ``nan`` entries are
        estimated; finite entries are held at the given value.
    trend : {"c", "n"}
        Include a constant ("c", default) or no deterministic term ("n").

    Returns
    -------
    ModelSummary
        Summary of the fitted model with ``len(resid) == nobs``.

    Raises
    ------
    ValueError
        If ``order`` is negative or too large for the sample, ``trend`` is
        unknown, or ``fixed`` has the wrong length.

    Examples
    --------
    >>> import numpy as np
    >>> from ardiag import fit_ar
    >>> rng = np.random.default_rng(0)
    >>> y = np.zeros(300)
    >>> for t in range(1, 300):
    ...     y[t] = 0.5 * y[t - 1] + rng.standard_normal()
    >>> ar2 = fit_ar(y, 2)
    >>> ar2_restricted = fit_ar(y, 2, fixed=[np.nan, 0.0, np.nan])
    """
    y = _ensure_series(series)

    if trend not in ("c", "n"):
        raise ValueError(f"trend must be 'c' or 'n', got {trend}")
    if order < 0:
        raise ValueError(f"order must be non-negative, got {order}")
    if order >= len(y):
        raise ValueError(
            f"order must be smaller than the number of observations ({len(y)}), "
            f"got {order}"
        )

    names = _coefficient_names(order, trend)
    fixed_params: dict[str, float] = {}
    if fixed is not None:
        if len(fixed) != len(names):
            raise ValueError(
                f"fixed must have {len(names)} entries (one per coefficient), "
                f"got {len(fixed)}"
            )
        fixed_params = {
            name: float(value)
            for name, value in zip(names, fixed, strict=True)
            if not np.isnan(value)
        }

    # statsmodels cannot hold individual AR terms fixed under the
    # stationarity transform.
    model = ARIMA(
        y,
        order=(order, 0, 0),
        trend=trend,
        enforce_stationarity=not fixed_params,
    )

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        if fixed_params:
            with model.fix_params(fixed_params):
                results = model.fit()
        else:
            results = model.fit()

    return summary_from_arima(results, order, model_name=f"AR({order})")
