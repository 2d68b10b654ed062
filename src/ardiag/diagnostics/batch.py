"""Batch drivers running diagnostics over many models, orders and lags.

Every diagnostic is a pure function of its inputs, so batches are plain
ordered maps. Passing ``n_jobs`` dispatches the items to a thread pool;
results always come back in input order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, TypeVar

import numpy as np
import pandas as pd

from ardiag.diagnostics.misspec import joint_test, ljung_box
from ardiag.models.ar import fit_ar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence

    from numpy.typing import ArrayLike

    from ardiag.results.base import ModelSummary

T = TypeVar("T")
R = TypeVar("R")


def parallel_map(
    func: Callable[[T], R], items: Iterable[T], n_jobs: int | None = None
) -> list[R]:
    """Apply ``func`` to every item, preserving order.

    Parameters
    ----------
    func : Callable
        Function of one argument.
    items : Iterable
        Inputs.
    n_jobs : int | None
        Number of worker threads. None or 1 runs sequentially.

    Returns
    -------
    list
        ``[func(item) for item in items]``.
    """
    if n_jobs is not None and n_jobs < 1:
        raise ValueError(f"n_jobs must be positive, got {n_jobs}")

    items = list(items)
    if n_jobs is None or n_jobs == 1 or len(items) <= 1:
        return [func(item) for item in items]

    with ThreadPoolExecutor(max_workers=n_jobs) as executor:
        return list(executor.map(func, items))


def fit_orders(
    series: ArrayLike | pd.Series[Any],
    orders: Sequence[int],
    fit: Callable[..., ModelSummary] = fit_ar,
    n_jobs: int | None = None,
) -> dict[int, ModelSummary]:
    """Fit one model per candidate order.

    Parameters
    ----------
    series : ArrayLike | pd.Series
        Observed series.
    orders : Sequence[int]
        Candidate autoregressive orders.
    fit : Callable
        Estimation routine with the signature of ``fit_ar``.
    n_jobs : int | None
        Number of worker threads.

    Returns
    -------
    dict[int, ModelSummary]
        Fitted models keyed by order, in the order given.
    """
    orders = list(orders)
    fits = parallel_map(lambda p: fit(series, p), orders, n_jobs=n_jobs)
    return dict(zip(orders, fits, strict=True))


def ljung_box_table(
    models: Mapping[Any, ModelSummary],
    lags: Sequence[int],
    n_jobs: int | None = None,
) -> pd.DataFrame:
    """Ljung-Box p-values for every model and lag depth.

    Parameters
    ----------
    models : Mapping
        Fitted models keyed by a caller-chosen identifier.
    lags : Sequence[int]
        Lag depths to test.
    n_jobs : int | None
        Number of worker threads.

    Returns
    -------
    pd.DataFrame
        One row per model, one column per lag depth. Cells where the test
        is not applicable hold nan.
    """
    keys = list(models)
    lags = list(lags)
    cells = [(key, k) for key in keys for k in lags]
    results = parallel_map(
        lambda cell: ljung_box(models[cell[0]], cell[1]), cells, n_jobs
    )

    values = np.array([r.pvalue for r in results], dtype=np.float64)
    return pd.DataFrame(
        values.reshape(len(keys), len(lags)),
        index=pd.Index(keys, name="model"),
        columns=pd.Index(lags, name="lag"),
    )


def joint_test_table(
    models: Mapping[Any, ModelSummary],
    unrestricted_sigma2: float,
    n_jobs: int | None = None,
) -> pd.DataFrame:
    """LM, LR and Wald tests of each model against a common variance.

    Parameters
    ----------
    models : Mapping
        Fitted models keyed by a caller-chosen identifier. Each is tested
        with its default degrees of freedom (coefficients minus intercept).
    unrestricted_sigma2 : float
        Residual variance of the comparison model.
    n_jobs : int | None
        Number of worker threads.

    Returns
    -------
    pd.DataFrame
        One row per model with each statistic and its p-value.
    """
    keys = list(models)
    results = parallel_map(
        lambda key: joint_test(models[key], unrestricted_sigma2), keys, n_jobs
    )

    rows = []
    for res in results:
        rows.append(
            {
                "df": res.lm.df,
                "LM": res.lm.statistic,
                "LM Pval": res.lm.pvalue,
                "LR": res.lr.statistic,
                "LR Pval": res.lr.pvalue,
                "W": res.wald.statistic,
                "W Pval": res.wald.pvalue,
            }
        )
    return pd.DataFrame(rows, index=pd.Index(keys, name="model"))
