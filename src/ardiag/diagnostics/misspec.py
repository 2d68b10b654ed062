"""Adequacy tests for fitted autoregressive models.

This module implements the diagnostic battery run on ``ModelSummary``
objects:
1. Coefficient significance - z-tests on individual coefficients
2. Joint significance - LM, LR and Wald tests from residual variances
3. Serial correlation - Ljung-Box portmanteau test on residuals
4. Conditional heteroskedasticity - Breusch-Pagan style ARCH test built
   from autoregressions of the squared residuals
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from ardiag.diagnostics.acf import autocorrelations
from ardiag.diagnostics.distributions import chi2_upper_tail, normal_upper_tail
from ardiag.models.ar import fit_ar

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import NDArray

    from ardiag.results.base import ModelSummary

    AuxiliaryFit = Callable[[NDArray[np.floating[Any]], int], ModelSummary]


def _fmt(value: float, width: int = 12, precision: int = 4) -> str:
    """Format a table cell, rendering undefined values as ``n/a``."""
    if math.isnan(value):
        return f"{'n/a':>{width}}"
    return f"{value:>{width}.{precision}f}"


@dataclass(frozen=True)
class DiagnosticTestResult:
    """Result from a single diagnostic test.

    Attributes
    ----------
    test_name : str
        Name of the test (e.g., "Ljung-Box Q(12)").
    null_hypothesis : str
        Description of the null hypothesis.
    statistic : float
        Test statistic value.
    pvalue : float
        P-value of the test; nan when the tail probability is undefined.
    df : int | None
        Degrees of freedom of the reference chi-square distribution.
    """

    test_name: str
    null_hypothesis: str
    statistic: float
    pvalue: float
    df: int | None = None

    @property
    def is_defined(self) -> bool:
        """True if the p-value could be computed."""
        return not math.isnan(self.pvalue)

    def __str__(self) -> str:
        """Return string representation."""
        return (
            f"{self.test_name}: statistic={self.statistic:.4f}, "
            f"p-value={self.pvalue:.4f}"
        )


@dataclass(frozen=True)
class NotApplicable:
    """Marker for a test that cannot be computed on the given model.

    Returned in place of a ``DiagnosticTestResult`` so that an undefined
    test is never confused with a legitimate p-value of 0 or 1.

    Attributes
    ----------
    test_name : str
        Name of the test that was requested.
    reason : str
        Why the test does not apply.
    """

    test_name: str
    reason: str

    @property
    def pvalue(self) -> float:
        """Always nan; lets tables treat the marker like an undefined cell."""
        return math.nan

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.test_name}: not applicable ({self.reason})"


@dataclass(frozen=True)
class JointTestResults:
    """LM, LR and Wald tests of a joint coefficient restriction.

    Attributes
    ----------
    lm : DiagnosticTestResult
        Lagrange multiplier statistic.
    lr : DiagnosticTestResult
        Likelihood ratio statistic.
    wald : DiagnosticTestResult
        Wald statistic.
    """

    lm: DiagnosticTestResult
    lr: DiagnosticTestResult
    wald: DiagnosticTestResult

    @property
    def tests(self) -> tuple[DiagnosticTestResult, ...]:
        """The three tests in LM, LR, Wald order."""
        return (self.lm, self.lr, self.wald)

    def summary(self) -> str:
        """Generate a text summary of the joint tests.

        Returns
        -------
        str
            Formatted table with statistic, degrees of freedom and p-value.
        """
        lines = []
        lines.append("=" * 81)
        lines.append(f"{'Joint Significance Tests':^81}")
        lines.append("-" * 81)
        lines.append(f"{'Test':<35} {'Statistic':>12} {'df':>6} {'P-value':>12}")
        lines.append("-" * 81)
        for test in self.tests:
            lines.append(
                f"{test.test_name:<35} {_fmt(test.statistic)} "
                f"{test.df!s:>6} {_fmt(test.pvalue)}"
            )
        lines.append("=" * 81)
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert results to a pandas DataFrame indexed by LM, LR, W."""
        return pd.DataFrame(
            {
                "statistic": [t.statistic for t in self.tests],
                "df": [t.df for t in self.tests],
                "pvalue": [t.pvalue for t in self.tests],
            },
            index=["LM", "LR", "W"],
        )


@dataclass(frozen=True, eq=False)
class BreuschPaganResults:
    """Cumulative and incremental ARCH statistics by auxiliary order.

    Arrays are indexed by ``order - 1``. Relative statistics of order 1
    are undefined (nan) since there is no lower-order fit to compare with.

    Attributes
    ----------
    max_order : int
        Largest auxiliary autoregression order.
    nobs : int
        Observation count of the tested model.
    stat : NDArray[np.floating]
        Cumulative statistic for each order.
    pvalue : NDArray[np.floating]
        Chi-square(order) p-value of ``stat``.
    rel_stat : NDArray[np.floating]
        Variance reduction from adding the lag at each order.
    rel_pvalue : NDArray[np.floating]
        Chi-square(1) p-value of ``rel_stat``.
    """

    max_order: int
    nobs: int
    stat: NDArray[np.floating[Any]]
    pvalue: NDArray[np.floating[Any]]
    rel_stat: NDArray[np.floating[Any]]
    rel_pvalue: NDArray[np.floating[Any]]

    @property
    def orders(self) -> list[int]:
        """Auxiliary orders ``1..max_order``."""
        return list(range(1, self.max_order + 1))

    def row(self, order: int) -> dict[str, float]:
        """Return the four statistics for one auxiliary order."""
        if not 1 <= order <= self.max_order:
            raise ValueError(
                f"order must be between 1 and {self.max_order}, got {order}"
            )
        i = order - 1
        return {
            "Stat": float(self.stat[i]),
            "Pval": float(self.pvalue[i]),
            "RelStat": float(self.rel_stat[i]),
            "RelPval": float(self.rel_pvalue[i]),
        }

    def summary(self) -> str:
        """Generate a text summary of the ARCH test table.

        Returns
        -------
        str
            One line per auxiliary order with cumulative and relative tests.
        """
        lines = []
        lines.append("=" * 81)
        lines.append(f"{'ARCH Tests (Breusch-Pagan)':^81}")
        lines.append("-" * 81)
        lines.append(
            f"{'Order':<8} {'Stat':>12} {'Pval':>12} {'RelStat':>12} {'RelPval':>12}"
        )
        lines.append("-" * 81)
        for order in self.orders:
            row = self.row(order)
            lines.append(
                f"{order:<8} {_fmt(row['Stat'])} {_fmt(row['Pval'])} "
                f"{_fmt(row['RelStat'])} {_fmt(row['RelPval'])}"
            )
        lines.append("=" * 81)
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert results to a pandas DataFrame indexed by order."""
        return pd.DataFrame(
            {
                "Stat": self.stat,
                "Pval": self.pvalue,
                "RelStat": self.rel_stat,
                "RelPval": self.rel_pvalue,
            },
            index=pd.Index(self.orders, name="order"),
        )


def coefficient_tests(model: ModelSummary) -> pd.DataFrame:
    """z-tests of individual coefficient significance.

    Parameters
    ----------
    model : ModelSummary
        Fitted model.

    Returns
    -------
    pd.DataFrame
        Columns ``coef``, ``std_err``, ``z`` and ``P>|z|`` indexed by
        coefficient name. The p-value is the one-sided normal tail of
        ``|z|``. Coefficients held fixed during estimation have no
        standard error and report nan.
    """
    z = model.zvalues
    return pd.DataFrame(
        {
            "coef": model.params,
            "std_err": model.bse,
            "z": z,
            "P>|z|": [normal_upper_tail(float(v)) for v in z],
        },
        index=model.names,
    )


def joint_test(
    restricted: ModelSummary,
    unrestricted_sigma2: float,
    restricted_df: int | None = None,
) -> JointTestResults:
    """LM, LR and Wald tests of a joint restriction from residual variances.

    Parameters
    ----------
    restricted : ModelSummary
        Model whose coefficients are tested jointly. Its ``sigma2`` and
        ``nobs`` enter the statistics.
    unrestricted_sigma2 : float
        Residual variance of the comparison model, estimated on the same
        observations.
    restricted_df : int | None
        Number of coefficients tested jointly. Defaults to
        ``len(restricted.params) - 1`` (all coefficients but the intercept).

    Returns
    -------
    JointTestResults
        The three statistics with chi-square(restricted_df) p-values.

    Raises
    ------
    ValueError
        If ``unrestricted_sigma2`` is negative.

    Notes
    -----
    With ``s_u = unrestricted_sigma2``, ``s_r = restricted.sigma2`` and
    ``N = restricted.nobs``:

        LM = N (s_u - s_r) / s_u
        LR = N ln(s_u / s_r)
        W  = N (s_u - s_r) / s_r

    Because ``1 - 1/a <= ln(a) <= a - 1`` for every ``a > 0``, the ordering
    ``LM <= LR <= W`` holds for any pair of positive variances, with
    equality (all zero) only when they coincide. The caller decides which
    model plays which role. Statistics are positive when
    ``unrestricted_sigma2`` exceeds ``restricted.sigma2``; a negative
    statistic gets a nan p-value.
    """
    if not unrestricted_sigma2 >= 0:
        raise ValueError(
            f"unrestricted_sigma2 must be non-negative, got {unrestricted_sigma2}"
        )
    if restricted_df is None:
        restricted_df = restricted.df_model - 1

    n = restricted.nobs
    s_u = np.float64(unrestricted_sigma2)
    s_r = np.float64(restricted.sigma2)

    # Zero variances give inf/nan statistics whose p-values are nan
    with np.errstate(divide="ignore", invalid="ignore"):
        lm = float(n * (s_u - s_r) / s_u)
        lr = float(n * np.log(s_u / s_r))
        wald = float(n * (s_u - s_r) / s_r)

    null = f"{restricted_df} coefficient(s) jointly zero"

    def _result(name: str, statistic: float) -> DiagnosticTestResult:
        return DiagnosticTestResult(
            test_name=name,
            null_hypothesis=null,
            statistic=statistic,
            pvalue=chi2_upper_tail(statistic, restricted_df),
            df=restricted_df,
        )

    return JointTestResults(
        lm=_result("LM", lm),
        lr=_result("LR", lr),
        wald=_result("Wald", wald),
    )


def ljung_box(
    model: ModelSummary, nlags: int = 12
) -> DiagnosticTestResult | NotApplicable:
    """Ljung-Box test for serial correlation in model residuals.

    Tests the null hypothesis that the residuals are not serially
    correlated up to lag ``nlags``.

    Parameters
    ----------
    model : ModelSummary
        Fitted model whose residuals are tested.
    nlags : int, default 12
        Lag depth ``K``.

    Returns
    -------
    DiagnosticTestResult | NotApplicable
        Test result with Q statistic, or ``NotApplicable`` when the lag
        depth leaves no degrees of freedom after accounting for the
        estimated AR coefficients, or exceeds the sample, or when
        the residuals are constant.

    Notes
    -----
    With ``T = model.nobs`` and ``r_k`` the residual autocorrelations:

        Q = T (T + 2) sum_{k=1}^{K} r_k^2 / (T - k)

    compared with a chi-square distribution on
    ``K - (len(params) - 1)`` degrees of freedom.
    """
    test_name = f"Ljung-Box Q({nlags})"
    ndf = nlags - (model.df_model - 1)
    t = model.nobs

    if ndf <= 0:
        return NotApplicable(
            test_name=test_name,
            reason=f"{nlags} lags leave {ndf} degrees of freedom",
        )
    if t <= nlags:
        return NotApplicable(
            test_name=test_name,
            reason=f"{t} observations for {nlags} lags",
        )

    rk = autocorrelations(model.resid, nlags)
    if np.isnan(rk).any():
        return NotApplicable(test_name=test_name, reason="constant residuals")
    k = np.arange(1, nlags + 1)
    q = float(t * (t + 2) * np.sum(rk**2 / (t - k)))

    return DiagnosticTestResult(
        test_name=test_name,
        null_hypothesis="No serial correlation",
        statistic=q,
        pvalue=chi2_upper_tail(q, ndf),
        df=ndf,
    )


def breusch_pagan(
    model: ModelSummary,
    max_order: int,
    fit_auxiliary: AuxiliaryFit = fit_ar,
    n_jobs: int | None = None,
) -> BreuschPaganResults:
    """Breusch-Pagan style test for ARCH effects in model residuals.

    Fits autoregressions of the squared residuals on their own lags for
    orders ``1..max_order`` and compares their residual variances with the
    unconditional variance of the squared residuals.

    Parameters
    ----------
    model : ModelSummary
        Fitted model whose residuals are tested.
    max_order : int
        Largest auxiliary autoregression order.
    fit_auxiliary : Callable[[NDArray, int], ModelSummary]
        Estimation routine for the auxiliary models. Defaults to
        :func:`ardiag.models.ar.fit_ar`.
    n_jobs : int | None
        Number of worker threads for the auxiliary fits. None or 1 fits
        sequentially.

    Returns
    -------
    BreuschPaganResults
        Table of cumulative and relative statistics by order.

    Raises
    ------
    ValueError
        If ``max_order`` is smaller than 1.

    Notes
    -----
    With ``T = model.nobs``, ``s2`` the sample variance of the squared
    residuals and ``v_i`` the residual variance of the order-i auxiliary
    fit:

        Stat_i    = T (s2 - v_i) / s2                    ~ chi2(i)
        RelStat_i = T (v_{i-1} - v_i) / v_{max_order}    ~ chi2(1), i > 1

    The relative statistic is normalized by the largest-order fit for every
    row, so its scale depends on ``max_order``.
    """
    from ardiag.diagnostics.batch import parallel_map

    if max_order < 1:
        raise ValueError(f"max_order must be at least 1, got {max_order}")

    res2 = model.resid**2
    t = model.nobs
    sigma2 = float(np.var(res2, ddof=1))

    orders = list(range(1, max_order + 1))
    aux = parallel_map(lambda i: fit_auxiliary(res2, i), orders, n_jobs=n_jobs)
    v = np.array([fit.sigma2 for fit in aux])

    if sigma2 > 0:
        stat = t * (sigma2 - v) / sigma2
    else:
        stat = np.full(max_order, np.nan)
    pvalue = np.array([chi2_upper_tail(float(s), i) for s, i in zip(stat, orders)])

    rel_stat = np.full(max_order, np.nan)
    rel_pvalue = np.full(max_order, np.nan)
    if v[-1] > 0:
        rel_stat[1:] = t * (v[:-1] - v[1:]) / v[-1]
        rel_pvalue[1:] = [chi2_upper_tail(float(s), 1) for s in rel_stat[1:]]

    return BreuschPaganResults(
        max_order=max_order,
        nobs=t,
        stat=stat,
        pvalue=pvalue,
        rel_stat=rel_stat,
        rel_pvalue=rel_pvalue,
    )
