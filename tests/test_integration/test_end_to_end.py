"""End-to-end scenarios on simulated AR(1) data with real estimation."""

from __future__ import annotations

import math

import numpy as np
import pytest

import ardiag as ad
from ardiag.diagnostics import DiagnosticTestResult

from ..conftest import simulate_ar1

N_TRIALS = 20


@pytest.fixture(scope="module")
def trials() -> list[np.ndarray]:
    """Independent AR(1) draws with phi=0.5, n=500."""
    rng = np.random.default_rng(20240501)
    return [simulate_ar1(rng) for _ in range(N_TRIALS)]


class TestLjungBoxScenario:
    """Ljung-Box separates the correct order from the intercept-only model."""

    def test_ar1_residuals_not_rejected(self, trials: list[np.ndarray]) -> None:
        """AR(1) residuals pass at K=12 in the large majority of draws."""
        pvalues = []
        for y in trials:
            result = ad.ljung_box(ad.fit_ar(y, 1), 12)
            assert isinstance(result, DiagnosticTestResult)
            assert result.df == 11
            pvalues.append(result.pvalue)
        assert sum(p > 0.05 for p in pvalues) >= 15

    def test_intercept_only_residuals_rejected(
        self, trials: list[np.ndarray]
    ) -> None:
        """Ignoring the AR term leaves strong autocorrelation."""
        for y in trials[:5]:
            result = ad.ljung_box(ad.fit_ar(y, 0), 12)
            assert result.pvalue < 0.01

    def test_order_sweep_table(self, trials: list[np.ndarray]) -> None:
        """AR(0)..AR(3) table: AR(0) rejected, AR(1) and up mostly not."""
        models = ad.fit_orders(trials[0], [0, 1, 2, 3], n_jobs=2)
        table = ad.ljung_box_table(models, [1, 6, 12])
        assert table.loc[0, 12] < 0.01
        assert math.isnan(table.loc[2, 1])
        assert math.isnan(table.loc[3, 1])
        assert not math.isnan(table.loc[3, 6])


class TestJointTestScenario:
    """LM, LR and W on correct and incorrect zero restrictions."""

    def test_true_zero_restriction_not_rejected(
        self, trials: list[np.ndarray]
    ) -> None:
        """Holding the second AR lag at its true value of zero."""
        rejections = {"LM": 0, "LR": 0, "Wald": 0}
        for y in trials:
            free = ad.fit_ar(y, 2)
            restricted = ad.fit_ar(y, 2, fixed=[np.nan, 0.0, np.nan])
            result = ad.joint_test(free, restricted.sigma2, restricted_df=1)
            for test in result.tests:
                if test.pvalue <= 0.10:
                    rejections[test.test_name] += 1
        assert all(count <= 6 for count in rejections.values())

    def test_false_zero_restriction_rejected(
        self, trials: list[np.ndarray]
    ) -> None:
        """The AR terms of AR(3) are jointly significant against AR(0)."""
        for y in trials[:5]:
            models = ad.fit_orders(y, [0, 3])
            result = ad.joint_test(models[3], models[0].sigma2)
            assert all(t.df == 3 for t in result.tests)
            assert all(t.pvalue < 0.001 for t in result.tests)
            lm, lr, w = (t.statistic for t in result.tests)
            assert 0 < lm <= lr <= w


class TestBreuschPaganScenario:
    """ARCH test on Gaussian AR(1) residuals."""

    def test_table_shape_and_undefined_first_row(
        self, trials: list[np.ndarray]
    ) -> None:
        """Real auxiliary fits give a full table with row 1 relative cells empty."""
        model = ad.fit_ar(trials[0], 1)
        result = ad.breusch_pagan(model, 3)
        df = result.to_dataframe()
        assert df.shape == (3, 4)
        assert math.isnan(df.loc[1, "RelStat"])
        assert np.all(np.isfinite(df.loc[2:, "RelStat"]))

    def test_idempotent(self, trials: list[np.ndarray]) -> None:
        """Repeated runs give bit-identical tables."""
        model = ad.fit_ar(trials[1], 1)
        first = ad.breusch_pagan(model, 2).to_dataframe()
        second = ad.breusch_pagan(model, 2).to_dataframe()
        np.testing.assert_array_equal(first.to_numpy(), second.to_numpy())
