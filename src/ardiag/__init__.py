"""ardiag: Adequacy diagnostics for fitted autoregressive models.

Given summaries of already-fitted AR models, ardiag computes joint
significance tests (LM, LR, Wald), the Ljung-Box serial correlation test
and a Breusch-Pagan style ARCH test on squared residuals.

Example
-------
>>> import ardiag as ad
>>> import numpy as np
>>>
>>> # Simulate an AR(1) process
>>> rng = np.random.default_rng(42)
>>> y = np.zeros(500)
>>> for t in range(1, 500):
...     y[t] = 0.5 * y[t - 1] + rng.standard_normal()
>>>
>>> # Fit candidate orders and check residual autocorrelation
>>> models = ad.fit_orders(y, [0, 1, 2, 3])
>>> print(ad.ljung_box_table(models, lags=[6, 12]))
>>>
>>> # Joint significance of the AR terms against the intercept-only model
>>> print(ad.joint_test(models[3], models[0].sigma2).summary())
>>>
>>> # ARCH effects in the AR(1) residuals
>>> print(ad.breusch_pagan(models[1], max_order=4).summary())
"""

from ardiag._version import __version__
from ardiag.api import (
    BreuschPaganResults,
    DiagnosticTestResult,
    JointTestResults,
    ModelSummary,
    NotApplicable,
    Trend,
    autocorrelations,
    breusch_pagan,
    chi2_upper_tail,
    coefficient_tests,
    fit_ar,
    fit_orders,
    joint_test,
    joint_test_table,
    ljung_box,
    ljung_box_table,
    normal_upper_tail,
    parallel_map,
    summary_from_arima,
)

__all__ = [
    "BreuschPaganResults",
    "DiagnosticTestResult",
    "JointTestResults",
    "ModelSummary",
    "NotApplicable",
    "Trend",
    "__version__",
    "autocorrelations",
    "breusch_pagan",
    "chi2_upper_tail",
    "coefficient_tests",
    "fit_ar",
    "fit_orders",
    "joint_test",
    "joint_test_table",
    "ljung_box",
    "ljung_box_table",
    "normal_upper_tail",
    "parallel_map",
    "summary_from_arima",
]
