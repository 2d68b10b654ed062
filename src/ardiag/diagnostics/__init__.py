"""Model adequacy tests and their building blocks.

This module provides diagnostic tests for fitted autoregressive models:
- Coefficient significance (z-tests)
- Joint significance (LM, LR, Wald)
- Serial correlation test (Ljung-Box)
- ARCH test (Breusch-Pagan on squared residuals)
"""

from ardiag.diagnostics.acf import autocorrelations
from ardiag.diagnostics.batch import (
    fit_orders,
    joint_test_table,
    ljung_box_table,
    parallel_map,
)
from ardiag.diagnostics.distributions import chi2_upper_tail, normal_upper_tail
from ardiag.diagnostics.misspec import (
    BreuschPaganResults,
    DiagnosticTestResult,
    JointTestResults,
    NotApplicable,
    breusch_pagan,
    coefficient_tests,
    joint_test,
    ljung_box,
)

__all__ = [
    "BreuschPaganResults",
    "DiagnosticTestResult",
    "JointTestResults",
    "NotApplicable",
    "autocorrelations",
    "breusch_pagan",
    "chi2_upper_tail",
    "coefficient_tests",
    "fit_orders",
    "joint_test",
    "joint_test_table",
    "ljung_box",
    "ljung_box_table",
    "normal_upper_tail",
    "parallel_map",
]
