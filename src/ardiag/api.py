"""Public API for ardiag package.

This module provides a clean namespace for the most commonly used
classes and functions in the ardiag package.
"""

# Diagnostics
from ardiag.diagnostics import (
    BreuschPaganResults,
    DiagnosticTestResult,
    JointTestResults,
    NotApplicable,
    autocorrelations,
    breusch_pagan,
    chi2_upper_tail,
    coefficient_tests,
    fit_orders,
    joint_test,
    joint_test_table,
    ljung_box,
    ljung_box_table,
    normal_upper_tail,
    parallel_map,
)

# Estimation
from ardiag.models import Trend, fit_ar, summary_from_arima

# Data contract
from ardiag.results import ModelSummary

__all__ = [
    "BreuschPaganResults",
    "DiagnosticTestResult",
    "JointTestResults",
    # Data contract
    "ModelSummary",
    "NotApplicable",
    # Estimation
    "Trend",
    "autocorrelations",
    # Diagnostics
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
