"""Estimation routines that produce ModelSummary objects."""

from ardiag.models.ar import Trend, fit_ar, summary_from_arima

__all__ = [
    "Trend",
    "fit_ar",
    "summary_from_arima",
]
