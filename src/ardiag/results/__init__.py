"""Fitted-model data contract."""

from ardiag.results.base import ModelSummary

__all__ = [
    "ModelSummary",
]
