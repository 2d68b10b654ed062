"""Pytest configuration and fixtures for ardiag tests."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest
from numpy.typing import NDArray

from ardiag import ModelSummary


def simulate_ar1(
    rng: np.random.Generator, n: int = 500, phi: float = 0.5, burn: int = 100
) -> NDArray[np.floating[Any]]:
    """Simulate a zero-mean AR(1) process with standard normal innovations."""
    e = rng.standard_normal(n + burn)
    y = np.zeros(n + burn)
    for t in range(1, n + burn):
        y[t] = phi * y[t - 1] + e[t]
    return y[burn:]


def make_summary(
    resid: NDArray[np.floating[Any]],
    n_params: int = 2,
    sigma2: float | None = None,
    nobs: int | None = None,
) -> ModelSummary:
    """Build a ModelSummary around a residual series.

    The coefficient vector is a placeholder of length ``n_params`` with a
    trailing intercept; only its length matters to the residual tests.
    """
    resid = np.asarray(resid, dtype=np.float64)
    return ModelSummary(
        order=n_params - 1,
        params=np.full(n_params, 0.1),
        cov_params_matrix=np.eye(n_params) * 0.01,
        resid=resid,
        sigma2=float(np.var(resid)) if sigma2 is None else sigma2,
        nobs=len(resid) if nobs is None else nobs,
    )


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def white_noise(rng: np.random.Generator) -> NDArray[np.floating[Any]]:
    """IID standard normal series (no serial correlation, no ARCH)."""
    return rng.standard_normal(500)


@pytest.fixture
def ar1_series(rng: np.random.Generator) -> NDArray[np.floating[Any]]:
    """Simulated AR(1) process with phi=0.5 and n=500."""
    return simulate_ar1(rng)


@pytest.fixture
def arch_series(rng: np.random.Generator) -> NDArray[np.floating[Any]]:
    """ARCH(1) innovations with a strong ARCH effect."""
    n = 500
    e = np.zeros(n)
    alpha0 = 0.5
    alpha1 = 0.5
    for t in range(1, n):
        sigma2 = alpha0 + alpha1 * e[t - 1] ** 2
        e[t] = np.sqrt(sigma2) * rng.standard_normal()
    return e


@pytest.fixture
def white_noise_summary(white_noise: NDArray[np.floating[Any]]) -> ModelSummary:
    """Intercept-only summary whose residuals are white noise."""
    return make_summary(white_noise - white_noise.mean(), n_params=1)
