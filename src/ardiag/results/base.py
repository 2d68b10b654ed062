"""Normalized view of a fitted autoregressive model.

Every diagnostic in ardiag consumes a ``ModelSummary``. It is produced once
by an estimation routine (see ``ardiag.models.ar``) and is read-only for the
rest of its life.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike, NDArray


def _frozen_array(data: ArrayLike, name: str, ndim: int) -> NDArray[np.floating[Any]]:
    """Copy ``data`` into a read-only float64 array of the given rank."""
    arr = np.array(data, dtype=np.float64)
    if arr.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}-dimensional, got {arr.ndim}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, kw_only=True, eq=False)
class ModelSummary:
    """Snapshot of a fitted AR (or ARCH-family) model.

    Parameters
    ----------
    order : int
        Number of autoregressive coefficients, excluding the intercept.
    params : ArrayLike
        Estimated coefficients. AR coefficients come first and the
        intercept, when present, is last.
    cov_params_matrix : ArrayLike
        Covariance matrix of ``params`` (same size and order).
    resid : ArrayLike
        Residuals in time order, one per fitted observation.
    sigma2 : float
        Estimated innovation variance.
    nobs : int
        Number of observations used in fitting.
    param_names : Sequence[str] | None
        Names of the coefficients for display purposes.
    model_name : str
        Label used in summaries and tables.

    Raises
    ------
    ValueError
        If the covariance matrix does not match ``params``, there are more
        residuals than observations, or ``sigma2``, ``nobs`` or ``order``
        are out of range.
    """

    order: int
    params: NDArray[np.floating[Any]]
    cov_params_matrix: NDArray[np.floating[Any]]
    resid: NDArray[np.floating[Any]]
    sigma2: float
    nobs: int
    param_names: Sequence[str] | None = None
    model_name: str = field(default="AR")

    def __post_init__(self) -> None:
        params = _frozen_array(self.params, "params", 1)
        cov = _frozen_array(self.cov_params_matrix, "cov_params_matrix", 2)
        resid = _frozen_array(self.resid, "resid", 1)

        k = len(params)
        if cov.shape != (k, k):
            raise ValueError(
                f"cov_params_matrix must be {k}x{k} to match params, "
                f"got {cov.shape[0]}x{cov.shape[1]}"
            )
        if self.nobs <= 0:
            raise ValueError(f"nobs must be positive, got {self.nobs}")
        if len(resid) > self.nobs:
            raise ValueError(
                f"resid has {len(resid)} entries but nobs is {self.nobs}"
            )
        if not self.sigma2 >= 0:
            raise ValueError(f"sigma2 must be non-negative, got {self.sigma2}")
        if self.order < 0 or self.order > k:
            raise ValueError(
                f"order must be between 0 and len(params)={k}, got {self.order}"
            )
        if self.param_names is not None and len(self.param_names) != k:
            raise ValueError(
                f"param_names has {len(self.param_names)} entries, expected {k}"
            )

        # Frozen dataclass: bypass __setattr__ to store the normalized arrays
        object.__setattr__(self, "params", params)
        object.__setattr__(self, "cov_params_matrix", cov)
        object.__setattr__(self, "resid", resid)
        object.__setattr__(self, "sigma2", float(self.sigma2))
        object.__setattr__(self, "nobs", int(self.nobs))
        if self.param_names is not None:
            object.__setattr__(self, "param_names", tuple(self.param_names))

    @property
    def df_model(self) -> int:
        """Number of estimated coefficients."""
        return len(self.params)

    @property
    def has_intercept(self) -> bool:
        """True if ``params`` carries a trailing intercept."""
        return self.df_model > self.order

    @property
    def ar_params(self) -> NDArray[np.floating[Any]]:
        """Autoregressive coefficients only."""
        return self.params[: self.order]

    @property
    def bse(self) -> NDArray[np.floating[Any]]:
        """Standard errors from the covariance diagonal."""
        with np.errstate(invalid="ignore"):
            return np.sqrt(np.diag(self.cov_params_matrix))

    @property
    def zvalues(self) -> NDArray[np.floating[Any]]:
        """z-statistics for the coefficient estimates."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return self.params / self.bse

    @property
    def names(self) -> list[str]:
        """Coefficient names, falling back to ``x0, x1, ...``."""
        if self.param_names is not None:
            return list(self.param_names)
        return [f"x{i}" for i in range(self.df_model)]

    def cov_params(self) -> NDArray[np.floating[Any]]:
        """Return the covariance matrix of the coefficient estimates."""
        return self.cov_params_matrix

    def __str__(self) -> str:
        """Return string representation."""
        return (
            f"{self.model_name}({self.order}): nobs={self.nobs}, "
            f"sigma2={self.sigma2:.4f}"
        )
