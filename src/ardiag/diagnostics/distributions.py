"""Upper-tail probabilities for the reference distributions of the tests.

Both evaluators are thin wrappers over ``scipy.stats`` survival functions,
which are accurate in the far tail where ``1 - cdf`` loses precision.
"""

from __future__ import annotations

import math

from scipy import stats


def normal_upper_tail(z: float) -> float:
    """One-sided standard normal tail probability of ``|z|``.

    Parameters
    ----------
    z : float
        Test statistic. The absolute value is used, since the direction of
        the alternative is unknown.

    Returns
    -------
    float
        ``P(Z > |z|)`` for a standard normal ``Z``; ``nan`` if ``z`` is nan.
    """
    if math.isnan(z):
        return math.nan
    return float(stats.norm.sf(abs(z)))


def chi2_upper_tail(x: float, df: float) -> float:
    """Chi-squared tail probability ``P(X > x)``.

    Parameters
    ----------
    x : float
        Test statistic.
    df : float
        Degrees of freedom.

    Returns
    -------
    float
        The tail probability, or ``nan`` when ``x`` is negative or not
        finite, or ``df`` is not positive. A degenerate cell is reported
        rather than raised so that batch tables stay computable.
    """
    if not math.isfinite(x) or x < 0 or not df > 0:
        return math.nan
    return float(stats.chi2.sf(x, df))
