"""
Standard normal cumulative distribution function.

[T1] N(x) = (1 + erf(x / √2)) / 2
"""

import math

import numpy as np
from scipy import special

_SQRT_2 = math.sqrt(2.0)


def normal_cdf(x):
    """
    Standard normal CDF, P(Z <= x) for Z ~ N(0, 1).

    Defined for every real x; -inf maps to 0 and +inf to 1.

    Parameters
    ----------
    x : float or np.ndarray
        Evaluation point(s)

    Returns
    -------
    float or np.ndarray
        A float for scalar input, an array otherwise

    Examples
    --------
    >>> normal_cdf(0.0)
    0.5
    """
    values = 0.5 * (1.0 + special.erf(np.asarray(x, dtype=float) / _SQRT_2))
    if np.ndim(values) == 0:
        return float(values)
    return values
