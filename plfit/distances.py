"""
Kolmogorov-Smirnov distances between a tail and a fitted power law.

ASSUME THE TAIL IS SORTED AND EVERY ELEMENT IS >= XMIN.
"""
import numba
import numpy as np
import scipy.special

#returned when alpha is outside the range where the power law is normalisable
BAD_DISTANCE = 1e12


@numba.njit
def find_d_sorted(z, alpha, xmin):
    """
    Find the KS distance between the empirical CDF of z and the CDF of a
    continuous power law with exponent alpha above xmin.

    Parameters
    ----------
    z : float array
        The sorted tail.
    alpha : float
        The power law exponent.
    xmin : float
        The lower bound of the power law.

    Returns
    -------
    float
        max(D+, D-). Lower is better.

    """
    if alpha <= 1:
        return BAD_DISTANCE
    n = len(z)
    cdf_t = 1 - (xmin / z) ** (alpha - 1)

    #D+ is measured at the top of each ecdf step, D- at the bottom
    d_plus = np.amax(np.arange(1, n + 1) / n - cdf_t)
    d_minus = np.amax(cdf_t - np.arange(n) / n)
    return max(d_plus, d_minus)


def find_d_sorted_discrete(z, alpha, xmin):
    """
    Find the KS distance for integer valued data.

    The theoretical CDF at a lattice point k is
    P(X <= k) = 1 - zeta(alpha, k + 1)/zeta(alpha, ceil(xmin)).
    Both CDFs are step functions on the integers, so the largest gap is either
    at an observed value v or at v - 1, where the theoretical CDF has risen
    through an unobserved stretch of the lattice while the ecdf has not.

    Parameters
    ----------
    z : float array
        The sorted tail, integer valued.
    alpha : float
        The power law exponent.
    xmin : float
        The lower bound of the power law.

    Returns
    -------
    float
        The KS distance. Always will be between 0 and 1.

    """
    if alpha <= 1:
        return BAD_DISTANCE
    vals, counts = np.unique(z, return_counts=True)
    ecdf = np.cumsum(counts) / len(z)
    norm = scipy.special.zeta(alpha, np.ceil(xmin))
    cdf_t = 1 - scipy.special.zeta(alpha, vals + 1) / norm

    #just below each observed value
    ecdf_below = np.concatenate(([0.0], ecdf[:-1]))
    cdf_below = 1 - scipy.special.zeta(alpha, vals) / norm
    return max(np.amax(np.abs(ecdf - cdf_t)), np.amax(np.abs(ecdf_below - cdf_below)))
