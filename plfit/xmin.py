"""
Search over a grid of candidate xmin values, following the KS minimisation
of Clauset et al 2009 section 3.3.

For each candidate xmin the tail x >= xmin is fit by maximum likelihood and
scored by its KS distance. The candidate with the lowest KS distance wins;
ties go to the smallest xmin, i.e. the largest tail.

nosmall: stop the search at the first candidate whose standard error on
alpha, (alpha - 1)/sqrt(n), is larger than MAX_ALPHA_SE. Past that point the
finite-size bias of the estimator dominates.

finite: apply the finite-size correction to the winning alpha only. The
selection of xmin always uses the uncorrected fits.
"""
import logging
from typing import NamedTuple

import numba
import numpy as np

from .distances import find_d_sorted, find_d_sorted_discrete
from .likelihoods import find_alpha, find_alpha_discrete, finite_size_correction, pl_like, pl_like_discrete

logger = logging.getLogger(__name__)

#default grid
START_XMIN = 1.5
INCREMENT_XMIN = 0.01
END_XMIN = 3.5

MAX_ALPHA_SE = 0.1
#below this many events in the tail the uncorrected alpha is visibly biased
FINITE_WARN_N = 50


class FitResult(NamedTuple):
    alpha: float
    xmin: float
    loglikelihood: float
    ks: float
    ntail: int


def xmin_grid(start=START_XMIN, step=INCREMENT_XMIN, end=END_XMIN):
    """
    Enumerate the candidate xmin values start, start + step, ..., end (inclusive).

    Returns an empty array if the grid is empty (start > end) or invalid
    (step <= 0 or a bound that is not finite).
    """
    if not (np.isfinite(start) and np.isfinite(step) and np.isfinite(end)):
        logger.warning("xmin grid (%s, %s, %s) is not finite.", start, step, end)
        return np.empty(0)
    if step <= 0:
        logger.warning("xmin increment must be positive, got %s.", step)
        return np.empty(0)
    if start > end:
        logger.warning("xmin grid start %s is larger than end %s.", start, end)
        return np.empty(0)

    #slack so that an end point on the lattice survives float error
    num = int(np.floor((end - start) / step + 1e-9)) + 1
    return start + step * np.arange(num)


@numba.njit
def scan_xmin_core(x, xmins, nosmall):
    """
    Fit every candidate in xmins. x must be sorted.

    Returns the KS distance, alpha, and log likelihood for every candidate,
    with nan where the candidate was skipped or truncated.
    """
    m = len(xmins)
    dat = np.full(m, np.nan)
    alphas = np.full(m, np.nan)
    lls = np.full(m, np.nan)
    for i in range(m):
        xmin = xmins[i]
        z = x[np.searchsorted(x, xmin):]
        alpha, ll = find_alpha(z, xmin)
        if np.isnan(alpha):
            continue
        if nosmall and (alpha - 1) / np.sqrt(len(z)) > MAX_ALPHA_SE:
            break
        alphas[i] = alpha
        lls[i] = ll
        dat[i] = find_d_sorted(z, alpha, xmin)

    return dat, alphas, lls


def scan_xmin_discrete(x, xmins, nosmall):
    """Same as scan_xmin_core() for the discrete power law."""
    m = len(xmins)
    dat = np.full(m, np.nan)
    alphas = np.full(m, np.nan)
    lls = np.full(m, np.nan)
    for i in range(m):
        xmin = xmins[i]
        z = x[np.searchsorted(x, xmin):]
        alpha, ll = find_alpha_discrete(z, xmin)
        if np.isnan(alpha):
            continue
        if nosmall and (alpha - 1) / np.sqrt(len(z)) > MAX_ALPHA_SE:
            break
        alphas[i] = alpha
        lls[i] = ll
        dat[i] = find_d_sorted_discrete(z, alpha, xmin)

    return dat, alphas, lls


@numba.njit
def best_xmin_idx(dat):
    #first index of the smallest non-nan distance, -1 if all are nan
    idx = -1
    for i in range(len(dat)):
        if np.isnan(dat[i]):
            continue
        if idx < 0 or dat[i] < dat[idx]:
            idx = i
    return idx


@numba.njit
def fit_sorted(x, xmins, nosmall, finite):
    """
    The grid search core. x must be sorted.

    Returns alpha, xmin, log likelihood, KS distance and the tail size of the
    winning candidate. If no candidate could be fit, returns nans and a tail size of 0.
    """
    dat, alphas, lls = scan_xmin_core(x, xmins, nosmall)
    idx = best_xmin_idx(dat)
    if idx < 0:
        return np.nan, np.nan, np.nan, np.nan, 0

    xmin = xmins[idx]
    z = x[np.searchsorted(x, xmin):]
    n = len(z)
    alpha = alphas[idx]
    ll = lls[idx]
    if finite:
        alpha = finite_size_correction(alpha, n)
        ll = pl_like(z, xmin, alpha)[0]

    return alpha, xmin, ll, dat[idx], n


def fit_sorted_discrete(x, xmins, nosmall, finite):
    """Same as fit_sorted() for the discrete power law."""
    dat, alphas, lls = scan_xmin_discrete(x, xmins, nosmall)
    idx = best_xmin_idx(dat)
    if idx < 0:
        return np.nan, np.nan, np.nan, np.nan, 0

    xmin = xmins[idx]
    z = x[np.searchsorted(x, xmin):]
    n = len(z)
    alpha = alphas[idx]
    ll = lls[idx]
    if finite:
        alpha = finite_size_correction(alpha, n)
        ll = pl_like_discrete(z, xmin, alpha)[0]

    return alpha, xmin, ll, dat[idx], n


def scan_xmin(x, xmins, nosmall=False, discrete=False):
    """
    Compute the KS curve over the candidate xmins.

    Parameters
    ----------
    x : array
        The sample. Does not need to be sorted.
    xmins : float array
        The candidate xmin values, ascending.
    nosmall : bool, optional
        Truncate the candidates once the tail becomes too small. The default is False.
    discrete : bool, optional
        Fit the discrete power law. The default is False.

    Returns
    -------
    dat : float array
        KS distance for every candidate. nan if skipped.
    alphas : float array
        Uncorrected MLE alpha for every candidate.
    lls : float array
        Log likelihood for every candidate.

    """
    x = np.sort(np.asarray(x, dtype=np.float64))
    xmins = np.asarray(xmins, dtype=np.float64)
    if discrete:
        return scan_xmin_discrete(x, xmins, nosmall)
    return scan_xmin_core(x, xmins, nosmall)


def search_xmin(x, xmins, nosmall=False, finite=False, discrete=False):
    """
    Find the xmin in xmins that minimises the KS distance, and the power law above it.

    Parameters
    ----------
    x : array
        The sample. Does not need to be sorted.
    xmins : float array
        The candidate xmin values, ascending.
    nosmall : bool, optional
        Truncate the candidates once the tail becomes too small. The default is False.
    finite : bool, optional
        Apply the finite-size correction to the winning alpha. The default is False.
    discrete : bool, optional
        Fit the discrete power law. The default is False.

    Returns
    -------
    FitResult or None
        None if no candidate gave a valid fit.

    """
    x = np.sort(np.asarray(x, dtype=np.float64))
    xmins = np.asarray(xmins, dtype=np.float64)
    if discrete:
        alpha, xmin, ll, d, n = fit_sorted_discrete(x, xmins, nosmall, finite)
    else:
        alpha, xmin, ll, d, n = fit_sorted(x, xmins, nosmall, finite)

    if n == 0:
        return None
    return FitResult(float(alpha), float(xmin), float(ll), float(d), int(n))
