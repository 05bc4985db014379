"""
Non-parametric bootstrap of the power law fit.

Every run draws len(x) values from x with replacement and repeats the whole
fit on the resample, including the search over xmin. The spread of the
bootstrapped alpha therefore also contains the uncertainty in choosing xmin,
which dominates for small samples.

Runs that give no valid fit are dropped. The returned values are the means
and sample standard deviations over the remaining runs.

Resample indices are drawn chunk by chunk in the calling thread, then each
chunk is fit in parallel. Results therefore only depend on rng.
"""
import logging
from typing import NamedTuple

import numba
import numpy as np

from .xmin import START_XMIN, INCREMENT_XMIN, END_XMIN, FitResult, xmin_grid, fit_sorted, fit_sorted_discrete

logger = logging.getLogger(__name__)

NUM_RUNS = 1000
CHUNKSIZE = 100


class AggregateResult(NamedTuple):
    alpha: float
    xmin: float
    loglikelihood: float
    alpha_sd: float
    xmin_sd: float
    loglikelihood_sd: float
    nsuccess: int


def resample_idx(rng, n, runs):
    #one row of n indices, drawn with replacement, per run
    return rng.integers(0, n, size=(runs, n))


def mean_sd(vals):
    """
    Mean and sample standard deviation of vals, ignoring nans.
    The standard deviation of a single value is 0.
    """
    vals = np.asarray(vals, dtype=np.float64)
    vals = vals[~np.isnan(vals)]
    if len(vals) == 0:
        return np.nan, np.nan
    if len(vals) == 1:
        return float(vals[0]), 0.0
    return float(np.mean(vals)), float(np.std(vals, ddof=1))


@numba.njit(parallel=True)
def bootstrap_parallel(x, idxs, xmins, nosmall, finite):
    """
    Fit every resample of x given by the rows of idxs over all available cores.

    Returns a (runs, 5) array of alpha, xmin, loglikelihood, ks, ntail. Failed runs are nan.
    """
    runs = idxs.shape[0]
    vals = np.full((runs, 5), np.nan)
    for i in numba.prange(runs):
        alpha, xmin, ll, d, n = fit_sorted(np.sort(x[idxs[i]]), xmins, nosmall, finite)
        if n > 0:
            vals[i, 0] = alpha
            vals[i, 1] = xmin
            vals[i, 2] = ll
            vals[i, 3] = d
            vals[i, 4] = n
    return vals


def bootstrap_discrete(x, idxs, xmins, nosmall, finite):
    """Same as bootstrap_parallel() for the discrete power law, run sequentially."""
    runs = idxs.shape[0]
    vals = np.full((runs, 5), np.nan)
    for i in range(runs):
        alpha, xmin, ll, d, n = fit_sorted_discrete(np.sort(x[idxs[i]]), xmins, nosmall, finite)
        if n > 0:
            vals[i] = alpha, xmin, ll, d, n
    return vals


def _log_progress(iteration, num_runs, res):
    if res is None:
        logger.info("Bootstrap %d/%d: no valid fit.", iteration, num_runs)
    else:
        logger.info("Bootstrap %d/%d: alpha = %g, xmin = %g, log-likelihood = %g",
                    iteration, num_runs, res.alpha, res.xmin, res.loglikelihood)


def bootstrap_fit(x, nosmall=False, finite=False, start_xmin=START_XMIN, increment_xmin=INCREMENT_XMIN,
                  end_xmin=END_XMIN, num_runs=NUM_RUNS, verbose=False, reporter=None, rng=None,
                  discrete=False, chunksize=CHUNKSIZE):
    """
    Bootstrap the power law fit of x.

    Parameters
    ----------
    x : array
        The sample of non-negative values.
    nosmall : bool, optional
        Truncate the xmin search before the finite-size bias becomes significant. The default is False.
    finite : bool, optional
        Apply the finite-size correction to alpha in every run. The default is False.
    start_xmin : float, optional
        First candidate xmin. The default is 1.5.
    increment_xmin : float, optional
        Step between candidate xmins. The default is 0.01.
    end_xmin : float, optional
        Last candidate xmin (inclusive). The default is 3.5.
    num_runs : int, optional
        The number of bootstrap runs. The default is 1000.
    verbose : bool, optional
        If True and no reporter is given, log every run at INFO level. The default is False.
    reporter : callable, optional
        Called as reporter(iteration, num_runs, result) after every run, in order,
        where result is a FitResult or None if the run failed. The default is None.
    rng : numpy.random.Generator or int, optional
        Source of randomness for the resampling, or a seed for one.
        The default is None (fresh entropy).
    discrete : bool, optional
        Fit the discrete power law. The default is False.
    chunksize : int, optional
        The number of runs drawn and fit at once. The default is 100.

    Returns
    -------
    AggregateResult or None
        Means and standard deviations of alpha, xmin, and log likelihood, and
        the number of successful runs. None if no run gave a valid fit.

    """
    xmins = xmin_grid(start_xmin, increment_xmin, end_xmin)
    x = np.asarray(x, dtype=np.float64)
    if len(xmins) == 0 or len(x) == 0 or num_runs <= 0:
        logger.warning("Nothing to bootstrap. Returning.")
        return None

    rng = np.random.default_rng(rng)
    if reporter is None and verbose:
        reporter = _log_progress

    n = len(x)
    chunksize = max(1, int(chunksize))
    vals = np.full((num_runs, 5), np.nan)
    for lo in range(0, num_runs, chunksize):
        hi = min(lo + chunksize, num_runs)
        idxs = resample_idx(rng, n, hi - lo)
        if discrete:
            vals[lo:hi] = bootstrap_discrete(x, idxs, xmins, nosmall, finite)
        else:
            vals[lo:hi] = bootstrap_parallel(x, idxs, xmins, nosmall, finite)

        if reporter is not None:
            for i in range(lo, hi):
                res = None
                if not np.isnan(vals[i, 0]):
                    res = FitResult(*map(float, vals[i, :4]), int(vals[i, 4]))
                reporter(i + 1, num_runs, res)

    ok = ~np.isnan(vals[:, 0])
    nsuccess = int(np.sum(ok))
    if nsuccess == 0:
        logger.warning("None of the %d bootstrap runs gave a valid fit.", num_runs)
        return None
    if nsuccess < num_runs:
        logger.debug("%d of %d bootstrap runs failed.", num_runs - nsuccess, num_runs)

    alpha, alpha_sd = mean_sd(vals[ok, 0])
    xmin, xmin_sd = mean_sd(vals[ok, 1])
    ll, ll_sd = mean_sd(vals[ok, 2])

    return AggregateResult(alpha, xmin, ll, alpha_sd, xmin_sd, ll_sd, nsuccess)
