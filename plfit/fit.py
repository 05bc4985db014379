"""
Single maximum likelihood fit of a power law with xmin chosen by KS minimisation.

Variables:
    x: a list or np.array of non-negative observations.
    nosmall: truncate the xmin search before the finite-size bias becomes significant.
    finite: apply the finite-size correction to alpha.
    start_xmin, increment_xmin, end_xmin: the grid of candidate xmin values (inclusive).
    discrete: fit the discrete power law instead of the continuous one.

Returns a FitResult (alpha, xmin, loglikelihood, ks, ntail), or None if no
candidate xmin gives a valid fit. Nothing is raised for degenerate input.
"""
import logging

import numpy as np

from .xmin import START_XMIN, INCREMENT_XMIN, END_XMIN, FINITE_WARN_N, xmin_grid, search_xmin

logger = logging.getLogger(__name__)


def single_fit(x, nosmall=False, finite=False, start_xmin=START_XMIN, increment_xmin=INCREMENT_XMIN,
               end_xmin=END_XMIN, discrete=False):
    xmins = xmin_grid(start_xmin, increment_xmin, end_xmin)
    if len(xmins) == 0:
        logger.warning("No xmin candidates to search. Returning.")
        return None

    x = np.asarray(x, dtype=np.float64)
    if len(x) == 0:
        logger.warning("Empty sample. Returning.")
        return None

    logger.debug("Searching %d xmin candidates over %d values.", len(xmins), len(x))
    res = search_xmin(x, xmins, nosmall=nosmall, finite=finite, discrete=discrete)
    if res is None:
        logger.warning("No xmin candidate gave a valid power law fit.")
        return None

    if res.ntail < FINITE_WARN_N and not finite:
        logger.warning("Only %d values above xmin = %g, finite-size bias may be present.", res.ntail, res.xmin)

    return res
