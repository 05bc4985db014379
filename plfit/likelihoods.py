"""
Power law likelihoods, maximum likelihood estimators and generators.

Performs the exponent estimation of Clauset et al 2009 for a tail x >= xmin.
    -- [1] A. Clauset, C.R. Shalizi, M.E.J. Newman, SIAM Review 51 (2009) 661-703.

-- Generator functions:
    -- pl_gen()
        -- Continuous power law above xmin, drawn by inverting the CDF.
    -- pl_gen_discrete()
        -- Discrete power law above xmin, using the approximation above equation D6 of [1].

-- Likelihood functions:
    -- pl_like()
        -- Continuous log likelihood of a tail for a given alpha.
    -- pl_like_discrete()
        -- Discrete log likelihood, normalised with the Hurwitz zeta function.

-- Maximum likelihood estimation (MLE) functions
    -- find_alpha():
        -- Closed form continuous MLE, equation 3.1 of [1].
    -- find_alpha_discrete()
        -- Numerical discrete MLE, equation 3.5 of [1].
    -- finite_size_correction()
        -- Small sample correction of alpha.
"""
import numba
import numpy as np
import scipy.optimize
import scipy.special

ln = np.log

#bounds on alpha for the numerical (discrete) estimator
ALPHA_LO = 1.000001
ALPHA_HI = 20.0

"""
%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%
GENERATOR FUNCTIONS
%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%
"""


def pl_gen(datalen, xmin, alpha, rng=None):
    """
    Produce continuous power law distributed data above xmin.

    Parameters
    ----------
    datalen : int
        The number of values to draw.
    xmin : float
        The lower bound of the power law.
    alpha : float
        The power law exponent. Must be > 1.
    rng : numpy.random.Generator or int, optional
        Source of randomness, or a seed for one. The default is None (fresh entropy).

    Returns
    -------
    out : float array
        Data with pdf proportional to x**-alpha for x >= xmin.

    """
    rng = np.random.default_rng(rng)
    r = rng.random(datalen)
    return xmin * (1 - r) ** (-1 / (alpha - 1))


def pl_gen_discrete(datalen, xmin, alpha, rng=None):
    """
    Generate a set of discrete data that obey a power law relationship, using
    the approximation given in Clauset et al 2009 just above equation D6.
    The approximation is good to, at worst, 10% for xmin = 1 but in practice
    is less than 1% when xmin = 10.

    Parameters
    ----------
    datalen : int
        The length of the data.
    xmin : int
        The minimum value of the scaling regime, x >= xmin.
    alpha : float
        The underlying power-law index in the data.
    rng : numpy.random.Generator or int, optional
        Source of randomness, or a seed for one.

    Returns
    -------
    out : float array
        Integer valued data that are (approximately) power-law distributed.

    """
    rng = np.random.default_rng(rng)
    r = rng.random(datalen)
    return np.floor((xmin - 0.5) * (1 - r) ** (-1 / (alpha - 1)) + 0.5)


"""
%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%
LIKELIHOOD FUNCTIONS
%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%
"""


@numba.njit
def pl_like(z, xmin, alpha):
    """
    Continuous power law log likelihood of the tail z (all z >= xmin).

    Returns
    -------
    ll : float
        The total log likelihood.
    dist : float array
        The log density of every element of z.

    """
    dist = ln((alpha - 1) / xmin) - alpha * ln(z / xmin)
    return np.sum(dist), dist


def pl_like_discrete(z, xmin, alpha):
    """
    The discrete version of the power law likelihood function.
    Normalised by the Hurwitz zeta function over the integers >= ceil(xmin),
    so every xmin between two integers describes the same tail.
    """
    dist = -ln(scipy.special.zeta(alpha, np.ceil(xmin))) - alpha * ln(z)
    return np.sum(dist), dist


"""
%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%
MAXIMUM LIKELIHOOD (MLE) FITS
%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%%
"""


@numba.njit
def find_alpha(z, xmin):
    """
    Find the continuous power law exponent of the tail z in closed form.

    Parameters
    ----------
    z : float array
        The tail, sorted ascending, with every element >= xmin.
    xmin : float
        The lower bound of the tail.

    Returns
    -------
    alpha : float
        1 + n/sum(log(z/xmin)), or nan if the tail is degenerate.
    ll : float
        The log likelihood at alpha, or nan if the tail is degenerate.

    """
    n = len(z)
    #alpha is undefined for fewer than two distinct values
    if n < 2 or xmin <= 0 or z[0] == z[-1]:
        return np.nan, np.nan
    S = np.sum(ln(z / xmin))
    if S <= 0:
        return np.nan, np.nan
    alpha = 1 + n / S
    ll = pl_like(z, xmin, alpha)[0]

    return alpha, ll


def find_alpha_discrete(z, xmin):
    """
    Find the power law exponent of integer valued data by numerically
    maximising the discrete log likelihood.

    Parameters
    ----------
    z : float array
        The tail, sorted ascending, with every element >= xmin.
    xmin : float
        The lower bound of the tail. Must be > 0.

    Returns
    -------
    alpha : float
        The optimal power law exponent, or nan if the tail is degenerate.
    ll : float
        The log likelihood at the optimal alpha.

    """
    n = len(z)
    if n < 2 or xmin <= 0 or z[0] == z[-1]:
        return np.nan, np.nan
    fun = lambda a: -pl_like_discrete(z, xmin, a)[0]
    opt = scipy.optimize.minimize_scalar(fun, bounds=(ALPHA_LO, ALPHA_HI), method='bounded',
                                         options={'xatol': 1e-10})
    alpha = opt.x
    ll = pl_like_discrete(z, xmin, alpha)[0]

    return alpha, ll


@numba.njit
def finite_size_correction(alpha, n):
    #bias of the MLE is O(1/n), so the correction vanishes for large tails
    return alpha * (n - 1) / n + 1 / n
