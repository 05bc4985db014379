"""
Tests for the maximum likelihood estimators and generators.
"""

import math

import numpy as np
import pytest

from plfit import (
    find_alpha,
    find_alpha_discrete,
    finite_size_correction,
    pl_gen,
    pl_gen_discrete,
    pl_like,
    pl_like_discrete,
)


class TestFindAlpha:
    """Tests for the closed form continuous MLE."""

    def test_closed_form(self) -> None:
        """sum(log(z/xmin)) = 1 for z = [1, e], so alpha = 1 + 2/1."""
        alpha, ll = find_alpha(np.array([1.0, math.e]), 1.0)
        assert alpha == pytest.approx(3.0)
        assert ll == pytest.approx(2 * math.log(2.0) - 3.0)

    def test_ll_matches_pl_like(self) -> None:
        z = np.array([2.0, 2.5, 3.0, 4.0, 5.0, 8.0, 10.0])
        alpha, ll = find_alpha(z, 2.0)
        total, dist = pl_like(z, 2.0, alpha)
        assert ll == pytest.approx(total)
        assert np.sum(dist) == pytest.approx(total)
        assert len(dist) == len(z)

    def test_ll_is_maximal(self) -> None:
        """The log likelihood drops on either side of the MLE."""
        z = np.sort(pl_gen(500, 1.0, 2.2, rng=3))
        alpha, ll = find_alpha(z, 1.0)
        assert pl_like(z, 1.0, alpha - 0.05)[0] < ll
        assert pl_like(z, 1.0, alpha + 0.05)[0] < ll

    def test_too_few_values(self) -> None:
        alpha, ll = find_alpha(np.array([3.0]), 1.0)
        assert np.isnan(alpha)
        assert np.isnan(ll)
        assert np.isnan(find_alpha(np.array([], dtype=np.float64), 1.0)[0])

    def test_all_values_equal(self) -> None:
        """A tail of identical values has no spread to estimate alpha from."""
        assert np.isnan(find_alpha(np.array([2.0, 2.0, 2.0]), 2.0)[0])
        assert np.isnan(find_alpha(np.array([3.0, 3.0]), 2.0)[0])

    def test_nonpositive_xmin(self) -> None:
        assert np.isnan(find_alpha(np.array([0.0, 1.0, 2.0]), 0.0)[0])

    def test_recovers_alpha(self) -> None:
        z = np.sort(pl_gen(50000, 2.0, 2.7, rng=11))
        alpha, _ = find_alpha(z, 2.0)
        assert alpha == pytest.approx(2.7, abs=0.03)


class TestFiniteSizeCorrection:
    """Tests for the small sample correction."""

    def test_value(self) -> None:
        assert finite_size_correction(2.0, 10) == pytest.approx(1.9)

    def test_vanishes_for_large_n(self) -> None:
        assert finite_size_correction(2.5, 10**7) == pytest.approx(2.5, abs=1e-6)

    def test_shrinks_towards_alpha(self) -> None:
        diffs = [2.5 - finite_size_correction(2.5, n) for n in (10, 100, 1000)]
        assert diffs[0] > diffs[1] > diffs[2] > 0


class TestGenerators:
    """Tests for the synthetic data generators."""

    def test_pl_gen_support(self) -> None:
        x = pl_gen(1000, 1.5, 2.5, rng=0)
        assert len(x) == 1000
        assert np.all(x >= 1.5)

    def test_pl_gen_reproducible(self) -> None:
        assert np.array_equal(pl_gen(100, 1.0, 2.0, rng=7), pl_gen(100, 1.0, 2.0, rng=7))

    def test_pl_gen_accepts_generator(self) -> None:
        rng = np.random.default_rng(5)
        a = pl_gen(10, 1.0, 2.0, rng)
        b = pl_gen(10, 1.0, 2.0, rng)
        assert not np.array_equal(a, b)

    def test_pl_gen_discrete_integers(self) -> None:
        x = pl_gen_discrete(1000, 5, 2.5, rng=0)
        assert np.all(x >= 5)
        assert np.array_equal(x, np.floor(x))


class TestFindAlphaDiscrete:
    """Tests for the numerical discrete MLE."""

    def test_recovers_alpha(self) -> None:
        z = np.sort(pl_gen_discrete(20000, 10, 2.5, rng=21))
        alpha, ll = find_alpha_discrete(z, 10.0)
        assert alpha == pytest.approx(2.5, abs=0.08)
        assert ll == pytest.approx(pl_like_discrete(z, 10.0, alpha)[0])

    def test_ll_is_maximal(self) -> None:
        z = np.sort(pl_gen_discrete(2000, 3, 2.2, rng=4))
        alpha, ll = find_alpha_discrete(z, 3.0)
        assert pl_like_discrete(z, 3.0, alpha - 0.05)[0] < ll
        assert pl_like_discrete(z, 3.0, alpha + 0.05)[0] < ll

    def test_degenerate(self) -> None:
        assert np.isnan(find_alpha_discrete(np.array([4.0]), 4.0)[0])
        assert np.isnan(find_alpha_discrete(np.array([4.0, 4.0]), 4.0)[0])
        assert np.isnan(find_alpha_discrete(np.array([0.0, 1.0, 2.0]), 0.0)[0])

    def test_fractional_xmin_uses_next_integer(self) -> None:
        z = np.sort(pl_gen_discrete(1000, 3, 2.4, rng=6))
        assert pl_like_discrete(z, 2.2, 2.4)[0] == pl_like_discrete(z, 3.0, 2.4)[0]
        assert find_alpha_discrete(z, 2.2) == find_alpha_discrete(z, 3.0)
