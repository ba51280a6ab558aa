import math

import pytest
from scipy.stats import norm

from ratelib.utils.distributions import (
    CumulativeNormalDistribution,
    cumulative_normal,
    normal_density,
)


def test_cdf_known_values():
    assert cumulative_normal(0.0) == pytest.approx(0.5, abs=1e-16)
    assert cumulative_normal(1.96) == pytest.approx(0.9750021048517795, abs=1e-14)
    assert cumulative_normal(-1.0) == pytest.approx(0.15865525393145707, abs=1e-14)


def test_lower_tail_keeps_relative_precision():
    # 1 + erf(x) would lose everything here
    assert cumulative_normal(-8.0) == pytest.approx(6.22096057427178e-16, rel=1e-9)
    assert cumulative_normal(-30.0) > 0.0


def test_upper_tail_saturates_towards_one():
    assert cumulative_normal(8.0) == pytest.approx(1.0, abs=1e-15)
    assert cumulative_normal(8.0) <= 1.0


@pytest.mark.parametrize("x", [-5.0, -1.3, 0.0, 0.7, 2.5, 6.0])
def test_symmetry(x):
    assert cumulative_normal(x) + cumulative_normal(-x) == pytest.approx(1.0, abs=1e-15)


def test_density():
    assert normal_density(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))
    assert normal_density(1.5) == pytest.approx(normal_density(-1.5))
    assert normal_density(40.0) == 0.0


def test_density_is_derivative_of_cdf():
    h = 1e-6
    for x in (-2.0, -0.3, 0.0, 1.1):
        numeric = (cumulative_normal(x + h) - cumulative_normal(x - h)) / (2 * h)
        assert numeric == pytest.approx(normal_density(x), rel=1e-7)


def test_matches_scipy_norm():
    for x in (-6.0, -1.2, 0.4, 3.3):
        assert cumulative_normal(x) == pytest.approx(norm.cdf(x), rel=1e-14)
        assert normal_density(x) == pytest.approx(norm.pdf(x), rel=1e-14)
    assert isinstance(cumulative_normal(0.3), float)


def test_non_standard_distribution():
    phi = CumulativeNormalDistribution(average=1.0, sigma=2.0)
    assert phi(1.0) == pytest.approx(0.5)
    assert phi.derivative(1.0) == pytest.approx(normal_density(0.0) / 2.0)
    with pytest.raises(ValueError):
        CumulativeNormalDistribution(sigma=0.0)
