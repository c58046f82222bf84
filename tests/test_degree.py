import numpy as np
import pytest

from synth_als.config import ConfigurationError
from synth_als.degree import DegreeDistribution, pdf_to_cdf, power_law_pmf


def test_pmf_is_power_law():
    pmf = power_law_pmf(50, 1.8)
    assert pmf.shape == (50,)
    assert pmf.sum() == pytest.approx(1.0)
    assert pmf[0] / pmf[1] == pytest.approx(2 ** 1.8)
    assert np.all(np.diff(pmf) < 0)


def test_cdf_monotone_and_ends_at_one():
    dist = DegreeDistribution.build(998, 1.8)
    assert dist.population_size == 998
    assert np.all(np.diff(dist.cdf) >= 0)
    assert dist.cdf[-1] == 1.0
    np.testing.assert_allclose(dist.pmf, power_law_pmf(998, 1.8))


def test_pdf_to_cdf():
    cdf = pdf_to_cdf(np.array([0.25, 0.25, 0.5]))
    np.testing.assert_allclose(cdf, [0.25, 0.5, 1.0])


@pytest.mark.parametrize("n", [0, -3])
def test_non_positive_population(n):
    with pytest.raises(ConfigurationError):
        DegreeDistribution.build(n, 1.8)


def test_inverse_cdf_lookup():
    dist = DegreeDistribution(cdf=np.array([0.5, 0.75, 1.0]), alpha=1.0)
    assert dist.index_of(0.0) == 0
    assert dist.index_of(0.5) == 0
    assert dist.index_of(0.6) == 1
    assert dist.index_of(0.99) == 2


def test_lookup_clamps_past_rounded_end():
    dist = DegreeDistribution(cdf=np.array([0.5, 0.9999]), alpha=1.0)
    assert dist.index_of(0.99995) == 1


def test_sampled_degrees_in_range_and_skewed():
    dist = DegreeDistribution.build(9, 1.8)
    rng = np.random.default_rng(31413)
    degrees = np.array([dist.sample_degree(rng) for _ in range(2000)])
    assert degrees.min() >= 1
    assert degrees.max() <= 9
    counts = np.bincount(degrees, minlength=10)
    assert counts[1] == counts.max()
    assert counts[1] > counts[2] > counts[4]


def test_sample_uses_one_uniform_draw():
    dist = DegreeDistribution.build(100, 1.8)
    a, b = np.random.default_rng(7), np.random.default_rng(7)
    d = dist.sample_degree(a)
    assert d == dist.index_of(b.random()) + 1
    assert a.random() == b.random()


def test_large_negative_alpha_stays_finite():
    dist = DegreeDistribution.build(998, -400.0)
    assert np.all(np.isfinite(dist.cdf))
    assert np.all(np.diff(dist.cdf) >= 0)
    assert dist.cdf[-1] == 1.0
    rng = np.random.default_rng(31413)
    degrees = [dist.sample_degree(rng) for _ in range(200)]
    assert min(degrees) >= 900


def test_large_positive_alpha_concentrates_on_one():
    dist = DegreeDistribution.build(998, 400.0)
    assert np.all(np.isfinite(dist.cdf))
    rng = np.random.default_rng(0)
    assert {dist.sample_degree(rng) for _ in range(50)} == {1}
