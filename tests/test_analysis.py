"""
Tests for post-processing statistics.
"""

import numpy as np
import pytest

from mc_fission.analysis import (
    mass_yield, neutron_statistics, probability_intervals,
)
from mc_fission.isotope import Isotope
from mc_fission.sampler import NeutronSampler
from mc_fission.tallies import count_probabilities


@pytest.fixture
def products():
    return [Isotope("Xe", 54, 140)] * 3 + [Isotope("Sr", 38, 94)]


def test_probability_intervals(products):
    out = probability_intervals(products)
    probs = count_probabilities(products)
    assert set(out) == set(probs)
    for sym, v in out.items():
        assert v["percent"] == pytest.approx(probs[sym])
        assert v["ci_half"] > v["std"] > 0.0

    # p = 0.75, n = 4: sigma = sqrt(0.75 * 0.25 / 4)
    assert out["Xe"]["std"] == pytest.approx(100.0 * np.sqrt(0.75 * 0.25 / 4))
    assert out["Xe"]["ci_half"] == pytest.approx(1.959964 * out["Xe"]["std"], rel=1e-5)


def test_probability_intervals_single_element():
    out = probability_intervals([Isotope("Xe", 54, 140)] * 5)
    assert out["Xe"]["percent"] == pytest.approx(100.0)
    assert out["Xe"]["std"] == 0.0


def test_probability_intervals_edge_cases(products):
    assert probability_intervals([]) == {}
    with pytest.raises(ValueError):
        probability_intervals(products, confidence=1.5)


def test_neutron_statistics_matches_sampler():
    draws = NeutronSampler(np.random.default_rng(31)).sample_many(50_000)
    st = neutron_statistics(draws.tolist())
    assert st["n"] == 50_000
    assert st["mean"] == pytest.approx(1.5, abs=0.02)
    assert st["frequencies"][1] == pytest.approx(0.6, abs=0.02)
    assert st["p_value"] is not None
    assert 0.0 <= st["p_value"] <= 1.0


def test_neutron_statistics_detects_wrong_distribution():
    st = neutron_statistics([3] * 500 + [1] * 500)
    assert st["p_value"] < 1e-6


def test_neutron_statistics_empty():
    st = neutron_statistics([])
    assert st["n"] == 0
    assert st["p_value"] is None


def test_neutron_statistics_out_of_range():
    st = neutron_statistics([1, 2, 4])
    assert st["chi2"] is None


def test_mass_yield(products):
    assert mass_yield(products) == {94: 1, 140: 3}
    assert list(mass_yield(products)) == [94, 140]
