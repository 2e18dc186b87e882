"""
Tests for the aggregate views over a product collection.
"""

import pytest

from mc_fission.isotope import Isotope
from mc_fission.tallies import (
    count_isotope_groups, count_neutrons, count_probabilities, count_symbols,
)


@pytest.fixture
def products():
    return [
        Isotope("Xe", 54, 140), Isotope("Sr", 38, 94),
        Isotope("Xe", 54, 139), Isotope("Sr", 38, 94),
        Isotope("Ba", 56, 141),
    ]


def test_count_symbols(products):
    assert count_symbols(products) == {"Xe": 2, "Sr": 2, "Ba": 1}


def test_count_isotope_groups(products):
    assert count_isotope_groups(products) == {
        "Xe": {"Xe-140": 1, "Xe-139": 1},
        "Sr": {"Sr-94": 2},
        "Ba": {"Ba-141": 1},
    }


def test_count_probabilities(products):
    probs = count_probabilities(products)
    assert probs == pytest.approx({"Xe": 40.0, "Sr": 40.0, "Ba": 20.0})
    assert sum(probs.values()) == pytest.approx(100.0, rel=1e-9)


def test_empty_collection():
    assert count_symbols([]) == {}
    assert count_isotope_groups([]) == {}
    assert count_probabilities([]) == {}


def test_aggregation_is_idempotent(products):
    snapshot = list(products)
    for fn in (count_symbols, count_isotope_groups, count_probabilities):
        assert fn(products) == fn(products)
    assert products == snapshot


def test_order_does_not_matter(products):
    rev = list(reversed(products))
    assert count_symbols(rev) == count_symbols(products)
    assert count_isotope_groups(rev) == count_isotope_groups(products)
    assert count_probabilities(rev) == pytest.approx(count_probabilities(products))


def test_groups_agree_with_symbols(products):
    groups = count_isotope_groups(products)
    symbols = count_symbols(products)
    assert {s: sum(g.values()) for s, g in groups.items()} == symbols


def test_count_neutrons():
    assert count_neutrons([1, 2, 1, 3, 1, 2]) == {1: 3, 2: 2, 3: 1}
    assert list(count_neutrons([3, 1, 2])) == [1, 2, 3]
    assert count_neutrons([]) == {}
