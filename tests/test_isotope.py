"""
Tests for the isotope value type and the fissile catalogue.
"""

import dataclasses

import numpy as np
import pytest

from mc_fission.isotope import (
    FISSILES, Isotope, fissile, fragment, pu239, random_fissile, u233, u235,
)


def test_display_name():
    assert u235().name == "U-235"
    assert Isotope("Xe", 54, 140).name == "Xe-140"


def test_fragment_is_unresolved():
    frag = fragment(54, 140)
    assert frag.symbol == ""
    assert not frag.resolved
    assert frag.with_symbol("Xe").resolved
    assert str(frag) == "(Z=54, A=140)"


def test_with_symbol_returns_copy():
    frag = fragment(38, 94)
    sr = frag.with_symbol("Sr")
    assert sr == Isotope("Sr", 38, 94)
    assert frag.symbol == ""


def test_isotope_is_immutable():
    iso = u235()
    with pytest.raises(dataclasses.FrozenInstanceError):
        iso.mass_number = 236


@pytest.mark.parametrize("z, a", [(-1, 10), (5, 0), (10, 9)])
def test_invalid_numbers_rejected(z, a):
    with pytest.raises(ValueError):
        Isotope("X", z, a)


def test_neutron_number():
    assert u235().neutron_number == 143


def test_fissile_catalogue():
    assert [iso.name for iso in FISSILES] == ["U-233", "U-235", "Pu-239"]
    assert u233() == Isotope("U", 92, 233)
    assert pu239() == Isotope("Pu", 94, 239)


def test_fissile_lookup_is_case_insensitive():
    assert fissile("u-235") == u235()
    assert fissile(" Pu-239 ") == pu239()


def test_fissile_lookup_unknown():
    with pytest.raises(KeyError):
        fissile("Th-232")


def test_random_fissile_covers_catalogue():
    rng = np.random.default_rng(3)
    picks = {random_fissile(rng) for _ in range(200)}
    assert picks == set(FISSILES)
