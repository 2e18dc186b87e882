"""
Neutron-Induced Fission Event Simulator
=======================================

Splits a fissile nucleus into two fragments plus prompt neutrons while
conserving charge and nucleon number, then identifies each fragment
against the reference isotope table.

Algorithm
---------
For a target isotope (Z, A):

    1.  Absorb the inducing neutron:  M = A + 1  (compound nucleus).
    2.  Sample prompt neutrons nu from the multiplicity table.
    3.  Sample the heavier fragment's mass uniformly:
            amu ~ U{ M // 2, ..., M - nu - 1 }
    4.  Apportion charge by mass fraction (integer truncation):
            Z_heavy = Z * amu // A                       (target basis)
            Z_heavy = (Z * ((amu * 100) // M)) // 100    (compound basis)
    5.  Lighter fragment:  Z_light = Z - Z_heavy,  A_light = M - nu - amu.
    6.  Look both (Z, A) pairs up in the reference table.

Conservation holds by construction:

    Z_heavy + Z_light = Z
    A_heavy + A_light + nu = A + 1

If either fragment is not a known nuclide the event is *unresolved*.
This is an ordinary modelling outcome and is returned as a value
(:class:`UnresolvedFragment`), not raised.

The split is a simplified heuristic, not a fission-yield evaluation.
Integer truncation (never rounding) is part of the model: an off-by-one
in Z or A changes whether a fragment resolves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .constants import (
    INDUCING_NEUTRONS,
    CHARGE_BASES,
    CHARGE_BASIS_TARGET,
    CHARGE_BASIS_COMPOUND,
)
from .isotope import Isotope
from .reference import ReferenceTable
from .sampler import NeutronSampler


# =====================================================================
# Outcome types
# =====================================================================
@dataclass(frozen=True)
class FissionEvent:
    """A successful fission: two identified fragments and prompt neutrons.

    Attributes
    ----------
    parent : Isotope
        Target isotope (before neutron absorption).
    heavier : Isotope
        Fragment carrying the sampled mass ``amu``.
    lighter : Isotope
        Complementary fragment.
    neutrons : int
        Prompt neutrons released.
    """

    parent: Isotope
    heavier: Isotope
    lighter: Isotope
    neutrons: int

    @property
    def fragments(self) -> Tuple[Isotope, Isotope]:
        return (self.heavier, self.lighter)

    def is_conserving(self) -> bool:
        """Check charge and nucleon conservation (A + 1 = A_h + A_l + nu)."""
        z_ok = (self.heavier.atomic_number + self.lighter.atomic_number
                == self.parent.atomic_number)
        a_ok = (self.heavier.mass_number + self.lighter.mass_number + self.neutrons
                == self.parent.mass_number + INDUCING_NEUTRONS)
        return z_ok and a_ok


@dataclass(frozen=True)
class UnresolvedFragment:
    """A fission split with at least one fragment absent from the table.

    Fragments are kept as raw (Z, A) pairs since an unresolved pair need
    not be a valid nuclide at all (e.g. A < Z).
    """

    parent: Isotope
    heavier: Tuple[int, int]
    lighter: Tuple[int, int]
    neutrons: int
    heavier_resolved: bool = False
    lighter_resolved: bool = False

    @property
    def missing(self) -> Tuple[Tuple[int, int], ...]:
        """The (Z, A) pairs that could not be identified."""
        out = []
        if not self.heavier_resolved:
            out.append(self.heavier)
        if not self.lighter_resolved:
            out.append(self.lighter)
        return tuple(out)

    def describe(self) -> str:
        pairs = ", ".join(f"(Z={z}, A={a})" for z, a in self.missing)
        return (
            f"{self.parent.name} split has no known isotope for {pairs}"
        )


FissionOutcome = Union[FissionEvent, UnresolvedFragment]


# =====================================================================
# Charge apportionment
# =====================================================================
def heavy_fragment_charge(
    atomic_number: int,
    mass_number: int,
    amu: int,
    charge_basis: str = CHARGE_BASIS_TARGET,
) -> int:
    """Protons carried by a heavy fragment of mass *amu*.

    Parameters
    ----------
    atomic_number, mass_number : int
        Z and A of the target (before neutron absorption).
    amu : int
        Sampled heavy-fragment mass number.
    charge_basis : {"target", "compound"}
        Which mass number the charge fraction is taken against.

    Returns
    -------
    int
        Z_heavy, clamped to [0, Z].
    """
    if charge_basis == CHARGE_BASIS_TARGET:
        z_heavy = (atomic_number * amu) // mass_number
    elif charge_basis == CHARGE_BASIS_COMPOUND:
        compound = mass_number + INDUCING_NEUTRONS
        z_heavy = (atomic_number * ((amu * 100) // compound)) // 100
    else:
        raise ValueError(
            f"Unknown charge basis '{charge_basis}'. Use one of {CHARGE_BASES}."
        )
    return max(0, min(z_heavy, atomic_number))


# =====================================================================
# Simulator
# =====================================================================
class FissionSimulator:
    """Single-event fission sampler bound to a reference table.

    Parameters
    ----------
    table : ReferenceTable
        Known isotopes used to identify fragments.
    rng : np.random.Generator, optional
        Random source for the fragment-mass draw (and for the default
        neutron sampler).  Non-deterministic if omitted.
    sampler : NeutronSampler, optional
        Multiplicity sampler.  Defaults to one sharing *rng*.
    charge_basis : {"target", "compound"}
        Charge apportionment rule (see :func:`heavy_fragment_charge`).

    Examples
    --------
    >>> from mc_fission.reference import load_reference_table
    >>> from mc_fission.isotope import u235
    >>> sim = FissionSimulator(load_reference_table(), np.random.default_rng(1))
    >>> outcome = sim.simulate(u235())
    """

    def __init__(
        self,
        table: ReferenceTable,
        rng: Optional[np.random.Generator] = None,
        sampler: Optional[NeutronSampler] = None,
        charge_basis: str = CHARGE_BASIS_TARGET,
    ):
        if charge_basis not in CHARGE_BASES:
            raise ValueError(
                f"Unknown charge basis '{charge_basis}'. Use one of {CHARGE_BASES}."
            )
        self.table = table
        self.rng = rng if rng is not None else np.random.default_rng()
        self.sampler = sampler if sampler is not None else NeutronSampler(self.rng)
        self.charge_basis = charge_basis

    def split(self, isotope: Isotope) -> Tuple[Tuple[int, int], Tuple[int, int], int]:
        """Sample an unresolved split of *isotope*.

        Returns
        -------
        heavier : (int, int)
            (Z, A) of the heavier fragment.
        lighter : (int, int)
            (Z, A) of the lighter fragment.
        neutrons : int
            Prompt neutrons released.

        Raises
        ------
        ValueError
            If the compound nucleus is too light for the sampled
            neutron count (empty mass range).
        """
        z = isotope.atomic_number
        a = isotope.mass_number
        compound = a + INDUCING_NEUTRONS

        neutrons = self.sampler.sample()

        lo = compound // 2
        hi = compound - neutrons
        if hi <= lo:
            raise ValueError(
                f"Cannot split {isotope}: compound mass {compound} leaves an "
                f"empty fragment range [{lo}, {hi}) after {neutrons} neutron(s)"
            )
        amu = int(self.rng.integers(lo, hi))

        z_heavy = heavy_fragment_charge(z, a, amu, self.charge_basis)
        z_light = z - z_heavy
        a_light = compound - neutrons - amu

        return (z_heavy, amu), (z_light, a_light), neutrons

    def simulate(self, isotope: Isotope) -> FissionOutcome:
        """Simulate one neutron-induced fission of *isotope*.

        The caller's isotope is not modified.

        Returns
        -------
        FissionEvent
            If both fragments are known nuclides.
        UnresolvedFragment
            Otherwise.  No retry is attempted.
        """
        heavier, lighter, neutrons = self.split(isotope)

        heavy_symbol = self.table.lookup(*heavier)
        light_symbol = self.table.lookup(*lighter)

        if heavy_symbol and light_symbol:
            return FissionEvent(
                parent=isotope,
                heavier=Isotope(heavy_symbol, *heavier),
                lighter=Isotope(light_symbol, *lighter),
                neutrons=neutrons,
            )

        return UnresolvedFragment(
            parent=isotope,
            heavier=heavier,
            lighter=lighter,
            neutrons=neutrons,
            heavier_resolved=bool(heavy_symbol),
            lighter_resolved=bool(light_symbol),
        )


def simulate_fission(
    isotope: Isotope,
    table: ReferenceTable,
    rng: Optional[np.random.Generator] = None,
    charge_basis: str = CHARGE_BASIS_TARGET,
) -> FissionOutcome:
    """Functional form of :meth:`FissionSimulator.simulate`."""
    return FissionSimulator(table, rng, charge_basis=charge_basis).simulate(isotope)
